import time
from unittest.mock import Mock, patch

import pytest

MODEM_FIELD_COUNT = 81
OUTDOOR_UNIT_FIELD_COUNT = 84


def build_document(values: dict, field_count: int) -> str:
    """Join a sparse position to value map into a ##-delimited document."""
    fields = [""] * field_count
    for index, value in values.items():
        fields[index] = value
    return "##".join(fields)


@pytest.fixture
def modem_values():
    """Realistic values for the mapped modem positions."""
    return {
        0: "192.168.100.1",
        1: "00:A0:BC:12:34:56",
        2: "UT_3.7.8.9.5",
        3: "SB2-HW-03",
        4: "Online",
        5: "1,234,567",
        6: "9,876,543,210",
        7: "7,654",
        8: "1,536",
        9: "2 days 03:14:07",
        10: "3",
        11: "12.5",
        12: "90%",
        13: "SN123456789",
        14: "-50.0",
        15: "80%",
        16: "11.2",
        17: "40%",
        18: "Ok",
        19: "6.0",
        20: "40%",
        21: "RG-6",
        22: "1504340-0001",
        23: "Online",
        24: "Blue",
        26: "Enabled",
        27: "Healthy",
        30: "1.2s",
        32: "625000",
        40: "BDT 4.2",
        46: "ViaSat",
        50: "20000000",
        51: "8PSK 3/4",
    }


@pytest.fixture
def outdoor_unit_values():
    """Realistic values for the mapped outdoor unit positions."""
    return {
        4: "Normal",
        5: "Left Hand Circular",
        7: "-20.0",
        9: "RG-6",
        10: "42.5",
        16: "TRIA-000123",
        17: "28.0",
        24: "TRIA_1.2.3",
        25: "60%",
        26: "52%",
        29: "Orange beam",
        81: "ViaSat",
    }


@pytest.fixture
def modem_document(modem_values):
    return build_document(modem_values, MODEM_FIELD_COUNT)


@pytest.fixture
def outdoor_unit_document(outdoor_unit_values):
    return build_document(outdoor_unit_values, OUTDOOR_UNIT_FIELD_COUNT)


@pytest.fixture
def short_document():
    """A document one field short of the modem layout."""
    return build_document({}, MODEM_FIELD_COUNT - 1)


def make_response(body: str, status_code: int = 200) -> Mock:
    """Mock requests.Response carrying a status page body."""
    return Mock(status_code=status_code, content=body.encode("utf-8"), text=body)


@pytest.fixture
def mock_status_pages(modem_document, outdoor_unit_document):
    """Patch Session.get to serve both status pages by their page parameter."""
    pages = {
        "modemStatusData": modem_document,
        "triaStatusData": outdoor_unit_document,
    }

    def get(url, params=None, timeout=None):
        return make_response(pages[params["page"]])

    with patch("requests.Session.get", side_effect=get) as mock_get:
        yield pages, mock_get


@pytest.fixture
def client_kwargs():
    """Default client kwargs for testing."""
    return {
        "host": "192.168.100.1",
        "port": 80,
        "concurrent": True,
        "max_retries": 1,
        "base_backoff": 0.01,
        "capture_errors": True,
        "timeout": (1, 2),
        "enable_instrumentation": True,
    }


@pytest.fixture
def mock_performance_instrumentation():
    """Mock performance instrumentation."""
    from surfbeam_status.instrumentation import PerformanceInstrumentation

    with patch.object(PerformanceInstrumentation, "start_timer") as mock_start:
        with patch.object(PerformanceInstrumentation, "record_timing") as mock_record:
            mock_start.return_value = time.time()
            mock_record.return_value = Mock(operation="test", duration=0.1, success=True, duration_ms=100)
            yield mock_start, mock_record
