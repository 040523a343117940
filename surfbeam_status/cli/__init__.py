"""
Command Line Interface Package for SurfBeam Modem Status Client

- args.py: Argument parsing and validation
- formatters.py: Output formatting for records and display values
- logging_setup.py: Logging configuration
- main.py: Main orchestration and entry point

License: MIT
"""

from .main import main

__all__ = ["main"]
