"""
Global configuration for the testnet generator.

This module contains environment-specific settings that apply across the package.
"""

import os

_SUPPORTED_LOG_LEVELS: list[str] = ["DEBUG", "INFO", "WARNING", "ERROR"]

LOG_LEVEL = os.environ.get("TESTNET_GEN_LOG_LEVEL", "INFO").upper()
"""Default log level of the command line tool. Defaults to 'INFO'."""

if LOG_LEVEL not in _SUPPORTED_LOG_LEVELS:
    raise ValueError(
        f"Invalid TESTNET_GEN_LOG_LEVEL environment variable: '{LOG_LEVEL}'. "
        f"Supported values: {_SUPPORTED_LOG_LEVELS}"
    )
