"""Shared utilities for the burn explorer: config, HTTP and formatting."""

# HTTP utilities
from utils.http import SessionManager, HTTPFailure, get_json

# Output formatting
from utils.formatting import (
    format_usd,
    format_cc,
    format_percent,
    format_count,
    percent_of,
    short_id,
)

# Configuration
from utils.config import Config, AppConfig

__all__ = [
    # HTTP
    "SessionManager",
    "HTTPFailure",
    "get_json",
    # Formatting
    "format_usd",
    "format_cc",
    "format_percent",
    "format_count",
    "percent_of",
    "short_id",
    # Config
    "Config",
    "AppConfig",
]
