"""
REDCap API - Three-layer client for the REDCap HTTP API.

Layers:
- core: Parameter enums, payload assembly and HTTP client
- sdk: High-level RedcapApi with one method per API call
- cli: Command-line interface over the SDK
"""

from redcap_api.core.client import APIError, RedcapError, ValidationError
from redcap_api.sdk import RedcapApi

__version__ = "0.1.0"
__all__ = ["APIError", "RedcapApi", "RedcapError", "ValidationError"]
