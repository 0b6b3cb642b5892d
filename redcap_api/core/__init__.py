"""
Core layer - Raw types and HTTP client.

This layer provides:
- Enums holding the REDCap API parameter vocabulary
- Dataclasses for import payloads and exported files
- Payload assembly and the low-level HTTP client with error handling
"""

from redcap_api.core.client import APIClient, APIError, RedcapError, ValidationError
from redcap_api.core.payload import build_payload, flatten, serialize_data
from redcap_api.core.types import (
    Content,
    CsvDelimiter,
    DateFormat,
    DecimalCharacter,
    ExportedFile,
    FormEventMapping,
    LogType,
    OnErrorFormat,
    Override,
    OverwriteBehavior,
    ProjectPurpose,
    RawOrLabel,
    RawOrLabelHeaders,
    RedcapAction,
    RedcapArm,
    RedcapDag,
    RedcapDataType,
    RedcapEvent,
    RedcapProject,
    RedcapUser,
    RepeatingInstrument,
    ReturnContent,
    ReturnFormat,
)

__all__ = [
    "APIClient",
    "APIError",
    "Content",
    "CsvDelimiter",
    "DateFormat",
    "DecimalCharacter",
    "ExportedFile",
    "FormEventMapping",
    "LogType",
    "OnErrorFormat",
    "Override",
    "OverwriteBehavior",
    "ProjectPurpose",
    "RawOrLabel",
    "RawOrLabelHeaders",
    "RedcapAction",
    "RedcapArm",
    "RedcapDag",
    "RedcapDataType",
    "RedcapError",
    "RedcapEvent",
    "RedcapProject",
    "RedcapUser",
    "RepeatingInstrument",
    "ReturnContent",
    "ReturnFormat",
    "ValidationError",
    "build_payload",
    "flatten",
    "serialize_data",
]
