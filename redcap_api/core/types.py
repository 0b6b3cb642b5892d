"""
Core types for the REDCap API.

Enums carry the exact strings REDCap expects on the wire; the
dataclasses mirror the JSON objects REDCap exchanges for import calls.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# Request vocabulary
# =============================================================================


class Content(str, Enum):
    """The REDCap resource an API call targets."""

    ARM = "arm"
    DAG = "dag"
    USER_DAG_MAPPING = "userDagMapping"
    EVENT = "event"
    EXPORT_FIELD_NAMES = "exportFieldNames"
    FILE = "file"
    FILE_REPOSITORY = "fileRepository"
    INSTRUMENT = "instrument"
    PDF = "pdf"
    FORM_EVENT_MAPPING = "formEventMapping"
    LOG = "log"
    METADATA = "metadata"
    PROJECT = "project"
    PROJECT_SETTINGS = "project_settings"
    PROJECT_XML = "project_xml"
    RECORD = "record"
    GENERATE_NEXT_RECORD_NAME = "generateNextRecordName"
    REPEATING_FORMS_EVENTS = "repeatingFormsEvents"
    REPORT = "report"
    VERSION = "version"
    SURVEY_LINK = "surveyLink"
    PARTICIPANT_LIST = "participantList"
    SURVEY_QUEUE_LINK = "surveyQueueLink"
    SURVEY_RETURN_CODE = "surveyReturnCode"
    USER = "user"
    USER_ROLE = "userRole"
    USER_ROLE_MAPPING = "userRoleMapping"


class RedcapAction(str, Enum):
    EXPORT = "export"
    IMPORT = "import"
    DELETE = "delete"
    CREATE_FOLDER = "createFolder"
    LIST = "list"
    SWITCH = "switch"
    RENAME = "rename"
    RANDOMIZE = "randomize"


class ReturnFormat(str, Enum):
    """Format of the data sent or returned (``format``)."""

    JSON = "json"
    CSV = "csv"
    XML = "xml"
    ODM = "odm"


class OnErrorFormat(str, Enum):
    """Format REDCap uses for error messages (``returnFormat``)."""

    JSON = "json"
    CSV = "csv"
    XML = "xml"


class RedcapDataType(str, Enum):
    FLAT = "flat"
    EAV = "eav"
    NONLONGITUDINAL = "nonlongitudinal"
    LONGITUDINAL = "longitudinal"


class OverwriteBehavior(str, Enum):
    """``normal`` keeps existing values for blanks, ``overwrite`` erases them."""

    NORMAL = "normal"
    OVERWRITE = "overwrite"


class ReturnContent(str, Enum):
    COUNT = "count"
    IDS = "ids"
    AUTO_IDS = "auto_ids"
    NOTHING = "nothing"


class RawOrLabel(str, Enum):
    RAW = "raw"
    LABEL = "label"


class RawOrLabelHeaders(str, Enum):
    RAW = "raw"
    LABEL = "label"


class CsvDelimiter(str, Enum):
    COMMA = ","
    TAB = "tab"
    SEMICOLON = ";"
    PIPE = "|"
    CARET = "^"


class DecimalCharacter(str, Enum):
    COMMA = ","
    DOT = "."


class Override(str, Enum):
    """Whether an arm/event import replaces all existing arms/events."""

    FALSE = "0"
    TRUE = "1"


class DateFormat(str, Enum):
    MDY = "MDY"
    DMY = "DMY"
    YMD = "YMD"


class LogType(str, Enum):
    EXPORT = "export"
    MANAGE = "manage"
    USER = "user"
    RECORD = "record"
    RECORD_ADD = "record_add"
    RECORD_EDIT = "record_edit"
    RECORD_DELETE = "record_delete"
    LOCK_RECORD = "lock_record"
    PAGE_VIEW = "page_view"


class ProjectPurpose(int, Enum):
    PRACTICE = 0
    OTHER = 1
    RESEARCH = 2
    QUALITY_IMPROVEMENT = 3
    OPERATIONAL_SUPPORT = 4


# =============================================================================
# Import payload types
# =============================================================================


@dataclass
class RedcapArm:
    """A study arm."""

    arm_num: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RedcapArm":
        """Create from API response dict."""
        return cls(arm_num=str(data.get("arm_num", "")), name=data.get("name", ""))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return {"arm_num": self.arm_num, "name": self.name}


@dataclass
class RedcapEvent:
    """An event in a longitudinal project."""

    event_name: str
    arm_num: str
    unique_event_name: str | None = None
    day_offset: str | None = None
    offset_min: str | None = None
    offset_max: str | None = None
    custom_event_label: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RedcapEvent":
        """Create from API response dict."""
        return cls(
            event_name=data.get("event_name", ""),
            arm_num=str(data.get("arm_num", "")),
            unique_event_name=data.get("unique_event_name"),
            day_offset=data.get("day_offset"),
            offset_min=data.get("offset_min"),
            offset_max=data.get("offset_max"),
            custom_event_label=data.get("custom_event_label"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        result = {"event_name": self.event_name, "arm_num": self.arm_num}
        optional = {
            "unique_event_name": self.unique_event_name,
            "day_offset": self.day_offset,
            "offset_min": self.offset_min,
            "offset_max": self.offset_max,
            "custom_event_label": self.custom_event_label,
        }
        result.update({k: v for k, v in optional.items() if v is not None})
        return result


@dataclass
class RedcapDag:
    """A Data Access Group."""

    data_access_group_name: str
    unique_group_name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RedcapDag":
        """Create from API response dict."""
        return cls(
            data_access_group_name=data.get("data_access_group_name", ""),
            unique_group_name=data.get("unique_group_name"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return {
            "data_access_group_name": self.data_access_group_name,
            "unique_group_name": self.unique_group_name or "",
        }


@dataclass
class FormEventMapping:
    arm_num: str
    unique_event_name: str
    form: str

    def to_dict(self) -> dict[str, Any]:
        return {"arm_num": self.arm_num, "unique_event_name": self.unique_event_name, "form": self.form}


@dataclass
class RepeatingInstrument:
    """A repeating instrument (or a whole repeating event when form_name is empty)."""

    event_name: str
    form_name: str = ""
    custom_form_label: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_name": self.event_name,
            "form_name": self.form_name,
            "custom_form_label": self.custom_form_label,
        }


@dataclass
class RedcapProject:
    """Settings for creating a new project with a super API token."""

    project_title: str
    purpose: ProjectPurpose
    purpose_other: str | None = None
    project_notes: str | None = None
    is_longitudinal: bool = False
    surveys_enabled: bool = False
    record_autonumbering_enabled: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request (REDCap expects 0/1 flags)."""
        result: dict[str, Any] = {
            "project_title": self.project_title,
            "purpose": int(self.purpose),
            "is_longitudinal": int(self.is_longitudinal),
            "surveys_enabled": int(self.surveys_enabled),
            "record_autonumbering_enabled": int(self.record_autonumbering_enabled),
        }
        if self.purpose_other is not None:
            result["purpose_other"] = self.purpose_other
        if self.project_notes is not None:
            result["project_notes"] = self.project_notes
        return result


@dataclass
class RedcapUser:
    """
    A project user and their privileges.

    Only ``username`` is required; unset privileges are left out so REDCap
    keeps its defaults. Form rights go in ``forms`` as ``{form: level}``.
    """

    username: str
    expiration: str | None = None
    data_access_group: str | None = None
    design: int | None = None
    user_rights: int | None = None
    data_access_groups: int | None = None
    reports: int | None = None
    stats_and_charts: int | None = None
    manage_survey_participants: int | None = None
    calendar: int | None = None
    data_import_tool: int | None = None
    data_comparison_tool: int | None = None
    logging: int | None = None
    file_repository: int | None = None
    data_quality_create: int | None = None
    data_quality_execute: int | None = None
    api_export: int | None = None
    api_import: int | None = None
    mobile_app: int | None = None
    mobile_app_download_data: int | None = None
    record_create: int | None = None
    record_rename: int | None = None
    record_delete: int | None = None
    lock_records_all_forms: int | None = None
    lock_records: int | None = None
    lock_records_customization: int | None = None
    forms: dict[str, int] = field(default_factory=dict)
    forms_export: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        result = {k: v for k, v in self.__dict__.items() if v is not None and k not in ("forms", "forms_export")}
        if self.forms:
            result["forms"] = dict(self.forms)
        if self.forms_export:
            result["forms_export"] = dict(self.forms_export)
        return result


# =============================================================================
# Response types
# =============================================================================


@dataclass
class ExportedFile:
    """A file downloaded from REDCap; ``content`` is the raw response body."""

    file_name: str | None
    content_type: str
    content: bytes
    path: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)
