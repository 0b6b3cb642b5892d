"""
REDCap SDK - High-level client with one method per API call.

Every method maps onto exactly one REDCap ``content``/``action``
combination, issues a single POST, and returns the response body
unchanged. Built on top of the core APIClient.
"""

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

import requests

from redcap_api.core.client import APIClient, ValidationError
from redcap_api.core.payload import build_payload, require, serialize_data
from redcap_api.core.types import (
    Content,
    CsvDelimiter,
    DateFormat,
    DecimalCharacter,
    ExportedFile,
    LogType,
    OnErrorFormat,
    Override,
    OverwriteBehavior,
    RawOrLabel,
    RawOrLabelHeaders,
    RedcapAction,
    RedcapDag,
    RedcapDataType,
    ReturnContent,
    ReturnFormat,
)

logger = logging.getLogger(__name__)

LOG_TIME_FORMAT = "%Y-%m-%d %H:%M"

JSON = ReturnFormat.JSON
ON_ERROR_JSON = OnErrorFormat.JSON


class RedcapApi:
    """
    High-level REDCap API client.

    Example:
        api = RedcapApi("https://redcap.example.edu/api/")

        version = api.version.export(token)
        arms = api.arms.export(token, arms=["1", "2"])
        api.records.import_(token, [{"record_id": "1", "first_name": "Ada"}])

    The token may be passed as ``None`` to use the default token given to
    the constructor (or REDCAP_API_TOKEN).

    """

    def __init__(
        self,
        url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        verify_ssl: bool = True,
        session: requests.Session | None = None,
    ):
        """
        Initialize the REDCap client.

        Args:
            url: REDCap API URL (or REDCAP_API_URL env var)
            token: Default API token (or REDCAP_API_TOKEN env var)
            timeout: Request timeout in seconds (or REDCAP_TIMEOUT env var)
            verify_ssl: Verify the server's TLS certificate
            session: Optional pre-configured requests session

        """
        self._client = APIClient(
            url=url,
            token=token,
            timeout=timeout,
            verify_ssl=verify_ssl,
            session=session,
        )

        # Sub-clients for each REDCap resource
        self.arms = ArmOperations(self._client)
        self.dags = DagOperations(self._client)
        self.events = EventOperations(self._client)
        self.fields = FieldOperations(self._client)
        self.files = FileOperations(self._client)
        self.file_repository = FileRepositoryOperations(self._client)
        self.instruments = InstrumentOperations(self._client)
        self.logs = LogOperations(self._client)
        self.metadata = MetadataOperations(self._client)
        self.projects = ProjectOperations(self._client)
        self.records = RecordOperations(self._client)
        self.repeating = RepeatingOperations(self._client)
        self.reports = ReportOperations(self._client)
        self.version = VersionOperations(self._client)
        self.surveys = SurveyOperations(self._client)
        self.users = UserOperations(self._client)
        self.user_roles = UserRoleOperations(self._client)

    def __enter__(self) -> "RedcapApi":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @property
    def url(self) -> str:
        """Get the REDCap API URL."""
        return self._client.url

    @property
    def token(self) -> str | None:
        """Get the default token."""
        return self._client.token

    @token.setter
    def token(self, value: str | None) -> None:
        """Set the default token."""
        self._client.token = value


class _Operations:
    """Shared plumbing for the per-resource operation groups."""

    def __init__(self, client: APIClient):
        self._client = client

    def _send(
        self,
        token: str | None,
        content: Content,
        action: RedcapAction | None = None,
        **fields: Any,
    ) -> str:
        payload = build_payload(self._client.ensure_token(token), content, action, **fields)
        return self._client.post_text(payload)

    def _send_file(
        self,
        token: str | None,
        content: Content,
        action: RedcapAction | None = None,
        file_path: str | None = None,
        **fields: Any,
    ) -> ExportedFile:
        payload = build_payload(self._client.ensure_token(token), content, action, **fields)
        return self._client.post_file(payload, file_path=file_path)

    def _upload(
        self,
        token: str | None,
        content: Content,
        file_name: str,
        file_path: str,
        **fields: Any,
    ) -> str:
        resolved = self._client.ensure_token(token)
        if not file_name or not file_path:
            logger.error("Upload rejected: file name and path are required")
            raise ValidationError("File name and file path are required for uploads")

        source = Path(file_path) / file_name
        try:
            data = source.read_bytes()
        except OSError as e:
            logger.error("Could not read %s: %s", source, e)
            raise ValidationError(f"Could not read file {source}: {e}")

        payload = build_payload(resolved, content, RedcapAction.IMPORT, **fields)
        files = {"file": (file_name, data, "application/octet-stream")}
        return self._client.post_text(payload, files=files)


# =============================================================================
# Arms
# =============================================================================


class ArmOperations(_Operations):
    """Operations for study arms in longitudinal projects."""

    def export(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        arms: Sequence[str] | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """
        Export arms.

        Args:
            token: API token
            format: Response format
            arms: Arm numbers to export; all arms when omitted
            on_error_format: Format of error messages

        Returns:
            Arms in the requested format

        """
        return self._send(token, Content.ARM, format=format, returnFormat=on_error_format, arms=arms)

    def import_(
        self,
        token: str | None,
        data: Any,
        override: Override = Override.FALSE,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """
        Import arms.

        With ``Override.TRUE`` all existing arms are deleted first; otherwise
        arms are added or renamed.

        Returns:
            Number of arms imported

        """
        return self._send(
            token,
            Content.ARM,
            RedcapAction.IMPORT,
            override=override,
            format=format,
            returnFormat=on_error_format,
            data=serialize_data(data, format),
        )

    def delete(self, token: str | None, arms: Sequence[str]) -> str:
        """Delete arms (and their events) by arm number. Returns the number deleted."""
        return self._send(token, Content.ARM, RedcapAction.DELETE, arms=require("arms", arms))


# =============================================================================
# Data Access Groups
# =============================================================================


class DagOperations(_Operations):
    """Operations for Data Access Groups."""

    def export(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(token, Content.DAG, format=format, returnFormat=on_error_format)

    def import_(
        self,
        token: str | None,
        data: Any,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """
        Create or rename DAGs.

        Leave ``unique_group_name`` blank to create a group; REDCap
        generates the unique name.
        """
        return self._send(
            token,
            Content.DAG,
            RedcapAction.IMPORT,
            format=format,
            returnFormat=on_error_format,
            data=serialize_data(data, format),
        )

    def delete(self, token: str | None, dags: Sequence[str]) -> str:
        """Delete DAGs by unique group name."""
        return self._send(token, Content.DAG, RedcapAction.DELETE, dags=require("dags", dags))

    def switch(self, token: str | None, dag: str | RedcapDag) -> str:
        """
        Switch the token owner's current DAG.

        Args:
            token: API token
            dag: Unique group name (or a RedcapDag carrying one)

        Returns:
            "1" on success

        """
        unique_name = dag.unique_group_name if isinstance(dag, RedcapDag) else dag
        if not unique_name:
            raise ValidationError("A unique group name is required to switch DAG")
        return self._send(token, Content.DAG, RedcapAction.SWITCH, dag=unique_name)

    def export_user_assignment(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Export user-DAG assignments."""
        return self._send(token, Content.USER_DAG_MAPPING, format=format, returnFormat=on_error_format)

    def import_user_assignment(
        self,
        token: str | None,
        data: Any,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Assign users to DAGs (``[{"username": ..., "redcap_data_access_group": ...}]``)."""
        return self._send(
            token,
            Content.USER_DAG_MAPPING,
            RedcapAction.IMPORT,
            format=format,
            returnFormat=on_error_format,
            data=serialize_data(data, format),
        )


# =============================================================================
# Events
# =============================================================================


class EventOperations(_Operations):
    """Operations for events in longitudinal projects."""

    def export(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        arms: Sequence[str] | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(token, Content.EVENT, format=format, returnFormat=on_error_format, arms=arms)

    def import_(
        self,
        token: str | None,
        data: Any,
        override: Override = Override.FALSE,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(
            token,
            Content.EVENT,
            RedcapAction.IMPORT,
            override=override,
            format=format,
            returnFormat=on_error_format,
            data=serialize_data(data, format),
        )

    def delete(self, token: str | None, events: Sequence[str]) -> str:
        """Delete events by unique event name."""
        return self._send(token, Content.EVENT, RedcapAction.DELETE, events=require("events", events))


# =============================================================================
# Field Names
# =============================================================================


class FieldOperations(_Operations):
    def export_names(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        field: str | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """
        Export the export field names (checkbox fields expand to one per choice).

        Args:
            token: API token
            format: Response format
            field: Only this field; all fields when omitted
            on_error_format: Format of error messages

        """
        return self._send(
            token,
            Content.EXPORT_FIELD_NAMES,
            format=format,
            returnFormat=on_error_format,
            field=field,
        )


# =============================================================================
# Files
# =============================================================================


class FileOperations(_Operations):
    """Operations for files attached to file-upload fields."""

    def export(
        self,
        token: str | None,
        record: str,
        field: str,
        event: str | None = None,
        repeat_instance: int | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
        file_path: str | None = None,
    ) -> ExportedFile:
        """
        Export a file from a record's file-upload field.

        Args:
            token: API token
            record: Record ID
            field: File-upload field name
            event: Unique event name (longitudinal projects)
            repeat_instance: Instance number of a repeating instrument/event
            on_error_format: Format of error messages
            file_path: Directory to save the file into; created if missing

        Returns:
            ExportedFile with the raw content and, when saved, its path

        """
        return self._send_file(
            token,
            Content.FILE,
            RedcapAction.EXPORT,
            file_path=file_path,
            record=record,
            field=field,
            event=event,
            returnFormat=on_error_format,
            repeat_instance=repeat_instance,
        )

    def import_(
        self,
        token: str | None,
        record: str,
        field: str,
        file_name: str,
        file_path: str,
        event: str | None = None,
        repeat_instance: int | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """
        Upload a local file into a record's file-upload field.

        The file at ``file_path/file_name`` is sent as multipart/form-data.

        Raises:
            ValidationError: If file name or path is empty, or the file can't be read

        """
        return self._upload(
            token,
            Content.FILE,
            file_name,
            file_path,
            record=record,
            field=field,
            event=event,
            returnFormat=on_error_format,
            repeat_instance=repeat_instance,
        )

    def delete(
        self,
        token: str | None,
        record: str,
        field: str,
        event: str | None = None,
        repeat_instance: int | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(
            token,
            Content.FILE,
            RedcapAction.DELETE,
            record=record,
            field=field,
            event=event,
            returnFormat=on_error_format,
            repeat_instance=repeat_instance,
        )


# =============================================================================
# File Repository
# =============================================================================


class FileRepositoryOperations(_Operations):
    """Operations for the project File Repository."""

    def create_folder(
        self,
        token: str | None,
        name: str,
        folder_id: int | None = None,
        dag_id: int | None = None,
        role_id: int | None = None,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """
        Create a folder, optionally inside ``folder_id``.

        ``dag_id``/``role_id`` restrict access to one DAG or user role.
        Returns the new folder_id.
        """
        if not name:
            raise ValidationError("Folder name is required")
        return self._send(
            token,
            Content.FILE_REPOSITORY,
            RedcapAction.CREATE_FOLDER,
            name=name,
            folder_id=folder_id,
            dag_id=dag_id,
            role_id=role_id,
            format=format,
            returnFormat=on_error_format,
        )

    def list(
        self,
        token: str | None,
        folder_id: int | None = None,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """List files and folders in ``folder_id`` (top level when omitted)."""
        return self._send(
            token,
            Content.FILE_REPOSITORY,
            RedcapAction.LIST,
            folder_id=folder_id,
            format=format,
            returnFormat=on_error_format,
        )

    def export(
        self,
        token: str | None,
        doc_id: int,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
        file_path: str | None = None,
    ) -> ExportedFile:
        return self._send_file(
            token,
            Content.FILE_REPOSITORY,
            RedcapAction.EXPORT,
            file_path=file_path,
            doc_id=doc_id,
            returnFormat=on_error_format,
        )

    def import_(
        self,
        token: str | None,
        file_name: str,
        file_path: str,
        folder_id: int | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._upload(
            token,
            Content.FILE_REPOSITORY,
            file_name,
            file_path,
            folder_id=folder_id,
            returnFormat=on_error_format,
        )

    def delete(
        self,
        token: str | None,
        doc_id: int,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(
            token,
            Content.FILE_REPOSITORY,
            RedcapAction.DELETE,
            doc_id=doc_id,
            returnFormat=on_error_format,
        )


# =============================================================================
# Instruments
# =============================================================================


class InstrumentOperations(_Operations):
    """Operations for instruments (data entry forms)."""

    def export(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Export instrument names and labels."""
        return self._send(token, Content.INSTRUMENT, format=format, returnFormat=on_error_format)

    def export_pdf(
        self,
        token: str | None,
        record: str | None = None,
        event: str | None = None,
        instrument: str | None = None,
        repeat_instance: int | None = None,
        all_records: bool = False,
        compact_display: bool = False,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
        file_path: str | None = None,
    ) -> ExportedFile:
        """
        Export instruments as a PDF.

        Without ``record`` the PDF is blank; with ``all_records`` every
        record is included.

        Args:
            token: API token
            record: Record ID to fill in
            event: Unique event name
            instrument: Single instrument; all instruments when omitted
            repeat_instance: Instance number of a repeating instrument/event
            all_records: Export all instruments for all records
            compact_display: Leave out empty fields
            on_error_format: Format of error messages
            file_path: Directory to save the PDF into

        Returns:
            ExportedFile holding the PDF bytes

        """
        return self._send_file(
            token,
            Content.PDF,
            file_path=file_path,
            returnFormat=on_error_format,
            record=record,
            event=event,
            instrument=instrument,
            repeat_instance=repeat_instance,
            allRecords=all_records,
            compactDisplay=compact_display,
        )

    def export_mapping(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        arms: Sequence[str] | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Export the instrument-event mappings."""
        return self._send(
            token,
            Content.FORM_EVENT_MAPPING,
            format=format,
            returnFormat=on_error_format,
            arms=arms,
        )

    def import_mapping(
        self,
        token: str | None,
        data: Any,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Import instrument-event mappings; replaces all existing mappings."""
        return self._send(
            token,
            Content.FORM_EVENT_MAPPING,
            RedcapAction.IMPORT,
            format=format,
            returnFormat=on_error_format,
            data=serialize_data(data, format),
        )


# =============================================================================
# Logging
# =============================================================================


class LogOperations(_Operations):
    def export(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        log_type: LogType | None = None,
        user: str | None = None,
        record: str | None = None,
        dag: str | None = None,
        begin_time: datetime | str | None = None,
        end_time: datetime | str | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """
        Export the project audit log.

        Args:
            token: API token
            format: Response format
            log_type: Kind of log entries; all when omitted
            user: Only entries by this username
            record: Only entries for this record
            dag: Only entries for records in this DAG
            begin_time: Earliest entry time
            end_time: Latest entry time
            on_error_format: Format of error messages

        """
        if isinstance(begin_time, datetime):
            begin_time = begin_time.strftime(LOG_TIME_FORMAT)
        if isinstance(end_time, datetime):
            end_time = end_time.strftime(LOG_TIME_FORMAT)
        return self._send(
            token,
            Content.LOG,
            format=format,
            logtype=log_type,
            user=user,
            record=record,
            dag=dag,
            beginTime=begin_time,
            endTime=end_time,
            returnFormat=on_error_format,
        )


# =============================================================================
# Metadata
# =============================================================================


class MetadataOperations(_Operations):
    """Operations for the data dictionary."""

    def export(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        fields: Sequence[str] | None = None,
        forms: Sequence[str] | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Export the data dictionary, optionally limited to some fields or forms."""
        return self._send(
            token,
            Content.METADATA,
            format=format,
            returnFormat=on_error_format,
            fields=fields,
            forms=forms,
        )

    def import_(
        self,
        token: str | None,
        data: Any,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Replace the data dictionary (development projects only). Returns the field count."""
        return self._send(
            token,
            Content.METADATA,
            RedcapAction.IMPORT,
            format=format,
            returnFormat=on_error_format,
            data=serialize_data(data, format),
        )


# =============================================================================
# Projects
# =============================================================================


class ProjectOperations(_Operations):
    """Operations for project settings and whole-project exports."""

    def create(
        self,
        token: str | None,
        data: Any,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
        odm: str | None = None,
    ) -> str:
        """
        Create a project. Requires a super API token.

        Args:
            token: Super API token
            data: Project attributes, e.g. a list holding one RedcapProject
            format: Format of ``data``
            on_error_format: Format of error messages
            odm: Optional CDISC ODM XML to build the project from

        Returns:
            The new project's API token

        """
        return self._send(
            token,
            Content.PROJECT,
            format=format,
            data=serialize_data(data, format),
            returnFormat=on_error_format,
            odm=odm,
        )

    def import_info(
        self,
        token: str | None,
        data: Any,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Update project settings. Returns the number of values changed."""
        return self._send(
            token,
            Content.PROJECT_SETTINGS,
            format=format,
            returnFormat=on_error_format,
            data=serialize_data(data, format),
        )

    def export_info(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(token, Content.PROJECT, format=format, returnFormat=on_error_format)

    def export_xml(
        self,
        token: str | None,
        return_metadata_only: bool = False,
        records: Sequence[str] | None = None,
        fields: Sequence[str] | None = None,
        events: Sequence[str] | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
        export_survey_fields: bool = False,
        export_data_access_groups: bool = False,
        filter_logic: str | None = None,
        export_files: bool = False,
    ) -> str:
        """
        Export the whole project as CDISC ODM XML.

        Args:
            token: API token
            return_metadata_only: Leave out record data
            records: Limit to these records
            fields: Limit to these fields
            events: Limit to these events
            on_error_format: Format of error messages
            export_survey_fields: Include survey identifier and timestamp fields
            export_data_access_groups: Include the redcap_data_access_group field
            filter_logic: REDCap logic expression records must match
            export_files: Embed uploaded files (base64) in the XML

        Returns:
            ODM XML document

        """
        return self._send(
            token,
            Content.PROJECT_XML,
            returnFormat=on_error_format,
            returnMetadataOnly=return_metadata_only,
            records=records,
            fields=fields,
            events=events,
            exportSurveyFields=export_survey_fields,
            exportDataAccessGroups=export_data_access_groups,
            filterLogic=filter_logic,
            exportFiles=export_files,
        )


# =============================================================================
# Records
# =============================================================================


class RecordOperations(_Operations):
    """Operations for project records."""

    def generate_next_name(self, token: str | None) -> str:
        """Return the next record name for auto-numbered projects."""
        return self._send(token, Content.GENERATE_NEXT_RECORD_NAME)

    def export(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        type: RedcapDataType = RedcapDataType.FLAT,
        records: Sequence[str] | None = None,
        fields: Sequence[str] | None = None,
        forms: Sequence[str] | None = None,
        events: Sequence[str] | None = None,
        raw_or_label: RawOrLabel = RawOrLabel.RAW,
        raw_or_label_headers: RawOrLabelHeaders = RawOrLabelHeaders.RAW,
        export_checkbox_label: bool = False,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
        export_survey_fields: bool = False,
        export_data_access_groups: bool = False,
        filter_logic: str | None = None,
        date_range_begin: datetime | None = None,
        date_range_end: datetime | None = None,
        csv_delimiter: CsvDelimiter | None = None,
        decimal_character: DecimalCharacter | None = None,
        export_blank_for_gray_form_status: bool = False,
    ) -> str:
        """
        Export a set of records.

        Data export user rights apply: fields may be filtered out unless
        the token owner has full data set export rights.

        Args:
            token: API token
            format: Response format
            type: flat (one row per record/event) or eav
            records: Record IDs; all records when omitted
            fields: Field names; all fields when omitted
            forms: Instrument names; all instruments when omitted
            events: Unique event names (longitudinal projects)
            raw_or_label: Export raw coded values or labels
            raw_or_label_headers: Raw variable names or labels as CSV headers
            export_checkbox_label: Export checkbox labels instead of Checked/Unchecked
            on_error_format: Format of error messages
            export_survey_fields: Include survey identifier and timestamp fields
            export_data_access_groups: Include the redcap_data_access_group field
            filter_logic: REDCap logic expression records must match
            date_range_begin: Only records created/modified after this time
            date_range_end: Only records created/modified before this time
            csv_delimiter: Delimiter for CSV output
            decimal_character: Decimal separator for number fields
            export_blank_for_gray_form_status: Blank instead of 0 for unvisited forms

        Returns:
            Records ordered by record ID, then event

        """
        return self._send(
            token,
            Content.RECORD,
            format=format,
            returnFormat=on_error_format,
            type=type,
            records=records,
            fields=fields,
            forms=forms,
            events=events,
            rawOrLabel=raw_or_label,
            rawOrLabelHeaders=raw_or_label_headers,
            exportCheckboxLabel=export_checkbox_label,
            exportSurveyFields=export_survey_fields,
            exportDataAccessGroups=export_data_access_groups,
            filterLogic=filter_logic,
            dateRangeBegin=date_range_begin,
            dateRangeEnd=date_range_end,
            csvDelimiter=csv_delimiter,
            decimalCharacter=decimal_character,
            exportBlankForGrayFormStatus=export_blank_for_gray_form_status,
        )

    def export_one(self, token: str | None, record: str, **kwargs: Any) -> str:
        """
        Export a single record.

        Takes the same keyword arguments as ``export`` except ``records``.
        """
        if not record:
            raise ValidationError("A record ID is required")
        return self.export(token, records=[record], **kwargs)

    def import_(
        self,
        token: str | None,
        data: Any,
        format: ReturnFormat = JSON,
        type: RedcapDataType = RedcapDataType.FLAT,
        overwrite_behavior: OverwriteBehavior = OverwriteBehavior.NORMAL,
        force_auto_number: bool = False,
        date_format: DateFormat | None = None,
        csv_delimiter: CsvDelimiter | None = None,
        return_content: ReturnContent = ReturnContent.COUNT,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """
        Import records.

        Args:
            token: API token
            data: Records as text in ``format``, or Python objects for JSON
            format: Format of ``data``
            type: flat or eav
            overwrite_behavior: Whether blank values erase stored values
            force_auto_number: Let REDCap assign new record names
            date_format: Date order used in ``data`` (MDY, DMY or YMD)
            csv_delimiter: Delimiter used in CSV ``data``
            return_content: count, ids, auto_ids or nothing
            on_error_format: Format of error messages

        Returns:
            Import count or IDs, as selected by ``return_content``

        """
        return self._send(
            token,
            Content.RECORD,
            RedcapAction.IMPORT,
            format=format,
            type=type,
            overwriteBehavior=overwrite_behavior,
            forceAutoNumber=force_auto_number,
            data=serialize_data(data, format),
            dateFormat=date_format,
            csvDelimiter=csv_delimiter,
            returnContent=return_content,
            returnFormat=on_error_format,
        )

    def delete(
        self,
        token: str | None,
        records: Sequence[str],
        arm: int | str | None = None,
        instrument: str | None = None,
        event: str | None = None,
        repeat_instance: int | None = None,
        delete_logging: bool = False,
    ) -> str:
        """
        Delete records, or only their data for one instrument/event/instance.

        Returns:
            Number of records deleted

        """
        return self._send(
            token,
            Content.RECORD,
            RedcapAction.DELETE,
            records=require("records", records),
            arm=arm,
            instrument=instrument,
            event=event,
            repeat_instance=repeat_instance,
            delete_logging=1 if delete_logging else None,
        )

    def rename(
        self,
        token: str | None,
        record: str,
        new_record_name: str,
        arm: int | str | None = None,
    ) -> str:
        """Rename a record (in one arm only when ``arm`` is given)."""
        if not record or not new_record_name:
            raise ValidationError("Both the record and the new record name are required")
        return self._send(
            token,
            Content.RECORD,
            RedcapAction.RENAME,
            record=record,
            new_record_name=new_record_name,
            arm=arm,
        )

    def randomize(
        self,
        token: str | None,
        record: str,
        randomization_id: int,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
        return_alt: bool = False,
    ) -> str:
        """Randomize a record using the given randomization model."""
        return self._send(
            token,
            Content.RECORD,
            RedcapAction.RANDOMIZE,
            record=record,
            randomization_id=randomization_id,
            returnAlt=return_alt,
            format=format,
            returnFormat=on_error_format,
        )


# =============================================================================
# Repeating Instruments and Events
# =============================================================================


class RepeatingOperations(_Operations):
    def export(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Export the repeating instruments and events setup."""
        return self._send(token, Content.REPEATING_FORMS_EVENTS, format=format, returnFormat=on_error_format)

    def import_(
        self,
        token: str | None,
        data: Any,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Replace the repeating instruments and events setup."""
        return self._send(
            token,
            Content.REPEATING_FORMS_EVENTS,
            RedcapAction.IMPORT,
            format=format,
            returnFormat=on_error_format,
            data=serialize_data(data, format),
        )


# =============================================================================
# Reports
# =============================================================================


class ReportOperations(_Operations):
    def export(
        self,
        token: str | None,
        report_id: int | str,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
        raw_or_label: RawOrLabel = RawOrLabel.RAW,
        raw_or_label_headers: RawOrLabelHeaders = RawOrLabelHeaders.RAW,
        export_checkbox_label: bool = False,
        csv_delimiter: CsvDelimiter | None = None,
        decimal_character: DecimalCharacter | None = None,
    ) -> str:
        """
        Export the data of a saved report.

        Args:
            token: API token
            report_id: Report ID shown on the project's reports page
            format: Response format
            on_error_format: Format of error messages
            raw_or_label: Export raw coded values or labels
            raw_or_label_headers: Raw variable names or labels as CSV headers
            export_checkbox_label: Export checkbox labels instead of Checked/Unchecked
            csv_delimiter: Delimiter for CSV output
            decimal_character: Decimal separator for number fields

        """
        if report_id in (None, ""):
            raise ValidationError("A report ID is required")
        return self._send(
            token,
            Content.REPORT,
            report_id=report_id,
            format=format,
            returnFormat=on_error_format,
            rawOrLabel=raw_or_label,
            rawOrLabelHeaders=raw_or_label_headers,
            exportCheckboxLabel=export_checkbox_label,
            csvDelimiter=csv_delimiter,
            decimalCharacter=decimal_character,
        )


# =============================================================================
# REDCap Version
# =============================================================================


class VersionOperations(_Operations):
    def export(self, token: str | None, format: ReturnFormat = JSON) -> str:
        """Return the REDCap version as plain text, e.g. ``13.7.2``."""
        return self._send(token, Content.VERSION, format=format)


# =============================================================================
# Surveys
# =============================================================================


class SurveyOperations(_Operations):
    """Operations for survey links, participants and return codes."""

    def export_link(
        self,
        token: str | None,
        record: str,
        instrument: str,
        event: str | None = None,
        repeat_instance: int | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Return the unique survey link for a record's instrument."""
        return self._send(
            token,
            Content.SURVEY_LINK,
            record=record,
            instrument=instrument,
            event=event,
            repeat_instance=repeat_instance,
            returnFormat=on_error_format,
        )

    def export_participants(
        self,
        token: str | None,
        instrument: str,
        event: str | None = None,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Export the participant list of a survey instrument."""
        return self._send(
            token,
            Content.PARTICIPANT_LIST,
            format=format,
            instrument=instrument,
            event=event,
            returnFormat=on_error_format,
        )

    def export_queue_link(
        self,
        token: str | None,
        record: str,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(token, Content.SURVEY_QUEUE_LINK, record=record, returnFormat=on_error_format)

    def export_return_code(
        self,
        token: str | None,
        record: str,
        instrument: str,
        event: str | None = None,
        repeat_instance: int | None = None,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(
            token,
            Content.SURVEY_RETURN_CODE,
            record=record,
            instrument=instrument,
            event=event,
            repeat_instance=repeat_instance,
            returnFormat=on_error_format,
        )


# =============================================================================
# Users
# =============================================================================


class UserOperations(_Operations):
    """Operations for project users and their privileges."""

    def export(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(token, Content.USER, format=format, returnFormat=on_error_format)

    def import_(
        self,
        token: str | None,
        data: Any,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Add users or update their privileges. Returns the number of users changed."""
        return self._send(
            token,
            Content.USER,
            RedcapAction.IMPORT,
            format=format,
            returnFormat=on_error_format,
            data=serialize_data(data, format),
        )

    def delete(
        self,
        token: str | None,
        users: Sequence[str],
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(
            token,
            Content.USER,
            RedcapAction.DELETE,
            users=require("users", users),
            returnFormat=on_error_format,
        )


# =============================================================================
# User Roles
# =============================================================================


class UserRoleOperations(_Operations):
    """Operations for user roles and role assignments."""

    def export(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(token, Content.USER_ROLE, format=format, returnFormat=on_error_format)

    def import_(
        self,
        token: str | None,
        data: Any,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Create roles (blank unique_role_name) or update existing ones."""
        return self._send(
            token,
            Content.USER_ROLE,
            RedcapAction.IMPORT,
            format=format,
            returnFormat=on_error_format,
            data=serialize_data(data, format),
        )

    def delete(
        self,
        token: str | None,
        roles: Sequence[str],
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Delete roles by unique role name."""
        return self._send(
            token,
            Content.USER_ROLE,
            RedcapAction.DELETE,
            roles=require("roles", roles),
            returnFormat=on_error_format,
        )

    def export_assignment(
        self,
        token: str | None,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        return self._send(token, Content.USER_ROLE_MAPPING, format=format, returnFormat=on_error_format)

    def import_assignment(
        self,
        token: str | None,
        data: Any,
        format: ReturnFormat = JSON,
        on_error_format: OnErrorFormat = ON_ERROR_JSON,
    ) -> str:
        """Assign users to roles (``[{"username": ..., "unique_role_name": ...}]``)."""
        return self._send(
            token,
            Content.USER_ROLE_MAPPING,
            RedcapAction.IMPORT,
            format=format,
            returnFormat=on_error_format,
            data=serialize_data(data, format),
        )


__all__ = [
    "ArmOperations",
    "DagOperations",
    "EventOperations",
    "FieldOperations",
    "FileOperations",
    "FileRepositoryOperations",
    "InstrumentOperations",
    "LogOperations",
    "MetadataOperations",
    "ProjectOperations",
    "RecordOperations",
    "RedcapApi",
    "RepeatingOperations",
    "ReportOperations",
    "SurveyOperations",
    "UserOperations",
    "UserRoleOperations",
    "VersionOperations",
]
