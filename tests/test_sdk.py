"""
Tests for the SDK operation groups.

Each test checks the exact form payload an operation sends, using the
mocked session from conftest.py.
"""

import json
from datetime import datetime

import pytest
from conftest import API_URL, TOKEN, make_response

from redcap_api.core.client import APIError, ValidationError
from redcap_api.core.types import (
    CsvDelimiter,
    DateFormat,
    LogType,
    Override,
    OverwriteBehavior,
    RawOrLabel,
    RedcapArm,
    RedcapDag,
    RedcapEvent,
    ReturnContent,
    ReturnFormat,
)
from redcap_api.sdk import RedcapApi

JSON_DEFAULTS = {"format": "json", "returnFormat": "json"}


def expected(content: str, action: str | None = None, token: str = TOKEN, **fields: str) -> dict[str, str]:
    payload = {"token": token, "content": content}
    if action:
        payload["action"] = action
    payload.update(fields)
    return payload


# =============================================================================
# Client
# =============================================================================


class TestRedcapApi:
    def test_default_token_used(self, api, sent):
        api.version.export(None)
        assert sent() == expected("version", format="json")

    def test_call_token_overrides_default(self, api, sent):
        api.version.export("SECOND_PROJECT_TOKEN")
        assert sent()["token"] == "SECOND_PROJECT_TOKEN"

    def test_missing_token_fails_before_request(self, session, monkeypatch):
        monkeypatch.delenv("REDCAP_API_TOKEN", raising=False)
        api = RedcapApi(url=API_URL, session=session)
        with pytest.raises(ValidationError):
            api.arms.export(None)
        session.post.assert_not_called()

    def test_token_property(self, api):
        assert api.token == TOKEN
        api.token = "NEW"
        assert api.token == "NEW"
        assert api.url == API_URL

    def test_response_returned_verbatim(self, api, session):
        body = '[{"arm_num":1,"name":"Arm 1"}]'
        session.post.return_value = make_response(body)
        assert api.arms.export(None) == body

    def test_api_error_propagates(self, api, session):
        session.post.return_value = make_response('{"error":"The arm number 9 is invalid"}', status=400)
        with pytest.raises(APIError, match="arm number 9"):
            api.arms.delete(None, ["9"])

    def test_context_manager(self, session):
        with RedcapApi(url=API_URL, token=TOKEN, session=session) as api:
            api.version.export(None)
        session.close.assert_called_once()


# =============================================================================
# Arms, events and DAGs
# =============================================================================


class TestArms:
    def test_export_flattens_arms(self, api, sent):
        api.arms.export(None, arms=["1", "2"])
        assert sent() == expected("arm", **JSON_DEFAULTS, **{"arms[0]": "1", "arms[1]": "2"})

    def test_export_all(self, api, sent):
        api.arms.export(None)
        assert sent() == expected("arm", **JSON_DEFAULTS)

    def test_import(self, api, sent):
        api.arms.import_(None, [RedcapArm(arm_num="1", name="Drug A")], override=Override.TRUE)
        payload = sent()
        assert payload["action"] == "import"
        assert payload["override"] == "1"
        assert json.loads(payload["data"]) == [{"arm_num": "1", "name": "Drug A"}]

    def test_import_csv_text(self, api, sent):
        api.arms.import_(None, "arm_num,name\n1,Drug A\n", format=ReturnFormat.CSV)
        assert sent() == expected(
            "arm",
            "import",
            override="0",
            format="csv",
            returnFormat="json",
            data="arm_num,name\n1,Drug A\n",
        )

    def test_delete(self, api, sent):
        api.arms.delete(None, ["3"])
        assert sent() == expected("arm", "delete", **{"arms[0]": "3"})

    def test_delete_requires_arms(self, api, session):
        with pytest.raises(ValidationError):
            api.arms.delete(None, [])
        session.post.assert_not_called()


class TestEvents:
    def test_export(self, api, sent):
        api.events.export(None, format=ReturnFormat.CSV, arms=["1"])
        assert sent() == expected("event", format="csv", returnFormat="json", **{"arms[0]": "1"})

    def test_import(self, api, sent):
        event = RedcapEvent(event_name="Baseline", arm_num="1", day_offset="0")
        api.events.import_(None, [event])
        assert json.loads(sent()["data"]) == [{"event_name": "Baseline", "arm_num": "1", "day_offset": "0"}]

    def test_delete(self, api, sent):
        api.events.delete(None, ["baseline_arm_1", "week_1_arm_1"])
        assert sent() == expected(
            "event",
            "delete",
            **{"events[0]": "baseline_arm_1", "events[1]": "week_1_arm_1"},
        )

    def test_delete_requires_events(self, api):
        with pytest.raises(ValidationError):
            api.events.delete(None, None)


class TestDags:
    def test_export(self, api, sent):
        api.dags.export(None)
        assert sent() == expected("dag", **JSON_DEFAULTS)

    def test_delete(self, api, sent):
        api.dags.delete(None, ["site_a"])
        assert sent() == expected("dag", "delete", **{"dags[0]": "site_a"})

    def test_switch_with_name(self, api, sent):
        api.dags.switch(None, "site_b")
        assert sent() == expected("dag", "switch", dag="site_b")

    def test_switch_with_dag(self, api, sent):
        api.dags.switch(None, RedcapDag(data_access_group_name="Site B", unique_group_name="site_b"))
        assert sent()["dag"] == "site_b"

    def test_switch_requires_unique_name(self, api):
        with pytest.raises(ValidationError):
            api.dags.switch(None, RedcapDag(data_access_group_name="New site"))

    def test_user_assignment(self, api, sent):
        api.dags.export_user_assignment(None)
        assert sent() == expected("userDagMapping", **JSON_DEFAULTS)

        api.dags.import_user_assignment(None, [{"username": "alice", "redcap_data_access_group": "site_a"}])
        payload = sent()
        assert payload["content"] == "userDagMapping"
        assert payload["action"] == "import"


# =============================================================================
# Fields, instruments and metadata
# =============================================================================


class TestFieldsAndInstruments:
    def test_export_field_names(self, api, sent):
        api.fields.export_names(None, field="age")
        assert sent() == expected("exportFieldNames", **JSON_DEFAULTS, field="age")

    def test_export_instruments(self, api, sent):
        api.instruments.export(None, format=ReturnFormat.XML)
        assert sent() == expected("instrument", format="xml", returnFormat="json")

    def test_export_mapping(self, api, sent):
        api.instruments.export_mapping(None, arms=["2"])
        assert sent() == expected("formEventMapping", **JSON_DEFAULTS, **{"arms[0]": "2"})

    def test_import_mapping(self, api, sent):
        api.instruments.import_mapping(None, '[{"arm_num":1,"unique_event_name":"baseline_arm_1","form":"demo"}]')
        assert sent()["action"] == "import"

    def test_export_pdf(self, api, session, sent):
        session.post.return_value = make_response(
            headers={"Content-Type": 'application/pdf; name="demographics.pdf"'},
            content=b"%PDF-1.4",
        )
        exported = api.instruments.export_pdf(None, record="1", instrument="demographics", compact_display=True)
        assert sent() == expected(
            "pdf",
            returnFormat="json",
            record="1",
            instrument="demographics",
            compactDisplay="true",
        )
        assert exported.file_name == "demographics.pdf"
        assert exported.content == b"%PDF-1.4"

    def test_export_metadata(self, api, sent):
        api.metadata.export(None, fields=["record_id"], forms=["demographics", "labs"])
        assert sent() == expected(
            "metadata",
            **JSON_DEFAULTS,
            **{"fields[0]": "record_id", "forms[0]": "demographics", "forms[1]": "labs"},
        )

    def test_import_metadata(self, api, sent):
        api.metadata.import_(None, [{"field_name": "record_id", "form_name": "demographics"}])
        assert sent()["content"] == "metadata"
        assert sent()["action"] == "import"


# =============================================================================
# Files and file repository
# =============================================================================


class TestFiles:
    def test_export_saves_file(self, api, session, sent, tmp_path):
        session.post.return_value = make_response(
            headers={"Content-Type": 'text/plain; name="notes.txt"'},
            content=b"hello",
        )
        exported = api.files.export(None, "1", "upload", event="baseline_arm_1", file_path=str(tmp_path))
        assert sent() == expected(
            "file",
            "export",
            record="1",
            field="upload",
            event="baseline_arm_1",
            returnFormat="json",
        )
        assert (tmp_path / "notes.txt").read_bytes() == b"hello"
        assert exported.path == str(tmp_path / "notes.txt")

    def test_import_sends_multipart(self, api, session, sent, tmp_path):
        (tmp_path / "scan.png").write_bytes(b"\x89PNG")
        api.files.import_(None, "1", "upload", "scan.png", str(tmp_path), repeat_instance=2)
        assert sent() == expected(
            "file",
            "import",
            record="1",
            field="upload",
            returnFormat="json",
            repeat_instance="2",
        )
        assert session.post.call_args.kwargs["files"] == {"file": ("scan.png", b"\x89PNG", "application/octet-stream")}

    @pytest.mark.parametrize(("file_name", "file_path"), [("", "/tmp"), ("scan.png", ""), ("", "")])
    def test_import_requires_name_and_path(self, api, session, file_name, file_path):
        with pytest.raises(ValidationError):
            api.files.import_(None, "1", "upload", file_name, file_path)
        session.post.assert_not_called()

    def test_import_unreadable_file(self, api, session, tmp_path):
        with pytest.raises(ValidationError, match="Could not read"):
            api.files.import_(None, "1", "upload", "missing.png", str(tmp_path))
        session.post.assert_not_called()

    def test_delete(self, api, sent):
        api.files.delete(None, "1", "upload")
        assert sent() == expected("file", "delete", record="1", field="upload", returnFormat="json")


class TestFileRepository:
    def test_create_folder(self, api, sent):
        api.file_repository.create_folder(None, "Consent forms", folder_id=4, role_id=2)
        assert sent() == expected(
            "fileRepository",
            "createFolder",
            name="Consent forms",
            folder_id="4",
            role_id="2",
            **JSON_DEFAULTS,
        )

    def test_create_folder_requires_name(self, api):
        with pytest.raises(ValidationError):
            api.file_repository.create_folder(None, "")

    def test_list(self, api, sent):
        api.file_repository.list(None)
        assert sent() == expected("fileRepository", "list", **JSON_DEFAULTS)

    def test_export(self, api, session, sent):
        session.post.return_value = make_response(
            headers={"Content-Type": 'application/pdf; name="protocol.pdf"'},
            content=b"%PDF",
        )
        exported = api.file_repository.export(None, 17)
        assert sent() == expected("fileRepository", "export", doc_id="17", returnFormat="json")
        assert exported.file_name == "protocol.pdf"

    def test_import(self, api, session, sent, tmp_path):
        (tmp_path / "protocol.pdf").write_bytes(b"%PDF")
        api.file_repository.import_(None, "protocol.pdf", str(tmp_path), folder_id=4)
        assert sent() == expected("fileRepository", "import", folder_id="4", returnFormat="json")
        assert session.post.call_args.kwargs["files"]["file"][0] == "protocol.pdf"

    def test_import_requires_path(self, api):
        with pytest.raises(ValidationError):
            api.file_repository.import_(None, "protocol.pdf", "")

    def test_delete(self, api, sent):
        api.file_repository.delete(None, 17)
        assert sent() == expected("fileRepository", "delete", doc_id="17", returnFormat="json")


# =============================================================================
# Logging and projects
# =============================================================================


class TestLogs:
    def test_export_with_filters(self, api, sent):
        api.logs.export(
            None,
            log_type=LogType.RECORD_EDIT,
            user="alice",
            begin_time=datetime(2024, 1, 1, 8, 30, 15),
            end_time="2024-01-31 17:00",
        )
        assert sent() == expected(
            "log",
            format="json",
            logtype="record_edit",
            user="alice",
            beginTime="2024-01-01 08:30",
            endTime="2024-01-31 17:00",
            returnFormat="json",
        )


class TestProjects:
    def test_create(self, api, sent):
        api.projects.create("SUPER_TOKEN", [{"project_title": "Trial", "purpose": 0}])
        payload = sent()
        assert payload["token"] == "SUPER_TOKEN"
        assert payload["content"] == "project"
        assert "action" not in payload
        assert json.loads(payload["data"]) == [{"project_title": "Trial", "purpose": 0}]
        assert "odm" not in payload

    def test_import_info(self, api, sent):
        api.projects.import_info(None, {"project_title": "Renamed"})
        assert sent() == expected("project_settings", **JSON_DEFAULTS, data='{"project_title": "Renamed"}')

    def test_export_info(self, api, sent):
        api.projects.export_info(None)
        assert sent() == expected("project", **JSON_DEFAULTS)

    def test_export_xml(self, api, sent):
        api.projects.export_xml(None, return_metadata_only=True, filter_logic="[age] > 30")
        assert sent() == expected(
            "project_xml",
            returnFormat="json",
            returnMetadataOnly="true",
            filterLogic="[age] > 30",
        )


# =============================================================================
# Records
# =============================================================================


class TestRecords:
    def test_generate_next_name(self, api, sent):
        api.records.generate_next_name(None)
        assert sent() == expected("generateNextRecordName")

    def test_export_defaults(self, api, sent):
        api.records.export(None)
        assert sent() == expected(
            "record",
            **JSON_DEFAULTS,
            type="flat",
            rawOrLabel="raw",
            rawOrLabelHeaders="raw",
        )

    def test_export_options(self, api, sent):
        api.records.export(
            None,
            format=ReturnFormat.CSV,
            records=["1001", "1002"],
            fields=["record_id", "age"],
            raw_or_label=RawOrLabel.LABEL,
            export_checkbox_label=True,
            date_range_begin=datetime(2024, 2, 1, 0, 0, 0),
            csv_delimiter=CsvDelimiter.TAB,
        )
        payload = sent()
        assert payload["format"] == "csv"
        assert payload["records[0]"] == "1001"
        assert payload["records[1]"] == "1002"
        assert payload["fields[1]"] == "age"
        assert payload["rawOrLabel"] == "label"
        assert payload["exportCheckboxLabel"] == "true"
        assert payload["dateRangeBegin"] == "2024-02-01 00:00:00"
        assert payload["csvDelimiter"] == "tab"
        assert "forms[0]" not in payload
        assert "filterLogic" not in payload

    def test_export_one(self, api, sent):
        api.records.export_one(None, "1001", fields=["age"])
        payload = sent()
        assert payload["records[0]"] == "1001"
        assert "records[1]" not in payload
        assert payload["fields[0]"] == "age"

    def test_export_one_requires_record(self, api):
        with pytest.raises(ValidationError):
            api.records.export_one(None, "")

    def test_import_defaults(self, api, sent):
        api.records.import_(None, [{"record_id": "1", "age": 42}])
        assert sent() == expected(
            "record",
            "import",
            format="json",
            type="flat",
            overwriteBehavior="normal",
            data='[{"record_id": "1", "age": 42}]',
            returnContent="count",
            returnFormat="json",
        )

    def test_import_options(self, api, sent):
        api.records.import_(
            None,
            "record_id,dob\n1,01/02/1980\n",
            format=ReturnFormat.CSV,
            overwrite_behavior=OverwriteBehavior.OVERWRITE,
            force_auto_number=True,
            date_format=DateFormat.MDY,
            return_content=ReturnContent.AUTO_IDS,
        )
        payload = sent()
        assert payload["overwriteBehavior"] == "overwrite"
        assert payload["forceAutoNumber"] == "true"
        assert payload["dateFormat"] == "MDY"
        assert payload["returnContent"] == "auto_ids"
        assert payload["data"] == "record_id,dob\n1,01/02/1980\n"

    def test_import_objects_as_csv_rejected(self, api, session):
        with pytest.raises(ValidationError):
            api.records.import_(None, [{"record_id": "1"}], format=ReturnFormat.CSV)
        session.post.assert_not_called()

    def test_delete(self, api, sent):
        api.records.delete(None, ["1", "2"], arm=2, delete_logging=True)
        assert sent() == expected(
            "record",
            "delete",
            arm="2",
            delete_logging="1",
            **{"records[0]": "1", "records[1]": "2"},
        )

    def test_delete_requires_records(self, api):
        with pytest.raises(ValidationError):
            api.records.delete(None, [])

    def test_rename(self, api, sent):
        api.records.rename(None, "1", "1001")
        assert sent() == expected("record", "rename", record="1", new_record_name="1001")

    def test_randomize(self, api, sent):
        api.records.randomize(None, "1", 3, return_alt=True)
        assert sent() == expected(
            "record",
            "randomize",
            record="1",
            randomization_id="3",
            returnAlt="true",
            **JSON_DEFAULTS,
        )


# =============================================================================
# Reports, repeating setup and version
# =============================================================================


class TestReportsAndRepeating:
    def test_report(self, api, sent):
        api.reports.export(None, 42, format=ReturnFormat.CSV)
        assert sent() == expected(
            "report",
            report_id="42",
            format="csv",
            returnFormat="json",
            rawOrLabel="raw",
            rawOrLabelHeaders="raw",
        )

    def test_report_requires_id(self, api):
        with pytest.raises(ValidationError):
            api.reports.export(None, "")

    def test_repeating(self, api, sent):
        api.repeating.export(None)
        assert sent() == expected("repeatingFormsEvents", **JSON_DEFAULTS)

        api.repeating.import_(None, [{"event_name": "visit_arm_1", "form_name": "labs", "custom_form_label": ""}])
        assert sent()["action"] == "import"

    def test_version_plain_text(self, api, session):
        session.post.return_value = make_response("14.0.2")
        assert api.version.export(None) == "14.0.2"


# =============================================================================
# Surveys, users and roles
# =============================================================================


class TestSurveys:
    def test_link(self, api, sent):
        api.surveys.export_link(None, "1", "consent", event="enrollment_arm_1", repeat_instance=1)
        assert sent() == expected(
            "surveyLink",
            record="1",
            instrument="consent",
            event="enrollment_arm_1",
            repeat_instance="1",
            returnFormat="json",
        )

    def test_participants(self, api, sent):
        api.surveys.export_participants(None, "consent")
        assert sent() == expected("participantList", format="json", instrument="consent", returnFormat="json")

    def test_queue_link(self, api, sent):
        api.surveys.export_queue_link(None, "1")
        assert sent() == expected("surveyQueueLink", record="1", returnFormat="json")

    def test_return_code(self, api, sent):
        api.surveys.export_return_code(None, "1", "consent")
        assert sent() == expected("surveyReturnCode", record="1", instrument="consent", returnFormat="json")


class TestUsersAndRoles:
    def test_users(self, api, sent):
        api.users.export(None)
        assert sent() == expected("user", **JSON_DEFAULTS)

        api.users.import_(None, [{"username": "alice", "design": 1}])
        assert sent()["action"] == "import"

        api.users.delete(None, ["alice", "bob"])
        assert sent() == expected("user", "delete", returnFormat="json", **{"users[0]": "alice", "users[1]": "bob"})

    def test_users_delete_requires_users(self, api):
        with pytest.raises(ValidationError):
            api.users.delete(None, [])

    def test_roles(self, api, sent):
        api.user_roles.export(None)
        assert sent() == expected("userRole", **JSON_DEFAULTS)

        api.user_roles.delete(None, ["U-527D39JXAC"])
        assert sent() == expected("userRole", "delete", returnFormat="json", **{"roles[0]": "U-527D39JXAC"})

        api.user_roles.export_assignment(None)
        assert sent() == expected("userRoleMapping", **JSON_DEFAULTS)

        api.user_roles.import_assignment(None, [{"username": "alice", "unique_role_name": "U-527D39JXAC"}])
        assert sent()["content"] == "userRoleMapping"
        assert sent()["action"] == "import"

    def test_roles_delete_requires_roles(self, api):
        with pytest.raises(ValidationError):
            api.user_roles.delete(None, [])
