"""
REDCap CLI - Command-line interface over the SDK.

This layer provides the user-facing CLI commands, using the SDK layer
for all operations. It handles:
- Argument parsing
- Loading configuration from .env and flags
- Writing REDCap response bodies to stdout unchanged
- JSON error output for piping/automation
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from redcap_api.core.client import RedcapError, ValidationError
from redcap_api.core.types import (
    LogType,
    Override,
    OverwriteBehavior,
    RawOrLabel,
    RawOrLabelHeaders,
    RedcapDataType,
    ReturnContent,
    ReturnFormat,
)
from redcap_api.sdk import RedcapApi

FORMATS = [f.value for f in ReturnFormat]

# =============================================================================
# Output Helpers
# =============================================================================


def is_tty() -> bool:
    """Check if stdout is a TTY (human) or pipe (machine)."""
    return sys.stdout.isatty()


def json_output(data: Any, pretty: bool = False) -> None:
    """Print JSON output."""
    indent = 2 if pretty or is_tty() else None
    print(json.dumps(data, indent=indent, default=str))


def error_output(error: RedcapError) -> None:
    """Print error and exit."""
    json_output(error.to_dict())
    sys.exit(1)


def success_output(data: Any) -> None:
    """Print success output."""
    json_output(data)


def body_output(body: str) -> None:
    """Write a REDCap response body exactly as received."""
    sys.stdout.write(body)
    if is_tty() and not body.endswith("\n"):
        sys.stdout.write("\n")


def read_data(source: str) -> str:
    """Read import data from a file path, or stdin for '-'."""
    if source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text()
    except OSError as e:
        raise ValidationError(f"Could not read {source}: {e}")


def split_list(value: str | None) -> list[str] | None:
    """Split a comma-separated option into a list."""
    if not value:
        return None
    return [v.strip() for v in value.split(",") if v.strip()]


def file_result(exported: Any) -> dict[str, Any]:
    return {
        "file_name": exported.file_name,
        "content_type": exported.content_type,
        "size": exported.size,
        "path": exported.path,
    }


# =============================================================================
# CLI Commands
# =============================================================================


def cmd_version(api: RedcapApi, _args: argparse.Namespace) -> None:
    """Print the REDCap version."""
    body_output(api.version.export(None))


def cmd_arms_export(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.arms.export(None, format=ReturnFormat(args.format), arms=split_list(args.arms)))


def cmd_arms_import(api: RedcapApi, args: argparse.Namespace) -> None:
    override = Override.TRUE if args.override else Override.FALSE
    body_output(api.arms.import_(None, read_data(args.file), override=override, format=ReturnFormat(args.format)))


def cmd_arms_delete(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.arms.delete(None, args.arms))


def cmd_events_export(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.events.export(None, format=ReturnFormat(args.format), arms=split_list(args.arms)))


def cmd_events_import(api: RedcapApi, args: argparse.Namespace) -> None:
    override = Override.TRUE if args.override else Override.FALSE
    body_output(api.events.import_(None, read_data(args.file), override=override, format=ReturnFormat(args.format)))


def cmd_events_delete(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.events.delete(None, args.events))


def cmd_dags_export(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.dags.export(None, format=ReturnFormat(args.format)))


def cmd_dags_import(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.dags.import_(None, read_data(args.file), format=ReturnFormat(args.format)))


def cmd_dags_delete(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.dags.delete(None, args.dags))


def cmd_dags_switch(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.dags.switch(None, args.dag))


def cmd_fields(api: RedcapApi, args: argparse.Namespace) -> None:
    """Export the export field names."""
    body_output(api.fields.export_names(None, format=ReturnFormat(args.format), field=args.field))


def cmd_files_export(api: RedcapApi, args: argparse.Namespace) -> None:
    """Download a file from a record and save it."""
    exported = api.files.export(
        None,
        args.record,
        args.field,
        event=args.event,
        repeat_instance=args.instance,
        file_path=args.output,
    )
    success_output(file_result(exported))


def cmd_files_import(api: RedcapApi, args: argparse.Namespace) -> None:
    path = Path(args.path)
    body_output(
        api.files.import_(
            None,
            args.record,
            args.field,
            path.name,
            str(path.parent),
            event=args.event,
            repeat_instance=args.instance,
        )
    )


def cmd_files_delete(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.files.delete(None, args.record, args.field, event=args.event, repeat_instance=args.instance))


def cmd_instruments_export(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.instruments.export(None, format=ReturnFormat(args.format)))


def cmd_instruments_pdf(api: RedcapApi, args: argparse.Namespace) -> None:
    """Export instruments as a PDF and save it."""
    exported = api.instruments.export_pdf(
        None,
        record=args.record,
        event=args.event,
        instrument=args.instrument,
        all_records=args.all_records,
        compact_display=args.compact,
        file_path=args.output,
    )
    success_output(file_result(exported))


def cmd_instruments_mapping(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.instruments.export_mapping(None, format=ReturnFormat(args.format), arms=split_list(args.arms)))


def cmd_logs(api: RedcapApi, args: argparse.Namespace) -> None:
    """Export the audit log."""
    body_output(
        api.logs.export(
            None,
            format=ReturnFormat(args.format),
            log_type=LogType(args.type) if args.type else None,
            user=args.user,
            record=args.record,
            begin_time=args.begin,
            end_time=args.end,
        )
    )


def cmd_metadata_export(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(
        api.metadata.export(
            None,
            format=ReturnFormat(args.format),
            fields=split_list(args.fields),
            forms=split_list(args.forms),
        )
    )


def cmd_metadata_import(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.metadata.import_(None, read_data(args.file), format=ReturnFormat(args.format)))


def cmd_project_info(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.projects.export_info(None, format=ReturnFormat(args.format)))


def cmd_project_xml(api: RedcapApi, args: argparse.Namespace) -> None:
    """Export the project as CDISC ODM XML."""
    body_output(
        api.projects.export_xml(
            None,
            return_metadata_only=args.metadata_only,
            export_files=args.files,
        )
    )


def cmd_project_next_record(api: RedcapApi, _args: argparse.Namespace) -> None:
    body_output(api.records.generate_next_name(None))


def cmd_records_export(api: RedcapApi, args: argparse.Namespace) -> None:
    """Export records."""
    body_output(
        api.records.export(
            None,
            format=ReturnFormat(args.format),
            type=RedcapDataType(args.type),
            records=split_list(args.records),
            fields=split_list(args.fields),
            forms=split_list(args.forms),
            events=split_list(args.events),
            raw_or_label=RawOrLabel.LABEL if args.labels else RawOrLabel.RAW,
            raw_or_label_headers=RawOrLabelHeaders.LABEL if args.labels else RawOrLabelHeaders.RAW,
            filter_logic=args.filter,
        )
    )


def cmd_records_import(api: RedcapApi, args: argparse.Namespace) -> None:
    """Import records."""
    body_output(
        api.records.import_(
            None,
            read_data(args.file),
            format=ReturnFormat(args.format),
            overwrite_behavior=OverwriteBehavior.OVERWRITE if args.overwrite else OverwriteBehavior.NORMAL,
            force_auto_number=args.auto_number,
            return_content=ReturnContent(args.return_content),
        )
    )


def cmd_records_delete(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.records.delete(None, args.records, arm=args.arm, delete_logging=args.delete_logging))


def cmd_records_rename(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.records.rename(None, args.record, args.new_name, arm=args.arm))


def cmd_reports(api: RedcapApi, args: argparse.Namespace) -> None:
    """Export a saved report."""
    body_output(
        api.reports.export(
            None,
            args.report_id,
            format=ReturnFormat(args.format),
            raw_or_label=RawOrLabel.LABEL if args.labels else RawOrLabel.RAW,
        )
    )


def cmd_repeating(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.repeating.export(None, format=ReturnFormat(args.format)))


def cmd_surveys_link(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.surveys.export_link(None, args.record, args.instrument, event=args.event))


def cmd_surveys_participants(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.surveys.export_participants(None, args.instrument, event=args.event, format=ReturnFormat(args.format)))


def cmd_surveys_queue_link(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.surveys.export_queue_link(None, args.record))


def cmd_surveys_return_code(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.surveys.export_return_code(None, args.record, args.instrument, event=args.event))


def cmd_users_export(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.users.export(None, format=ReturnFormat(args.format)))


def cmd_users_import(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.users.import_(None, read_data(args.file), format=ReturnFormat(args.format)))


def cmd_users_delete(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.users.delete(None, args.users))


def cmd_roles_export(api: RedcapApi, args: argparse.Namespace) -> None:
    body_output(api.user_roles.export(None, format=ReturnFormat(args.format)))


# =============================================================================
# Main CLI
# =============================================================================


def add_format(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--format", "-f", choices=FORMATS, default="json", help="Response format (default: json)")


def create_parser() -> argparse.ArgumentParser:  # noqa: PLR0915
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="redcap",
        description="REDCap CLI - Command-line interface for the REDCap API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration:
  REDCAP_API_URL and REDCAP_API_TOKEN are read from the environment or a
  .env file; --url and --token override them.

Examples:
  redcap version
  redcap records export --fields record_id,age --format csv
  redcap records import data.json
  redcap files export 1 consent_form --output ./downloads
  redcap arms export | jq '.[].name'
""",
    )
    parser.add_argument("--url", help="REDCap API URL (overrides REDCAP_API_URL)")
    parser.add_argument("--token", help="API token (overrides REDCAP_API_TOKEN)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests to stderr")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ========== Version ==========
    version = subparsers.add_parser("version", help="Show the REDCap version")
    version.set_defaults(func=cmd_version)

    # ========== Arms ==========
    arms = subparsers.add_parser("arms", help="Manage study arms")
    arms.set_defaults(func=lambda _c, _a: arms.print_help())
    arms_sub = arms.add_subparsers(dest="subcommand")

    ar_export = arms_sub.add_parser("export", help="Export arms")
    ar_export.add_argument("--arms", help="Comma-separated arm numbers")
    add_format(ar_export)
    ar_export.set_defaults(func=cmd_arms_export)

    ar_import = arms_sub.add_parser("import", help="Import arms")
    ar_import.add_argument("file", help="Data file (or - for stdin)")
    ar_import.add_argument("--override", action="store_true", help="Delete all existing arms first")
    add_format(ar_import)
    ar_import.set_defaults(func=cmd_arms_import)

    ar_delete = arms_sub.add_parser("delete", help="Delete arms")
    ar_delete.add_argument("arms", nargs="+", help="Arm numbers")
    ar_delete.set_defaults(func=cmd_arms_delete)

    # ========== Events ==========
    events = subparsers.add_parser("events", help="Manage events")
    events.set_defaults(func=lambda _c, _a: events.print_help())
    events_sub = events.add_subparsers(dest="subcommand")

    ev_export = events_sub.add_parser("export", help="Export events")
    ev_export.add_argument("--arms", help="Comma-separated arm numbers")
    add_format(ev_export)
    ev_export.set_defaults(func=cmd_events_export)

    ev_import = events_sub.add_parser("import", help="Import events")
    ev_import.add_argument("file", help="Data file (or - for stdin)")
    ev_import.add_argument("--override", action="store_true", help="Delete all existing events first")
    add_format(ev_import)
    ev_import.set_defaults(func=cmd_events_import)

    ev_delete = events_sub.add_parser("delete", help="Delete events")
    ev_delete.add_argument("events", nargs="+", help="Unique event names")
    ev_delete.set_defaults(func=cmd_events_delete)

    # ========== DAGs ==========
    dags = subparsers.add_parser("dags", help="Manage Data Access Groups")
    dags.set_defaults(func=lambda _c, _a: dags.print_help())
    dags_sub = dags.add_subparsers(dest="subcommand")

    d_export = dags_sub.add_parser("export", help="Export DAGs")
    add_format(d_export)
    d_export.set_defaults(func=cmd_dags_export)

    d_import = dags_sub.add_parser("import", help="Import DAGs")
    d_import.add_argument("file", help="Data file (or - for stdin)")
    add_format(d_import)
    d_import.set_defaults(func=cmd_dags_import)

    d_delete = dags_sub.add_parser("delete", help="Delete DAGs")
    d_delete.add_argument("dags", nargs="+", help="Unique group names")
    d_delete.set_defaults(func=cmd_dags_delete)

    d_switch = dags_sub.add_parser("switch", help="Switch your current DAG")
    d_switch.add_argument("dag", help="Unique group name")
    d_switch.set_defaults(func=cmd_dags_switch)

    # ========== Field Names ==========
    fields = subparsers.add_parser("fields", help="Export the export field names")
    fields.add_argument("--field", help="Single field name")
    add_format(fields)
    fields.set_defaults(func=cmd_fields)

    # ========== Files ==========
    files = subparsers.add_parser("files", help="Manage files in file-upload fields")
    files.set_defaults(func=lambda _c, _a: files.print_help())
    files_sub = files.add_subparsers(dest="subcommand")

    fl_export = files_sub.add_parser("export", help="Download a file")
    fl_export.add_argument("record", help="Record ID")
    fl_export.add_argument("field", help="File-upload field")
    fl_export.add_argument("--event", help="Unique event name")
    fl_export.add_argument("--instance", type=int, help="Repeat instance")
    fl_export.add_argument("--output", "-o", default=".", help="Directory to save into (default: .)")
    fl_export.set_defaults(func=cmd_files_export)

    fl_import = files_sub.add_parser("import", help="Upload a file")
    fl_import.add_argument("record", help="Record ID")
    fl_import.add_argument("field", help="File-upload field")
    fl_import.add_argument("path", help="Local file to upload")
    fl_import.add_argument("--event", help="Unique event name")
    fl_import.add_argument("--instance", type=int, help="Repeat instance")
    fl_import.set_defaults(func=cmd_files_import)

    fl_delete = files_sub.add_parser("delete", help="Delete a file")
    fl_delete.add_argument("record", help="Record ID")
    fl_delete.add_argument("field", help="File-upload field")
    fl_delete.add_argument("--event", help="Unique event name")
    fl_delete.add_argument("--instance", type=int, help="Repeat instance")
    fl_delete.set_defaults(func=cmd_files_delete)

    # ========== Instruments ==========
    instruments = subparsers.add_parser("instruments", help="Export instruments")
    instruments.set_defaults(func=lambda _c, _a: instruments.print_help())
    instruments_sub = instruments.add_subparsers(dest="subcommand")

    i_export = instruments_sub.add_parser("export", help="List instruments")
    add_format(i_export)
    i_export.set_defaults(func=cmd_instruments_export)

    i_pdf = instruments_sub.add_parser("pdf", help="Export instruments as PDF")
    i_pdf.add_argument("--record", help="Record ID (blank forms when omitted)")
    i_pdf.add_argument("--event", help="Unique event name")
    i_pdf.add_argument("--instrument", help="Single instrument")
    i_pdf.add_argument("--all-records", action="store_true", help="Include all records")
    i_pdf.add_argument("--compact", action="store_true", help="Leave out empty fields")
    i_pdf.add_argument("--output", "-o", default=".", help="Directory to save into (default: .)")
    i_pdf.set_defaults(func=cmd_instruments_pdf)

    i_mapping = instruments_sub.add_parser("mapping", help="Export instrument-event mappings")
    i_mapping.add_argument("--arms", help="Comma-separated arm numbers")
    add_format(i_mapping)
    i_mapping.set_defaults(func=cmd_instruments_mapping)

    # ========== Logging ==========
    logs = subparsers.add_parser("logs", help="Export the audit log")
    logs.add_argument("--type", choices=[t.value for t in LogType], help="Log entry type")
    logs.add_argument("--user", help="Username")
    logs.add_argument("--record", help="Record ID")
    logs.add_argument("--begin", help="Begin time (YYYY-MM-DD HH:MM)")
    logs.add_argument("--end", help="End time (YYYY-MM-DD HH:MM)")
    add_format(logs)
    logs.set_defaults(func=cmd_logs)

    # ========== Metadata ==========
    metadata = subparsers.add_parser("metadata", help="Manage the data dictionary")
    metadata.set_defaults(func=lambda _c, _a: metadata.print_help())
    metadata_sub = metadata.add_subparsers(dest="subcommand")

    m_export = metadata_sub.add_parser("export", help="Export the data dictionary")
    m_export.add_argument("--fields", help="Comma-separated field names")
    m_export.add_argument("--forms", help="Comma-separated instrument names")
    add_format(m_export)
    m_export.set_defaults(func=cmd_metadata_export)

    m_import = metadata_sub.add_parser("import", help="Import the data dictionary")
    m_import.add_argument("file", help="Data file (or - for stdin)")
    add_format(m_import)
    m_import.set_defaults(func=cmd_metadata_import)

    # ========== Project ==========
    project = subparsers.add_parser("project", help="Project information")
    project.set_defaults(func=lambda _c, _a: project.print_help())
    project_sub = project.add_subparsers(dest="subcommand")

    p_info = project_sub.add_parser("info", help="Export project settings")
    add_format(p_info)
    p_info.set_defaults(func=cmd_project_info)

    p_xml = project_sub.add_parser("xml", help="Export the project as CDISC ODM XML")
    p_xml.add_argument("--metadata-only", action="store_true", help="Leave out record data")
    p_xml.add_argument("--files", action="store_true", help="Embed uploaded files")
    p_xml.set_defaults(func=cmd_project_xml)

    p_next = project_sub.add_parser("next-record", help="Generate the next record name")
    p_next.set_defaults(func=cmd_project_next_record)

    # ========== Records ==========
    records = subparsers.add_parser("records", help="Manage records")
    records.set_defaults(func=lambda _c, _a: records.print_help())
    records_sub = records.add_subparsers(dest="subcommand")

    r_export = records_sub.add_parser("export", help="Export records")
    r_export.add_argument("--records", help="Comma-separated record IDs")
    r_export.add_argument("--fields", help="Comma-separated field names")
    r_export.add_argument("--forms", help="Comma-separated instrument names")
    r_export.add_argument("--events", help="Comma-separated unique event names")
    r_export.add_argument("--filter", help="Filter logic, e.g. [age] > 30")
    r_export.add_argument("--type", choices=["flat", "eav"], default="flat", help="Data type (default: flat)")
    r_export.add_argument("--labels", action="store_true", help="Export labels instead of raw values")
    add_format(r_export)
    r_export.set_defaults(func=cmd_records_export)

    r_import = records_sub.add_parser("import", help="Import records")
    r_import.add_argument("file", help="Data file (or - for stdin)")
    r_import.add_argument("--overwrite", action="store_true", help="Blank values erase stored values")
    r_import.add_argument("--auto-number", action="store_true", help="Let REDCap assign record names")
    r_import.add_argument(
        "--return-content",
        choices=[c.value for c in ReturnContent],
        default="count",
        help="What to return (default: count)",
    )
    add_format(r_import)
    r_import.set_defaults(func=cmd_records_import)

    r_delete = records_sub.add_parser("delete", help="Delete records")
    r_delete.add_argument("records", nargs="+", help="Record IDs")
    r_delete.add_argument("--arm", help="Arm number")
    r_delete.add_argument("--delete-logging", action="store_true", help="Also delete the records' log entries")
    r_delete.set_defaults(func=cmd_records_delete)

    r_rename = records_sub.add_parser("rename", help="Rename a record")
    r_rename.add_argument("record", help="Current record ID")
    r_rename.add_argument("new_name", help="New record ID")
    r_rename.add_argument("--arm", help="Arm number")
    r_rename.set_defaults(func=cmd_records_rename)

    # ========== Reports ==========
    reports = subparsers.add_parser("reports", help="Export a saved report")
    reports.add_argument("report_id", help="Report ID")
    reports.add_argument("--labels", action="store_true", help="Export labels instead of raw values")
    add_format(reports)
    reports.set_defaults(func=cmd_reports)

    # ========== Repeating ==========
    repeating = subparsers.add_parser("repeating", help="Export repeating instruments and events")
    add_format(repeating)
    repeating.set_defaults(func=cmd_repeating)

    # ========== Surveys ==========
    surveys = subparsers.add_parser("surveys", help="Survey links and participants")
    surveys.set_defaults(func=lambda _c, _a: surveys.print_help())
    surveys_sub = surveys.add_subparsers(dest="subcommand")

    s_link = surveys_sub.add_parser("link", help="Export a survey link")
    s_link.add_argument("record", help="Record ID")
    s_link.add_argument("instrument", help="Survey instrument")
    s_link.add_argument("--event", help="Unique event name")
    s_link.set_defaults(func=cmd_surveys_link)

    s_participants = surveys_sub.add_parser("participants", help="Export a participant list")
    s_participants.add_argument("instrument", help="Survey instrument")
    s_participants.add_argument("--event", help="Unique event name")
    add_format(s_participants)
    s_participants.set_defaults(func=cmd_surveys_participants)

    s_queue = surveys_sub.add_parser("queue-link", help="Export a survey queue link")
    s_queue.add_argument("record", help="Record ID")
    s_queue.set_defaults(func=cmd_surveys_queue_link)

    s_code = surveys_sub.add_parser("return-code", help="Export a survey return code")
    s_code.add_argument("record", help="Record ID")
    s_code.add_argument("instrument", help="Survey instrument")
    s_code.add_argument("--event", help="Unique event name")
    s_code.set_defaults(func=cmd_surveys_return_code)

    # ========== Users ==========
    users = subparsers.add_parser("users", help="Manage project users")
    users.set_defaults(func=lambda _c, _a: users.print_help())
    users_sub = users.add_subparsers(dest="subcommand")

    u_export = users_sub.add_parser("export", help="Export users")
    add_format(u_export)
    u_export.set_defaults(func=cmd_users_export)

    u_import = users_sub.add_parser("import", help="Import users")
    u_import.add_argument("file", help="Data file (or - for stdin)")
    add_format(u_import)
    u_import.set_defaults(func=cmd_users_import)

    u_delete = users_sub.add_parser("delete", help="Remove users")
    u_delete.add_argument("users", nargs="+", help="Usernames")
    u_delete.set_defaults(func=cmd_users_delete)

    # ========== Roles ==========
    roles = subparsers.add_parser("roles", help="User roles")
    roles.set_defaults(func=lambda _c, _a: roles.print_help())
    roles_sub = roles.add_subparsers(dest="subcommand")

    ro_export = roles_sub.add_parser("export", help="Export user roles")
    add_format(ro_export)
    ro_export.set_defaults(func=cmd_roles_export)

    return parser


def main() -> None:
    """Main CLI entry point."""
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        api = RedcapApi(url=args.url, token=args.token)
    except RedcapError as e:
        error_output(e)

    # Run command (all subparsers have default funcs that print help)
    with api:
        try:
            args.func(api, args)
        except RedcapError as e:
            error_output(e)


if __name__ == "__main__":
    main()
