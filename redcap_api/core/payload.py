"""
Request payload assembly.

REDCap takes every parameter as a form field. This module turns Python
values into those fields: enums become their REDCap value, booleans
``true``/``false``, datetimes ``YYYY-MM-DD HH:MM:SS``, and sequences are
flattened into positional keys (``records[0]``, ``records[1]``, ...).
"""

import json
from collections.abc import Sequence
from datetime import date, datetime
from enum import Enum
from typing import Any

from redcap_api.core.client import ValidationError
from redcap_api.core.types import Content, RedcapAction, ReturnFormat

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def to_wire(value: Any) -> str:
    """Convert a single parameter value to its form-field string."""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.strftime(DATETIME_FORMAT)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def flatten(name: str, values: Sequence[Any]) -> dict[str, str]:
    """Flatten ``values`` into ``name[0]``, ``name[1]``, ... keys."""
    return {f"{name}[{i}]": to_wire(v) for i, v in enumerate(values)}


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple)) and len(value) == 0:
        return True
    return False


def build_payload(
    token: str,
    content: Content,
    action: RedcapAction | None = None,
    **fields: Any,
) -> dict[str, str]:
    """
    Build the form payload for one API call.

    ``token`` and ``content`` come first, then ``action`` when given, then
    ``fields`` in keyword order. Fields that are ``None``, ``False``, or an
    empty string/list are left out. List and tuple values are flattened
    into indexed keys.

    Args:
        token: Project (or super) API token
        content: REDCap resource
        action: REDCap action, if the call has one
        **fields: Remaining parameters, named as REDCap names them

    Returns:
        Ordered dict of form fields

    """
    payload = {"token": token, "content": to_wire(content)}
    if action is not None:
        payload["action"] = to_wire(action)

    for name, value in fields.items():
        if _is_empty(value):
            continue
        if isinstance(value, (list, tuple)):
            payload.update(flatten(name, value))
        else:
            payload[name] = to_wire(value)
    return payload


def require(name: str, values: Sequence[Any] | None) -> list[Any]:
    """Return ``values`` as a list, raising if it is missing or empty."""
    if not values:
        raise ValidationError(f"At least one value is required for '{name}'")
    if isinstance(values, str):
        return [values]
    return list(values)


def _to_jsonable(item: Any) -> Any:
    if hasattr(item, "to_dict"):
        return item.to_dict()
    if isinstance(item, (list, tuple)):
        return [_to_jsonable(i) for i in item]
    if isinstance(item, dict):
        return {k: _to_jsonable(v) for k, v in item.items()}
    if isinstance(item, (Enum, datetime, date)):
        return to_wire(item)
    return item


def serialize_data(data: Any, format: ReturnFormat = ReturnFormat.JSON) -> str:
    """
    Serialize import ``data`` for the ``data`` form field.

    Text is sent as-is (it is already CSV, JSON or XML). Python objects
    are serialized to JSON, which REDCap only accepts with ``format=json``.
    """
    if isinstance(data, bytes):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValidationError(f"Import data is not valid UTF-8: {e}")
    if isinstance(data, str):
        return data
    if format != ReturnFormat.JSON:
        raise ValidationError(
            f"Import data must be pre-serialized text when format is '{to_wire(format)}'",
            details={"type": type(data).__name__},
        )
    return json.dumps(_to_jsonable(data))
