"""
Narrative Synthesizer

Turns one audit record into a human-readable sentence. The output is a pure
function of the record, so the timestamp format is fixed (English month
names, UTC, 12-hour clock) rather than taken from the host locale.

build_narrative() never raises: records whose payload breaks an action's
requirements degrade to a generic entity sentence.
"""

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Callable, Dict

from audit_trail.domain.entities import ActionCode
from audit_trail.domain.records import AuditRecordView

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "System"
UNKNOWN_FIELDS = "unknown fields"
NO_CHANGES = "no changes detected"

# key absent from one snapshot; never equal to an explicit None
_ABSENT = object()

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class NarrativeSynthesisError(Exception):
    """A record lacks a field its action type requires"""


def format_timestamp(moment: datetime) -> str:
    """Format as e.g. "January 5, 2026, 10:15 AM" (UTC)"""
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{MONTH_NAMES[moment.month - 1]} {moment.day}, {moment.year}, "
        f"{hour}:{moment.minute:02d} {meridiem}"
    )


def actor_of(record: AuditRecordView) -> str:
    return record.action_by or SYSTEM_ACTOR


def values_equal(left: Any, right: Any) -> bool:
    """Deep structural equality over JSON-like values; True never equals 1"""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, Mapping) or isinstance(right, Mapping):
        if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
            return False
        if left.keys() != right.keys():
            return False
        return all(values_equal(left[key], right[key]) for key in left)
    if isinstance(left, (list, tuple)) or isinstance(right, (list, tuple)):
        if not (isinstance(left, (list, tuple)) and isinstance(right, (list, tuple))):
            return False
        return len(left) == len(right) and all(map(values_equal, left, right))
    return left == right


def format_value(value: Any) -> str:
    if value is None or value is _ABSENT:
        return "null"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def describe_changes(previous_data: Any, new_data: Any) -> str:
    """
    Field-level diff between two snapshots.

    A key missing on one side differs from every value, an explicit null
    included, and renders as null. Returns UNKNOWN_FIELDS when
    either side is not an object and NO_CHANGES when nothing differs.
    """
    if not isinstance(previous_data, Mapping) or not isinstance(new_data, Mapping):
        return UNKNOWN_FIELDS

    changes = []
    for field in dict.fromkeys([*previous_data.keys(), *new_data.keys()]):
        old = previous_data.get(field, _ABSENT)
        new = new_data.get(field, _ABSENT)
        if values_equal(old, new):
            continue
        changes.append(f"{field}: {format_value(old)} → {format_value(new)}")

    return "; ".join(changes) if changes else NO_CHANGES


def _create(record: AuditRecordView) -> str:
    details = (
        f"User {actor_of(record)} created a new {record.entity_type} record "
        f"(ID: {record.entity_id}) at {format_timestamp(record.action_at)}."
    )
    if isinstance(record.new_data, Mapping) and record.new_data:
        details += f" Initial values were set for: {', '.join(map(str, record.new_data))}."
    return details


def _update(record: AuditRecordView) -> str:
    details = (
        f"User {actor_of(record)} updated the {record.entity_type} record "
        f"(ID: {record.entity_id}) at {format_timestamp(record.action_at)}."
    )
    changes = describe_changes(record.previous_data, record.new_data)
    if changes in (UNKNOWN_FIELDS, NO_CHANGES):
        return f"{details} {changes}."
    return f"{details}\n\nChanges:\n{changes}"


def _lifecycle(verb: str) -> Callable[[AuditRecordView], str]:
    def handler(record: AuditRecordView) -> str:
        return (
            f"User {actor_of(record)} {verb} the {record.entity_type} record "
            f"(ID: {record.entity_id}) at {format_timestamp(record.action_at)}."
        )

    return handler


def _reference_id(record: AuditRecordView, code: ActionCode) -> str:
    if not record.entity_id or not record.entity_id.strip():
        raise NarrativeSynthesisError(
            f"{code.value} action requires a valid entity_id as reference identifier"
        )
    return record.entity_id


def _export(record: AuditRecordView) -> str:
    reference_id = _reference_id(record, ActionCode.EXPORT)
    return (
        f"User {actor_of(record)} exported {record.entity_type} data at "
        f"{format_timestamp(record.action_at)}. Export reference ID: {reference_id}."
    )


def _import(record: AuditRecordView) -> str:
    reference_id = _reference_id(record, ActionCode.IMPORT)
    return (
        f"User {actor_of(record)} imported data into {record.entity_type} at "
        f"{format_timestamp(record.action_at)}. Import reference ID: {reference_id}."
    )


def _session(verb: str) -> Callable[[AuditRecordView], str]:
    def handler(record: AuditRecordView) -> str:
        details = f"User {actor_of(record)} {verb} at {format_timestamp(record.action_at)}"
        if record.ip_address:
            details += f" from IP address {record.ip_address}"
        return details + "."

    return handler


def _unrecognized(record: AuditRecordView, code: str) -> str:
    return (
        f"User {actor_of(record)} performed action '{code}' on {record.entity_type} "
        f"(ID: {record.entity_id}) at {format_timestamp(record.action_at)}."
    )


def fallback_narrative(record: AuditRecordView) -> str:
    return f"Audit log entry for {record.entity_type} (ID: {record.entity_id})."


HANDLERS: Dict[ActionCode, Callable[[AuditRecordView], str]] = {
    ActionCode.CREATE: _create,
    ActionCode.UPDATE: _update,
    ActionCode.DELETE: _lifecycle("deleted"),
    ActionCode.ARCHIVE: _lifecycle("archived"),
    ActionCode.UNARCHIVE: _lifecycle("unarchived"),
    ActionCode.EXPORT: _export,
    ActionCode.IMPORT: _import,
    ActionCode.LOGIN: _session("logged in"),
    ActionCode.LOGOUT: _session("logged out"),
}


def build_narrative(record: AuditRecordView) -> str:
    """Describe one audit record in a sentence; never raises"""
    raw_code = record.action_type.code if record.action_type else ""
    code = (raw_code or "").upper()
    action_code = ActionCode.parse(code)

    try:
        if action_code is None:
            return _unrecognized(record, code)
        return HANDLERS[action_code](record)
    except (NarrativeSynthesisError, TypeError, ValueError, AttributeError) as exc:
        logger.error("Error building narrative for audit record %s: %s", record.id, exc)
        return fallback_narrative(record)
