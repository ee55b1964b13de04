from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.services.narrative import build_narrative
from audit_trail.domain.entities import AuditRecord
from audit_trail.domain.records import AuditRecordView


def present_record(record: AuditRecord, catalog: ActionTypeCatalog) -> AuditRecordView:
    """Join a stored record with its action type and render its narrative"""
    view = AuditRecordView.from_record(record, catalog.get(record.action_type_id))
    view.details = build_narrative(view)
    return view
