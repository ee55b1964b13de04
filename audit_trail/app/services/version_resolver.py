from audit_trail.app.services.unit_of_work import UnitOfWork


class VersionResolver:
    """
    Computes the next version number for an entity key.

    Read-max-then-insert with no lock: two writers racing on the same
    (entity_type, entity_id) can both read the same maximum and store the
    same version. Callers must already be inside the unit of work.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def next_version(self, entity_type: str, entity_id: str) -> int:
        current = await self.uow.audit_records.get_max_version(entity_type, entity_id)
        return 1 if current is None else current + 1
