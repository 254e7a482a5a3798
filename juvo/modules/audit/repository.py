"""Audit repository layer."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from juvo.modules.audit.models import AuditLog


class AuditRepository:
    """Append and read the audit trail of a single entity."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_audit_log(
        self,
        actor_id: UUID | None,
        action: str,
        entity_type: str,
        entity_id: str | None,
        payload: dict | None = None,
    ) -> AuditLog:
        log = AuditLog(
            actor_id=actor_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            payload=payload or {},
        )
        self.session.add(log)
        await self.session.flush()
        return log

    async def list_entity_logs(self, entity_type: str, entity_id: str) -> list[AuditLog]:
        """Oldest first, so the list reads as the entity's history."""
        stmt = (
            select(AuditLog)
            .where(AuditLog.entity_type == entity_type, AuditLog.entity_id == entity_id)
            .order_by(AuditLog.created_at.asc(), AuditLog.id.asc())
        )
        return list((await self.session.scalars(stmt)).all())
