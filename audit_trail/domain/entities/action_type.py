"""
ActionType Entity

Catalog of the action codes an audit record can carry.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from audit_trail.domain.base import utc_now


class ActionType(SQLModel, table=True):
    """
    ActionType entity - catalog entry referenced by every audit record.

    Business Rules:
    - code is unique and stored upper-case (CREATE, UPDATE, ...)
    - Never deleted, only deactivated through is_active
    - Seeded once at start-up, read-mostly afterwards
    """

    __tablename__ = "action_types"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(unique=True, index=True, max_length=50)
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
