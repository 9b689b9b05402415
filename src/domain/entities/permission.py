"""
Permission Entity

Atomic capability identified by a code such as ROLE_MANAGE.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class Permission(SQLModel, table=True):
    """
    Permission entity - capability code grouped by module.

    Business Rules:
    - Code is unique
    - Module groups related permissions (e.g. IDENTITY, ACADEMIC)
    """

    __tablename__ = "permissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    code: str = Field(unique=True, index=True, max_length=100)
    module: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_permission_module", "module"),)
