"""
Role Entity

Named bundle of permissions assigned to users.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import RoleStatus


class Role(SQLModel, table=True):
    """
    Role entity - named bundle of permissions.

    Business Rules:
    - Role name is unique
    - Permissions of every assigned role are granted to the user
    """

    __tablename__ = "roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    status: RoleStatus = Field(default=RoleStatus.active)
    created_by: Optional[str] = Field(default=None, max_length=100)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
