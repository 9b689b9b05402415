"""
User Entity

Represents a person who can sign in to the school system.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import UserStatus


class User(SQLModel, table=True):
    """
    User entity - a school system account.

    Business Rules:
    - Username and email are unique
    - Password stored as bcrypt hash, never plaintext
    - Only active, non-deleted accounts may sign in
    - Soft delete only: is_deleted is terminal, rows are retained for audit
    - Super admins bypass permission checks
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=100)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)

    status: UserStatus = Field(default=UserStatus.active)
    is_super_admin: bool = Field(default=False)
    is_deleted: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_modified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_status", "status"),
        Index("idx_user_is_deleted", "is_deleted"),
    )
