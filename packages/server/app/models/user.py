"""User model."""

from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

import sqlalchemy as sa
from sqlmodel import Field, Relationship, SQLModel

from .base import UUIDMixin, _utcnow

if TYPE_CHECKING:
    from .project import Project


class User(UUIDMixin, SQLModel, table=True):
    __tablename__ = "users"

    nickname: str = Field(nullable=False, unique=True, index=True)  # GitHub login
    email: Optional[str] = Field(default=None)
    created_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_column_kwargs={"server_default": sa.func.now()},
        sa_type=sa.DateTime(timezone=True),
    )

    projects: List["Project"] = Relationship(back_populates="submitted_by")
