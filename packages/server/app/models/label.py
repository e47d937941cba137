"""Label model and its project join table."""

from typing import List, TYPE_CHECKING
import uuid

from sqlmodel import Field, Relationship, SQLModel

from .base import TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from .project import Project


class ProjectLabel(SQLModel, table=True):
    __tablename__ = "project_labels"

    project_id: uuid.UUID = Field(foreign_key="projects.id", primary_key=True)
    label_id: uuid.UUID = Field(foreign_key="labels.id", primary_key=True)


class Label(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "labels"

    name: str = Field(nullable=False, unique=True, index=True)

    projects: List["Project"] = Relationship(back_populates="labels", link_model=ProjectLabel)
