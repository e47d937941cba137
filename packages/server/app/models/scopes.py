"""
Composable query scopes over projects.

Each scope takes a ``select(Project)`` statement and returns a narrowed one,
so scopes chain in any order::

    stmt = by_language(active(select(Project)), "ruby")
"""

from __future__ import annotations

from collections.abc import Iterable

import sqlalchemy as sa
from sqlalchemy.sql import Select
from sqlmodel import select

from prhub_shared.schemas.common import PER_PAGE

from .label import Label, ProjectLabel
from .project import Project


def not_owner(stmt: Select, user: str) -> Select:
    # Compares against a bare "github.com/<user>/" string, which stored URLs
    # (always scheme-prefixed) never equal.
    return stmt.where(Project.github_url != f"github.com/{user}/")


def by_language(stmt: Select, language: str) -> Select:
    return stmt.where(sa.func.lower(Project.main_language) == language.lower())


def by_languages(stmt: Select, languages: Iterable[str]) -> Select:
    # Only the column is lower-cased; callers pass lower-case names.
    return stmt.where(sa.func.lower(Project.main_language).in_(list(languages)))


def by_labels(stmt: Select, labels: Iterable[str]) -> Select:
    """Projects carrying any of the named labels, each project once."""
    labelled = (
        select(ProjectLabel.project_id)
        .join(Label, Label.id == ProjectLabel.label_id)
        .where(Label.name.in_(list(labels)))
    )
    return stmt.where(Project.id.in_(labelled))


def active(stmt: Select) -> Select:
    return stmt.where(
        sa.or_(Project.inactive == sa.false(), Project.inactive.is_(None))
    )


def filter_by_repository(stmt: Select, repository: str) -> Select:
    return stmt.where(Project.github_url.like(f"%{repository}%"))


def paginate(stmt: Select, page: int = 1) -> Select:
    """Newest first, ``PER_PAGE`` rows per page; pages start at 1."""
    page = max(page, 1)
    return (
        stmt.order_by(Project.created_at.desc(), Project.id)
        .offset((page - 1) * PER_PAGE)
        .limit(PER_PAGE)
    )
