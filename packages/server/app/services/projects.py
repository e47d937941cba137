"""
Project service — validation, persistence and listing of suggested projects.
"""

from __future__ import annotations

import math
import uuid
from typing import Any, Iterable, Mapping, Optional

import structlog
from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.exceptions import ProjectValidationError
from app.models import scopes
from app.models.label import Label
from app.models.project import Project
from prhub_shared.schemas.common import PER_PAGE, Pagination
from prhub_shared.schemas.projects import (
    DUPLICATE_URL_MESSAGE,
    REQUIRED_FIELDS,
    ProjectCreate,
    ProjectUpdate,
    validate_project,
)

log = structlog.get_logger()

GITHUB_URL_INDEX = "ix_projects_github_url_lower"
LABEL_NOT_FOUND_MESSAGE = "contains an unknown label"


async def github_url_taken(
    github_url: str,
    session: AsyncSession,
    exclude_id: Optional[uuid.UUID] = None,
) -> bool:
    """True if another project already uses this URL, ignoring case."""
    stmt = select(Project.id).where(func.lower(Project.github_url) == github_url.lower())
    if exclude_id is not None:
        stmt = stmt.where(Project.id != exclude_id)
    result = await session.execute(stmt.limit(1))
    return result.first() is not None


async def validate_attributes(
    attrs: Mapping[str, Any],
    session: AsyncSession,
    exclude_id: Optional[uuid.UUID] = None,
) -> dict[str, list[str]]:
    errors = validate_project(attrs)
    if "github_url" not in errors and await github_url_taken(
        attrs["github_url"], session, exclude_id
    ):
        errors["github_url"] = [DUPLICATE_URL_MESSAGE]
    return errors


async def _flush(project: Project, session: AsyncSession) -> None:
    """Flush, turning a lost race on the URL index into a field error."""
    session.add(project)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        if GITHUB_URL_INDEX in str(exc.orig):
            raise ProjectValidationError({"github_url": [DUPLICATE_URL_MESSAGE]}) from exc
        raise


async def _find_labels(label_ids: list[uuid.UUID], session: AsyncSession) -> list[Label]:
    if not label_ids:
        return []
    result = await session.execute(select(Label).where(Label.id.in_(label_ids)))
    return list(result.scalars().all())


async def create_project(req: ProjectCreate, session: AsyncSession) -> Project:
    """Validate and persist a new project suggestion.

    Nested labels are attached only when they carry the id of an existing label.
    """
    attrs = req.model_dump(include=set(REQUIRED_FIELDS))
    errors = await validate_attributes(attrs, session)

    label_ids = list(dict.fromkeys(req.label_ids()))
    labels = await _find_labels(label_ids, session)
    if len(labels) != len(label_ids):
        errors.setdefault("labels", []).append(LABEL_NOT_FOUND_MESSAGE)

    if errors:
        log.info("project.rejected", fields=sorted(errors), github_url=req.github_url)
        raise ProjectValidationError(errors)

    project = Project(**attrs, user_id=req.user_id)
    project.labels = labels
    await _flush(project, session)

    log.info(
        "project.created",
        project_id=str(project.id),
        github_url=project.github_url,
        labels=[label.name for label in labels],
    )
    return project


async def update_project(
    project: Project, req: ProjectUpdate, session: AsyncSession
) -> Project:
    """Apply the fields set on ``req`` if the resulting project is valid."""
    changes = req.model_dump(exclude_unset=True)
    attrs = {field: getattr(project, field) for field in REQUIRED_FIELDS}
    attrs.update(changes)

    errors = await validate_attributes(attrs, session, exclude_id=project.id)
    if errors:
        log.info("project.rejected", project_id=str(project.id), fields=sorted(errors))
        raise ProjectValidationError(errors)

    for key, value in changes.items():
        setattr(project, key, value)
    await _flush(project, session)

    log.info("project.updated", project_id=str(project.id), fields=sorted(changes))
    return project


async def deactivate_project(project: Project, session: AsyncSession) -> Project:
    """Mark the project inactive and write it straight away, skipping validation."""
    project.deactivate()
    session.add(project)
    await session.flush()
    log.info("project.deactivated", project_id=str(project.id))
    return project


async def get_project(project_id: uuid.UUID, session: AsyncSession) -> Project:
    """Get a project by id; raises 404 if not found."""
    project = await session.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


async def reload_project(project_id: uuid.UUID, session: AsyncSession) -> Project:
    """Re-read a project and its labels from the database."""
    result = await session.execute(
        select(Project)
        .where(Project.id == project_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def list_projects(
    session: AsyncSession,
    *,
    language: Optional[str] = None,
    languages: Optional[Iterable[str]] = None,
    labels: Optional[Iterable[str]] = None,
    exclude_owner: Optional[str] = None,
    include_inactive: bool = False,
    page: int = 1,
) -> tuple[list[Project], Pagination]:
    """One page of projects matching every given filter."""
    stmt = select(Project)
    if not include_inactive:
        stmt = scopes.active(stmt)
    if exclude_owner:
        stmt = scopes.not_owner(stmt, exclude_owner)
    if language:
        stmt = scopes.by_language(stmt, language)
    if languages:
        stmt = scopes.by_languages(stmt, [name.lower() for name in languages])
    if labels:
        stmt = scopes.by_labels(stmt, labels)

    total_result = await session.execute(select(func.count()).select_from(stmt.subquery()))
    total = total_result.scalar_one()

    result = await session.execute(scopes.paginate(stmt, page))
    projects = list(result.scalars().all())
    pagination = Pagination(
        page=page,
        per_page=PER_PAGE,
        total=total,
        total_pages=math.ceil(total / PER_PAGE),
    )
    return projects, pagination


async def find_by_github_repo(repository: str, session: AsyncSession) -> Optional[Project]:
    """First project whose URL contains ``repository`` (e.g. ``owner/repo``)."""
    stmt = scopes.filter_by_repository(select(Project), repository)
    result = await session.execute(
        stmt.order_by(Project.created_at, Project.id).limit(1)
    )
    return result.scalars().first()
