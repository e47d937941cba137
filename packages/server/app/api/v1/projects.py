"""
Project endpoints: submission, listing, deactivation and GitHub activity.

GET    /api/v1/projects/                        — List active projects (filters + pagination)
POST   /api/v1/projects/                        — Suggest a project
GET    /api/v1/projects/by-repository           — Find a project by owner/repo
GET    /api/v1/projects/{projectId}             — Get a project
PATCH  /api/v1/projects/{projectId}             — Update a project
POST   /api/v1/projects/{projectId}/deactivate  — Mark a project inactive
GET    /api/v1/projects/{projectId}/issues      — Recent issues (GitHub)
GET    /api/v1/projects/{projectId}/commits     — Recent commits on master (GitHub)
GET    /api/v1/projects/{projectId}/repository  — Repository metadata (GitHub)
GET    /api/v1/projects/{projectId}/score       — Popularity score
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import (
    GithubCredentials,
    optional_github_credentials,
    require_github_credentials,
)
from app.core.database import get_session
from app.services import projects as project_service
from prhub_shared.schemas.projects import (
    ProjectCreate,
    ProjectPage,
    ProjectRead,
    ProjectUpdate,
)

router = APIRouter()


@router.get("/", response_model=ProjectPage)
async def list_projects(
    language: Optional[str] = None,
    languages: Optional[List[str]] = Query(None),
    labels: Optional[List[str]] = Query(None),
    include_inactive: bool = False,
    page: int = Query(1, ge=1),
    credentials: Optional[GithubCredentials] = Depends(optional_github_credentials),
    session: AsyncSession = Depends(get_session),
):
    """List projects, newest first, 20 per page.

    Signed-in users do not see their own repositories.
    """
    projects, pagination = await project_service.list_projects(
        session,
        language=language,
        languages=languages,
        labels=labels,
        exclude_owner=credentials.nickname if credentials else None,
        include_inactive=include_inactive,
        page=page,
    )
    return ProjectPage(
        data=[ProjectRead.model_validate(p) for p in projects],
        pagination=pagination,
    )


@router.post("/", response_model=ProjectRead, status_code=201)
async def create_project(
    project_in: ProjectCreate,
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.create_project(project_in, session)
    await session.commit()
    project = await project_service.reload_project(project.id, session)
    return ProjectRead.model_validate(project)


@router.get("/by-repository", response_model=ProjectRead)
async def get_project_by_repository(
    repository: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.find_by_github_repo(repository, session)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return ProjectRead.model_validate(project)


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.get_project(project_id, session)
    return ProjectRead.model_validate(project)


@router.patch("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: uuid.UUID,
    project_in: ProjectUpdate,
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.get_project(project_id, session)
    await project_service.update_project(project, project_in, session)
    await session.commit()
    project = await project_service.reload_project(project_id, session)
    return ProjectRead.model_validate(project)


@router.post("/{project_id}/deactivate", response_model=ProjectRead)
async def deactivate_project(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.get_project(project_id, session)
    await project_service.deactivate_project(project, session)
    await session.commit()
    project = await project_service.reload_project(project_id, session)
    return ProjectRead.model_validate(project)


# ---------------------------------------------------------------------------
# GitHub activity (runs as the requesting user)
# ---------------------------------------------------------------------------


@router.get("/{project_id}/issues")
async def project_issues(
    project_id: uuid.UUID,
    months_ago: int = Query(6, ge=0),
    credentials: GithubCredentials = Depends(require_github_credentials),
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.get_project(project_id, session)
    return await project.issues(credentials.nickname, credentials.token, months_ago)


@router.get("/{project_id}/commits")
async def project_commits(
    project_id: uuid.UUID,
    months_ago: int = Query(3, ge=0),
    credentials: GithubCredentials = Depends(require_github_credentials),
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.get_project(project_id, session)
    return await project.commits(credentials.nickname, credentials.token, months_ago)


@router.get("/{project_id}/repository")
async def project_repository(
    project_id: uuid.UUID,
    credentials: GithubCredentials = Depends(require_github_credentials),
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.get_project(project_id, session)
    return await project.repo(credentials.nickname, credentials.token)


@router.get("/{project_id}/score")
async def project_score(
    project_id: uuid.UUID,
    credentials: GithubCredentials = Depends(require_github_credentials),
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.get_project(project_id, session)
    score = await project.score(credentials.nickname, credentials.token)
    return {"project_id": str(project.id), "score": score}
