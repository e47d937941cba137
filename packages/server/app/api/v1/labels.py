"""
Label endpoints.

GET    /api/v1/labels/  — List labels
POST   /api/v1/labels/  — Create a label
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session
from app.services import labels as label_service
from prhub_shared.schemas.labels import LabelCreate, LabelRead

router = APIRouter()


@router.get("/", response_model=List[LabelRead])
async def list_labels(session: AsyncSession = Depends(get_session)):
    labels = await label_service.list_labels(session)
    return [LabelRead.model_validate(label) for label in labels]


@router.post("/", response_model=LabelRead, status_code=201)
async def create_label(
    label_in: LabelCreate,
    session: AsyncSession = Depends(get_session),
):
    label = await label_service.create_label(label_in, session)
    await session.commit()
    return LabelRead.model_validate(label)
