"""
Label service — labels are managed here; project submission only attaches them.
"""

from __future__ import annotations

import structlog
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.label import Label
from prhub_shared.schemas.labels import LabelCreate

log = structlog.get_logger()


async def list_labels(session: AsyncSession) -> list[Label]:
    result = await session.execute(select(Label).order_by(Label.name))
    return list(result.scalars().all())


async def create_label(req: LabelCreate, session: AsyncSession) -> Label:
    """Create a label; raises 409 if the name is taken."""
    name = req.name.strip()
    if not name:
        raise HTTPException(status_code=422, detail="Label name can't be blank")
    existing = await session.execute(select(Label).where(Label.name == name))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="Label already exists")

    label = Label(name=name)
    session.add(label)
    await session.flush()

    log.info("label.created", label_id=str(label.id), name=name)
    return label
