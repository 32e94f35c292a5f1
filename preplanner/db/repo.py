# preplanner/db/repo.py

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from preplanner.db.models import Project


async def get_project(db: AsyncSession, project_id: str) -> Project | None:
    res = await db.execute(select(Project).where(Project.id == project_id))
    return res.scalar_one_or_none()


async def create_project(db: AsyncSession, project: Project) -> Project:
    """
    Insert a project unless one with the same id already exists.

    Projects are immutable once registered: an existing row is returned
    untouched instead of being overwritten.
    """
    existing = await get_project(db, project.id)
    if existing is not None:
        return existing

    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project
