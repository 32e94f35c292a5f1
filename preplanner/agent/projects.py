"""
Registers projects.
What it does:
- Validates name and the accepted tech tag
- Echoes a caller supplied projectId or mints a new one
- Stores the project once (never modified afterwards)
"""


from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from preplanner.core.config import settings
from preplanner.core.ids import new_project_id
from preplanner.core.logging import get_logger
from preplanner.db.models import Project
from preplanner.db.repo import create_project

log = get_logger("agent.projects")


class ProjectValidationError(ValueError):
    pass


async def register_project(
    db: AsyncSession,
    *,
    name: Optional[str],
    tech: Optional[str],
    project_id: Optional[str] = None,
    accepted_tech: str | None = None,
) -> str:
    accepted_tech = accepted_tech or settings.ACCEPTED_TECH
    if not name or not name.strip() or tech != accepted_tech:
        raise ProjectValidationError("Missing fields")

    project = await create_project(
        db, Project(id=project_id or new_project_id(), name=name, tech=tech)
    )
    log.info(f"registered project={project.id} name={project.name!r}")
    return project.id
