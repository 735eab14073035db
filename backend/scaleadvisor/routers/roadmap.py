import uuid, logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from scaleadvisor import schemas, models, crud
from scaleadvisor.config.database import get_async_session
from scaleadvisor.auth.router import optional_active_user
from scaleadvisor.errors import ScaleAdvisorError, UnauthorizedError
from scaleadvisor.utils import roadmap_engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Roadmap"])


@router.post("/projects/{project_id}/roadmap/generate", response_model=List[schemas.RoadmapStep])
async def generate_roadmap(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        project = await crud.get_owned_project(db, project_id, current_user)
        steps = roadmap_engine.generate_roadmap_steps(project)
        return await crud.replace_roadmap_steps(db, project.id, steps)
    except ScaleAdvisorError as e:
        raise e.to_http()
    except Exception:
        logger.exception(f"Roadmap generation failed for project {project_id}")
        raise HTTPException(status_code=500, detail="Failed to generate roadmap.")


@router.get("/projects/{project_id}/roadmap", response_model=List[schemas.RoadmapStep])
async def list_roadmap(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    if current_user is None:
        return []
    try:
        project = await crud.get_project(db, project_id=project_id, owner_id=current_user.id)
        if not project:
            return []
        return await crud.list_roadmap_steps(db, project.id)
    except Exception as e:
        logger.error(f"Failed to list roadmap for project {project_id}: {e}")
        return []


@router.post("/roadmap/{step_id}/toggle", response_model=schemas.RoadmapStep)
async def toggle_roadmap_step(
    step_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        if current_user is None:
            raise UnauthorizedError()
        return await crud.toggle_roadmap_step(db, step_id, current_user.id)
    except ScaleAdvisorError as e:
        raise e.to_http()
    except Exception:
        logger.exception(f"Toggle failed for roadmap step {step_id}")
        raise HTTPException(status_code=500, detail="Failed to update roadmap step.")
