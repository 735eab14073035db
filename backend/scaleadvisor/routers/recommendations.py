import uuid, logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from scaleadvisor import schemas, models, crud
from scaleadvisor.config.database import get_async_session
from scaleadvisor.auth.router import optional_active_user
from scaleadvisor.errors import ScaleAdvisorError, UnauthorizedError
from scaleadvisor.utils import recommendation_engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Recommendations"])


@router.post("/projects/{project_id}/recommendations/generate", response_model=List[schemas.Recommendation])
async def generate_recommendations(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        project = await crud.get_owned_project(db, project_id, current_user)
        items = recommendation_engine.get_recommendations_for_project(project)
        return await crud.replace_recommendations(db, project.id, items)
    except ScaleAdvisorError as e:
        raise e.to_http()
    except Exception:
        logger.exception(f"Recommendation generation failed for project {project_id}")
        raise HTTPException(status_code=500, detail="Failed to generate recommendations.")


@router.get("/projects/{project_id}/recommendations", response_model=List[schemas.Recommendation])
async def list_recommendations(
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
        return await crud.list_recommendations(db, project.id)
    except Exception as e:
        logger.error(f"Failed to list recommendations for project {project_id}: {e}")
        return []


@router.post("/recommendations/{rec_id}/toggle", response_model=schemas.Recommendation)
async def toggle_recommendation(
    rec_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        if current_user is None:
            raise UnauthorizedError()
        return await crud.toggle_recommendation(db, rec_id, current_user.id)
    except ScaleAdvisorError as e:
        raise e.to_http()
    except Exception:
        logger.exception(f"Toggle failed for recommendation {rec_id}")
        raise HTTPException(status_code=500, detail="Failed to update recommendation.")
