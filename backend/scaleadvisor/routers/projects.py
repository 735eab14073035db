import uuid, logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from scaleadvisor import schemas, models
from scaleadvisor import crud as projects
from scaleadvisor.config.database import get_async_session
from scaleadvisor.auth.router import optional_active_user
from scaleadvisor.errors import ScaleAdvisorError, UnauthorizedError
from scaleadvisor.utils import cost_estimator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["Projects"])


# List Projects
@router.get("", response_model=List[schemas.Project])
async def list_projects(
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    if current_user is None:
        return []
    try:
        return await projects.list_projects(db, owner_id=current_user.id)
    except Exception as e:
        logger.error(f"Failed to list projects for user {current_user.id}: {e}")
        return []


# Create Project
@router.post("", response_model=schemas.Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: schemas.ProjectCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        if current_user is None:
            raise UnauthorizedError()
        return await projects.create_project(db, project, current_user.id)
    except ScaleAdvisorError as e:
        raise e.to_http()
    except Exception:
        logger.exception("Project creation failed")
        raise HTTPException(status_code=500, detail="Failed to create project. Please try again.")


# Get Project Details
@router.get("/{project_id}", response_model=schemas.Project)
async def get_project(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        return await projects.get_owned_project(db, project_id, current_user)
    except ScaleAdvisorError as e:
        raise e.to_http()


# Update Project
@router.patch("/{project_id}", response_model=schemas.Project)
async def update_project(
    project_id: uuid.UUID,
    project_update: schemas.ProjectUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        db_project = await projects.get_owned_project(db, project_id, current_user)
        return await projects.update_project(db, db_project, project_update)
    except ScaleAdvisorError as e:
        raise e.to_http()
    except Exception:
        logger.exception(f"Update failed for project {project_id}")
        raise HTTPException(status_code=500, detail="Failed to update project.")


# Delete Project
@router.delete("/{project_id}", response_model=schemas.MessageResponse)
async def delete_project(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        db_project = await projects.get_owned_project(db, project_id, current_user)
        await projects.delete_project(db, db_project)
    except ScaleAdvisorError as e:
        raise e.to_http()
    except Exception:
        logger.exception(f"Delete failed for project {project_id}")
        raise HTTPException(status_code=500, detail="Failed to delete project.")
    return {"msg": "Project deleted successfully"}


# Cost Estimate for a stored project
@router.get("/{project_id}/cost_estimate", response_model=schemas.CostEstimate)
async def project_cost_estimate(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        db_project = await projects.get_owned_project(db, project_id, current_user)
    except ScaleAdvisorError as e:
        raise e.to_http()
    return cost_estimator.estimate_for_project(db_project)
