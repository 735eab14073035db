import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from scaleadvisor import schemas, models, crud
from scaleadvisor.config.database import get_async_session
from scaleadvisor.auth.router import optional_active_user
from scaleadvisor.errors import ScaleAdvisorError, UnauthorizedError
from scaleadvisor.models import TechStack, ScalingPhase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/templates", tags=["Templates"])


@router.get("", response_model=List[schemas.Template])
async def list_templates(
    tech_stack: Optional[TechStack] = None,
    phase: Optional[ScalingPhase] = None,
    category: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    return await crud.list_templates(
        db,
        user_id=current_user.id if current_user else None,
        tech_stack=models.enum_value(tech_stack),
        phase=models.enum_value(phase),
        category=category,
    )


@router.post("", response_model=schemas.Template, status_code=status.HTTP_201_CREATED)
async def create_template(
    template: schemas.TemplateCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        if current_user is None:
            raise UnauthorizedError()
        return await crud.create_template(db, template, current_user.id)
    except ScaleAdvisorError as e:
        raise e.to_http()
    except Exception:
        logger.exception("Template creation failed")
        raise HTTPException(status_code=500, detail="Failed to create template.")
