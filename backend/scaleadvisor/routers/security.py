import uuid, logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from scaleadvisor import schemas, models, crud
from scaleadvisor.config.database import get_async_session
from scaleadvisor.auth.router import optional_active_user
from scaleadvisor.errors import ScaleAdvisorError
from scaleadvisor.utils import security_advisor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects/{project_id}", tags=["Security"])


@router.post("/security/generate", response_model=schemas.SecurityReport)
async def generate_security(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    """Refresh the compliance checklist and the IAM / secrets / CIS Terraform artifacts."""
    try:
        project = await crud.get_owned_project(db, project_id, current_user)
        checks = await crud.replace_compliance_checks(
            db, project.id, security_advisor.generate_compliance_checks(project)
        )
        artifacts = await crud.upsert_configurations(
            db, project.id, security_advisor.generate_security_artifacts(project)
        )
        return {"compliance_checks": checks, "artifacts": artifacts}
    except ScaleAdvisorError as e:
        raise e.to_http()
    except Exception:
        logger.exception(f"Security generation failed for project {project_id}")
        raise HTTPException(status_code=500, detail="Failed to generate security artifacts.")


@router.get("/compliance", response_model=List[schemas.ComplianceCheck])
async def list_compliance(
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
        return await crud.list_compliance_checks(db, project.id)
    except Exception as e:
        logger.error(f"Failed to list compliance checks for project {project_id}: {e}")
        return []
