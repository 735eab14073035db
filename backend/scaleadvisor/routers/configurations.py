import uuid, logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from scaleadvisor import schemas, models, crud
from scaleadvisor.config.database import get_async_session
from scaleadvisor.auth.router import optional_active_user
from scaleadvisor.errors import ScaleAdvisorError, ValidationError
from scaleadvisor.models import ConfigurationType
from scaleadvisor.utils import config_templates, canvas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects/{project_id}", tags=["Configurations"])


# ---------- Generated configurations ----------
@router.post("/configurations/generate", response_model=schemas.Configuration)
async def generate_configuration(
    project_id: uuid.UUID,
    request: schemas.ConfigurationGenerateRequest,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        project = await crud.get_owned_project(db, project_id, current_user)
        try:
            artifact = config_templates.generate_configuration(project, request.type)
        except ValueError as e:
            raise ValidationError(str(e))
        return await crud.upsert_configuration(db, project.id, request.type, artifact)
    except ScaleAdvisorError as e:
        raise e.to_http()
    except Exception:
        logger.exception(f"{request.type} generation failed for project {project_id}")
        raise HTTPException(status_code=500, detail="Failed to generate configuration.")


@router.get("/configurations", response_model=List[schemas.Configuration])
async def list_configurations(
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
        return await crud.list_configurations(db, project.id)
    except Exception as e:
        logger.error(f"Failed to list configurations for project {project_id}: {e}")
        return []


# ---------- Infra canvas ----------
def _render_previews(project: models.Project, nodes) -> dict:
    return {
        "terraform": canvas.render_terraform_preview(project.name, nodes),
        "kubernetes": canvas.render_kubernetes_preview(project.name, nodes),
    }


@router.post("/canvas/preview", response_model=schemas.CanvasPreview)
async def canvas_preview(
    project_id: uuid.UUID,
    request: schemas.CanvasRequest,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        project = await crud.get_owned_project(db, project_id, current_user)
    except ScaleAdvisorError as e:
        raise e.to_http()
    return _render_previews(project, request.nodes)


@router.post("/canvas/generate", response_model=schemas.CanvasGenerateResponse)
async def canvas_generate(
    project_id: uuid.UUID,
    request: schemas.CanvasRequest,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    try:
        project = await crud.get_owned_project(db, project_id, current_user)
        if not request.nodes:
            raise ValidationError("Add at least one node to the canvas before generating.")

        preview = _render_previews(project, request.nodes)
        slug = canvas.canvas_slug(project.name)
        configs = await crud.upsert_configurations(db, project.id, [
            {
                "type": ConfigurationType.TERRAFORM.value,
                "name": f"{slug}-canvas.tf",
                "content": preview["terraform"],
                "description": f"Terraform generated from the infra canvas for {project.name}",
            },
            {
                "type": ConfigurationType.KUBERNETES.value,
                "name": f"{slug}-canvas.yaml",
                "content": preview["kubernetes"],
                "description": f"Kubernetes manifests generated from the infra canvas for {project.name}",
            },
        ])
        return {"preview": preview, "configurations": configs}
    except ScaleAdvisorError as e:
        raise e.to_http()
    except Exception:
        logger.exception(f"Canvas generation failed for project {project_id}")
        raise HTTPException(status_code=500, detail="Failed to generate configurations from canvas.")
