import uuid, re, logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from scaleadvisor import models, schemas, crud
from scaleadvisor.config.database import get_async_session
from scaleadvisor.auth.router import optional_active_user
from scaleadvisor.errors import ScaleAdvisorError
from scaleadvisor.utils import export, cost_estimator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects/{project_id}/export", tags=["Export"])


# ---------- Helpers ----------
async def _get_project(
    project_id: uuid.UUID, user: Optional[models.User], db: AsyncSession
) -> models.Project:
    try:
        return await crud.get_owned_project(db, project_id, user)
    except ScaleAdvisorError as e:
        raise e.to_http()


def _safe_filename(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9_-]+", "_", (name or "").strip().lower())


async def build_project_report(db: AsyncSession, project: models.Project) -> Dict[str, Any]:
    """Everything generated for a project, in one JSON-ready document."""
    def rows(schema, items):
        return [schema.model_validate(item) for item in items]

    report = schemas.ProjectReport(
        project=schemas.Project.model_validate(project),
        recommendations=rows(schemas.Recommendation, await crud.list_recommendations(db, project.id)),
        roadmap=rows(schemas.RoadmapStep, await crud.list_roadmap_steps(db, project.id)),
        configurations=rows(schemas.Configuration, await crud.list_configurations(db, project.id)),
        compliance_checks=rows(schemas.ComplianceCheck, await crud.list_compliance_checks(db, project.id)),
        cost_estimate=cost_estimator.estimate_for_project(project),
    )
    return report.model_dump(mode="json")


# ---------- Exports ----------
@router.get("/json")
async def export_project_json(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    project = await _get_project(project_id, current_user, db)
    report = await build_project_report(db, project)
    logger.info(f"Exported project {project_id} as JSON")
    return report


@router.get("/excel")
async def export_project_excel(
    project_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: Optional[models.User] = Depends(optional_active_user),
):
    project = await _get_project(project_id, current_user, db)
    report = await build_project_report(db, project)
    file = export.generate_xlsx(report)
    safe_name = _safe_filename(project.name or f"project_{project.id}")
    return StreamingResponse(
        file,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={safe_name}_{project.id}.xlsx"},
    )
