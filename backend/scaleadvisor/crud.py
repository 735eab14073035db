from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, or_
import uuid, logging
from scaleadvisor import models, schemas
from scaleadvisor.errors import (
    UnauthorizedError, ProjectAccessError, RecordAccessError, ValidationError,
)

logger = logging.getLogger(__name__)

# Limits
MAX_NAME_LEN = 100
MAX_DESC_LEN = 1000
MAX_INFRA_LEN = 1000
MAX_GOALS = 10
MAX_GOAL_LEN = 200

# Child tables cleared when a project is removed
PROJECT_CHILDREN = (
    models.Recommendation,
    models.RoadmapStep,
    models.Configuration,
    models.ComplianceCheck,
)


# -------------------------
# Input normalization
# -------------------------
def normalize_goals(goals: Sequence[str]) -> List[str]:
    """Trim, drop blanks and de-duplicate while keeping first-seen order."""
    seen: Dict[str, None] = {}
    for g in goals or []:
        g = (g or "").strip()
        if g:
            seen.setdefault(g, None)
    return list(seen)


def validate_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Validation error: Project name cannot be empty.")
    if len(name) > MAX_NAME_LEN:
        raise ValidationError(f"Validation error: Project name must be <= {MAX_NAME_LEN} characters.")
    return name


def validate_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    description = description.strip()
    if len(description) > MAX_DESC_LEN:
        raise ValidationError(f"Validation error: Description must be <= {MAX_DESC_LEN} characters.")
    return description


def normalize_project_input(
    name: str,
    description: Optional[str] = None,
    current_infra: str = "",
    scaling_goals: Sequence[str] = (),
) -> Dict[str, Any]:
    name = validate_name(name)
    description = validate_description(description)

    current_infra = (current_infra or "").strip()
    if len(current_infra) > MAX_INFRA_LEN:
        raise ValidationError(f"Validation error: Current infrastructure must be <= {MAX_INFRA_LEN} characters.")

    goals = normalize_goals(scaling_goals)
    if len(goals) > MAX_GOALS:
        raise ValidationError(f"Validation error: No more than {MAX_GOALS} scaling goals allowed.")
    for goal in goals:
        if len(goal) > MAX_GOAL_LEN:
            raise ValidationError(f"Validation error: Each scaling goal must be <= {MAX_GOAL_LEN} characters.")

    return {
        "name": name,
        "description": description,
        "current_infra": current_infra,
        "scaling_goals": goals,
    }


# -------------------------
# Projects CRUD
# -------------------------
async def list_projects(db: AsyncSession, owner_id: uuid.UUID) -> List[models.Project]:
    result = await db.execute(
        select(models.Project)
        .filter(models.Project.owner_id == owner_id)
        .order_by(models.Project.created_at.desc())
    )
    projects = result.scalars().all()
    logger.info(f"Listed {len(projects)} projects for owner {owner_id}")
    return projects


async def get_project(
    db: AsyncSession, project_id: uuid.UUID, owner_id: uuid.UUID
) -> Optional[models.Project]:
    result = await db.execute(
        select(models.Project)
        .filter(models.Project.id == project_id, models.Project.owner_id == owner_id)
    )
    project = result.scalars().first()

    if project:
        logger.info(f"Loaded project {project_id} for owner {owner_id}")
    else:
        logger.warning(f"Project {project_id} not found or access denied for owner {owner_id}")
    return project


async def get_owned_project(
    db: AsyncSession, project_id: uuid.UUID, user: Optional[models.User]
) -> models.Project:
    """Project owned by `user`, or raise the matching access error."""
    if user is None:
        raise UnauthorizedError()
    project = await get_project(db, project_id=project_id, owner_id=user.id)
    if not project:
        raise ProjectAccessError()
    return project


async def create_project(
    db: AsyncSession,
    project: schemas.ProjectCreate,
    owner_id: uuid.UUID,
) -> models.Project:
    data = project.model_dump()
    data.update(normalize_project_input(
        name=data["name"],
        description=data.get("description"),
        current_infra=data.get("current_infra", ""),
        scaling_goals=data.get("scaling_goals", []),
    ))
    db_project = models.Project(
        **data,
        owner_id=owner_id,
        status=models.ProjectStatus.ACTIVE.value,
    )
    db.add(db_project)
    await db.commit()
    await db.refresh(db_project)
    logger.info(f"Created project {db_project.id} for owner {owner_id}")
    return db_project


async def update_project(
    db: AsyncSession,
    db_project: models.Project,
    update_data: schemas.ProjectUpdate,
) -> models.Project:
    updates = update_data.model_dump(exclude_unset=True)
    if "name" in updates:
        updates["name"] = validate_name(updates["name"])
    if "description" in updates:
        updates["description"] = validate_description(updates["description"])
    if updates.get("status") is None:
        updates.pop("status", None)

    for field, value in updates.items():
        setattr(db_project, field, value)
    await db.commit()
    await db.refresh(db_project)
    logger.info(f"Updated project {db_project.id} ({', '.join(updates) or 'no changes'})")
    return db_project


async def delete_project(db: AsyncSession, db_project: models.Project) -> bool:
    project_id = db_project.id
    logger.info(f"Deleting project {project_id} and its generated artifacts...")

    for child in PROJECT_CHILDREN:
        await db.execute(delete(child).where(child.project_id == project_id))

    await db.delete(db_project)
    await db.commit()
    logger.info(f"Project {project_id} deleted")
    return True


# -------------------------
# Recommendations
# -------------------------
async def list_recommendations(db: AsyncSession, project_id: uuid.UUID) -> List[models.Recommendation]:
    result = await db.execute(
        select(models.Recommendation)
        .filter(models.Recommendation.project_id == project_id)
        .order_by(models.Recommendation.position)
    )
    return result.scalars().all()


async def replace_recommendations(
    db: AsyncSession, project_id: uuid.UUID, items: List[Dict[str, Any]]
) -> List[models.Recommendation]:
    await db.execute(
        delete(models.Recommendation).where(models.Recommendation.project_id == project_id)
    )
    for position, item in enumerate(items):
        db.add(models.Recommendation(
            project_id=project_id, position=position, is_completed=False, **item
        ))
    await db.commit()
    logger.info(f"Generated {len(items)} recommendations for project {project_id}")
    return await list_recommendations(db, project_id)


async def toggle_recommendation(
    db: AsyncSession, rec_id: uuid.UUID, owner_id: uuid.UUID
) -> models.Recommendation:
    rec = await db.get(models.Recommendation, rec_id)
    if not rec:
        raise RecordAccessError("Recommendation not found")
    if not await get_project(db, project_id=rec.project_id, owner_id=owner_id):
        raise RecordAccessError("Access denied")

    rec.is_completed = not rec.is_completed
    await db.commit()
    await db.refresh(rec)
    logger.info(f"Recommendation {rec_id} marked completed={rec.is_completed}")
    return rec


# -------------------------
# Roadmap
# -------------------------
async def list_roadmap_steps(db: AsyncSession, project_id: uuid.UUID) -> List[models.RoadmapStep]:
    result = await db.execute(
        select(models.RoadmapStep)
        .filter(models.RoadmapStep.project_id == project_id)
        .order_by(models.RoadmapStep.order)
    )
    return result.scalars().all()


async def replace_roadmap_steps(
    db: AsyncSession, project_id: uuid.UUID, steps: List[Dict[str, Any]]
) -> List[models.RoadmapStep]:
    await db.execute(
        delete(models.RoadmapStep).where(models.RoadmapStep.project_id == project_id)
    )
    for step in steps:
        db.add(models.RoadmapStep(project_id=project_id, is_completed=False, **step))
    await db.commit()
    logger.info(f"Generated {len(steps)} roadmap steps for project {project_id}")
    return await list_roadmap_steps(db, project_id)


async def toggle_roadmap_step(
    db: AsyncSession, step_id: uuid.UUID, owner_id: uuid.UUID
) -> models.RoadmapStep:
    step = await db.get(models.RoadmapStep, step_id)
    if not step:
        raise RecordAccessError("Roadmap step not found")
    if not await get_project(db, project_id=step.project_id, owner_id=owner_id):
        raise RecordAccessError("Access denied")

    step.is_completed = not step.is_completed
    await db.commit()
    await db.refresh(step)
    logger.info(f"Roadmap step {step_id} marked completed={step.is_completed}")
    return step


# -------------------------
# Configurations
# -------------------------
async def list_configurations(db: AsyncSession, project_id: uuid.UUID) -> List[models.Configuration]:
    result = await db.execute(
        select(models.Configuration)
        .filter(models.Configuration.project_id == project_id)
        .order_by(models.Configuration.type)
    )
    return result.scalars().all()


async def _stage_configuration(
    db: AsyncSession, project_id: uuid.UUID, config_type: str, artifact: Dict[str, Any]
) -> models.Configuration:
    result = await db.execute(
        select(models.Configuration).filter(
            models.Configuration.project_id == project_id,
            models.Configuration.type == config_type,
        )
    )
    existing = result.scalars().first()

    if existing:
        existing.name = artifact["name"]
        existing.content = artifact["content"]
        existing.description = artifact.get("description")
        return existing

    db_config = models.Configuration(
        project_id=project_id,
        type=config_type,
        name=artifact["name"],
        content=artifact["content"],
        description=artifact.get("description"),
    )
    db.add(db_config)
    return db_config


async def upsert_configurations(
    db: AsyncSession, project_id: uuid.UUID, artifacts: List[Dict[str, Any]]
) -> List[models.Configuration]:
    """Insert or update one row per (project, type); each artifact carries its own `type`."""
    staged = []
    for artifact in artifacts:
        config_type = models.enum_value(artifact["type"])
        staged.append(await _stage_configuration(db, project_id, config_type, artifact))
        # flush so a repeated type in the same batch updates instead of inserting twice
        await db.flush()
    await db.commit()
    for db_config in staged:
        await db.refresh(db_config)
    logger.info(
        f"Upserted {len(staged)} configurations ({', '.join(c.type for c in staged)}) "
        f"for project {project_id}"
    )
    return staged


async def upsert_configuration(
    db: AsyncSession, project_id: uuid.UUID, config_type: str, artifact: Dict[str, Any]
) -> models.Configuration:
    configs = await upsert_configurations(db, project_id, [{**artifact, "type": config_type}])
    return configs[0]


# -------------------------
# Compliance checks
# -------------------------
async def list_compliance_checks(db: AsyncSession, project_id: uuid.UUID) -> List[models.ComplianceCheck]:
    result = await db.execute(
        select(models.ComplianceCheck)
        .filter(models.ComplianceCheck.project_id == project_id)
        .order_by(models.ComplianceCheck.position)
    )
    return result.scalars().all()


async def replace_compliance_checks(
    db: AsyncSession, project_id: uuid.UUID, checks: List[Dict[str, Any]]
) -> List[models.ComplianceCheck]:
    await db.execute(
        delete(models.ComplianceCheck).where(models.ComplianceCheck.project_id == project_id)
    )
    for position, check in enumerate(checks):
        db.add(models.ComplianceCheck(
            project_id=project_id, position=position, is_passed=False, **check
        ))
    await db.commit()
    logger.info(f"Generated {len(checks)} compliance checks for project {project_id}")
    return await list_compliance_checks(db, project_id)


# -------------------------
# Templates
# -------------------------
async def list_templates(
    db: AsyncSession,
    user_id: Optional[uuid.UUID] = None,
    tech_stack: Optional[str] = None,
    phase: Optional[str] = None,
    category: Optional[str] = None,
) -> List[models.Template]:
    visibility = models.Template.is_public.is_(True)
    if user_id is not None:
        visibility = or_(visibility, models.Template.created_by == user_id)

    query = select(models.Template).filter(visibility)
    if tech_stack:
        query = query.filter(models.Template.tech_stack == tech_stack)
    if phase:
        query = query.filter(models.Template.phase == phase)
    if category:
        query = query.filter(models.Template.category == category)

    result = await db.execute(query.order_by(models.Template.name))
    return result.scalars().all()


async def create_template(
    db: AsyncSession, template: schemas.TemplateCreate, user_id: uuid.UUID
) -> models.Template:
    data = template.model_dump()
    data["tags"] = normalize_goals(data.get("tags", []))
    db_template = models.Template(**data, created_by=user_id)
    db.add(db_template)
    await db.commit()
    await db.refresh(db_template)
    logger.info(f"Created template {db_template.id} ({db_template.category}) for user {user_id}")
    return db_template
