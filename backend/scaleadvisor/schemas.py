from __future__ import annotations
import uuid
from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime
from fastapi_users import schemas as fa_schemas

from scaleadvisor.models import (
    Role, TechStack, ScalingPhase, ProjectStatus, ConfigurationType,
)


# ==========================================================
# USER SCHEMAS
# ==========================================================
class UserRead(fa_schemas.BaseUser[uuid.UUID]):
    name: Optional[str] = None
    role: Role = Role.USER
    created_at: Optional[datetime] = None


class UserCreate(fa_schemas.BaseUserCreate):
    name: Optional[str] = None


class UserUpdate(fa_schemas.BaseUserUpdate):
    name: Optional[str] = None


# ==========================================================
# PROJECT SCHEMAS
# ==========================================================
class ProjectCreate(BaseModel):
    name: str
    description: Optional[str] = None
    tech_stack: TechStack
    current_phase: ScalingPhase
    target_phase: ScalingPhase
    current_infra: str = ""
    scaling_goals: List[str] = []

    class Config:
        use_enum_values = True


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None

    class Config:
        use_enum_values = True


class Project(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    description: Optional[str] = None
    tech_stack: TechStack
    current_phase: ScalingPhase
    target_phase: ScalingPhase
    current_infra: str
    scaling_goals: List[str] = []
    status: ProjectStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ==========================================================
# GENERATED ARTIFACTS
# ==========================================================
class Recommendation(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    title: str
    description: str
    priority: Literal["high", "medium", "low"]
    category: str
    estimated_impact: str
    implementation_time: str
    is_completed: bool

    class Config:
        from_attributes = True


class RoadmapResource(BaseModel):
    title: str
    url: str
    type: Literal["documentation", "tutorial", "tool"]


class RoadmapStep(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    title: str
    description: str
    order: int
    is_completed: bool
    estimated_duration: str
    dependencies: List[str] = []
    resources: List[RoadmapResource] = []

    class Config:
        from_attributes = True


class Configuration(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    type: ConfigurationType
    name: str
    content: str
    description: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ConfigurationGenerateRequest(BaseModel):
    type: Literal["dockerfile", "kubernetes", "terraform", "github-actions", "docker-compose"]


class ComplianceCheck(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    title: str
    description: str
    category: str
    severity: Literal["high", "medium", "low"]
    standard: str
    remediation: str
    is_passed: bool

    class Config:
        from_attributes = True


class SecurityReport(BaseModel):
    compliance_checks: List[ComplianceCheck]
    artifacts: List[Configuration]


# ==========================================================
# COST ESTIMATES
# ==========================================================
class CostEstimateRequest(BaseModel):
    tech_stack: Optional[str] = None
    current_phase: Optional[str] = None
    target_phase: Optional[str] = None
    scaling_goals: List[str] = []
    current_infra: str = ""


class CostLineItem(BaseModel):
    label: str
    cost: int


class VendorCostBreakdown(BaseModel):
    total: int
    items: List[CostLineItem]


class CostEstimate(BaseModel):
    aws: VendorCostBreakdown
    gcp: VendorCostBreakdown
    azure: VendorCostBreakdown


# ==========================================================
# INFRA CANVAS
# ==========================================================
class CanvasNodeProps(BaseModel):
    engine: Optional[str] = None
    replicas: Optional[int] = None


class CanvasNode(BaseModel):
    id: str
    type: Literal["db", "lb", "api"]
    x: float
    y: float
    props: CanvasNodeProps = Field(default_factory=CanvasNodeProps)


class CanvasRequest(BaseModel):
    nodes: List[CanvasNode] = []


class CanvasPreview(BaseModel):
    terraform: str
    kubernetes: str


class CanvasGenerateResponse(BaseModel):
    preview: CanvasPreview
    configurations: List[Configuration]


# ==========================================================
# TEMPLATES
# ==========================================================
class TemplateCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str
    tech_stack: TechStack
    phase: ScalingPhase
    category: str = Field(min_length=1, max_length=50)
    content: str
    tags: List[str] = []
    is_public: bool = False

    class Config:
        use_enum_values = True


class Template(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    tech_stack: TechStack
    phase: ScalingPhase
    category: str
    content: str
    tags: List[str] = []
    is_public: bool
    created_by: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ==========================================================
# EXPORT
# ==========================================================
class ProjectReport(BaseModel):
    project: Project
    recommendations: List[Recommendation]
    roadmap: List[RoadmapStep]
    configurations: List[Configuration]
    compliance_checks: List[ComplianceCheck]
    cost_estimate: CostEstimate


# GENERIC RESPONSES
class MessageResponse(BaseModel):
    msg: str
