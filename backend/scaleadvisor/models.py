import enum
import uuid
import datetime
from sqlalchemy import (
    String, Text, Integer, Boolean, DateTime, ForeignKey, JSON, UniqueConstraint,
)
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func
from fastapi_users.db import SQLAlchemyBaseUserTableUUID
from fastapi_users_db_sqlalchemy.generics import GUID
from scaleadvisor.config.database import Base


# Enums
class Role(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"
    MEMBER = "member"


class TechStack(str, enum.Enum):
    MERN = "mern"
    DJANGO = "django"
    NEXTJS = "nextjs"
    LARAVEL = "laravel"
    RAILS = "rails"
    FLASK = "flask"
    SPRING = "spring"
    DOTNET = "dotnet"


class ScalingPhase(str, enum.Enum):
    STARTUP = "startup"
    GROWTH = "growth"
    SCALE = "scale"
    ENTERPRISE = "enterprise"


class ProjectStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class Priority(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ConfigurationType(str, enum.Enum):
    DOCKERFILE = "dockerfile"
    KUBERNETES = "kubernetes"
    TERRAFORM = "terraform"
    GITHUB_ACTIONS = "github-actions"
    DOCKER_COMPOSE = "docker-compose"
    # Security advisor artifacts
    IAM_POLICY = "iam-policy"
    SECRETS_MANAGEMENT = "secrets-management"
    TERRAFORM_CIS = "terraform-cis"


def enum_value(value):
    """Plain string for enum members, so table lookups work for rows and schemas alike."""
    return value.value if isinstance(value, enum.Enum) else value


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


# User
class User(SQLAlchemyBaseUserTableUUID, Base):
    __tablename__ = "users"

    name: Mapped[str | None] = mapped_column(String(length=100), nullable=True)
    role: Mapped[str] = mapped_column(
        String(length=20), nullable=False, default=Role.USER.value
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    projects: Mapped[list["Project"]] = relationship(
        "Project", back_populates="owner"
    )

    def __repr__(self):
        return f"<User(id={str(self.id)[:8]}, email={self.email})>"


#  Project
class Project(Base):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        GUID, primary_key=True, default=uuid.uuid4, index=True
    )

    # Core fields
    name: Mapped[str] = mapped_column(String(length=100), index=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    tech_stack: Mapped[str] = mapped_column(String(length=20), nullable=False)
    current_phase: Mapped[str] = mapped_column(String(length=20), nullable=False)
    target_phase: Mapped[str] = mapped_column(String(length=20), nullable=False)
    current_infra: Mapped[str] = mapped_column(Text, nullable=False, default="")
    scaling_goals: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(
        String(length=20), nullable=False, default=ProjectStatus.ACTIVE.value
    )

    # Audit
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )

    # Owner
    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    owner: Mapped["User"] = relationship("User", back_populates="projects")

    def __repr__(self):
        return f"<Project(id={str(self.id)[:8]}, name={self.name[:20]})>"


# Recommendation
class Recommendation(Base):
    __tablename__ = "recommendations"

    id: Mapped[uuid.UUID] = mapped_column(
        GUID, primary_key=True, default=uuid.uuid4, index=True
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[str] = mapped_column(String(length=10), nullable=False)
    category: Mapped[str] = mapped_column(String(length=50), nullable=False)
    estimated_impact: Mapped[str] = mapped_column(String, nullable=False)
    implementation_time: Mapped[str] = mapped_column(String, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Recommendation(id={str(self.id)[:8]}, category={self.category})>"


# RoadmapStep
class RoadmapStep(Base):
    __tablename__ = "roadmap_steps"

    id: Mapped[uuid.UUID] = mapped_column(
        GUID, primary_key=True, default=uuid.uuid4, index=True
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    estimated_duration: Mapped[str] = mapped_column(String, nullable=False)
    dependencies: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    resources: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<RoadmapStep(id={str(self.id)[:8]}, order={self.order})>"


# Configuration
class Configuration(Base):
    __tablename__ = "configurations"
    __table_args__ = (
        UniqueConstraint("project_id", "type", name="uq_configurations_project_type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        GUID, primary_key=True, default=uuid.uuid4, index=True
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False
    )
    type: Mapped[str] = mapped_column(String(length=30), nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return f"<Configuration(id={str(self.id)[:8]}, type={self.type})>"


# ComplianceCheck
class ComplianceCheck(Base):
    __tablename__ = "compliance_checks"

    id: Mapped[uuid.UUID] = mapped_column(
        GUID, primary_key=True, default=uuid.uuid4, index=True
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(length=50), nullable=False)
    severity: Mapped[str] = mapped_column(String(length=10), nullable=False)
    standard: Mapped[str] = mapped_column(String(length=20), nullable=False)
    remediation: Mapped[str] = mapped_column(Text, nullable=False)
    is_passed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<ComplianceCheck(id={str(self.id)[:8]}, standard={self.standard})>"


# Template
class Template(Base):
    __tablename__ = "templates"

    id: Mapped[uuid.UUID] = mapped_column(
        GUID, primary_key=True, default=uuid.uuid4, index=True
    )
    name: Mapped[str] = mapped_column(String(length=100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    tech_stack: Mapped[str] = mapped_column(String(length=20), index=True, nullable=False)
    phase: Mapped[str] = mapped_column(String(length=20), index=True, nullable=False)
    category: Mapped[str] = mapped_column(String(length=50), index=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self):
        return f"<Template(id={str(self.id)[:8]}, name={self.name})>"
