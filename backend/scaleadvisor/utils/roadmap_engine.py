# scaleadvisor/utils/roadmap_engine.py
from __future__ import annotations
from typing import Any, Dict, List

from scaleadvisor.models import ScalingPhase, enum_value


def _doc(title: str, url: str) -> Dict[str, str]:
    return {"title": title, "url": url, "type": "documentation"}


def _tutorial(title: str, url: str) -> Dict[str, str]:
    return {"title": title, "url": url, "type": "tutorial"}


# Always present
FOUNDATION_STEPS: List[Dict[str, Any]] = [
    {
        "title": "🏗️ Foundation Setup",
        "description": "Set up basic infrastructure and development workflow",
        "estimated_duration": "1-2 weeks",
        "dependencies": [],
        "resources": [
            _doc("Docker Documentation", "https://docs.docker.com/"),
            _tutorial("Git Workflow Guide", "https://guides.github.com/introduction/flow/"),
        ],
    },
    {
        "title": "🐳 Containerization",
        "description": "Package your application in Docker containers",
        "estimated_duration": "3-5 days",
        "dependencies": ["Foundation Setup"],
        "resources": [
            _doc("Dockerfile Best Practices", "https://docs.docker.com/develop/dev-best-practices/"),
            _tutorial("Docker Compose Tutorial", "https://docs.docker.com/compose/gettingstarted/"),
        ],
    },
    {
        "title": "⚙️ CI/CD Pipeline",
        "description": "Automate testing and deployment processes",
        "estimated_duration": "1 week",
        "dependencies": ["Containerization"],
        "resources": [
            _doc("GitHub Actions Documentation", "https://docs.github.com/en/actions"),
            _tutorial(
                "CI/CD Best Practices",
                "https://docs.github.com/en/actions/learn-github-actions/essential-features-of-github-actions",
            ),
        ],
    },
]

# Target phase growth and beyond
GROWTH_STEPS: List[Dict[str, Any]] = [
    {
        "title": "⚖️ Load Balancing",
        "description": "Distribute traffic across multiple instances",
        "estimated_duration": "3-5 days",
        "dependencies": ["CI/CD Pipeline"],
        "resources": [
            _doc("AWS Application Load Balancer", "https://docs.aws.amazon.com/elasticloadbalancing/latest/application/"),
            _doc("NGINX Load Balancing", "https://nginx.org/en/docs/http/load_balancing.html"),
        ],
    },
    {
        "title": "🧊 Caching Layer",
        "description": "Implement Redis caching for better performance",
        "estimated_duration": "1 week",
        "dependencies": ["Load Balancing"],
        "resources": [
            _doc("Redis Documentation", "https://redis.io/documentation"),
            _tutorial("Caching Strategies", "https://redis.io/docs/manual/patterns/"),
        ],
    },
]

# Target phase scale and beyond
SCALE_STEPS: List[Dict[str, Any]] = [
    {
        "title": "📈 Auto-scaling",
        "description": "Automatically scale based on demand",
        "estimated_duration": "1-2 weeks",
        "dependencies": ["Caching Layer"],
        "resources": [
            _doc(
                "Kubernetes Horizontal Pod Autoscaler",
                "https://kubernetes.io/docs/tasks/run-application/horizontal-pod-autoscale/",
            ),
            _doc("AWS Auto Scaling", "https://docs.aws.amazon.com/autoscaling/"),
        ],
    },
    {
        "title": "🗄️ Database Optimization",
        "description": "Optimize database performance and implement read replicas",
        "estimated_duration": "2-3 weeks",
        "dependencies": ["Auto-scaling"],
        "resources": [
            _doc("Database Performance Tuning", "https://www.postgresql.org/docs/current/performance-tips.html"),
            _tutorial(
                "Read Replicas Guide",
                "https://docs.aws.amazon.com/AmazonRDS/latest/UserGuide/USER_ReadRepl.html",
            ),
        ],
    },
]

# Enterprise only
ENTERPRISE_STEPS: List[Dict[str, Any]] = [
    {
        "title": "☸️ Kubernetes Migration",
        "description": "Migrate to Kubernetes for advanced orchestration",
        "estimated_duration": "3-4 weeks",
        "dependencies": ["Database Optimization"],
        "resources": [
            _doc("Kubernetes Documentation", "https://kubernetes.io/docs/"),
            _tutorial("Kubernetes Migration Guide", "https://kubernetes.io/docs/concepts/workloads/"),
        ],
    },
    {
        "title": "📊 Advanced Monitoring",
        "description": "Implement comprehensive monitoring and alerting",
        "estimated_duration": "2-3 weeks",
        "dependencies": ["Kubernetes Migration"],
        "resources": [
            _doc("Prometheus Documentation", "https://prometheus.io/docs/"),
            _tutorial("Grafana Tutorials", "https://grafana.com/tutorials/"),
        ],
    },
]

_GROWTH_TARGETS = {ScalingPhase.GROWTH.value, ScalingPhase.SCALE.value, ScalingPhase.ENTERPRISE.value}
_SCALE_TARGETS = {ScalingPhase.SCALE.value, ScalingPhase.ENTERPRISE.value}


def generate_roadmap_steps(project: Any) -> List[Dict[str, Any]]:
    """
    Build the ordered roadmap for a project from its target phase.
    Steps are numbered from 1 and each depends on the step before it.
    """
    target = enum_value(project.target_phase)

    blocks = [FOUNDATION_STEPS]
    if target in _GROWTH_TARGETS:
        blocks.append(GROWTH_STEPS)
    if target in _SCALE_TARGETS:
        blocks.append(SCALE_STEPS)
    if target == ScalingPhase.ENTERPRISE.value:
        blocks.append(ENTERPRISE_STEPS)

    steps: List[Dict[str, Any]] = []
    for block in blocks:
        for step in block:
            steps.append({
                **step,
                "order": len(steps) + 1,
                "dependencies": list(step["dependencies"]),
                "resources": [dict(r) for r in step["resources"]],
            })
    return steps
