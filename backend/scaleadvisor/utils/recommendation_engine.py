# scaleadvisor/utils/recommendation_engine.py
"""
Scaling recommendations keyed off a project's current phase and tech stack.

Only `current_phase` selects the phase-specific advice; the target phase is
the roadmap's concern.
"""
from __future__ import annotations
from typing import Any, Dict, List

from scaleadvisor.models import Priority, ScalingPhase, TechStack, enum_value


PHASE_RECOMMENDATIONS: Dict[str, List[Dict[str, str]]] = {
    ScalingPhase.STARTUP.value: [
        {
            "title": "🐳 Containerize with Docker",
            "description": "Package your application in containers for consistent deployment across environments",
            "priority": Priority.HIGH.value,
            "category": "containerization",
            "estimated_impact": "High - Enables consistent deployments",
            "implementation_time": "1-2 days",
        },
        {
            "title": "⚙️ Set up CI/CD Pipeline",
            "description": "Automate testing and deployment with GitHub Actions or similar",
            "priority": Priority.HIGH.value,
            "category": "automation",
            "estimated_impact": "High - Reduces deployment errors",
            "implementation_time": "2-3 days",
        },
    ],
    ScalingPhase.GROWTH.value: [
        {
            "title": "⚖️ Add Load Balancer",
            "description": "Distribute traffic across multiple instances for better performance",
            "priority": Priority.HIGH.value,
            "category": "load-balancing",
            "estimated_impact": "High - Improves availability",
            "implementation_time": "1 day",
        },
        {
            "title": "🧊 Implement Redis Caching",
            "description": "Add Redis for session storage and frequently accessed data",
            "priority": Priority.MEDIUM.value,
            "category": "caching",
            "estimated_impact": "Medium - Reduces database load",
            "implementation_time": "2-3 days",
        },
        {
            "title": "📈 Enable Auto-scaling",
            "description": "Automatically scale instances based on traffic and resource usage",
            "priority": Priority.MEDIUM.value,
            "category": "scaling",
            "estimated_impact": "High - Handles traffic spikes",
            "implementation_time": "3-4 days",
        },
    ],
    ScalingPhase.SCALE.value: [
        {
            "title": "🗄️ Database Optimization",
            "description": "Implement read replicas and query optimization",
            "priority": Priority.HIGH.value,
            "category": "database",
            "estimated_impact": "High - Improves query performance",
            "implementation_time": "1 week",
        },
        {
            "title": "☸️ Migrate to Kubernetes",
            "description": "Use Kubernetes for advanced orchestration and scaling",
            "priority": Priority.MEDIUM.value,
            "category": "orchestration",
            "estimated_impact": "High - Better resource management",
            "implementation_time": "2-3 weeks",
        },
        {
            "title": "📊 Advanced Monitoring",
            "description": "Set up comprehensive monitoring with Prometheus and Grafana",
            "priority": Priority.MEDIUM.value,
            "category": "monitoring",
            "estimated_impact": "Medium - Better observability",
            "implementation_time": "1 week",
        },
    ],
    # Enterprise projects get no phase-specific baseline advice.
    ScalingPhase.ENTERPRISE.value: [],
}

STACK_RECOMMENDATIONS: Dict[str, List[Dict[str, str]]] = {
    TechStack.MERN.value: [
        {
            "title": "🔄 Optimize React Bundle",
            "description": "Implement code splitting and lazy loading for better performance",
            "priority": Priority.MEDIUM.value,
            "category": "frontend",
            "estimated_impact": "Medium - Faster page loads",
            "implementation_time": "2-3 days",
        },
    ],
}


def get_recommendations_for_project(project: Any) -> List[Dict[str, str]]:
    """Return fresh recommendation dicts for `project` (phase items first, then stack items)."""
    recommendations: List[Dict[str, str]] = []
    recommendations.extend(PHASE_RECOMMENDATIONS.get(enum_value(project.current_phase), []))
    recommendations.extend(STACK_RECOMMENDATIONS.get(enum_value(project.tech_stack), []))
    # copies, so callers can mutate freely
    return [dict(r) for r in recommendations]
