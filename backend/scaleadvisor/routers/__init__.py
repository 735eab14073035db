"""
Import and expose all routers here for cleaner main.py usage.
"""
from . import (
    projects, recommendations, roadmap, configurations,
    security, estimates, templates, exports,
)

__all__ = [
    "projects", "recommendations", "roadmap", "configurations",
    "security", "estimates", "templates", "exports",
]
