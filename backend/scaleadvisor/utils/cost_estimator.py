# scaleadvisor/utils/cost_estimator.py
"""
Approximate monthly infrastructure cost per cloud vendor.

Pure arithmetic over fixed lookup tables. Every intermediate value is guarded
against NaN/inf and negative numbers so a bad input degrades to zeros instead
of an error.
"""
from __future__ import annotations
import logging
import math
from typing import Any, Dict, Optional, Sequence

from scaleadvisor.models import enum_value

logger = logging.getLogger(__name__)

PHASE_MULTIPLIER: Dict[str, float] = {
    "startup": 1,
    "growth": 2,
    "scale": 4,
    "enterprise": 8,
}

STACK_BASELINE: Dict[str, float] = {
    "mern": 80,
    "nextjs": 90,
    "django": 85,
    "flask": 70,
    "laravel": 75,
    "rails": 85,
    "spring": 110,
    "dotnet": 120,
}
DEFAULT_BASELINE = 80

VENDOR_MULTIPLIER: Dict[str, float] = {
    "aws": 1.0,
    "gcp": 0.95,
    "azure": 1.05,
}

MAX_COUNTED_GOALS = 10
GOAL_WEIGHT = 0.05
MIN_MONTHLY_TOTAL = 20

LINE_LABELS = ("Compute + Autoscaling", "Managed DB/Cache", "Bandwidth + Storage")


def safe_round(n: float) -> int:
    """Round half up after clamping at zero; non-finite values become 0."""
    if not isinstance(n, (int, float)) or not math.isfinite(n):
        return 0
    return int(math.floor(max(0.0, n) + 0.5))


def _stack_lift(tech_stack: Optional[str]) -> float:
    if tech_stack in ("spring", "dotnet"):
        return 1.25
    if tech_stack in ("rails", "django"):
        return 1.1
    return 1.0


def _managed_services(current_infra: str) -> float:
    infra = (current_infra or "").lower()
    cost = 25 if "redis" in infra else 0
    if "postgres" in infra or "mysql" in infra or "mongodb" in infra:
        cost += 40
    else:
        cost += 30
    return cost


def _empty_estimate() -> Dict[str, Dict[str, Any]]:
    return {
        vendor: {"total": 0, "items": [{"label": label, "cost": 0} for label in LINE_LABELS]}
        for vendor in VENDOR_MULTIPLIER
    }


def estimate_costs(
    tech_stack: Optional[str],
    current_phase: Optional[str],
    target_phase: Optional[str],
    scaling_goals: Sequence[str] | int = (),
    current_infra: str = "",
) -> Dict[str, Dict[str, Any]]:
    """
    Monthly cost projection for aws/gcp/azure.

    `scaling_goals` may be the goal list itself or just its length. The phase
    multiplier is the larger of the current and target phase multipliers, and
    each vendor total is floored at MIN_MONTHLY_TOTAL.
    """
    tech_stack = enum_value(tech_stack)
    current_phase = enum_value(current_phase)
    target_phase = enum_value(target_phase)
    try:
        goal_count = scaling_goals if isinstance(scaling_goals, int) else len(scaling_goals)
        goals_factor = min(max(goal_count, 0), MAX_COUNTED_GOALS) * GOAL_WEIGHT

        current_mult = PHASE_MULTIPLIER.get(current_phase or "startup", 1)
        target_mult = PHASE_MULTIPLIER.get(target_phase or "startup", 1)
        phase_mult = max(current_mult, target_mult)

        baseline = STACK_BASELINE.get(tech_stack, DEFAULT_BASELINE)
        derived = baseline * _stack_lift(tech_stack) * (1 + goals_factor) * phase_mult
        if not math.isfinite(derived):
            derived = 0

        storage_and_bandwidth = 20 * phase_mult
        managed = _managed_services(current_infra)

        estimate: Dict[str, Dict[str, Any]] = {}
        for vendor, vendor_mult in VENDOR_MULTIPLIER.items():
            compute = derived * 0.7 * vendor_mult
            db = (derived * 0.2 + managed) * vendor_mult
            net_storage = (derived * 0.1 + storage_and_bandwidth) * vendor_mult
            total = max(MIN_MONTHLY_TOTAL, compute + db + net_storage)

            estimate[vendor] = {
                "total": safe_round(total),
                "items": [
                    {"label": label, "cost": safe_round(cost)}
                    for label, cost in zip(LINE_LABELS, (compute, db, net_storage))
                ],
            }
        return estimate
    except Exception as e:
        logger.warning(f"Cost estimation failed, returning zeros: {e}")
        return _empty_estimate()


def estimate_for_project(project: Any) -> Dict[str, Dict[str, Any]]:
    return estimate_costs(
        tech_stack=project.tech_stack,
        current_phase=project.current_phase,
        target_phase=project.target_phase,
        scaling_goals=list(project.scaling_goals or []),
        current_infra=project.current_infra or "",
    )

