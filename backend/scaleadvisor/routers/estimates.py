from fastapi import APIRouter

from scaleadvisor import schemas
from scaleadvisor.utils import cost_estimator

router = APIRouter(prefix="/api/estimates", tags=["Estimates"])


# Draft-form preview, no project or login needed
@router.post("/cost", response_model=schemas.CostEstimate)
async def estimate_cost(request: schemas.CostEstimateRequest):
    return cost_estimator.estimate_costs(
        tech_stack=request.tech_stack,
        current_phase=request.current_phase,
        target_phase=request.target_phase,
        scaling_goals=request.scaling_goals,
        current_infra=request.current_infra,
    )
