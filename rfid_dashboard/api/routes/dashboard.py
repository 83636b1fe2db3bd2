# =======================================================================================
# rfid_dashboard/api/routes/dashboard
# =======================================================================================

from fastapi import APIRouter, Depends

from ...models.schemas import DashboardStats, IdentityClaim
from ...services.dashboard_service import DashboardService
from ..dependencies import get_dashboard_service, require_identity

router = APIRouter()


@router.get("/dashboard-stats", response_model=DashboardStats)
def get_dashboard_stats(
    _: IdentityClaim = Depends(require_identity),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
):
    return DashboardStats(**dashboard_service.get_summary())
