"""
backend/routers/admin.py
────────────────────────
Admin overview of partner activity.

GET  /api/admin/partners   — request counts by status plus every request, newest first
"""

from fastapi import APIRouter, Depends

from backend.auth import require_admin
from backend.dependencies import get_repository, get_request_store
from backend.routers.partners import to_request_out
from backend.schemas import AdminPartnersResponse
from models.partner_requests import PartnerRequestStore, RequestStatus
from models.repository import UserRepository

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/partners", response_model=AdminPartnersResponse)
def partners_overview(
    _admin: dict = Depends(require_admin),
    repo: UserRepository = Depends(get_repository),
    store: PartnerRequestStore = Depends(get_request_store),
):
    counts = store.status_counts()
    requests = sorted(store.all(), key=lambda r: r.created_at, reverse=True)
    return AdminPartnersResponse(
        total_users=len(repo),
        onboarded_users=repo.count_onboarded(),
        total_requests=len(requests),
        pending_requests=counts[RequestStatus.PENDING.value],
        accepted_requests=counts[RequestStatus.ACCEPTED.value],
        declined_requests=counts[RequestStatus.DECLINED.value],
        requests=[to_request_out(r, repo) for r in requests],
    )
