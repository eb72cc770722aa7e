"""
backend/routers/partners.py
───────────────────────────
FastAPI router for practice-partner endpoints. Every route needs a session.

Endpoints
─────────
GET    /api/partners/find                    — Ranked partner recommendations
POST   /api/partners/request                 — Send a practice request
GET    /api/partners/requests                — Requests sent and received
PATCH  /api/partners/requests/{request_id}   — Accept / decline / counter a received request
GET    /api/partners/connections             — Partners with an accepted request
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend.auth import get_current_user
from backend.dependencies import (
    get_app_settings,
    get_matchmaker,
    get_repository,
    get_request_store,
)
from backend.schemas import (
    ConnectionOut,
    ConnectionsResponse,
    PartnerCard,
    PartnerListResponse,
    PartnerRequestAction,
    PartnerRequestCreate,
    PartnerRequestOut,
    PartnerRequestsResponse,
)
from config.settings import Settings
from models.matchmaker import PartnerFilters, PartnerMatchmaker, apply_filters
from models.partner_requests import (
    AlreadyAnsweredError,
    DuplicateRequestError,
    EmptyCounterOfferError,
    NotReceiverError,
    PartnerRequest,
    PartnerRequestStore,
    RequestNotFoundError,
    SelfRequestError,
)
from models.repository import UserRepository

router = APIRouter(prefix="/api/partners", tags=["partners"])


# ── helpers ───────────────────────────────────────────────────────────────────

def to_request_out(req: PartnerRequest, repo: UserRepository) -> PartnerRequestOut:
    sender = repo.get_user(req.sender_id) or {}
    receiver = repo.get_user(req.receiver_id) or {}
    return PartnerRequestOut(
        id=req.id,
        sender_id=req.sender_id,
        sender_name=sender.get("name"),
        receiver_id=req.receiver_id,
        receiver_name=receiver.get("name"),
        message=req.message,
        response_message=req.response_message,
        status=req.status.value,
        created_at=req.created_at,
        responded_at=req.responded_at,
    )


# ── endpoints ─────────────────────────────────────────────────────────────────

@router.get("/find", response_model=PartnerListResponse)
def find_partners(
    q: Optional[str] = Query(None, description="Search name or location"),
    skill_level: Optional[str] = Query(None, alias="skillLevel", description="BEGINNER … PRO, or 'all'"),
    max_distance: Optional[float] = Query(None, alias="maxDistance", ge=0),
    user: dict = Depends(get_current_user),
    repo: UserRepository = Depends(get_repository),
    matchmaker: PartnerMatchmaker = Depends(get_matchmaker),
    settings: Settings = Depends(get_app_settings),
):
    candidates = repo.find_candidates(user["id"], limit=settings.candidate_limit)
    cards = matchmaker.rank(user, candidates)
    cards = apply_filters(cards, PartnerFilters(q=q, skill_level=skill_level, max_distance=max_distance))
    partners = [PartnerCard.model_validate(c) for c in cards]
    return PartnerListResponse(total=len(partners), partners=partners)


@router.post("/request", response_model=PartnerRequestOut, status_code=status.HTTP_201_CREATED)
def send_partner_request(
    body: PartnerRequestCreate,
    user: dict = Depends(get_current_user),
    repo: UserRepository = Depends(get_repository),
    store: PartnerRequestStore = Depends(get_request_store),
):
    if repo.get_user(body.partner_id) is None:
        raise HTTPException(404, f"Partner '{body.partner_id}' not found")
    try:
        req = store.create(user["id"], body.partner_id, body.message)
    except SelfRequestError as exc:
        raise HTTPException(400, str(exc))
    except DuplicateRequestError as exc:
        raise HTTPException(409, str(exc))
    return to_request_out(req, repo)


@router.get("/requests", response_model=PartnerRequestsResponse)
def list_partner_requests(
    user: dict = Depends(get_current_user),
    repo: UserRepository = Depends(get_repository),
    store: PartnerRequestStore = Depends(get_request_store),
):
    return PartnerRequestsResponse(
        sent=[to_request_out(r, repo) for r in store.sent_by(user["id"])],
        received=[to_request_out(r, repo) for r in store.received_by(user["id"])],
    )


@router.patch("/requests/{request_id}", response_model=PartnerRequestOut)
def respond_to_partner_request(
    request_id: str,
    body: PartnerRequestAction,
    user: dict = Depends(get_current_user),
    repo: UserRepository = Depends(get_repository),
    store: PartnerRequestStore = Depends(get_request_store),
):
    try:
        if body.action == "counter_offer":
            req = store.counter_offer(request_id, user["id"], body.message)
        else:
            req = store.respond(request_id, user["id"], accept=body.action == "accept")
    except EmptyCounterOfferError as exc:
        raise HTTPException(400, str(exc))
    except RequestNotFoundError:
        raise HTTPException(404, f"Request '{request_id}' not found")
    except NotReceiverError as exc:
        raise HTTPException(403, str(exc))
    except AlreadyAnsweredError as exc:
        raise HTTPException(409, str(exc))
    return to_request_out(req, repo)


@router.get("/connections", response_model=ConnectionsResponse)
def list_connections(
    user: dict = Depends(get_current_user),
    repo: UserRepository = Depends(get_repository),
    store: PartnerRequestStore = Depends(get_request_store),
):
    connections = []
    for req in store.connections_for(user["id"]):
        partner_id = req.partner_of(user["id"])
        partner = repo.get_user(partner_id) or {}
        connections.append(ConnectionOut(
            request_id=req.id,
            partner_id=partner_id,
            partner_name=partner.get("name"),
            connected_at=req.responded_at,
        ))
    return ConnectionsResponse(total=len(connections), connections=connections)
