"""
backend/schemas.py
──────────────────
Pydantic v2 request / response models for all FastAPI endpoints.
JSON keys are camelCase to match the web client; Python attributes stay snake_case.

Sections
────────
  1. Partner models            — ScoreBreakdownOut, PartnerCard, PartnerListResponse
  2. Partner request models    — PartnerRequestCreate, PartnerRequestAction, ConnectionOut,
                                 ConnectionsResponse, PartnerRequestOut, PartnerRequestsResponse
  3. Admin models              — AdminPartnersResponse
  4. Shared / util models      — HealthResponse
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─────────────────────────────────────────────────────────────────────────────
#  1. Partner models
# ─────────────────────────────────────────────────────────────────────────────

class ScoreBreakdownOut(CamelModel):
    """Points earned per scoring term."""
    skill:    int = Field(..., ge=0, le=30)
    goals:    int = Field(..., ge=0, le=25)
    style:    int = Field(..., ge=0, le=15)
    days:     int = Field(..., ge=0, le=15)
    location: int = Field(..., ge=0, le=15)


class PartnerCard(CamelModel):
    """One recommended practice partner."""
    id:              str
    name:            str
    rating:          float = Field(..., description="Player rating; 2.0 when unknown")
    skill_level:     str   = Field("BEGINNER", description="BEGINNER | INTERMEDIATE | ADVANCED | PRO")
    location:        Optional[str] = None
    distance:        Optional[float] = Field(None, description="Placeholder only; None unless enabled")
    is_available:    bool  = Field(..., description="Active within the availability window")
    match_score:     int   = Field(..., ge=0, le=100)
    match_label:     str
    common_goals:    list[str] = Field(default_factory=list)
    common_days:     list[str] = Field(default_factory=list)
    playing_style:   Optional[str] = None
    availability:    list[str] = Field(default_factory=list)
    score_breakdown: ScoreBreakdownOut


class PartnerListResponse(CamelModel):
    """Response envelope for GET /api/partners/find."""
    total:    int
    partners: list[PartnerCard]


# ─────────────────────────────────────────────────────────────────────────────
#  2. Partner request models
# ─────────────────────────────────────────────────────────────────────────────

class PartnerRequestCreate(CamelModel):
    """Body for POST /api/partners/request."""
    partner_id: str = Field(..., min_length=1)
    message:    Optional[str] = Field(None, max_length=1000)


class PartnerRequestAction(CamelModel):
    """Body for PATCH /api/partners/requests/{request_id}.

    The web client sends upper-case actions (ACCEPT, COUNTER_OFFER) and the
    partner list sends lower-case ones; both are accepted.
    """
    action:  Literal["accept", "decline", "counter_offer"]
    message: Optional[str] = Field(None, max_length=1000, description="Required for counter_offer")

    @field_validator("action", mode="before")
    @classmethod
    def _lowercase_action(cls, v):
        return v.lower() if isinstance(v, str) else v


class ConnectionOut(CamelModel):
    """A partner the user is connected with through an accepted request."""
    request_id:    str
    partner_id:    str
    partner_name:  Optional[str] = None
    connected_at:  Optional[datetime] = None


class ConnectionsResponse(CamelModel):
    """Response for GET /api/partners/connections."""
    total:       int
    connections: list[ConnectionOut]


class PartnerRequestOut(CamelModel):
    id:               str
    sender_id:        str
    sender_name:      Optional[str] = None
    receiver_id:      str
    receiver_name:    Optional[str] = None
    message:          str
    response_message: Optional[str] = Field(None, description="Receiver's counter offer, if any")
    status:           str
    created_at:       datetime
    responded_at:     Optional[datetime] = None


class PartnerRequestsResponse(CamelModel):
    """Response for GET /api/partners/requests."""
    sent:     list[PartnerRequestOut]
    received: list[PartnerRequestOut]


# ─────────────────────────────────────────────────────────────────────────────
#  3. Admin models
# ─────────────────────────────────────────────────────────────────────────────

class AdminPartnersResponse(CamelModel):
    """Response for GET /api/admin/partners."""
    total_users:       int
    onboarded_users:   int
    total_requests:    int
    pending_requests:  int
    accepted_requests: int
    declined_requests: int
    requests:          list[PartnerRequestOut]


# ─────────────────────────────────────────────────────────────────────────────
#  4. Shared / utility models
# ─────────────────────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    """Response for GET /health."""
    status:               str
    users_loaded:         int
    candidates_available: int
    version:              str = "1.0.0"
