"""
models/partner_requests.py
──────────────────────────
In-memory store for practice-partner requests.

Lifecycle: PENDING → ACCEPTED | DECLINED. Only the receiver may answer,
and only once. A counter offer attaches the receiver's reply message and
leaves the request PENDING. Requests live for the lifetime of the process.

Every state change is logged with the request id bound into the record's
extra, so the JSON file sink can be filtered per request.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from utils.logger import logger

DEFAULT_REQUEST_MESSAGE = (
    "Hi! I'd love to practice with you. I'm working on improving my game and "
    "think we'd be great practice partners. Let me know when you're available!"
)


class RequestStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


class PartnerRequestError(Exception):
    """Base class for request-state violations."""


class SelfRequestError(PartnerRequestError):
    pass


class DuplicateRequestError(PartnerRequestError):
    pass


class RequestNotFoundError(PartnerRequestError):
    pass


class NotReceiverError(PartnerRequestError):
    pass


class AlreadyAnsweredError(PartnerRequestError):
    pass


class EmptyCounterOfferError(PartnerRequestError):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PartnerRequest:
    sender_id: str
    receiver_id: str
    message: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: RequestStatus = RequestStatus.PENDING
    response_message: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)
    responded_at: Optional[datetime] = None

    def partner_of(self, user_id: str) -> str:
        return self.receiver_id if self.sender_id == user_id else self.sender_id

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data


class PartnerRequestStore:
    def __init__(self) -> None:
        self._requests: list[PartnerRequest] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._requests)

    def all(self) -> list[PartnerRequest]:
        return list(self._requests)

    def get(self, request_id: str) -> PartnerRequest:
        for req in self._requests:
            if req.id == request_id:
                return req
        raise RequestNotFoundError(request_id)

    def create(self, sender_id: str, receiver_id: str, message: str | None = None) -> PartnerRequest:
        if sender_id == receiver_id:
            raise SelfRequestError("Cannot send a partner request to yourself")

        with self._lock:
            for req in self._requests:
                if (
                    req.sender_id == sender_id
                    and req.receiver_id == receiver_id
                    and req.status is RequestStatus.PENDING
                ):
                    raise DuplicateRequestError("A pending request to this partner already exists")

            text = (message or "").strip() or DEFAULT_REQUEST_MESSAGE
            req = PartnerRequest(sender_id=sender_id, receiver_id=receiver_id, message=text)
            self._requests.append(req)

        logger.bind(request_id=req.id).info(f"Partner request created: {sender_id} -> {receiver_id}")
        return req

    def respond(self, request_id: str, user_id: str, accept: bool) -> PartnerRequest:
        with self._lock:
            req = self._pending_for_receiver(request_id, user_id)
            req.status = RequestStatus.ACCEPTED if accept else RequestStatus.DECLINED
            req.responded_at = _utcnow()

        logger.bind(request_id=req.id).info(f"Partner request {req.status.value} by {user_id}")
        return req

    def counter_offer(self, request_id: str, user_id: str, message: str | None) -> PartnerRequest:
        """Attach the receiver's reply; the request stays PENDING."""
        text = (message or "").strip()
        if not text:
            raise EmptyCounterOfferError("A counter offer needs a message")

        with self._lock:
            req = self._pending_for_receiver(request_id, user_id)
            req.response_message = text
            req.responded_at = _utcnow()

        logger.bind(request_id=req.id).info(f"Counter offer from {user_id}")
        return req

    def sent_by(self, user_id: str) -> list[PartnerRequest]:
        return [r for r in self._requests if r.sender_id == user_id]

    def received_by(self, user_id: str) -> list[PartnerRequest]:
        return [r for r in self._requests if r.receiver_id == user_id]

    def connections_for(self, user_id: str) -> list[PartnerRequest]:
        """Accepted requests the user took part in, either direction."""
        return [
            r for r in self._requests
            if r.status is RequestStatus.ACCEPTED and user_id in (r.sender_id, r.receiver_id)
        ]

    def status_counts(self) -> dict[str, int]:
        counts = {s.value: 0 for s in RequestStatus}
        for req in self._requests:
            counts[req.status.value] += 1
        return counts

    # ── helpers ───────────────────────────────────────────────────────────────

    def _pending_for_receiver(self, request_id: str, user_id: str) -> PartnerRequest:
        req = self.get(request_id)
        if req.receiver_id != user_id:
            raise NotReceiverError("Only the receiver can answer this request")
        if req.status is not RequestStatus.PENDING:
            raise AlreadyAnsweredError(f"Request already {req.status.value.lower()}")
        return req
