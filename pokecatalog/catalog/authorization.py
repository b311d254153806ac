"""
Ownership-based authorization for catalog mutations.

``authorize`` is a pure function: it only looks at the record's owner and the
acting identity. The caller must confirm the record exists first; a missing
record is reported as not found before authorization is consulted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol


class DenialReason(str, Enum):
    SEEDED = "seeded"
    NOT_OWNER = "not_owner"


_DENIAL_MESSAGES = {
    DenialReason.SEEDED: "Seeded Pokemon cannot be modified",
    DenialReason.NOT_OWNER: "User not authorized to modify this Pokemon",
}


class OwnedRecord(Protocol):
    owner_id: Optional[str]


@dataclass(frozen=True)
class AuthorizationDecision:
    """Result of an authorization check."""

    allowed: bool
    reason: Optional[DenialReason] = None

    @property
    def message(self) -> Optional[str]:
        return _DENIAL_MESSAGES[self.reason] if self.reason else None


ALLOWED = AuthorizationDecision(allowed=True)


def authorize(record: OwnedRecord, acting_user_id: Optional[str]) -> AuthorizationDecision:
    """Decide whether ``acting_user_id`` may update or delete ``record``.

    Seeded records (no owner) are immutable for everyone; owned records can
    only be changed by their owner.
    """
    if record.owner_id is None:
        return AuthorizationDecision(allowed=False, reason=DenialReason.SEEDED)
    if record.owner_id != acting_user_id:
        return AuthorizationDecision(allowed=False, reason=DenialReason.NOT_OWNER)
    return ALLOWED
