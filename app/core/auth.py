"""
Caller identity: who is calling, as vouched for by the identity collaborator.

The API layer reads the bearer token and asks an IdentityVerifier for the
principal. It never rejects a request itself; an unknown or missing token
yields identity None and the query handler raises UnauthenticatedError.
"""

import hmac
import logging
from dataclasses import dataclass
from typing import Protocol

from app.core.config import CALLER_TOKENS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerIdentity:
    """Verified principal associated with an inbound request."""

    uid: str


class IdentityVerifier(Protocol):
    def verify(self, token: str) -> CallerIdentity | None:
        ...


def parse_caller_tokens(raw: str) -> dict[str, str]:
    """Parse "uid:token,uid2:token2" into {token: uid}. Malformed entries are skipped."""
    tokens: dict[str, str] = {}
    for entry in (raw or "").split(","):
        uid, sep, token = entry.strip().partition(":")
        uid, token = uid.strip(), token.strip()
        if not sep or not uid or not token:
            if entry.strip():
                logger.warning("[auth:parse_caller_tokens] skipping malformed entry for uid=%r", uid)
            continue
        tokens[token] = uid
    return tokens


class StaticTokenVerifier:
    """Accepts a fixed set of bearer tokens, each mapped to a caller uid."""

    def __init__(self, tokens: dict[str, str]) -> None:
        self._tokens = dict(tokens)

    @classmethod
    def from_config(cls) -> "StaticTokenVerifier":
        return cls(parse_caller_tokens(CALLER_TOKENS))

    def verify(self, token: str) -> CallerIdentity | None:
        if not token:
            return None
        for known, uid in self._tokens.items():
            if hmac.compare_digest(known.encode(), token.encode()):
                return CallerIdentity(uid=uid)
        return None


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an Authorization header value ("Bearer <token>")."""
    if not authorization:
        return ""
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()
