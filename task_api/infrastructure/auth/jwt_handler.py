"""
JWT token handler.
Verifies bearer tokens issued by the user service and extracts the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from jose import JWTError, jwt as jose_jwt

from task_api.config import Settings, get_settings
from task_api.domain.models.base import AuthenticationError
from task_api.domain.models.role import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller: numeric id, roles and the raw token to forward."""

    user_id: int
    roles: List[Role] = field(default_factory=list)
    token: str = ""


class JWTHandler:
    """Handles JWT token validation and caller extraction."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.jwt_key = self.settings.jwt_verification_key
        self.jwt_algorithm = self.settings.jwt_algorithm
        self.user_id_claim = self.settings.jwt_user_id_claim
        self.roles_claim = self.settings.jwt_roles_claim

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token string

        Returns:
            Dict containing token payload

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        # Remove 'Bearer ' prefix if present
        if token.startswith('Bearer '):
            token = token[7:]

        if not self.jwt_key:
            logger.error("No JWT verification key configured")
            raise AuthenticationError("Token verification is not configured")

        try:
            return jose_jwt.decode(
                token,
                self.jwt_key,
                algorithms=[self.jwt_algorithm],
                options={"verify_aud": False}
            )
        except JWTError as e:
            logger.info(f"Rejected bearer token: {e}")
            raise AuthenticationError(f"Invalid JWT token: {str(e)}")

    def get_user_id(self, payload: Dict[str, Any]) -> int:
        """
        Extract the numeric user ID claim.

        Raises:
            AuthenticationError: If the claim is missing or not numeric
        """
        raw = payload.get(self.user_id_claim)
        if isinstance(raw, bool) or raw is None:
            raise AuthenticationError(f"Token missing user ID ({self.user_id_claim} claim)")
        try:
            user_id = int(raw)
        except (TypeError, ValueError):
            raise AuthenticationError(f"Token user ID is not numeric: {raw!r}")
        if isinstance(raw, float) and raw != user_id:
            raise AuthenticationError(f"Token user ID is not an integer: {raw!r}")
        return user_id

    def get_roles(self, payload: Dict[str, Any]) -> List[Role]:
        """Extract roles from a list claim or a space-separated string claim."""
        raw = payload.get(self.roles_claim)
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = raw.split()
        if not isinstance(raw, (list, tuple)):
            return []
        return Role.parse_all(str(value) for value in raw)

    def authenticate(self, token: str) -> CurrentUser:
        """Verify a token and build the caller it describes."""
        payload = self.verify_token(token)
        if token.startswith('Bearer '):
            token = token[7:]
        return CurrentUser(
            user_id=self.get_user_id(payload),
            roles=self.get_roles(payload),
            token=token,
        )
