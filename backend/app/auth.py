"""
Bearer-token authentication.

Tokens are issued by the separate auth service; this module only verifies
them and extracts the id of the requesting user.
"""
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.config import settings
from app.errors import UnauthorizedError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def decode_owner_id(token: str) -> str:
    """
    Verify a JWT and return the user id claim.

    Raises:
        UnauthorizedError: If the token is invalid, expired or has no user id
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning("Rejected token: %s", e)
        raise UnauthorizedError("Invalid token") from e

    owner_id = payload.get(settings.jwt_user_claim)
    if owner_id is None or str(owner_id).strip() == "":
        raise UnauthorizedError("Invalid token: missing user id")
    return str(owner_id)


async def get_current_owner(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """
    FastAPI dependency resolving the requester's owner id.

    Usage:
        @router.get("/protected")
        async def protected_route(owner_id: str = Depends(get_current_owner)):
            ...
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token, authorization denied")
    return decode_owner_id(credentials.credentials)
