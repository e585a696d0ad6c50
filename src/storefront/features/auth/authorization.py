"""Request authorization: bearer credential -> verified identity -> permission check.

``authorize`` is used as a router-level FastAPI dependency. It resolves the
caller's identity from a signed access token and checks the request against
the static permission table in ``storefront.core.permissions``. The token's
subject must still be an active user, so disabling an account cuts off
tokens already issued to it. On success the resolved ``RequestContext`` is
attached to ``request.state.context``.
"""
import logging
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JWTError, jwt

from ...core.config import ALGORITHM, MIN_TOKEN_LENGTH, SECRET_KEY
from ...core.errors import Forbidden, Unauthenticated
from ...core.permissions import PERMISSIONS, is_allowed, normalize_path
from . import service as auth_service

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)

LEGACY_TOKEN_HEADER = "x-auth-token"


@dataclass(frozen=True)
class Identity:
    subject: str
    role: str


@dataclass(frozen=True)
class RequestContext:
    method: str
    path: str
    credential: str
    identity: Identity


def verify_credential(credential: Optional[str]) -> Identity:
    """Decode and verify a bearer token, returning the identity it carries.

    Raises:
        Unauthenticated: missing, malformed, badly signed or expired token.
        Forbidden: the token is valid but carries no role claim.
    """
    if not credential or not isinstance(credential, str) or len(credential) < MIN_TOKEN_LENGTH:
        logger.warning("Rejected request with missing or malformed credential.")
        raise Unauthenticated("Token missing or malformed")

    try:
        payload = jwt.decode(credential, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        logger.warning("Rejected expired token.")
        raise Unauthenticated("Token expired")
    except JWTError as e:
        logger.warning(f"JWT decoding error: {e}")
        raise Unauthenticated("Invalid token")

    subject = payload.get("sub")
    if not subject:
        logger.warning("Token sub is missing.")
        raise Unauthenticated("Invalid token")

    role = payload.get("role")
    if not role:
        logger.warning(f"Token for user {subject} carries no role claim.")
        raise Forbidden("Role not provided in token")

    return Identity(subject=str(subject), role=str(role))


def authorize_request(method: str, path: str, credential: Optional[str], rules=PERMISSIONS) -> RequestContext:
    """Framework-independent authorization of one request."""
    identity = verify_credential(credential)
    normalized = normalize_path(path)
    if not is_allowed(identity.role, normalized, method, rules):
        logger.warning(
            f"Permission denied for role {identity.role} (user: {identity.subject}) "
            f"on {method.upper()} {normalized}"
        )
        raise Forbidden(f"Route {normalized} ({method.upper()}) not allowed for role {identity.role}")
    logger.debug(f"Authorized {identity.role} ({identity.subject}) for {method.upper()} {normalized}")
    return RequestContext(method=method.upper(), path=normalized, credential=credential, identity=identity)


async def authorize(
    request: Request,
    bearer_token: Annotated[Optional[str], Depends(oauth2_scheme)],
) -> RequestContext:
    credential = bearer_token or request.headers.get(LEGACY_TOKEN_HEADER)
    context = authorize_request(request.method, request.url.path, credential)
    # Disabling an account revokes its outstanding tokens too.
    user = await auth_service.get_user_by_public_id(context.identity.subject)
    if user is None or not user.is_active:
        logger.warning(f"Rejected token for unknown or inactive user {context.identity.subject}")
        raise Unauthenticated("Inactive or unknown user")
    request.state.context = context
    return context


async def get_current_identity(
    context: Annotated[RequestContext, Depends(authorize)],
) -> Identity:
    return context.identity
