"""FastAPI auth dependencies — the access gate.

Learn: require_token is attached to protected routers with
`dependencies=[Depends(require_token)]`. FastAPI resolves it before
the route handler, so a rejected token raises 401 and the handler
body (and any database write in it) never runs.

The gate is stateless: every request is validated on its own, there
is no session and no refresh. An expired token means logging in again.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header, HTTPException, Request

from todogate.auth.jwt import Claims, TokenError, TokenService

logger = structlog.get_logger()


def get_token_service(request: Request) -> TokenService:
    """The process-wide TokenService built in create_app()."""
    return request.app.state.token_service


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_token(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> Claims:
    """Validate the bearer token (required — 401 otherwise)."""
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Authentication required")

    token = authorization[7:].strip()
    try:
        claims = tokens.validate(token)
    except TokenError:
        # Don't log the token itself
        logger.warning("auth.token_rejected")
        raise _unauthorized("Invalid token")

    structlog.contextvars.bind_contextvars(user_id=claims.user_id)
    return claims
