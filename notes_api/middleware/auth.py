"""
Notes API — Bearer Token Authentication Stage
===============================================

What:  Authenticates a request from its `Authorization: Bearer <token>` header.
How:   `BearerAuth` is a FastAPI dependency attached to a router's dependency
       list, so it runs before the route's own parameters are resolved. On
       success the user id is stored on `request.state.user_id`; on failure
       an UnauthorizedError subclass propagates to the 401 handler.

Per-request outcomes:
    NoToken → MissingTokenError
    token   → TokenMalformedError | TokenSignatureInvalidError
              | TokenExpiredError | user id

All failures produce the same 401 body. The reason is logged with the
request id for diagnostics; the token itself never is.
"""

import logging
from typing import Optional

from fastapi import Request

from notes_api.exceptions import MissingTokenError, UnauthorizedError
from notes_api.middleware.request_id import request_id_var
from notes_api.services.token_service import TokenService

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the credential of a `Bearer` header value, or None."""
    if not authorization:
        return None
    scheme, _, credential = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    credential = credential.strip()
    return credential or None


class BearerAuth:
    """
    Request-processing stage: either continues with an authenticated user id
    or ends the request with 401.

    Usage:
        router = APIRouter(dependencies=[Depends(require_user)])
    """

    header_name = "Authorization"

    async def __call__(self, request: Request) -> int:
        rid = request_id_var.get("")
        token = extract_bearer_token(request.headers.get(self.header_name))

        try:
            if token is None:
                raise MissingTokenError()
            token_service: TokenService = request.app.state.token_service
            user_id = token_service.verify(token)
        except UnauthorizedError as exc:
            logger.warning(
                "[%s] Rejected %s %s: %s",
                rid,
                request.method,
                request.url.path,
                exc.context.get("reason", exc.reason),
            )
            raise

        request.state.user_id = user_id
        return user_id


require_user = BearerAuth()
