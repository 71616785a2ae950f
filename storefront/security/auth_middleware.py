"""
Bearer Token Authentication Middleware

Verifies tokens on incoming requests and stores the caller's identity in
request state. Requests without a token proceed anonymously; routes decide
whether an identity is required through AuthDependency.
"""

import logging
from typing import Callable, Optional

from fastapi import Request
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from ..exceptions import AuthenticationError, ForbiddenError
from .models import Identity
from .tokens import TokenVerifier

logger = logging.getLogger(__name__)


def extract_token(headers: Headers) -> Optional[str]:
    """Read the token from ``Authorization: Bearer`` or ``x-auth-token``"""
    authorization = headers.get("Authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            return credentials.strip()
    return headers.get("x-auth-token")


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Middleware that verifies bearer tokens on requests.

    If a request carries a token, it is validated and rejected with 401
    when invalid. If no token is present, the request proceeds with no
    identity.
    """

    def __init__(self, app, verifier: TokenVerifier):
        super().__init__(app)
        self.verifier = verifier

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.identity = None
        token = extract_token(request.headers)

        if token:
            try:
                identity = self.verifier.verify(token)
            except AuthenticationError as e:
                logger.warning(f"Token verification failed: {e.message}")
                return JSONResponse(status_code=e.status_code, content={"detail": e.message})

            request.state.identity = identity
            logger.debug(f"Authenticated user={identity.user_id} role={identity.role.value}")

        return await call_next(request)


class AuthDependency:
    """
    FastAPI dependency returning the caller's identity from request state.
    """

    def __init__(self, require_auth: bool = False, require_admin: bool = False):
        """
        Args:
            require_auth: If True, reject requests without a valid token
            require_admin: If True, also require the admin role
        """
        self.require_auth = require_auth or require_admin
        self.require_admin = require_admin

    async def __call__(self, request: Request) -> Optional[Identity]:
        identity = getattr(request.state, "identity", None)

        if self.require_auth and identity is None:
            raise AuthenticationError("No token, authorization denied")

        if self.require_admin and not identity.is_admin:
            raise ForbiddenError("Administrator access required")

        return identity


# Dependency instances
require_user = AuthDependency(require_auth=True)
require_admin = AuthDependency(require_admin=True)
