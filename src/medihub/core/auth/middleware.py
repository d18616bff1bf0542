"""Session gating and request ID middleware.

This module provides middleware for:
- Redirecting page requests based on whether a session is logged in
- Request tracing with unique IDs
"""

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal
from urllib.parse import urlencode

import structlog
from fastapi import Request, Response, status
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from medihub.config import settings
from medihub.core.auth.schemas import SessionData
from medihub.core.auth.session import resolve_request_session


if TYPE_CHECKING:
    from starlette.types import ASGIApp


logger = structlog.get_logger()


@dataclass(frozen=True)
class RoutePolicy:
    """How request paths are classified.

    Attributes:
        public_only_prefixes: Pages only meant for anonymous visitors, in
            addition to the login page
        exempt_prefixes: Paths never gated here (APIs rely on the guard)
        login_path: Where anonymous page requests are sent
        landing_path: Where logged-in visitors of public-only pages are sent
    """

    public_only_prefixes: tuple[str, ...] = ()
    exempt_prefixes: tuple[str, ...] = (
        "/api",
        "/health",
        "/info",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/static",
        "/favicon.ico",
    )
    login_path: str = field(default_factory=lambda: settings.login_path)
    landing_path: str = field(default_factory=lambda: settings.landing_path)

    @property
    def public_only(self) -> tuple[str, ...]:
        return (self.login_path, *self.public_only_prefixes)


@dataclass(frozen=True)
class RouteDecision:
    """Outcome of gating one request."""

    action: Literal["allow", "redirect"]
    location: str | None = None

    @property
    def is_redirect(self) -> bool:
        return self.action == "redirect"


ALLOW = RouteDecision("allow")


def _matches(path: str, prefixes: tuple[str, ...]) -> bool:
    # Whole path segments only: "/login" covers "/login/reset", not "/loginx"
    return any(
        path == prefix or path.startswith(prefix.rstrip("/") + "/")
        for prefix in prefixes
    )


def decide_route(
    path: str,
    query: str,
    session: SessionData,
    policy: RoutePolicy | None = None,
) -> RouteDecision:
    """Decide what to do with a request.

    1. Exempt paths always pass.
    2. A public-only page (the login page is always one) visited with a
       logged-in session redirects to the landing page.
    3. Any other page visited without a session redirects to the login
       page, remembering the original path and query in ``from``.
    4. Everything else passes unmodified.

    Nothing is retained between calls.
    """
    policy = policy or RoutePolicy()

    if _matches(path, policy.exempt_prefixes):
        return ALLOW

    if _matches(path, policy.public_only):
        if session.is_logged_in:
            return RouteDecision("redirect", policy.landing_path)
        return ALLOW

    if not session.is_logged_in:
        origin = f"{path}?{query}" if query else path
        return RouteDecision("redirect", f"{policy.login_path}?{urlencode({'from': origin})}")

    return ALLOW


class SessionGateMiddleware(BaseHTTPMiddleware):
    """Middleware that resolves the session and gates page requests.

    The resolved session is stored on ``request.state.session`` and the
    user ID bound to the structlog context.
    """

    def __init__(self, app: "ASGIApp", policy: RoutePolicy | None = None) -> None:
        super().__init__(app)
        self.policy = policy or RoutePolicy()

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        session = resolve_request_session(request)
        request.state.session = session

        if session.is_logged_in:
            structlog.contextvars.bind_contextvars(user_id=session.user_id)

        decision = decide_route(
            request.url.path,
            request.url.query,
            session,
            self.policy,
        )
        if decision.is_redirect and decision.location:
            logger.info(
                "route_redirect",
                path=request.url.path,
                location=decision.location,
                is_logged_in=session.is_logged_in,
            )
            return RedirectResponse(
                decision.location,
                status_code=status.HTTP_307_TEMPORARY_REDIRECT,
            )

        return await call_next(request)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that adds a unique request ID to each request.

    The request ID is added to:
    - request.state.request_id
    - Response header X-Request-ID
    - Structlog context
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        request.state.request_id = request_id
        request.state.trace_id = request_id  # Alias for error handler

        structlog.contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        structlog.contextvars.unbind_contextvars("request_id", "user_id")

        return response
