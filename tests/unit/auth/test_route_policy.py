"""Unit tests for the page gating decision."""

from urllib.parse import parse_qs, urlsplit

import pytest

from medihub.config import settings
from medihub.core.auth.middleware import ALLOW, RoutePolicy, decide_route
from medihub.core.auth.schemas import ANONYMOUS_SESSION, SessionData


pytestmark = pytest.mark.unit


LOGGED_IN = SessionData(
    is_logged_in=True,
    user_id="usr-1",
    username="admin",
    role_id="administrator",
    role_name="Administrador",
)

POLICY = RoutePolicy(login_path="/login", landing_path="/dashboard")


def redirect_params(location: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(location).query)


class TestPublicOnlyPaths:
    """Tests for pages meant only for anonymous visitors."""

    def test_logged_in_visitor_sent_to_landing(self):
        decision = decide_route("/login", "", LOGGED_IN, POLICY)

        assert decision.is_redirect
        assert decision.location == "/dashboard"

    def test_anonymous_visitor_allowed(self):
        assert decide_route("/login", "", ANONYMOUS_SESSION, POLICY) == ALLOW

    def test_subpath_counts_as_public_only(self):
        decision = decide_route("/login/recover", "", LOGGED_IN, POLICY)

        assert decision.location == "/dashboard"

    def test_prefix_match_respects_segments(self):
        decision = decide_route("/loginx", "", ANONYMOUS_SESSION, POLICY)

        assert decision.is_redirect
        assert decision.location.startswith("/login?")


class TestProtectedPaths:
    """Tests for every other page."""

    def test_anonymous_sent_to_login_with_origin(self):
        decision = decide_route("/dashboard/agenda", "", ANONYMOUS_SESSION, POLICY)

        assert decision.is_redirect
        assert urlsplit(decision.location).path == "/login"
        assert redirect_params(decision.location) == {"from": ["/dashboard/agenda"]}

    def test_origin_keeps_query_string(self):
        decision = decide_route(
            "/dashboard/hce", "patient=42&tab=notes", ANONYMOUS_SESSION, POLICY
        )

        assert redirect_params(decision.location) == {
            "from": ["/dashboard/hce?patient=42&tab=notes"]
        }

    def test_logged_in_passes(self):
        assert decide_route("/dashboard/agenda", "", LOGGED_IN, POLICY) == ALLOW

    def test_root_requires_login(self):
        decision = decide_route("/", "", ANONYMOUS_SESSION, POLICY)

        assert decision.is_redirect
        assert redirect_params(decision.location) == {"from": ["/"]}


class TestExemptPaths:
    """Exempt paths are never redirected."""

    @pytest.mark.parametrize(
        "path",
        [
            "/api/v1/roles",
            "/api/v1/auth/login",
            "/health/live",
            "/info",
            "/docs",
            "/openapi.json",
            "/static/app.css",
            "/favicon.ico",
        ],
    )
    @pytest.mark.parametrize("session", [ANONYMOUS_SESSION, LOGGED_IN])
    def test_exempt(self, path, session):
        assert decide_route(path, "", session, POLICY) == ALLOW

    def test_lookalike_prefix_not_exempt(self):
        decision = decide_route("/apiary", "", ANONYMOUS_SESSION, POLICY)

        assert decision.is_redirect


class TestCustomPolicy:
    """Tests for non-default policies."""

    def test_custom_paths(self):
        policy = RoutePolicy(
            public_only_prefixes=("/signin", "/register"),
            exempt_prefixes=(),
            login_path="/signin",
            landing_path="/home",
        )

        assert decide_route("/register", "", LOGGED_IN, policy).location == "/home"
        assert decide_route("/api/x", "", ANONYMOUS_SESSION, policy).location == (
            "/signin?from=%2Fapi%2Fx"
        )

    def test_custom_login_path_is_public_only(self):
        policy = RoutePolicy(login_path="/signin", landing_path="/home")

        assert decide_route("/signin", "", ANONYMOUS_SESSION, policy) == ALLOW
        assert decide_route("/signin", "", LOGGED_IN, policy).location == "/home"
        assert decide_route("/login", "", ANONYMOUS_SESSION, policy).location == (
            "/signin?from=%2Flogin"
        )

    def test_default_policy_follows_configured_login_path(
        self, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(settings, "login_path", "/signin")

        policy = RoutePolicy()

        assert decide_route("/signin", "", ANONYMOUS_SESSION, policy) == ALLOW
        assert decide_route("/dashboard", "", ANONYMOUS_SESSION, policy).location == (
            "/signin?from=%2Fdashboard"
        )

    def test_decision_is_stateless(self):
        first = decide_route("/dashboard", "", ANONYMOUS_SESSION, POLICY)
        decide_route("/dashboard", "", LOGGED_IN, POLICY)
        again = decide_route("/dashboard", "", ANONYMOUS_SESSION, POLICY)

        assert first == again
