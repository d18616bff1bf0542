"""Page endpoints behind the session gate.

Pages call the authorization guard and turn its failures into
redirects: an anonymous visitor goes to the login page and a visitor
without the permission goes back to the landing page. A redirect to
the login page also drops the session cookie.
"""

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import RedirectResponse

from medihub.api.dependencies import DBSession
from medihub.config import settings
from medihub.core.auth.dependencies import CurrentSession
from medihub.core.auth.session import clear_session_cookie
from medihub.core.errors import ForbiddenError, NotFoundError, UnauthenticatedError
from medihub.core.permissions import authorize, effective_permissions


@dataclass(frozen=True)
class NavItem:
    """A dashboard menu entry, shown only when its permission is held."""

    href: str
    title: str
    section: str
    permission: str | None = None

    @property
    def slug(self) -> str:
        return self.href.removeprefix("/dashboard/")


NAV_ITEMS: tuple[NavItem, ...] = (
    NavItem("/dashboard", "Dashboard", "main"),
    NavItem("/dashboard/agenda", "Agenda", "main", "agenda.manage"),
    NavItem("/dashboard/sala-de-espera", "Sala de Espera", "main", "waitlist.manage"),
    NavItem("/dashboard/consulta", "Consulta", "main", "consultation.perform"),
    NavItem("/dashboard/hce", "HCE", "main", "hce.view"),
    NavItem("/dashboard/bitacora", "Bitácora", "main", "treatmentlog.manage"),
    NavItem(
        "/dashboard/salud-ocupacional",
        "Salud Ocupacional",
        "main",
        "occupationalhealth.manage",
    ),
    NavItem("/dashboard/reportes", "Reportes", "admin", "reports.view"),
    NavItem("/dashboard/cie10", "Catálogo CIE-10", "admin", "cie10.manage"),
    NavItem("/dashboard/servicios", "Servicios", "admin", "services.manage"),
    NavItem("/dashboard/personas", "Personas", "admin", "people.manage"),
    NavItem(
        "/dashboard/lista-pacientes", "Lista de Pacientes", "admin", "patientlist.view"
    ),
    NavItem("/dashboard/pacientes", "Gestión de Titulares", "admin", "titulars.manage"),
    NavItem("/dashboard/beneficiarios", "Beneficiarios", "admin", "beneficiaries.manage"),
    NavItem("/dashboard/empresas", "Empresas", "admin", "companies.manage"),
    NavItem("/dashboard/seguridad/roles", "Roles", "security", "roles.manage"),
    NavItem("/dashboard/seguridad/usuarios", "Usuarios", "security", "users.manage"),
)

SECTIONS: dict[str, NavItem] = {
    item.slug: item for item in NAV_ITEMS if item.permission is not None
}


def build_menu(permissions: list[str]) -> list[dict[str, Any]]:
    """Filter the menu down to entries the permissions allow."""
    granted = set(permissions)
    return [
        {"href": item.href, "title": item.title, "section": item.section}
        for item in NAV_ITEMS
        if item.permission is None or item.permission in granted
    ]


def _redirect(path: str, **params: str) -> RedirectResponse:
    location = f"{path}?{urlencode(params)}" if params else path
    return RedirectResponse(location, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


def _login_redirect(request: Request) -> RedirectResponse:
    origin = request.url.path
    if request.url.query:
        origin = f"{origin}?{request.url.query}"
    response = _redirect(settings.login_path, **{"from": origin})
    clear_session_cookie(response)
    return response


router = APIRouter(tags=["pages"], include_in_schema=False)


@router.get("/")
async def index() -> RedirectResponse:
    """Send visitors to the landing page."""
    return _redirect(settings.landing_path)


@router.get(settings.login_path)
async def login_page(
    from_: str | None = Query(None, alias="from"),
) -> dict[str, Any]:
    """Describe the login page and where to return after login."""
    return {"page": "login", "from": from_}


@router.get("/dashboard", response_model=None)
async def dashboard(
    request: Request,
    session: CurrentSession,
    db: DBSession,
) -> dict[str, Any] | RedirectResponse:
    """Landing page with the menu filtered by the session's permissions."""
    if not session.is_logged_in:
        return _login_redirect(request)

    permissions = await effective_permissions(session, db)
    return {
        "page": "dashboard",
        "user": {
            "id": session.user_id,
            "username": session.username,
            "role_id": session.role_id,
            "role_name": session.role_name,
        },
        "permissions": permissions,
        "menu": build_menu(permissions),
    }


@router.get("/dashboard/{section:path}", response_model=None)
async def dashboard_section(
    section: str,
    request: Request,
    session: CurrentSession,
    db: DBSession,
) -> dict[str, Any] | RedirectResponse:
    """A guarded dashboard section.

    Raises:
        NotFoundError: If the section does not exist
    """
    item = SECTIONS.get(section.strip("/"))
    if item is None or item.permission is None:
        raise NotFoundError("Page not found", resource="page", resource_id=section)

    try:
        await authorize(session, item.permission, db)
    except UnauthenticatedError:
        return _login_redirect(request)
    except ForbiddenError:
        return _redirect(settings.landing_path, denied=item.permission)

    return {
        "page": item.slug,
        "title": item.title,
        "permission": item.permission,
    }
