"""Static catalog of every permission the system recognizes.

Roles may only reference identifiers listed here. The catalog is fixed
at deploy time and never changes while the application runs.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from medihub.core.errors import UnknownPermissionError


@dataclass(frozen=True, slots=True)
class Permission:
    """A single capability a role can grant.

    Attributes:
        id: Stable identifier, e.g. ``roles.manage``
        name: Human-readable label
        description: What holding the permission allows
        module: Group label used when listing the catalog
    """

    id: str
    name: str
    description: str
    module: str


PERMISSION_MODULES: tuple[str, ...] = (
    "Seguridad",
    "Parametrización",
    "Admisión",
    "Atención",
    "Reportes",
)

ALL_PERMISSIONS: tuple[Permission, ...] = (
    # Seguridad
    Permission(
        "roles.manage",
        "Gestionar Roles y Permisos",
        "Permite crear, editar y eliminar roles de seguridad.",
        "Seguridad",
    ),
    Permission(
        "users.manage",
        "Gestionar Usuarios",
        "Permite crear, editar y eliminar usuarios del sistema.",
        "Seguridad",
    ),
    # Parametrización
    Permission(
        "companies.manage",
        "Gestionar Empresas",
        "Permite administrar el catálogo de empresas afiliadas.",
        "Parametrización",
    ),
    Permission(
        "cie10.manage",
        "Gestionar Catálogo CIE-10",
        "Permite administrar el catálogo de códigos de diagnóstico.",
        "Parametrización",
    ),
    Permission(
        "services.manage",
        "Gestionar Servicios",
        "Permite administrar el catálogo de servicios de la clínica.",
        "Parametrización",
    ),
    Permission(
        "surveys.manage",
        "Gestionar Encuestas",
        "Permite administrar las encuestas aplicadas a los pacientes.",
        "Parametrización",
    ),
    # Admisión
    Permission(
        "people.manage",
        "Gestionar Personas",
        "Permite gestionar el repositorio central de personas.",
        "Admisión",
    ),
    Permission(
        "titulars.manage",
        "Gestionar Titulares",
        "Permite crear, editar y eliminar titulares.",
        "Admisión",
    ),
    Permission(
        "beneficiaries.manage",
        "Gestionar Beneficiarios",
        "Permite añadir o quitar beneficiarios de un titular.",
        "Admisión",
    ),
    Permission(
        "patientlist.view",
        "Ver Lista de Pacientes",
        "Permite consultar la lista de todos los pacientes con HCE.",
        "Admisión",
    ),
    # Atención
    Permission(
        "agenda.manage",
        "Gestionar Agenda",
        "Permite ver, crear y modificar citas en la agenda.",
        "Atención",
    ),
    Permission(
        "waitlist.manage",
        "Gestionar Sala de Espera",
        "Permite registrar pacientes y cambiar su estado en la cola.",
        "Atención",
    ),
    Permission(
        "consultation.perform",
        "Realizar Consulta Médica",
        "Permite acceder al módulo de consulta para atender pacientes.",
        "Atención",
    ),
    Permission(
        "hce.view",
        "Ver Historia Clínica (HCE)",
        "Permite buscar y consultar el historial clínico de los pacientes.",
        "Atención",
    ),
    Permission(
        "treatmentlog.manage",
        "Gestionar Bitácora de Tratamiento",
        "Permite crear órdenes y registrar ejecuciones de tratamientos.",
        "Atención",
    ),
    Permission(
        "occupationalhealth.manage",
        "Gestionar Salud Ocupacional",
        "Permite registrar evaluaciones e historial de salud ocupacional.",
        "Atención",
    ),
    # Reportes
    Permission(
        "reports.view",
        "Ver Reportes",
        "Permite visualizar reportes de morbilidad y operacionales.",
        "Reportes",
    ),
)

PERMISSION_IDS: frozenset[str] = frozenset(p.id for p in ALL_PERMISSIONS)

_BY_ID: dict[str, Permission] = {p.id: p for p in ALL_PERMISSIONS}


def get_permission(permission_id: str) -> Permission | None:
    """Look up a catalog entry by identifier."""
    return _BY_ID.get(permission_id)


def is_known_permission(permission_id: str) -> bool:
    return permission_id in PERMISSION_IDS


def validate_permission_ids(permission_ids: Iterable[str]) -> list[str]:
    """Check that every identifier exists in the catalog.

    Duplicates are dropped and the first-seen order is kept.

    Args:
        permission_ids: Identifiers submitted for a role

    Returns:
        The de-duplicated identifiers

    Raises:
        UnknownPermissionError: Listing every identifier not in the catalog
    """
    seen: dict[str, None] = dict.fromkeys(permission_ids)
    unknown = [pid for pid in seen if pid not in PERMISSION_IDS]
    if unknown:
        raise UnknownPermissionError(unknown)
    return list(seen)


def permissions_by_module() -> dict[str, list[Permission]]:
    """Group the catalog by module, in display order."""
    grouped: dict[str, list[Permission]] = {module: [] for module in PERMISSION_MODULES}
    for permission in ALL_PERMISSIONS:
        grouped.setdefault(permission.module, []).append(permission)
    return grouped
