"""Feature modules with auto-discovery."""

from importlib import import_module
from pathlib import Path

import structlog
from fastapi import APIRouter


logger = structlog.get_logger()


def discover_modules() -> list[APIRouter]:
    """Auto-discover and return routers from all modules.

    Scans the modules directory for packages exposing a ``router``,
    calling their ``register_routes`` hook first when they define one.

    Returns:
        List of FastAPI routers from discovered modules.
    """
    modules_dir = Path(__file__).parent
    routers: list[APIRouter] = []

    for path in sorted(modules_dir.iterdir()):
        if not path.is_dir() or path.name.startswith("_"):
            continue
        module = import_module(f"medihub.modules.{path.name}")
        if not hasattr(module, "router"):
            continue
        if hasattr(module, "register_routes"):
            module.register_routes()
        routers.append(module.router)
        logger.debug("module_loaded", module=path.name)

    return routers
