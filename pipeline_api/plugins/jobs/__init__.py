"""Jobs API plugin: list, get and update routes backed by a job datastore."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

from ...logging_conf import get_logger
from ..routing import RouteDescriptor, RouteTable
from .get_job import get_route
from .list_jobs import list_route
from .update_job import update_route

if TYPE_CHECKING:
    from ...datastore import JobDatastore

__all__ = ["PLUGIN_NAME", "register", "list_route", "get_route", "update_route"]

PLUGIN_NAME = "jobs"

logger = get_logger("plugins.jobs")


def register(
    server: RouteTable,
    *,
    datastore: JobDatastore,
    on_registered: Optional[Callable[[], None]] = None,
) -> list[RouteDescriptor]:
    """Add the jobs routes to ``server``.

    Args:
        server: FastAPI app or APIRouter receiving the routes.
        datastore: Job datastore handed to every route factory.
        on_registered: Called once after all routes were added.

    Returns:
        The route descriptors, in list/get/update order.
    """
    routes = [
        list_route(datastore),
        get_route(datastore),
        update_route(datastore),
    ]
    for route in routes:
        route.add_to(server)

    logger.info(
        "plugin.registered",
        extra={
            "event": "plugin_registered",
            "plugin": PLUGIN_NAME,
            "routes": [f"{r.method} {r.path}" for r in routes],
        },
    )
    if on_registered is not None:
        on_registered()
    return routes
