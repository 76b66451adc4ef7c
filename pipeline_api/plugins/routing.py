from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol


class RouteTable(Protocol):
    """Anything routes can be added to: a FastAPI app or an APIRouter."""

    def add_api_route(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None: ...


@dataclass(frozen=True)
class RouteDescriptor:
    """One HTTP route produced by a plugin's route factory."""

    method: str
    path: str
    handler: Callable[..., Any]
    summary: str = ""
    response_model: Any = None

    def add_to(self, server: RouteTable) -> None:
        server.add_api_route(
            self.path,
            self.handler,
            methods=[self.method],
            summary=self.summary or None,
            response_model=self.response_model,
        )
