"""
Base classes for external integrations.

The cycling simulator has no documented API, so every provider is wrapped in
an adapter exposing the same three fetches: profile, activities and routes.
Adapters return raw payloads; normalization happens downstream.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class IntegrationError(Exception):
    """
    Error contract for ``RouteDataProvider`` implementations.

    Adapters raise it (or a subclass) when a simulator fetch fails; the sync
    service lets it propagate to the caller unchanged.
    """

    def __init__(self, message: str, provider: str = "", code: Optional[str] = None):
        self.provider = provider
        self.code = code
        super().__init__(message)


class RouteDataProvider(ABC):
    """
    Abstract source of simulator data for one rider.
    """

    provider: str = "base"

    @abstractmethod
    async def get_profile(self) -> Dict[str, Any]:
        """Get the rider's raw profile payload."""
        pass

    @abstractmethod
    async def get_activities(self) -> List[Dict[str, Any]]:
        """Get the rider's raw activity history."""
        pass

    @abstractmethod
    async def get_routes(self) -> List[Dict[str, Any]]:
        """Get the raw route list."""
        pass


class StaticRouteDataProvider(RouteDataProvider):
    """
    Serves payloads that were already fetched by a collaborator.

    Used by the HTTP API, where the client posts the simulator data it holds,
    and by tests.
    """

    provider = "static"

    def __init__(
        self,
        profile: Optional[Dict[str, Any]] = None,
        activities: Optional[List[Dict[str, Any]]] = None,
        routes: Optional[List[Dict[str, Any]]] = None,
    ):
        self._profile = profile or {}
        self._activities = activities or []
        self._routes = routes or []

    async def get_profile(self) -> Dict[str, Any]:
        return self._profile

    async def get_activities(self) -> List[Dict[str, Any]]:
        return self._activities

    async def get_routes(self) -> List[Dict[str, Any]]:
        return self._routes
