"""API module."""

from office_server.api.routes import FrontendEndpoint, dispatch, frontend_route

__all__ = ["FrontendEndpoint", "dispatch", "frontend_route"]
