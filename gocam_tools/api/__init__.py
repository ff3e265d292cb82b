"""API package exposing the FastAPI router and schemas."""

from .routes import configure_services, get_services, router

__all__ = ["configure_services", "get_services", "router"]
