"""Activity routers."""

from .activity_router import router as activity_router

__all__ = ["activity_router"]
