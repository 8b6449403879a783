"""Users feature: the actor entity, persistence and admin role editing."""

from .entities import User

__all__ = ["User"]
