"""Resource entities used as authorization subjects and audit references."""

from .entities import Category, Client, Document

__all__ = ["Category", "Client", "Document"]
