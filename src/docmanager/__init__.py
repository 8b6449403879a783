"""docmanager: authorization and password reset core of a document manager."""

from .__version__ import __version__

__all__ = ["__version__"]
