"""Feature modules of docmanager."""
