"""Activity feature: audit trail of document and client operations."""
