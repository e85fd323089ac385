"""Infrastructure Layer: database pool, storage gateway, id provider, logging."""
