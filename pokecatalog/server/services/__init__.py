"""Request-scoped dependencies for the HTTP layer."""
