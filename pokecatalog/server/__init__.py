"""
PokeCatalog Server Package.

This package contains the web server implementation for the catalog: the
FastAPI application, its routers and the wiring between HTTP requests and the
catalog and account services.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Server configuration and constants.
    services: Request-scoped dependencies (sessions, services, identity).
    exception_handlers: Translation of errors into JSON responses.
    middleware: Request timing and tracing.
"""
