"""
Coworkspace API server package.

This package contains the FastAPI application of the booking platform.

Subpackages:
    api: FastAPI route definitions, one router per resource.
    core: Server configuration and constants.
    services: Business rules, role checks and request dependencies.
    exception_handlers: Rendering of errors into the JSON envelope.
    middleware: Request timing and monitoring.
"""
