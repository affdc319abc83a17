"""Coworkspace.

Booking platform for coworking spaces: locations, space types, spaces,
availability windows, additional services, users and bookings exposed as a
REST API.

Subpackages
-----------

- ``coworkspace.core``: logging, monitoring, domain errors, the scheduling and
  pricing rules, password/token helpers and the database layer.
- ``coworkspace.server``: the FastAPI application, its routers, services,
  exception handlers and middleware.
"""

__version__ = "0.1.0"
