"""
Data models for Coworkspace.

- domain: enums shared by entities, services and I/O schemas
- io: Pydantic request/response schemas for the REST API
"""
