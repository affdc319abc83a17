"""
I/O schemas (Pydantic) for the REST API: one module per resource.
"""
