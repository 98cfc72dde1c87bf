"""
jobly.api

HTTP API package (FastAPI).

Responsibilities:
- App factory, dependency wiring, error mapping and routers.
"""

# Package marker.
