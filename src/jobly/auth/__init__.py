"""
jobly.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- Request authentication middleware (bearer token -> Identity).
- Authorization policy checks and their FastAPI dependency wrappers.
- Password hashing.
"""

# Package marker.
