"""
jobly.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM schema, engine/session setup, SQL fragment builders and
  repositories.
"""

# Package marker.
