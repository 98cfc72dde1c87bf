"""
jobly.api.routers

Routers package.
"""

# Package marker.
