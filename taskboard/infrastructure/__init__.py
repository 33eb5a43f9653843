"""
Infrastructure layer for the taskboard service.

Implements the domain interfaces against external systems: SQLAlchemy
persistence, JWT authentication, event handlers and the HTTP surface.
"""
