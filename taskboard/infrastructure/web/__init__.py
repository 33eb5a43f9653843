"""
HTTP surface: routers, middleware and request wiring.
"""
