"""
ActionOrder Server - FastAPI + WebSocket Server Layer
"""

from actionorder.server.app import app, create_app

__all__ = ["app", "create_app"]
