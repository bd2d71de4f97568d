"""
HTTP surface for the storage and codec services.
"""
from .registry import create_app, init_app, register_all_routes

__all__ = ["create_app", "init_app", "register_all_routes"]
