"""
Route handlers.
"""
from .download import register_download_routes
from .library import register_library_routes
from .server_info import register_server_info_routes

__all__ = [
    "register_download_routes",
    "register_library_routes",
    "register_server_info_routes",
]
