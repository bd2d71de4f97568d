from .service import ServerInfoService

__all__ = ["ServerInfoService"]
