"""Hardware video codec discovery."""
from .base import CodecRepository
from .device import DeviceCodecRepository

__all__ = ["CodecRepository", "DeviceCodecRepository"]
