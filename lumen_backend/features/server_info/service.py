"""
Server info service - media volume usage and hardware transcoding support.
"""
from typing import Any

from ...adapters.codec import CodecRepository
from ...adapters.storage import StorageRepository
from ...shared import ErrorCode, Result, get_logger
from ...utils import as_human_readable

logger = get_logger(__name__)


class ServerInfoService:
    """
    Reports disk usage of the media location and available hardware codecs.
    """

    def __init__(self, storage: StorageRepository, codecs: CodecRepository, media_location: str):
        """
        Args:
            storage: Storage adapter
            codecs: Codec discovery adapter
            media_location: Folder whose volume is reported
        """
        self.storage = storage
        self.codecs = codecs
        self.media_location = media_location

    async def get_info(self) -> Result[dict]:
        """
        Disk usage of the media volume.

        Returns:
            Result with raw byte counts, human readable sizes and the used
            percentage rounded to two decimals
        """
        usage_res = await self.storage.check_disk_usage(self.media_location)
        if not usage_res.ok or usage_res.data is None:
            logger.warning("Disk usage unavailable for media location: %s", usage_res.error)
            return Result.Err(usage_res.code, usage_res.error or "Disk usage unavailable")

        usage = usage_res.data
        used = max(0, usage.total - usage.free)
        percentage = round(used / usage.total * 100, 2) if usage.total > 0 else 0.0

        return Result.Ok(
            {
                "disk_available": as_human_readable(usage.available),
                "disk_size": as_human_readable(usage.total),
                "disk_use": as_human_readable(used),
                "disk_available_raw": usage.available,
                "disk_size_raw": usage.total,
                "disk_use_raw": used,
                "disk_use_percentage": percentage,
            }
        )

    async def get_codecs(self) -> Result[dict[str, Any]]:
        """
        Hardware codec devices.

        A missing device directory means no hardware acceleration and is
        reported as an empty list; permission problems stay errors so an
        operator can fix the container's device mapping.
        """
        codecs_res = await self.codecs.find_codecs()
        if codecs_res.ok:
            codecs = list(codecs_res.data or [])
            return Result.Ok({"codecs": codecs, "hardware_acceleration": bool(codecs)})
        if codecs_res.code == ErrorCode.NOT_FOUND.value:
            return Result.Ok({"codecs": [], "hardware_acceleration": False}, device_dir_missing=True)
        logger.warning("Codec discovery failed: %s", codecs_res.error)
        return Result.Err(codecs_res.code, codecs_res.error or "Codec discovery failed")
