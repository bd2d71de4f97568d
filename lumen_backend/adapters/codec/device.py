"""
Hardware codec detection from the Linux DRM device directory.

Render nodes (renderD128, ...) and card nodes (card0, ...) under /dev/dri are
what VA-API and Quick Sync transcoding open; their presence is the signal
that hardware encode/decode is available.
"""
from __future__ import annotations

import asyncio
import os
import re

from ...config import DEVICE_DIR
from ...shared import Result, get_logger
from ..storage.errors import os_error_result

logger = get_logger(__name__)

_CODEC_DEVICE_RE = re.compile(r"^(renderD\d+|card\d+)$")


def is_codec_device(name: str) -> bool:
    return bool(_CODEC_DEVICE_RE.match(str(name or "")))


class DeviceCodecRepository:
    """
    Enumerates hardware codec nodes in a device directory.

    Never raises - an inaccessible directory is an error Result, an
    accessible one without codec nodes is Ok([]).
    """

    def __init__(self, device_dir: str | None = None) -> None:
        self.device_dir = device_dir or DEVICE_DIR

    async def find_codecs(self) -> Result[list[str]]:
        try:
            names = await asyncio.to_thread(os.listdir, self.device_dir)
        except OSError as exc:
            logger.debug("Cannot read codec device directory %s: %s", self.device_dir, exc)
            return os_error_result(exc, "read codec device directory", self.device_dir)

        codecs = sorted(name for name in names if is_codec_device(name))
        if codecs:
            logger.debug("Hardware codec devices: %s", ", ".join(codecs))
        return Result.Ok(codecs)
