"""Hardware codec discovery contract."""
from __future__ import annotations

from typing import Protocol

from ...shared import Result


class CodecRepository(Protocol):
    async def find_codecs(self) -> Result[list[str]]:
        """
        Read the hardware codec devices available to the server.

        Returns:
            Ok(list of device identifiers), Ok([]) when none are present
        """
        ...
