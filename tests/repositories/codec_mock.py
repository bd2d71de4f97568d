from unittest.mock import create_autospec

from lumen_backend.adapters.codec import CodecRepository


def new_codec_repository_mock():
    """Recording double for CodecRepository (find_codecs is an AsyncMock)."""
    return create_autospec(CodecRepository, instance=True)
