"""JSON encoding used for structured log output."""

from typing import Any

import msgspec

__all__ = ("encode_json",)

_encoder = msgspec.json.Encoder(enc_hook=str)


def encode_json(data: Any) -> str:
    """Encode ``data`` as a JSON string; unsupported values are written as ``str(value)``."""
    return _encoder.encode(data).decode("utf-8")
