"""Payload decoders for vest BLE notifications."""

from vestmon.decoders.accel import AccelDecoder

__all__ = [
    "AccelDecoder",
]
