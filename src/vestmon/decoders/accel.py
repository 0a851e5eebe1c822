"""Accelerometer notification decoder."""

from __future__ import annotations

import math
import struct

from vestmon.protocol import ACCEL_CHAR_UUID
from vestmon.samples import AccelVector


class AccelDecoder:
    """Decode the vest's accelerometer characteristic.

    The firmware sends four little-endian float32 values: x, y, z in g and
    the magnitude it computed on-device. The supplied magnitude is kept as-is.
    """

    FORMAT = "<ffff"
    PAYLOAD_SIZE = struct.calcsize(FORMAT)  # 16 bytes

    @staticmethod
    def can_decode(uuid: str) -> bool:
        """Check if notifications from this characteristic are accelerometer data."""
        return uuid.lower() == ACCEL_CHAR_UUID

    @staticmethod
    def decode(data: bytes | bytearray) -> AccelVector | None:
        """Decode one notification payload.

        Returns None for short payloads or non-finite values.
        """
        if len(data) < AccelDecoder.PAYLOAD_SIZE:
            return None

        x, y, z, mag = struct.unpack_from(AccelDecoder.FORMAT, data, 0)
        if not all(math.isfinite(v) for v in (x, y, z, mag)):
            return None

        return AccelVector(x=x, y=y, z=z, magnitude=mag)

    @staticmethod
    def encode(vector: AccelVector) -> bytes:
        """Pack a vector the way the firmware does."""
        return struct.pack(AccelDecoder.FORMAT, vector.x, vector.y, vector.z, vector.magnitude)
