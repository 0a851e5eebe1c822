"""Vest BLE protocol constants.

The vest firmware exposes one custom service with three notify
characteristics. Only the accelerometer characteristic carries a payload
the monitor consumes:

    ACCEL: [x: f32 LE] [y: f32 LE] [z: f32 LE] [magnitude: f32 LE]   (16 bytes)
"""

from vestmon.samples import SignalKind

DEVICE_NAME = "VEST"

SERVICE_UUID = "4fafc201-1fb5-459e-8fcc-c5c9c331914b"
TEMP_CHAR_UUID = "beb5483e-36e1-4688-b7f5-ea07361b26a8"
PPG_CHAR_UUID = "beb5483e-36e1-4688-b7f5-ea07361b26a9"
ACCEL_CHAR_UUID = "beb5483e-36e1-4688-b7f5-ea07361b26aa"

# Characteristic UUID → signal it carries
CHARACTERISTIC_SIGNALS = {
    TEMP_CHAR_UUID: SignalKind.TEMPERATURE,
    PPG_CHAR_UUID: SignalKind.PPG,
    ACCEL_CHAR_UUID: SignalKind.ACCEL,
}


def char_signal(uuid: str) -> SignalKind | None:
    """Return the signal carried by a characteristic UUID, if it is one of ours."""
    return CHARACTERISTIC_SIGNALS.get(uuid.lower())
