"""Live sensor feed from the vest over BLE.

The link subscribes to the vest's three notify characteristics. Accelerometer
notifications are decoded and pushed into a :class:`LiveSource`; temperature
and PPG notifications are only counted, the monitor keeps simulating those
signals. Optionally every raw notification is appended to a JSONL capture
that :mod:`vestmon.replay` can read back.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

from bleak import BleakClient
from bleak.backends.characteristic import BleakGATTCharacteristic

from vestmon.decoders.accel import AccelDecoder
from vestmon.protocol import CHARACTERISTIC_SIGNALS, char_signal
from vestmon.samples import Sample, SignalKind
from vestmon.scanner import find_vest
from vestmon.sources import LiveSource

log = logging.getLogger(__name__)


class VestLink:
    """Turns raw vest notifications into samples.

    Args:
        accel_source: Queue the decoded accelerometer samples go to.
        capture: Optional open text file receiving one JSON line per
            notification.
    """

    def __init__(self, accel_source: LiveSource, capture: TextIO | None = None) -> None:
        self.accel_source = accel_source
        self.capture = capture
        self.counts = {kind: 0 for kind in SignalKind}
        self.dropped = 0
        self.connected = False

    def handle_notification(self, uuid: str, data: bytes | bytearray) -> Sample | None:
        """Process one notification; returns the accel sample it produced, if any."""
        kind = char_signal(uuid)
        if kind is None:
            return None
        self.counts[kind] += 1
        if self.capture is not None:
            self._write_capture(uuid, data)

        if not AccelDecoder.can_decode(uuid):
            return None

        vector = AccelDecoder.decode(data)
        if vector is None:
            self.dropped += 1
            log.debug("Malformed accel payload (%d bytes): %s", len(data), bytes(data).hex())
            return None

        sample = Sample(SignalKind.ACCEL, vector, time.monotonic())
        self.accel_source.push(sample)
        return sample

    def _write_capture(self, uuid: str, data: bytes | bytearray) -> None:
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uuid": uuid,
            "hex_data": bytes(data).hex(),
            "length": len(data),
        }
        self.capture.write(json.dumps(record) + "\n")
        self.capture.flush()

    async def run(self, address: str | None = None, duration: float | None = None) -> None:
        """Connect, subscribe and keep the link open.

        Runs until ``duration`` elapses, the task is cancelled, or the vest
        disconnects. A disconnect is not an error: the session simply stops
        receiving samples.
        """
        if address is None:
            device = await find_vest()
            if device is None:
                print("No vest found.")
                return
            address = device.address

        disconnected = asyncio.Event()

        def _on_disconnect(_client: BleakClient) -> None:
            self.connected = False
            disconnected.set()

        print(f"Connecting to {address}...")
        async with BleakClient(address, disconnected_callback=_on_disconnect) as client:
            self.connected = True
            print(f"Connected. MTU={client.mtu_size}")

            def _on_notification(char: BleakGATTCharacteristic, data: bytearray) -> None:
                self.handle_notification(char.uuid, data)

            subscribed = 0
            for uuid in CHARACTERISTIC_SIGNALS:
                try:
                    await client.start_notify(uuid, _on_notification)
                    subscribed += 1
                except Exception as e:
                    print(f"  Warning: failed to subscribe {uuid}: {e}")

            if not subscribed:
                print("Error: no vest characteristics found.")
                return

            print(f"Subscribed to {subscribed} characteristic(s).")

            try:
                if duration:
                    await asyncio.wait_for(disconnected.wait(), timeout=duration)
                else:
                    await disconnected.wait()
            except asyncio.TimeoutError:
                pass
            finally:
                self.connected = False
                print(f"\n  Link closed ({sum(self.counts.values())} notifications, "
                      f"{self.dropped} dropped).")


def open_capture(output: str | None) -> TextIO | None:
    """Open (append) a capture file, creating parent directories."""
    if output is None:
        return None
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    return open(path, "a")
