"""Scan for the vest over BLE."""

import asyncio

from bleak import BleakScanner
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData

from vestmon.protocol import DEVICE_NAME, SERVICE_UUID


def is_vest(device: BLEDevice, adv: AdvertisementData) -> bool:
    """True if the advertisement looks like the vest (name or service UUID)."""
    name = adv.local_name or device.name or ""
    if name.upper() == DEVICE_NAME:
        return True
    return SERVICE_UUID in [u.lower() for u in adv.service_uuids or []]


async def scan(timeout: float = 10.0) -> list[tuple[BLEDevice, AdvertisementData]]:
    """Scan for nearby vests.

    Returns a list of (device, advertisement_data) tuples.
    """
    results: list[tuple[BLEDevice, AdvertisementData]] = []

    def _callback(device: BLEDevice, adv: AdvertisementData) -> None:
        if not is_vest(device, adv):
            return
        if any(d.address == device.address for d, _ in results):
            return
        results.append((device, adv))
        name = adv.local_name or device.name or "?"
        print(f"  Found: {name} [{device.address}] RSSI={adv.rssi} dBm")

    scanner = BleakScanner(detection_callback=_callback)
    print(f"Scanning for {DEVICE_NAME} devices ({timeout}s)...")
    await scanner.start()
    await asyncio.sleep(timeout)
    await scanner.stop()

    if not results:
        print("No vest found.")
    else:
        print(f"\n{len(results)} vest(s) found.")

    return results


async def find_vest(timeout: float = 10.0) -> BLEDevice | None:
    """Find the first vest and return it."""
    results = await scan(timeout)
    if results:
        return results[0][0]
    return None
