"""Tests for live.py — BLE notification handling (no hardware needed)."""

import io
import json

import pytest

from vestmon.live import VestLink, open_capture
from vestmon.protocol import ACCEL_CHAR_UUID, PPG_CHAR_UUID, TEMP_CHAR_UUID
from vestmon.samples import SignalKind
from vestmon.sources import LiveSource

from tests.conftest import accel_payload


@pytest.fixture
def link() -> VestLink:
    return VestLink(LiveSource(SignalKind.ACCEL))


class TestHandleNotification:
    def test_accel_pushed_to_source(self, link):
        sample = link.handle_notification(ACCEL_CHAR_UUID, bytearray(accel_payload(0.1, 0.2, 0.9, 1.1)))
        assert sample.kind is SignalKind.ACCEL
        assert sample.value.magnitude == pytest.approx(1.1)
        assert len(link.accel_source) == 1
        assert link.counts[SignalKind.ACCEL] == 1

    def test_malformed_accel_dropped(self, link):
        assert link.handle_notification(ACCEL_CHAR_UUID, b"\x00\x01\x02") is None
        assert len(link.accel_source) == 0
        assert link.dropped == 1

    @pytest.mark.parametrize("uuid, kind", [
        (TEMP_CHAR_UUID, SignalKind.TEMPERATURE),
        (PPG_CHAR_UUID, SignalKind.PPG),
    ])
    def test_other_signals_only_counted(self, link, uuid, kind):
        assert link.handle_notification(uuid, b"\x00" * 4) is None
        assert link.counts[kind] == 1
        assert len(link.accel_source) == 0

    def test_foreign_characteristic_ignored(self, link):
        assert link.handle_notification("00002a37-0000-1000-8000-00805f9b34fb", b"\x00\x48") is None
        assert sum(link.counts.values()) == 0


class TestCapture:
    def test_each_notification_written(self):
        buf = io.StringIO()
        link = VestLink(LiveSource(SignalKind.ACCEL), capture=buf)
        payload = accel_payload(0.0, 0.0, 1.0, 1.0)
        link.handle_notification(ACCEL_CHAR_UUID, payload)
        link.handle_notification(TEMP_CHAR_UUID, b"\x01\x02")
        lines = buf.getvalue().splitlines()
        assert len(lines) == 2
        first = json.loads(lines[0])
        assert first["uuid"] == ACCEL_CHAR_UUID
        assert first["hex_data"] == payload.hex()
        assert first["length"] == 16

    def test_open_capture_creates_parents(self, tmp_path):
        f = open_capture(str(tmp_path / "logs" / "cap.jsonl"))
        try:
            assert (tmp_path / "logs").is_dir()
        finally:
            f.close()

    def test_open_capture_none(self):
        assert open_capture(None) is None
