"""Tests for decoders/accel.py — accelerometer notification payloads."""

import math
import struct

import pytest

from vestmon.decoders.accel import AccelDecoder
from vestmon.protocol import ACCEL_CHAR_UUID, PPG_CHAR_UUID, TEMP_CHAR_UUID, char_signal
from vestmon.samples import AccelVector, SignalKind

from tests.conftest import accel_payload


class TestAccelDecoderCanDecode:
    def test_accel_characteristic(self):
        assert AccelDecoder.can_decode(ACCEL_CHAR_UUID) is True

    def test_uppercase_uuid(self):
        assert AccelDecoder.can_decode(ACCEL_CHAR_UUID.upper()) is True

    @pytest.mark.parametrize("uuid", [TEMP_CHAR_UUID, PPG_CHAR_UUID, "0000180d-0000-1000-8000-00805f9b34fb"])
    def test_other_characteristics(self, uuid):
        assert AccelDecoder.can_decode(uuid) is False


class TestAccelDecoderDecode:
    def test_little_endian_floats(self):
        vec = AccelDecoder.decode(accel_payload(0.15, 0.12, 1.05, 1.08))
        assert vec.x == pytest.approx(0.15)
        assert vec.y == pytest.approx(0.12)
        assert vec.z == pytest.approx(1.05)
        assert vec.magnitude == pytest.approx(1.08)

    def test_supplied_magnitude_is_kept(self):
        # not the Euclidean norm of the axes
        vec = AccelDecoder.decode(accel_payload(0.0, 0.0, 1.0, 2.5))
        assert vec.magnitude == pytest.approx(2.5)

    def test_accepts_bytearray_and_trailing_bytes(self):
        vec = AccelDecoder.decode(bytearray(accel_payload(0.1, 0.2, 0.3, 0.4)) + b"\x00\x00")
        assert vec.z == pytest.approx(0.3)

    @pytest.mark.parametrize("length", [0, 4, 12, 15])
    def test_short_payload(self, length):
        assert AccelDecoder.decode(accel_payload()[:length]) is None

    def test_non_finite_values(self):
        assert AccelDecoder.decode(struct.pack("<ffff", 0.0, math.nan, 1.0, 1.0)) is None
        assert AccelDecoder.decode(struct.pack("<ffff", 0.0, 0.0, 1.0, math.inf)) is None

    def test_encode_matches_firmware_layout(self):
        vec = AccelVector(0.5, -0.25, 1.0, 1.25)
        assert AccelDecoder.encode(vec) == accel_payload(0.5, -0.25, 1.0, 1.25)
        assert AccelDecoder.decode(AccelDecoder.encode(vec)) == vec


class TestProtocol:
    def test_char_signal(self):
        assert char_signal(ACCEL_CHAR_UUID) is SignalKind.ACCEL
        assert char_signal(TEMP_CHAR_UUID.upper()) is SignalKind.TEMPERATURE
        assert char_signal(PPG_CHAR_UUID) is SignalKind.PPG
        assert char_signal("deadbeef") is None


class TestAccelVector:
    def test_from_axes_derives_norm(self):
        vec = AccelVector.from_axes(0.0, 0.6, 0.8)
        assert vec.magnitude == pytest.approx(1.0)
