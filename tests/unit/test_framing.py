"""Unit tests for the signature trailer framing."""

from __future__ import annotations

import os

import pytest

from flexbin import SigningKeyMissing, VerificationFailed
from flexbin.envelope import frame_signed, unframe_signed
from flexbin.security import SIGNATURE_SIZE


class TestSignedFraming:
    """Test signed framing."""

    def test_frame_appends_tag(self, sample_payload: bytes, signing_key: bytes) -> None:
        """Test the payload is kept verbatim and followed by the tag."""
        framed = frame_signed(sample_payload, signing_key)

        assert len(framed) == len(sample_payload) + SIGNATURE_SIZE
        assert framed.startswith(sample_payload)

    def test_roundtrip(self, sample_payload: bytes, signing_key: bytes) -> None:
        """Test framing/unframing round-trip."""
        framed = frame_signed(sample_payload, signing_key)
        assert unframe_signed(framed, signing_key) == sample_payload

    def test_empty_payload(self, signing_key: bytes) -> None:
        """Test an empty payload still carries a tag."""
        framed = frame_signed(b"", signing_key)
        assert unframe_signed(framed, signing_key) == b""


class TestSignedFramingErrors:
    """Test signed framing error handling."""

    def test_wrong_key(self, sample_payload: bytes, signing_key: bytes) -> None:
        """Test verification with another key."""
        framed = frame_signed(sample_payload, signing_key)

        with pytest.raises(VerificationFailed, match="verification failed"):
            unframe_signed(framed, os.urandom(32))

    def test_corrupted_payload(self, sample_payload: bytes, signing_key: bytes) -> None:
        """Test a flipped payload byte."""
        framed = bytearray(frame_signed(sample_payload, signing_key))
        framed[0] ^= 0x80

        with pytest.raises(VerificationFailed):
            unframe_signed(bytes(framed), signing_key)

    def test_corrupted_tag(self, sample_payload: bytes, signing_key: bytes) -> None:
        """Test a flipped tag byte."""
        framed = frame_signed(sample_payload, signing_key)
        corrupted = framed[:-1] + bytes([framed[-1] ^ 0xFF])

        with pytest.raises(VerificationFailed):
            unframe_signed(corrupted, signing_key)

    def test_too_short(self, signing_key: bytes) -> None:
        """Test frames shorter than a tag."""
        with pytest.raises(VerificationFailed, match="too short"):
            unframe_signed(b"\x00" * (SIGNATURE_SIZE - 1), signing_key)

    def test_missing_key(self, sample_payload: bytes, signing_key: bytes) -> None:
        """Test both directions require a key."""
        with pytest.raises(SigningKeyMissing):
            frame_signed(sample_payload, None)

        framed = frame_signed(sample_payload, signing_key)
        with pytest.raises(SigningKeyMissing):
            unframe_signed(framed, None)
