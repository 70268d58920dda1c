"""Test doubles shared across the test suite."""

from .recording_transport import RecordingTransport

__all__ = ["RecordingTransport"]
