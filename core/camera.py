# core/camera.py
"""
Camera capture for the add-student photo.

closed -> requesting -> streaming -> (captured | cancelled) -> closed

The device stream is held only while streaming and is released on every
way out: capture, cancel, close (screen left) or a failed acquisition.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, List, Optional

import streamlit as st

logger = logging.getLogger(__name__)

CAMERA_ERROR_MESSAGE = "Could not access camera."


class CameraState(str, Enum):
    CLOSED = "closed"
    REQUESTING = "requesting"
    STREAMING = "streaming"
    CAPTURED = "captured"
    CANCELLED = "cancelled"


class CameraCapture:
    """``device`` is a zero-argument callable returning a stream with ``stop_tracks()``."""

    def __init__(self, device: Callable[[], Any]):
        self.device = device
        self.state = CameraState.CLOSED
        self.stream: Any = None
        self.frame: Optional[bytes] = None
        self.error: Optional[str] = None
        self.history: List[CameraState] = [CameraState.CLOSED]

    def _set(self, state: CameraState) -> None:
        self.state = state
        self.history.append(state)

    def _release(self) -> None:
        stream, self.stream = self.stream, None
        if stream is not None:
            stream.stop_tracks()

    @property
    def is_open(self) -> bool:
        return self.state in (CameraState.REQUESTING, CameraState.STREAMING)

    def open(self) -> bool:
        if self.is_open:
            return True
        self.error = None
        self._set(CameraState.REQUESTING)
        try:
            self.stream = self.device()
        except Exception as e:
            logger.error("Camera error: %s", e)
            self.error = CAMERA_ERROR_MESSAGE
            self._release()
            self._set(CameraState.CLOSED)
            return False
        self._set(CameraState.STREAMING)
        return True

    def capture(self, frame: bytes) -> bytes:
        if self.state is not CameraState.STREAMING:
            raise RuntimeError(f"Cannot capture while camera is {self.state.value}")
        self.frame = frame
        self._set(CameraState.CAPTURED)
        self._release()
        self._set(CameraState.CLOSED)
        return frame

    def cancel(self) -> None:
        if not self.is_open:
            return
        self._set(CameraState.CANCELLED)
        self._release()
        self._set(CameraState.CLOSED)

    def close(self) -> None:
        """Unconditional teardown, used when the owning view goes away."""
        self._release()
        if self.state is not CameraState.CLOSED:
            self._set(CameraState.CLOSED)

    def take_frame(self) -> Optional[bytes]:
        frame, self.frame = self.frame, None
        return frame

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class StreamlitCameraStream:
    """
    The browser owns the real device; dropping the ``st.camera_input``
    widget state unmounts it and stops its tracks.
    """

    def __init__(self, widget_key: str):
        self.widget_key = widget_key

    def stop_tracks(self) -> None:
        st.session_state.pop(self.widget_key, None)
