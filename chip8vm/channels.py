"""Bounded, non-blocking channels between the emulator and the platform layer.

Frames flow from the emulator thread to the presenter and key events flow
the other way. Neither side ever waits on the other: a full channel drops
its oldest entry.
"""

import threading
from collections import deque
from typing import List, Optional

from chip8vm.constants import NUM_KEYS


class FrameChannel:
    """Latest-frame mailbox from the emulator to the presenter."""

    def __init__(self, capacity: int = 1):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._frames = deque(maxlen=capacity)
        self._lock = threading.Lock()
        self.dropped = 0

    def publish(self, frame: bytes) -> None:
        with self._lock:
            if len(self._frames) == self._frames.maxlen:
                self.dropped += 1
            self._frames.append(frame)

    def latest(self) -> Optional[bytes]:
        """Newest frame, or None. Older pending frames are discarded."""
        with self._lock:
            if not self._frames:
                return None
            frame = self._frames[-1]
            self._frames.clear()
            return frame


class KeyChannel:
    """Key events from the input poller to the emulator.

    An event is the key currently held (0-15) or None once it is released.
    """

    def __init__(self, capacity: int = NUM_KEYS):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._events = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def send(self, key: Optional[int]) -> None:
        if key is not None and not 0 <= key < NUM_KEYS:
            raise ValueError(f"key must be in 0..{NUM_KEYS - 1} or None, got {key}")
        with self._lock:
            self._events.append(key)

    def poll(self) -> List[Optional[int]]:
        """Drain pending events, oldest first."""
        with self._lock:
            events = list(self._events)
            self._events.clear()
        return events
