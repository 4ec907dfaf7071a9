"""
mock_device.py
===================
Stand-in for the sensor board used in demo mode. It behaves like a
serial port and produces frames in the board's wire format, with every
cell following a triangle wave between two temperatures. Each cell is
phase-shifted so the grid shows a moving gradient.
"""

import time

import numpy as np

from thermal_heatmap import config


class MockSerial:
    """
    Minimal read()/close() port that emits one frame per interval.
    """

    port = "demo"

    def __init__(self, low=15.0, high=55.0, step=config.DEMO_STEP,
                 interval=config.DEMO_INTERVAL):
        self.low = low
        self.high = high
        self.step = step
        self.interval = interval
        self.is_open = True
        # Readings are tracked in tenths of a degree, as the board sends them
        span = (high - low) * config.VALUE_SCALE
        self.current = np.linspace(0, span, config.CELL_COUNT, endpoint=False)
        self.direction = np.ones(config.CELL_COUNT)
        self._pending = b""

    def next_values(self) -> np.ndarray:
        """
        Advance the triangle wave one step and return the readings x10.
        """
        span = (self.high - self.low) * config.VALUE_SCALE
        self.current += self.step * self.direction
        top = self.current >= span
        bottom = self.current <= 0
        self.current[top] = span
        self.direction[top] = -1
        self.current[bottom] = 0
        self.direction[bottom] = 1
        return np.round(self.current + self.low * config.VALUE_SCALE).astype(int)

    def next_frame(self) -> bytes:
        values = self.next_values()
        return (",".join(str(v) for v in values) + ",\n").encode('ascii')

    def read(self, size=1) -> bytes:
        if not self.is_open:
            return b""
        if not self._pending:
            if self.interval:
                time.sleep(self.interval)
            self._pending = self.next_frame()
        chunk, self._pending = self._pending[:size], self._pending[size:]
        return chunk

    def close(self):
        self.is_open = False
