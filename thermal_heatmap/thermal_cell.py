"""
thermal_cell.py
===================
Cell model for the heat map: one observable temperature value per grid
position, and the parser that turns a sensor frame into cell values.

A frame is one ASCII line of comma-separated readings in tenths of a
degree, for example ``"215,223,301,198,"``. The trailing comma is optional.
"""

import logging
import math
import re
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from thermal_heatmap import config

# Plain decimal with optional sign and exponent, as the board prints it
DECIMAL_TOKEN = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*")


class ThermalCell:
    """
    A single grid position's current temperature reading.
    Subscribers are called with the cell whenever its value changes.
    """

    def __init__(self, value: float = 0.0):
        self._value = value
        self._callbacks: List[Callable[['ThermalCell'], None]] = []

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, new_value: float):
        if new_value != self._value:
            self._value = new_value
            for callback in list(self._callbacks):
                callback(self)

    def subscribe(self, callback: Callable[['ThermalCell'], None]):
        self._callbacks.append(callback)

    def unsubscribe(self, callback: Callable[['ThermalCell'], None]):
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def __repr__(self):
        return f"ThermalCell({self._value!r})"


def parse_frame(line: str) -> List[Optional[float]]:
    """
    Parse one frame into degrees.
    Each token is divided by VALUE_SCALE; tokens that are not numbers
    become None so the caller can leave that cell untouched.
    """
    if line.endswith(','):
        line = line[:-1]
    values: List[Optional[float]] = []
    for token in line.split(','):
        reading = float(token) if DECIMAL_TOKEN.fullmatch(token) else None
        if reading is None or not math.isfinite(reading):
            logging.debug(f"Skipping malformed token {token!r}")
            values.append(None)
        else:
            values.append(reading / config.VALUE_SCALE)
    return values


class CellGrid:
    """
    Fixed, row-major collection of HORIZONTAL_CELLS x VERTICAL_CELLS cells.
    Frame index i always maps to cell i.
    """

    def __init__(self):
        self.cells = [ThermalCell() for _ in range(config.CELL_COUNT)]

    def __len__(self):
        return len(self.cells)

    def __getitem__(self, index) -> ThermalCell:
        return self.cells[index]

    def __iter__(self) -> Iterator[ThermalCell]:
        return iter(self.cells)

    def values(self) -> List[float]:
        return [cell.value for cell in self.cells]

    def as_array(self) -> np.ndarray:
        """Current values shaped (VERTICAL_CELLS, HORIZONTAL_CELLS)."""
        return np.array(self.values(), dtype=float).reshape(
            config.VERTICAL_CELLS, config.HORIZONTAL_CELLS
        )

    @staticmethod
    def position(index: int) -> Tuple[int, int]:
        return divmod(index, config.HORIZONTAL_CELLS)

    def reset(self):
        for cell in self.cells:
            cell.value = 0.0

    def apply_frame(self, line: str) -> int:
        """
        Update cells from one frame and return how many tokens parsed.
        Values past the last cell are ignored.
        """
        updated = 0
        for cell, value in zip(self.cells, parse_frame(line)):
            if value is None:
                continue
            cell.value = value
            updated += 1
        return updated
