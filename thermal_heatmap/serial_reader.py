"""
serial_reader.py
==================
Finds the thermal sensor board by USB VID/PID, opens it at 9600-8-N-1 and
reads newline-terminated frames on a background QThread. Completed lines
are handed to the GUI thread through a Qt signal.
"""

import logging
from typing import Callable, List, Optional

import serial
from serial.tools import list_ports
from PyQt5 import QtCore

from thermal_heatmap import config


def find_device(vid: int = config.VID, pid: int = config.PID) -> Optional[str]:
    """
    Return the device path of the first port matching vid/pid, or None.
    """
    for port in list_ports.comports():
        if port.vid == vid and port.pid == pid:
            return port.device
    return None


def open_device(port: str) -> serial.Serial:
    """
    Open the sensor port with the board's line settings and no handshake.
    """
    return serial.Serial(
        port,
        baudrate=config.BAUD_RATE,
        bytesize=config.BYTE_SIZE,
        parity=config.PARITY,
        stopbits=config.STOP_BITS,
        xonxoff=False,
        rtscts=False,
        dsrdtr=False,
        timeout=config.TIMEOUT,
    )


class LineBuffer:
    """
    Accumulates incoming bytes and splits them into lines on b'\\n'.
    A line that outgrows the buffer is dropped up to the next newline.
    """

    def __init__(self, size: int = config.LINE_BUFFER_SIZE):
        self.size = size
        self._buf = bytearray()
        self._overflowed = False

    def feed(self, data: bytes) -> List[str]:
        lines = []
        for byte in data:
            if byte == 0x0A:
                if self._overflowed:
                    self._overflowed = False
                else:
                    lines.append(self._buf.decode('ascii', errors='replace').rstrip('\r'))
                self._buf.clear()
            elif self._overflowed:
                continue
            elif len(self._buf) >= self.size:
                logging.warning(f"Line exceeded {self.size} bytes; dropping it.")
                self._buf.clear()
                self._overflowed = True
            else:
                self._buf.append(byte)
        return lines


def read_lines(port, on_line: Callable[[str], None], is_running: Callable[[], bool],
               buffer: Optional[LineBuffer] = None):
    """
    Read from port until is_running() turns false, calling on_line for
    every completed line. A read error ends the loop; there is no reconnect.
    """
    if buffer is None:
        buffer = LineBuffer()
    while is_running():
        try:
            chunk = port.read(config.READ_CHUNK)
        except serial.SerialException as e:
            logging.error(f"Error reading serial port: {e}")
            return
        if chunk:
            for line in buffer.feed(chunk):
                on_line(line)


class SerialReaderThread(QtCore.QThread):
    """
    SerialReaderThread is a QThread that owns the serial handle and reads
    frames from it. It emits newLine with each completed line.
    """
    newLine = QtCore.pyqtSignal(str)

    def __init__(self, port, parent=None):
        super().__init__(parent)
        self.port = port
        self.running = True

    def run(self):
        """
        Continuously read from the port and emit completed lines.
        """
        try:
            read_lines(self.port, self.newLine.emit, lambda: self.running)
        finally:
            self.port.close()
            logging.info("Serial connection closed.")

    def stop(self):
        """
        Ask the read loop to finish after the current read.
        """
        self.running = False


def start_reader(parent=None) -> Optional[SerialReaderThread]:
    """
    Locate and open the sensor, returning an unstarted reader thread.
    Returns None when the device is missing or cannot be opened.
    """
    port_name = find_device()
    if port_name is None:
        logging.info(f"No device with VID {config.VID:#06x} / PID {config.PID:#06x} found.")
        return None
    try:
        port = open_device(port_name)
    except serial.SerialException as e:
        logging.error(f"Error opening serial port {port_name}: {e}")
        return None
    logging.info(f"Connected to {port_name} at {config.BAUD_RATE} baud.")
    return SerialReaderThread(port, parent)
