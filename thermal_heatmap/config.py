"""
config.py
===================
This configuration file contains constants and settings that are used throughout the software.
"""

# USB identifiers of the sensor board (Arduino Uno)
VID = 0x2341
PID = 0x0043

# Serial settings: 9600-8-N-1, no flow control
BAUD_RATE = 9600
BYTE_SIZE = 8
PARITY = 'N'
STOP_BITS = 1
TIMEOUT = 0.1

# Bytes requested per read and the size of the line buffer
READ_CHUNK = 16
LINE_BUFFER_SIZE = 128

# Grid layout
HORIZONTAL_CELLS = 4
VERTICAL_CELLS = 4
CELL_COUNT = HORIZONTAL_CELLS * VERTICAL_CELLS

# Readings arrive in tenths of a degree
VALUE_SCALE = 10

# Color scale bounds in degrees Celsius
MIN_TEMP = 20
MAX_TEMP = 50

# Demo source
DEMO_INTERVAL = 0.2
DEMO_STEP = 5

# How often (ms) control returns to Python so Ctrl+C is noticed
SIGNAL_POLL_MS = 200
