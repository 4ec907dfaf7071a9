from thermal_heatmap import config
from thermal_heatmap.mock_device import MockSerial
from thermal_heatmap.serial_reader import LineBuffer
from thermal_heatmap.thermal_cell import CellGrid


def test_frame_matches_wire_format():
    frame = MockSerial(interval=0).next_frame()
    assert frame.endswith(b",\n")
    tokens = frame.decode("ascii").rstrip("\n").rstrip(",").split(",")
    assert len(tokens) == config.CELL_COUNT
    assert all(t.lstrip("-").isdigit() for t in tokens)


def test_values_stay_within_bounds():
    device = MockSerial(low=15.0, high=55.0, step=37, interval=0)
    for _ in range(200):
        values = device.next_values()
        assert values.min() >= 150
        assert values.max() <= 550


def test_read_chunks_reassemble_into_frames():
    device = MockSerial(interval=0)
    buf = LineBuffer()
    lines = []
    while len(lines) < 3:
        lines.extend(buf.feed(device.read(config.READ_CHUNK)))
    grid = CellGrid()
    assert grid.apply_frame(lines[-1]) == config.CELL_COUNT
    assert all(15.0 <= v <= 55.0 for v in grid.values())


def test_closed_device_reads_nothing():
    device = MockSerial(interval=0)
    device.close()
    assert device.read(16) == b""
