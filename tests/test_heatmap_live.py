import signal
from types import SimpleNamespace

import pytest
from PyQt5 import QtCore

from thermal_heatmap import config, heatmap_live
from thermal_heatmap.heatmap_live import MainWindow, install_interrupt_handler
from thermal_heatmap.serial_reader import SerialReaderThread
from thermal_heatmap.thermal_cell import CellGrid

from tests.test_serial_reader import FakePort


@pytest.fixture(scope="module")
def qt_app():
    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])


def test_on_new_line_applies_frame_to_grid():
    window = SimpleNamespace(grid=CellGrid())
    MainWindow.on_new_line(window, "215,abc,300,")
    assert window.grid.values()[:3] == [21.5, 0.0, 30.0]


def test_reader_lines_reach_grid_through_slot():
    window = SimpleNamespace(grid=CellGrid())
    repainted = []
    for index, cell in enumerate(window.grid):
        cell.subscribe(lambda c, i=index: repainted.append(i))
    thread = SerialReaderThread(FakePort([b"200,210,\n", b"220,\n"]))
    thread.newLine.connect(lambda line: MainWindow.on_new_line(window, line))
    thread.run()
    assert window.grid.values()[:2] == [22.0, 21.0]
    assert repainted == [0, 1, 0]


def test_interrupt_handler_quits_and_keeps_timer_running(qt_app, monkeypatch):
    handlers = {}
    monkeypatch.setattr(heatmap_live.signal, "signal",
                        lambda signum, handler: handlers.__setitem__(signum, handler))
    quits = []
    app = SimpleNamespace(quit=lambda: quits.append(True))

    timer = install_interrupt_handler(app)
    try:
        assert timer.isActive()
        assert timer.interval() == config.SIGNAL_POLL_MS
        handlers[signal.SIGINT](signal.SIGINT, None)
        assert quits == [True]
    finally:
        timer.stop()
