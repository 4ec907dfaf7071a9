"""
heatmap_live.py
==================
This script reads temperature frames from the USB thermal sensor board and
displays them as a 4x4 color-mapped grid in a PyQt5 GUI using pyqtgraph.
Pass 'demo' on the command line to run against a simulated board.
"""

import sys
import signal
import logging

from PyQt5 import QtWidgets, QtCore
import pyqtgraph as pg

from thermal_heatmap import config
from thermal_heatmap.colors import to_hex, to_rgba
from thermal_heatmap.mock_device import MockSerial
from thermal_heatmap.serial_reader import SerialReaderThread, start_reader
from thermal_heatmap.thermal_cell import CellGrid


class MainWindow(QtWidgets.QWidget):
    """
    MainWindow shows one tile per ThermalCell. Tiles repaint themselves
    when their cell reports a new value.
    """
    def __init__(self, grid: CellGrid, status: str = ""):
        super().__init__()
        pg.setConfigOption('background', 'w')
        pg.setConfigOption('foreground', 'k')
        pg.setConfigOption('antialias', True)
        self.setWindowTitle("Thermal Heat Map")
        self.grid = grid

        main_layout = QtWidgets.QVBoxLayout(self)

        # Legend for the color scale, plus status and Reset button.
        top_layout = QtWidgets.QHBoxLayout()
        top_layout.addStretch()
        for temp in range(config.MIN_TEMP, config.MAX_TEMP + 1, 5):
            legend_item = QtWidgets.QWidget()
            legend_layout = QtWidgets.QHBoxLayout(legend_item)
            legend_layout.setContentsMargins(0, 0, 0, 0)
            square = QtWidgets.QLabel()
            square.setFixedSize(15, 15)
            square.setStyleSheet(f"background-color: {to_hex(temp)}; border: 1px solid black;")
            legend_layout.addWidget(square)
            legend_layout.addWidget(QtWidgets.QLabel(f"{temp}°C"))
            top_layout.addWidget(legend_item)

        btn_reset = QtWidgets.QPushButton("Reset All")
        btn_reset.clicked.connect(self.reset_cells)
        top_layout.addWidget(btn_reset)
        top_layout.addStretch()
        main_layout.addLayout(top_layout)

        self.status_label = QtWidgets.QLabel(status)
        main_layout.addWidget(self.status_label)

        # One square tile per cell, row 0 at the top.
        self.plot_widget = pg.GraphicsLayoutWidget(title="Thermal Grid")
        self.plot_widget.resize(600, 600)
        self.view = self.plot_widget.addViewBox()
        self.view.setAspectLocked(True)
        self.view.invertY(True)
        self.view.setMouseEnabled(x=False, y=False)
        main_layout.addWidget(self.plot_widget)

        self.tiles = []
        self.labels = []
        for index, cell in enumerate(self.grid):
            row, col = self.grid.position(index)
            tile = QtWidgets.QGraphicsRectItem(col, row, 1, 1)
            tile.setPen(pg.mkPen('k', width=1))
            self.view.addItem(tile)
            label = pg.TextItem(anchor=(0.5, 0.5), color='k')
            label.setPos(col + 0.5, row + 0.5)
            self.view.addItem(label)
            self.tiles.append(tile)
            self.labels.append(label)
            cell.subscribe(lambda c, i=index: self.paint_cell(i))
            self.paint_cell(index)
        self.view.setRange(xRange=(0, config.HORIZONTAL_CELLS),
                           yRange=(0, config.VERTICAL_CELLS), padding=0.02)

    def paint_cell(self, index):
        """
        Recolor and relabel the tile for one cell.
        """
        value = self.grid[index].value
        self.tiles[index].setBrush(pg.mkBrush(*to_rgba(value)))
        self.labels[index].setText(f"{value:.1f}°C")

    @QtCore.pyqtSlot(str)
    def on_new_line(self, line):
        """
        Slot to handle a frame received from the serial reader.
        """
        self.grid.apply_frame(line)

    def reset_cells(self):
        """
        Put every cell back to its default value.
        """
        self.grid.reset()


def install_interrupt_handler(app, interval=config.SIGNAL_POLL_MS):
    """
    Quit app on Ctrl+C. Qt holds the interpreter inside exec_(), so a timer
    wakes Python periodically to let the handler run.
    """
    def signal_handler(*_):
        """
        Graceful Exit Handler
        """
        logging.info("Exiting gracefully...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    timer = QtCore.QTimer()
    timer.timeout.connect(lambda: None)
    timer.start(interval)
    return timer


def main():
    """
    Main function to initialize the application and start the GUI.
    It starts a SerialReaderThread for the sensor board (or the demo
    source) and connects it to the GUI. Without a board the grid simply
    keeps its default values.
    """
    logging.basicConfig(level=logging.INFO)
    demo = any(arg.lower() == 'demo' for arg in sys.argv[1:])

    app = QtWidgets.QApplication(sys.argv)

    if demo:
        logging.info("Demo mode is active.")
        reader_thread = SerialReaderThread(MockSerial())
    else:
        reader_thread = start_reader()

    if reader_thread is None:
        status = "No sensor found"
    else:
        status = f"Reading from {reader_thread.port.port}"

    window = MainWindow(CellGrid(), status)
    window.show()

    interrupt_timer = install_interrupt_handler(app)

    if reader_thread is not None:
        reader_thread.newLine.connect(window.on_new_line)
        reader_thread.start()
        app.aboutToQuit.connect(lambda: (reader_thread.stop(), reader_thread.wait()))
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
