"""PySide6 launcher for selective-history background estimation."""
from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtCore import QThread, Signal
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QFileDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from selectivebg import (
    COMBINE_L1,
    COMBINE_MAX,
    DEFAULT_N_PARAM,
    DEFAULT_S_PARAM,
    estimate_background,
)


class EstimateWorker(QThread):
    progress = Signal(int)
    finished_success = Signal(str)
    failed = Signal(str)

    def __init__(self, *args, **kwargs):
        super().__init__()
        self.args = args
        self.kwargs = kwargs

    def run(self):
        try:
            path = estimate_background(*self.args, progress=self.progress.emit, **self.kwargs)
            self.finished_success.emit(str(path))
        except Exception as exc:  # noqa: BLE001
            self.failed.emit(str(exc))


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Background Estimation")
        self.worker: EstimateWorker | None = None

        widget = QWidget()
        layout = QVBoxLayout()
        grid = QGridLayout()
        grid.setColumnStretch(1, 1)

        self.input_edit = QLineEdit()
        browse_video = QPushButton("Video…")
        browse_video.clicked.connect(self._browse_video)
        browse_folder = QPushButton("Folder…")
        browse_folder.clicked.connect(lambda: self._browse_dir(self.input_edit))
        input_buttons = QHBoxLayout()
        input_buttons.addWidget(browse_video)
        input_buttons.addWidget(browse_folder)

        self.output_edit = QLineEdit()
        browse_out = QPushButton("Browse…")
        browse_out.clicked.connect(lambda: self._browse_dir(self.output_edit))

        self.s_spin = QSpinBox()
        self.s_spin.setRange(1, 999)
        self.s_spin.setValue(DEFAULT_S_PARAM)

        self.n_spin = QSpinBox()
        self.n_spin.setRange(1, 999)
        self.n_spin.setValue(DEFAULT_N_PARAM)

        self.patch_spin = QSpinBox()
        self.patch_spin.setRange(1, 256)
        self.patch_spin.setValue(1)

        self.combine_combo = QComboBox()
        self.combine_combo.addItems([COMBINE_L1, COMBINE_MAX])

        grid.addWidget(QLabel("Input sequence"), 0, 0)
        grid.addWidget(self.input_edit, 0, 1)
        grid.addLayout(input_buttons, 0, 2)

        grid.addWidget(QLabel("Output folder"), 1, 0)
        grid.addWidget(self.output_edit, 1, 1)
        grid.addWidget(browse_out, 1, 2)

        grid.addWidget(QLabel("S"), 2, 0)
        grid.addWidget(self.s_spin, 2, 1)

        grid.addWidget(QLabel("N"), 3, 0)
        grid.addWidget(self.n_spin, 3, 1)

        grid.addWidget(QLabel("Patch size"), 4, 0)
        grid.addWidget(self.patch_spin, 4, 1)

        grid.addWidget(QLabel("Channel rule"), 5, 0)
        grid.addWidget(self.combine_combo, 5, 1)

        layout.addLayout(grid)

        self.status = QLabel("")
        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 1)

        self.start_btn = QPushButton("Estimate Background")
        self.start_btn.clicked.connect(self._start_estimate)

        layout.addWidget(self.start_btn)
        layout.addWidget(self.progress_bar)
        layout.addWidget(self.status)
        widget.setLayout(layout)
        self.setCentralWidget(widget)

    def _start_estimate(self):
        input_path = self.input_edit.text().strip()
        output_dir = self.output_edit.text().strip()
        if not input_path or not output_dir:
            self.status.setText("Select input sequence and output folder")
            return
        self.start_btn.setEnabled(False)
        self.status.setText("Estimating…")
        # frame count is unknown while streaming
        self.progress_bar.setRange(0, 0)
        self.worker = EstimateWorker(
            input_path,
            output_dir,
            s_param=self.s_spin.value(),
            n_param=self.n_spin.value(),
            patch_size=self.patch_spin.value(),
            combine=self.combine_combo.currentText(),
        )
        self.worker.progress.connect(self._on_progress)
        self.worker.finished_success.connect(self._on_done)
        self.worker.failed.connect(self._on_error)
        self.worker.start()

    def _on_progress(self, frames: int):
        self.status.setText(f"Frame {frames}")

    def _on_done(self, path: str):
        self.status.setText(f"Wrote {path}")
        self.progress_bar.setRange(0, 1)
        self.progress_bar.setValue(1)
        self.start_btn.setEnabled(True)
        self.worker = None

    def _on_error(self, err: str):
        self.status.setText(f"Error: {err}")
        self.progress_bar.setRange(0, 1)
        self.progress_bar.setValue(0)
        self.start_btn.setEnabled(True)
        self.worker = None

    def _browse_video(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Select video", str(Path.home()), "Video Files (*.mp4 *.avi *.mov *.*)"
        )
        if path:
            self.input_edit.setText(path)

    def _browse_dir(self, line_edit: QLineEdit):
        path = QFileDialog.getExistingDirectory(self, "Select folder", str(Path.home()))
        if path:
            line_edit.setText(path)


def main():
    app = QApplication(sys.argv)
    window = MainWindow()
    window.resize(600, 300)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
