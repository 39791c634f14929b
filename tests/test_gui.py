from __future__ import annotations

import os

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

import gui  # noqa: E402


@pytest.fixture(scope="module")
def app():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


def test_start_requires_paths(app):
    window = gui.MainWindow()
    window._start_estimate()
    assert window.worker is None
    assert "Select" in window.status.text()
    assert window.s_spin.value() == 19
    assert window.n_spin.value() == 3


def test_worker_reports_progress_and_result(app, png_sequence, tmp_path):
    folder = png_sequence(np.full((3, 4, 4, 3), 10, dtype=np.uint8))
    worker = gui.EstimateWorker(str(folder), str(tmp_path / "out"), s_param=2, n_param=1)
    frames, done = [], []
    worker.progress.connect(frames.append)
    worker.finished_success.connect(done.append)
    worker.run()
    assert frames == [1, 2, 3]
    assert done == [str(tmp_path / "out" / "output_2_1.png")]


def test_worker_failure_reenables_start(app, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("decoder crashed")

    monkeypatch.setattr(gui, "estimate_background", boom)
    window = gui.MainWindow()
    window.start_btn.setEnabled(False)
    worker = gui.EstimateWorker("in.mp4", "out", s_param=2, n_param=1)
    errors = []
    worker.failed.connect(errors.append)
    worker.failed.connect(window._on_error)
    worker.run()
    assert errors == ["decoder crashed"]
    assert window.start_btn.isEnabled()
    assert window.status.text() == "Error: decoder crashed"
