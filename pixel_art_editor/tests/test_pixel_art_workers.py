#!/usr/bin/env python3
"""
Tests for the file worker threads.
Workers are run synchronously via run() unless a test needs the thread.
"""

from pathlib import Path

import pytest
from PIL import Image

from pixel_art_editor.core.pixel_art_workers import (
    BaseWorker,
    FileExportWorker,
    FileImportWorker,
)


class TestBaseWorker:
    """Test BaseWorker file path handling and cancellation"""

    def test_accepts_string_path(self, qapp):
        worker = BaseWorker("test/path.png")
        assert worker.file_path == Path("test/path.png")

    def test_no_path(self, qapp):
        assert BaseWorker().file_path is None

    def test_file_path_is_read_only(self, qapp):
        worker = BaseWorker("test/path.png")
        with pytest.raises(AttributeError):
            worker.file_path = "other.png"

    def test_cancel_suppresses_signals(self, qapp):
        worker = BaseWorker()
        received = []
        worker.progress.connect(lambda p, m: received.append(p))
        worker.error.connect(received.append)

        worker.cancel()
        worker.emit_progress(50)
        worker.emit_error("boom")

        assert worker.is_cancelled()
        assert received == []


class TestFileImportWorker:
    """Test image decoding in the import worker"""

    def test_emits_result(self, qapp, png_file):
        worker = FileImportWorker(png_file)
        results, errors, finished = [], [], []
        worker.result.connect(results.append)
        worker.error.connect(errors.append)
        worker.finished.connect(lambda: finished.append(True))

        worker.run()

        assert errors == []
        assert finished == [True]
        assert len(results) == 1
        assert results[0].mode == "RGBA"
        assert results[0].size == (4, 4)

    def test_emits_error_for_bad_file(self, qapp, tmp_path):
        bad = tmp_path / "bad.png"
        bad.write_text("text, not pixels")
        worker = FileImportWorker(bad)
        results, errors = [], []
        worker.result.connect(results.append)
        worker.error.connect(errors.append)

        worker.run()

        assert results == []
        assert len(errors) == 1
        assert errors[0].startswith("Error loading image")

    def test_progress_reported(self, qapp, png_file):
        worker = FileImportWorker(png_file)
        progress = []
        worker.progress.connect(lambda p, m: progress.append(p))

        worker.run()

        assert progress == [0, 100]

    def test_threaded_run(self, qtbot, png_file):
        worker = FileImportWorker(png_file)

        with qtbot.waitSignal(worker.result, timeout=5000) as blocker:
            worker.start()
        worker.wait(5000)

        assert blocker.args[0].size == (4, 4)


class TestFileExportWorker:
    """Test PNG writing in the export worker"""

    def test_saves_png(self, qapp, tmp_path):
        target = tmp_path / "out.png"
        worker = FileExportWorker(Image.new("RGBA", (6, 4), (9, 8, 7, 255)), target)
        saved = []
        worker.saved.connect(saved.append)

        worker.run()

        assert saved == [str(target)]
        with Image.open(target) as image:
            assert image.size == (6, 4)

    def test_emits_error_when_unwritable(self, qapp, tmp_path):
        worker = FileExportWorker(Image.new("RGBA", (2, 2)), tmp_path / "no" / "out.png")
        saved, errors = [], []
        worker.saved.connect(saved.append)
        worker.error.connect(errors.append)

        worker.run()

        assert saved == []
        assert len(errors) == 1
        assert errors[0].startswith("Error saving image")
