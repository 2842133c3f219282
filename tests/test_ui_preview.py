from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("customtkinter")

from bgi_converter.controllers.app_controller import AppController  # noqa: E402
from bgi_converter.ui.image_viewer import scaled_size  # noqa: E402


class _Viewer:
    def __init__(self) -> None:
        self.images = []

    def set_image(self, image) -> None:
        self.images.append(image)

    def get_zoom_percent(self) -> int:
        return 100


class _Sidebar:
    def __init__(self) -> None:
        self.export_enabled = None
        self.report = None

    def set_export_enabled(self, enabled: bool) -> None:
        self.export_enabled = enabled

    def set_report(self, report) -> None:
        self.report = report


class _Bottom:
    def __init__(self) -> None:
        self.status = None
        self.error = None

    def set_status(self, text: str, error: bool = False) -> None:
        self.status, self.error = text, error

    def set_zoom_percent(self, percent: int) -> None:
        pass


def _controller() -> AppController:
    return AppController(viewer=_Viewer(), sidebar=_Sidebar(), bottom=_Bottom(), window=None)


def test_scaled_size_of_empty_image_is_none() -> None:
    assert scaled_size((0, 5), 1.0) is None
    assert scaled_size((5, 0), 4.0) is None
    assert scaled_size((3, 2), 2.0) == (6, 4)
    assert scaled_size((3, 2), 0.1) == (1, 1)


def test_load_file_with_zero_width_image_enables_export(tmp_path: Path, bgi_bytes) -> None:
    path = tmp_path / "empty"
    path.write_bytes(bgi_bytes(0, 5, 0x00000000))

    ctrl = _controller()
    ctrl.load_file(path)
    assert ctrl.sidebar.export_enabled is True
    assert ctrl.bottom.error is False
    assert ctrl.viewer.images[-1].size == (0, 5)


def test_load_file_unknown_format_reports_error(tmp_path: Path) -> None:
    path = tmp_path / "junk"
    path.write_bytes(b"\xff" * 32)

    ctrl = _controller()
    ctrl.load_file(path)
    assert ctrl.sidebar.export_enabled is False
    assert ctrl.bottom.error is True
    assert ctrl.viewer.images[-1] is None
