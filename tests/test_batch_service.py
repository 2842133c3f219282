from __future__ import annotations

from pathlib import Path

import pytest

from bgi_converter.config import ConverterSettings
from bgi_converter.models.errors import TruncatedPayload, UnrecognizedFormat
from bgi_converter.services.batch_service import BatchService


@pytest.fixture
def folder(tmp_path: Path, bgi_bytes, bmp_bytes) -> Path:
    (tmp_path / "SGTitle000300").write_bytes(bgi_bytes(2, 1, 0x00000020, b"\x01" * 8))
    (tmp_path / "SGTitle000100").write_bytes(bgi_bytes(1, 1, 0x00000000, b"\x01\x02\x03"))
    (tmp_path / "bg_room.bmp").write_bytes(bmp_bytes(1, 1, 24, b"\x01\x02\x03\x00"))
    (tmp_path / "notes.txt").write_bytes(b"not an image at all, just text")
    # declares 4x4 RGBA but carries only 3 rows
    (tmp_path / "SGTitle000200").write_bytes(bgi_bytes(4, 4, 0x00000020, b"\x00" * 48))
    (tmp_path / "subdir").mkdir()
    return tmp_path


def test_find_candidates_keeps_recognized_files_sorted(folder: Path) -> None:
    names = [p.name for p in BatchService().find_candidates(folder)]
    assert names == ["SGTitle000100", "SGTitle000200", "SGTitle000300", "bg_room.bmp"]


def test_find_candidates_filters_by_substring(folder: Path) -> None:
    names = [p.name for p in BatchService().find_candidates(folder, "room")]
    assert names == ["bg_room.bmp"]


def test_find_candidates_uses_settings_pattern(folder: Path) -> None:
    svc = BatchService(ConverterSettings(pattern="SGTitle"))
    assert len(svc.find_candidates(folder)) == 3
    # explicit empty pattern overrides the configured one
    assert len(svc.find_candidates(folder, "")) == 4


def test_convert_folder_continues_after_failure(folder: Path) -> None:
    result = BatchService().convert_folder(folder)
    assert result.total == 4
    assert result.succeeded == 3
    assert [p.name for p, _msg in result.failures] == ["SGTitle000200"]
    assert not (folder / "SGTitle000200.tga").exists()
    for name in ("SGTitle000100", "SGTitle000300", "bg_room.bmp"):
        assert (folder / f"{name}.tga").is_file()


def test_convert_folder_skips_previous_outputs(folder: Path) -> None:
    BatchService().convert_folder(folder)
    again = BatchService().convert_folder(folder)
    assert all(not p.name.endswith(".tga") for p in again.candidates)
    assert again.total == 4


def test_convert_folder_without_matches(folder: Path) -> None:
    result = BatchService().convert_folder(folder, "nothing-matches")
    assert result.total == 0
    assert result.succeeded == 0


def test_convert_file_default_and_custom_output(folder: Path, tmp_path: Path) -> None:
    svc = BatchService()
    out = svc.convert_file(folder / "SGTitle000100")
    assert out == folder / "SGTitle000100.tga"
    assert out.read_bytes()[18:] == b"\x01\x02\x03\xff"

    custom = svc.convert_file(folder / "SGTitle000100", tmp_path / "titulo.tga")
    assert custom.name == "titulo.tga"


def test_convert_file_errors(folder: Path) -> None:
    svc = BatchService()
    with pytest.raises(UnrecognizedFormat):
        svc.convert_file(folder / "notes.txt")
    with pytest.raises(TruncatedPayload):
        svc.convert_file(folder / "SGTitle000200")
    with pytest.raises(OSError):
        svc.convert_file(folder / "missing")


def test_custom_output_suffix(folder: Path) -> None:
    svc = BatchService(ConverterSettings(output_suffix=".out.tga"))
    assert svc.default_output(folder / "x.bgi") == folder / "x.bgi.out.tga"


def test_convert_folder_survives_corrupt_bitmap_geometry(tmp_path: Path, bgi_bytes, bmp_bytes) -> None:
    (tmp_path / "corrupt.bmp").write_bytes(bmp_bytes(0x7FFFFFFF, 0x7FFFFFFF, 32, b"\x00" * 16))
    (tmp_path / "SGTitle000100").write_bytes(bgi_bytes(1, 1, 0x00000000, b"\x01\x02\x03"))

    result = BatchService().convert_folder(tmp_path)
    assert result.total == 2
    assert result.succeeded == 1
    assert [p.name for p, _msg in result.failures] == ["corrupt.bmp"]


def test_find_candidates_skips_unreadable_files(folder: Path, monkeypatch) -> None:
    svc = BatchService()
    real_detect = svc._detector.detect

    def detect(source):
        if Path(source).name == "SGTitle000300":
            raise PermissionError(13, "Permission denied", str(source))
        return real_detect(source)

    monkeypatch.setattr(svc._detector, "detect", detect)
    names = [p.name for p in svc.find_candidates(folder)]
    assert names == ["SGTitle000100", "SGTitle000200", "bg_room.bmp"]
