from __future__ import annotations

import struct
from pathlib import Path

import numpy as np
import pytest

from bgi_converter.core import serialize, write_container
from bgi_converter.models.errors import InvalidArgument
from bgi_converter.models.image_model import PixelBuffer
from bgi_converter.services.convert_service import ConvertService
from bgi_converter.services.detect_service import DetectService
from bgi_converter.services.tga_service import TgaService


def test_tga_header_layout() -> None:
    raw = bytes(i % 256 for i in range(300 * 2 * 4))
    out = TgaService().serialize(raw, 300, 2)
    assert len(out) == 18 + len(raw)
    header = out[:18]
    assert header[0] == 0 and header[1] == 0
    assert header[2] == 2
    assert header[3:12] == b"\x00" * 9
    assert header[12:14] == (300).to_bytes(2, "little")
    assert header[14:16] == (2).to_bytes(2, "little")
    assert header[16] == 32
    assert header[17] == 0x20
    assert out[18:] == raw


def test_tga_pixels_follow_header_verbatim() -> None:
    pixels = np.arange(2 * 3 * 4, dtype=np.uint8).reshape(3, 2, 4)
    buf = PixelBuffer(pixels=pixels)
    out = serialize(buf, buf.width, buf.height)
    assert out[18:] == pixels.tobytes()


def test_tga_rejects_mismatched_length() -> None:
    with pytest.raises(InvalidArgument):
        TgaService().serialize(b"\x00" * 15, 2, 2)


def test_tga_rejects_dimensions_over_16_bits() -> None:
    with pytest.raises(InvalidArgument):
        TgaService().serialize(b"", 70000, 0)


def test_write_container_round_trip_geometry(tmp_path: Path, bgi_bytes) -> None:
    payload = bytes(range(5 * 3 * 4))
    data = bgi_bytes(5, 3, 0x00000020, payload)
    buf = ConvertService().convert(data, DetectService().detect(data))

    out = write_container(tmp_path / "out.tga", buf, buf.width, buf.height)
    written = out.read_bytes()
    width, height = struct.unpack_from("<HH", written, 12)
    assert (width, height) == (5, 3)
    assert written[18:] == payload


def test_write_container_does_not_create_file_on_bad_input(tmp_path: Path) -> None:
    target = tmp_path / "bad.tga"
    with pytest.raises(InvalidArgument):
        write_container(target, b"\x00" * 3, 1, 1)
    assert not target.exists()


def test_write_container_missing_directory_raises_oserror(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        write_container(tmp_path / "no" / "such" / "dir.tga", b"\x00" * 4, 1, 1)
