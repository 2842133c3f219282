from __future__ import annotations

import struct

import pytest


def _build_bgi(width: int, height: int, tag: int, payload: bytes = b"") -> bytes:
    return struct.pack("<HHI8s", width, height, tag, b"\x00" * 8) + payload


def _build_bmp(width: int, height: int, bpp: int, rows: bytes, offset: int = 54) -> bytes:
    gap = b"\x00" * (offset - 54)
    file_header = struct.pack("<2sIII", b"BM", offset + len(rows), 0, offset)
    info_header = struct.pack("<IiiHHIIiiII", 40, width, height, 1, bpp, 0, len(rows), 2835, 2835, 0, 0)
    return file_header + info_header + gap + rows


@pytest.fixture
def bgi_bytes():
    """Builder for headerless BGI files: (width, height, tag, payload) -> bytes."""
    return _build_bgi


@pytest.fixture
def bmp_bytes():
    """Builder for BITMAPINFOHEADER files: (width, height, bpp, rows, offset=54) -> bytes."""
    return _build_bmp
