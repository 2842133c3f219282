"""Запись канонического буфера в несжатый TGA (32 бита, начало координат сверху)."""
from __future__ import annotations

import logging
import struct
from pathlib import Path

from bgi_converter.models.errors import InvalidArgument
from bgi_converter.models.image_model import PixelBuffer

logger = logging.getLogger(__name__)

# id length, colormap type, image type, colormap spec (5), x/y origin, width, height, depth, descriptor
TGA_HEADER = struct.Struct("<BBB5sHHHHBB")
TGA_UNCOMPRESSED_TRUE_COLOR = 2
TGA_PIXEL_DEPTH = 32
TGA_TOP_DOWN_8BIT_ALPHA = 0x20
_MAX_DIMENSION = 0xFFFF


class TgaService:
    def serialize(self, buffer: PixelBuffer | bytes, width: int, height: int) -> bytes:
        """Возвращает 18-байтный заголовок TGA и байты RGBA без изменений."""
        if not (0 <= width <= _MAX_DIMENSION and 0 <= height <= _MAX_DIMENSION):
            raise InvalidArgument(f"Размер {width}x{height} не помещается в 16-битные поля TGA")
        raw = buffer.to_bytes() if isinstance(buffer, PixelBuffer) else bytes(buffer)
        if len(raw) != width * height * 4:
            raise InvalidArgument(
                f"Длина буфера {len(raw)} не равна {width}x{height}x4 = {width * height * 4}"
            )

        header = TGA_HEADER.pack(
            0,
            0,
            TGA_UNCOMPRESSED_TRUE_COLOR,
            b"\x00" * 5,
            0,
            0,
            width,
            height,
            TGA_PIXEL_DEPTH,
            TGA_TOP_DOWN_8BIT_ALPHA,
        )
        return header + raw

    def write_container(self, path: str | Path, buffer: PixelBuffer | bytes, width: int, height: int) -> Path:
        """Сериализует буфер и записывает его на диск.

        Raises:
            InvalidArgument: если размеры не согласованы с буфером.
            OSError: если файл не удаётся записать.
        """
        # сначала сериализация: при ошибке файл не создаётся
        payload = self.serialize(buffer, width, height)
        out_path = Path(path)
        with open(out_path, "wb") as fh:
            fh.write(payload)
        logger.info("TGA создан: %s (%dx%d)", out_path, width, height)
        return out_path
