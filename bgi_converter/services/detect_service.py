"""Определение формата файла по заголовкам фиксированной раскладки.

Принципы:
- SRP: сервис только читает заголовки и возвращает дескриптор, пиксели не трогает.
- Порядок проверок фиксирован: сначала BMP, затем собственный заголовок BGI.
- Чистая функция: повторный вызов на тех же байтах даёт равный дескриптор.
"""
from __future__ import annotations

import logging
import struct

from bgi_converter.models.image_model import (
    BGI_HEADER_SIZE,
    DirectRGBADescriptor,
    DirectRGBDescriptor,
    ImageDescriptor,
    StandardBitmapDescriptor,
    UnknownDescriptor,
)
from bgi_converter.services.source import Source, describe_source, read_source

logger = logging.getLogger(__name__)

# BITMAPFILEHEADER (14 байт) + BITMAPINFOHEADER (40 байт), little-endian
BMP_FILE_HEADER = struct.Struct("<2sIII")
BMP_INFO_HEADER = struct.Struct("<IiiHHIIiiII")
BMP_SIGNATURE = b"BM"
SUPPORTED_BMP_BPP = (24, 32)

# width (u16), height (u16), format tag (u32), 8 байт резерва
BGI_HEADER = struct.Struct("<HHI8s")
BGI_TAG_RGBA = 0x00000020
BGI_TAG_RGB = 0x00000000

_PROBE_SIZE = max(BMP_FILE_HEADER.size + BMP_INFO_HEADER.size, BGI_HEADER.size)


class DetectService:
    def detect(self, source: Source) -> ImageDescriptor:
        """Классифицирует источник в один из известных форматов.

        Args:
            source: Путь к файлу или байты.

        Returns:
            Дескриптор формата; `UnknownDescriptor`, если ни одна раскладка не подошла.

        Raises:
            OSError: если файл не удаётся открыть или прочитать.
        """
        head = read_source(source, limit=_PROBE_SIZE)

        descriptor = self._probe_bitmap(head)
        if descriptor is None:
            descriptor = self._probe_bgi(head)

        logger.debug("detect %s -> %s", describe_source(source), descriptor)
        return descriptor

    def _probe_bitmap(self, head: bytes) -> ImageDescriptor | None:
        if len(head) < BMP_FILE_HEADER.size + BMP_INFO_HEADER.size:
            return None
        signature, _file_size, _reserved, data_offset = BMP_FILE_HEADER.unpack_from(head, 0)
        if signature != BMP_SIGNATURE:
            return None

        (_header_size, width, height, _planes, bpp,
         _compression, _image_size, _xppm, _yppm, _colors_used, _important) = BMP_INFO_HEADER.unpack_from(
            head, BMP_FILE_HEADER.size
        )
        # сигнатура совпала, но раскладка вне поддерживаемого семейства
        if bpp not in SUPPORTED_BMP_BPP or width < 0:
            logger.warning("BMP с неподдерживаемыми параметрами: %d бит, ширина %d", bpp, width)
            return UnknownDescriptor()

        return StandardBitmapDescriptor(
            width=width,
            height=abs(height),
            bits_per_pixel=bpp,
            pixel_data_offset=data_offset,
            top_down=height < 0,
        )

    def _probe_bgi(self, head: bytes) -> ImageDescriptor:
        if len(head) < BGI_HEADER.size:
            return UnknownDescriptor()
        width, height, tag, _reserved = BGI_HEADER.unpack_from(head, 0)
        if tag == BGI_TAG_RGBA:
            return DirectRGBADescriptor(width=width, height=height, pixel_data_offset=BGI_HEADER_SIZE)
        if tag == BGI_TAG_RGB:
            return DirectRGBDescriptor(width=width, height=height, pixel_data_offset=BGI_HEADER_SIZE)
        return UnknownDescriptor()
