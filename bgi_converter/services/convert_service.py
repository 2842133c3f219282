"""Восстановление пикселей: приведение любого известного формата к каноническому RGBA.

Принципы:
- SRP: сервис только интерпретирует пиксельные байты по дескриптору.
- Всё или ничего: либо полностью заполненный буфер, либо исключение.
"""
from __future__ import annotations

import logging

import numpy as np

from bgi_converter.models.errors import InvalidArgument, TruncatedPayload
from bgi_converter.models.image_model import (
    DirectRGBADescriptor,
    DirectRGBDescriptor,
    ImageDescriptor,
    PixelBuffer,
    StandardBitmapDescriptor,
)
from bgi_converter.services.source import Source, describe_source, read_source

logger = logging.getLogger(__name__)

OPAQUE = 255


def bitmap_row_stride(width: int, bits_per_pixel: int) -> int:
    """Длина строки BMP в байтах, выровненная до кратной 4."""
    bytes_per_pixel = bits_per_pixel // 8
    return ((width * bytes_per_pixel + 3) // 4) * 4


class ConvertService:
    def __init__(self, honor_top_down: bool = False) -> None:
        # по умолчанию строки BMP переворачиваются всегда, знак высоты не учитывается
        self.honor_top_down = honor_top_down

    def convert(self, source: Source, descriptor: ImageDescriptor) -> PixelBuffer:
        """Читает пиксели источника и возвращает канонический буфер.

        Args:
            source: Путь к файлу или байты (те же, что передавались в `detect`).
            descriptor: Результат `detect`.

        Returns:
            `PixelBuffer` формы (height, width, 4), строка 0 — верхняя.

        Raises:
            InvalidArgument: если дескриптор не описывает известный формат.
            TruncatedPayload: если пиксельных данных меньше, чем требует геометрия.
            OSError: если файл не удаётся прочитать.
        """
        if isinstance(descriptor, StandardBitmapDescriptor):
            data = read_source(source)
            pixels = self._bitmap_to_rgba(data, descriptor)
        elif isinstance(descriptor, DirectRGBADescriptor):
            data = read_source(source)
            pixels = self._direct_payload(data, descriptor, channels=4)
        elif isinstance(descriptor, DirectRGBDescriptor):
            data = read_source(source)
            rgb = self._direct_payload(data, descriptor, channels=3)
            alpha = np.full(rgb.shape[:2] + (1,), OPAQUE, dtype=np.uint8)
            pixels = np.concatenate([rgb, alpha], axis=2)
        else:
            raise InvalidArgument(f"Нельзя конвертировать нераспознанный формат: {describe_source(source)}")

        logger.info(
            "converted %s (%s, %dx%d)",
            describe_source(source), descriptor.kind.value, descriptor.width, descriptor.height,
        )
        return PixelBuffer(pixels=np.ascontiguousarray(pixels))

    # ---------- Вспомогательные функции ----------
    def _direct_payload(self, data: bytes, descriptor, channels: int) -> np.ndarray:
        """Пиксели BGI уже лежат сверху вниз, построчно, без выравнивания."""
        width, height = descriptor.width, descriptor.height
        expected = width * height * channels
        payload = data[descriptor.pixel_data_offset:descriptor.pixel_data_offset + expected]
        if len(payload) < expected:
            raise TruncatedPayload(expected, len(payload))
        return np.frombuffer(payload, dtype=np.uint8).reshape(height, width, channels).copy()

    def _bitmap_to_rgba(self, data: bytes, descriptor: StandardBitmapDescriptor) -> np.ndarray:
        width, height = descriptor.width, descriptor.height
        bytes_per_pixel = descriptor.bits_per_pixel // 8
        stride = bitmap_row_stride(width, descriptor.bits_per_pixel)

        if width == 0 or height == 0:
            return np.empty((height, width, 4), dtype=np.uint8)

        # проверка длины до любых выделений памяти; выравнивание последней строки не обязательно
        expected = stride * (height - 1) + width * bytes_per_pixel
        payload = data[descriptor.pixel_data_offset:descriptor.pixel_data_offset + stride * height]
        if len(payload) < expected:
            raise TruncatedPayload(expected, len(payload))
        payload = payload.ljust(stride * height, b"\x00")

        out = np.empty((height, width, 4), dtype=np.uint8)

        rows = np.frombuffer(payload, dtype=np.uint8).reshape(height, stride)
        px = rows[:, : width * bytes_per_pixel].reshape(height, width, bytes_per_pixel)

        # B,G,R[,A] -> R,G,B,A
        out[..., 0] = px[..., 2]
        out[..., 1] = px[..., 1]
        out[..., 2] = px[..., 0]
        out[..., 3] = px[..., 3] if bytes_per_pixel == 4 else OPAQUE

        if self.honor_top_down and descriptor.top_down:
            return out
        return out[::-1]
