"""Модели данных: описание формата файла и канонический RGBA-буфер.

Принципы:
- SRP: только структуры данных, без чтения файлов и без логики конвертации.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
- Дескриптор — сумма типов: у каждого формата свой класс, у `Unknown` нет геометрии.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Tuple, Union

import numpy as np
from PIL import Image


class FormatKind(Enum):
    UNKNOWN = "unknown"
    STANDARD_BITMAP = "standard_bitmap"
    DIRECT_RGBA = "direct_rgba"
    DIRECT_RGB = "direct_rgb"


# Размер собственного заголовка BGI: ширина, высота, тег формата, 8 байт резерва
BGI_HEADER_SIZE = 16


@dataclass(frozen=True)
class StandardBitmapDescriptor:
    """Файл Windows BMP (BITMAPINFOHEADER, 24/32 бита).

    Fields:
        width: Ширина, px.
        height: Высота, px (модуль значения из заголовка).
        bits_per_pixel: 24 или 32.
        pixel_data_offset: Смещение пиксельных данных от начала файла.
        top_down: Высота в заголовке была отрицательной (строки сверху вниз).
    """
    width: int
    height: int
    bits_per_pixel: int
    pixel_data_offset: int
    top_down: bool = False

    @property
    def kind(self) -> FormatKind:
        return FormatKind.STANDARD_BITMAP


@dataclass(frozen=True)
class DirectRGBADescriptor:
    """BGI с тегом 0x00000020: пиксели RGBA сверху вниз сразу после заголовка."""
    width: int
    height: int
    pixel_data_offset: int = BGI_HEADER_SIZE

    @property
    def kind(self) -> FormatKind:
        return FormatKind.DIRECT_RGBA

    @property
    def bits_per_pixel(self) -> int:
        return 32


@dataclass(frozen=True)
class DirectRGBDescriptor:
    """BGI с тегом 0x00000000: тройки RGB без альфы."""
    width: int
    height: int
    pixel_data_offset: int = BGI_HEADER_SIZE

    @property
    def kind(self) -> FormatKind:
        return FormatKind.DIRECT_RGB

    @property
    def bits_per_pixel(self) -> int:
        return 24


@dataclass(frozen=True)
class UnknownDescriptor:
    """Файл не распознан; геометрии нет."""

    @property
    def kind(self) -> FormatKind:
        return FormatKind.UNKNOWN


KnownDescriptor = Union[StandardBitmapDescriptor, DirectRGBADescriptor, DirectRGBDescriptor]
ImageDescriptor = Union[KnownDescriptor, UnknownDescriptor]


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Канонический буфер: RGBA, построчно, строка 0 — верхняя.

    Fields:
        pixels: Массив `uint8` формы (height, width, 4).
    """
    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def __len__(self) -> int:
        return int(self.pixels.size)

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def to_pil(self) -> Image.Image:
        """Возвращает копию буфера как изображение PIL в режиме RGBA (для превью)."""
        return Image.frombytes("RGBA", (self.width, self.height), self.to_bytes())


@dataclass(frozen=True)
class AnalysisReport:
    """Результат анализа файла: размер, распознанный формат и первые байты.

    Fields:
        path: Путь к файлу.
        size_bytes: Размер файла.
        descriptor: Результат `detect`.
        head: Первые байты файла (не более 64).
    """
    path: Path
    size_bytes: int
    descriptor: ImageDescriptor
    head: bytes


@dataclass
class BatchResult:
    """Итог пакетной конвертации папки."""
    candidates: List[Path] = field(default_factory=list)
    converted: List[Path] = field(default_factory=list)
    failures: List[Tuple[Path, str]] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.converted)

    @property
    def total(self) -> int:
        return len(self.candidates)
