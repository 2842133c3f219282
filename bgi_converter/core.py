"""Внешний контракт ядра: определение формата, восстановление пикселей, запись TGA.

Тонкие функции над сервисами; их вызывают консоль, окно и пакетная конвертация.
"""
from __future__ import annotations

from pathlib import Path

from bgi_converter.models.image_model import ImageDescriptor, PixelBuffer
from bgi_converter.services.convert_service import ConvertService
from bgi_converter.services.detect_service import DetectService
from bgi_converter.services.source import Source
from bgi_converter.services.tga_service import TgaService


def detect(source: Source) -> ImageDescriptor:
    return DetectService().detect(source)


def convert(source: Source, descriptor: ImageDescriptor, *, honor_top_down: bool = False) -> PixelBuffer:
    return ConvertService(honor_top_down=honor_top_down).convert(source, descriptor)


def convert_to_canonical_buffer(
    path: str | Path, descriptor: ImageDescriptor, *, honor_top_down: bool = False
) -> PixelBuffer:
    return convert(Path(path), descriptor, honor_top_down=honor_top_down)


def serialize(buffer: PixelBuffer | bytes, width: int, height: int) -> bytes:
    return TgaService().serialize(buffer, width, height)


def write_container(path: str | Path, buffer: PixelBuffer | bytes, width: int, height: int) -> Path:
    return TgaService().write_container(path, buffer, width, height)
