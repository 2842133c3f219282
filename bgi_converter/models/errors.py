"""Ошибки конвертации.

Ошибки ввода-вывода не оборачиваются: наружу уходит стандартный `OSError`.
"""
from __future__ import annotations


class ConversionError(Exception):
    """Базовая ошибка ядра конвертера."""


class UnrecognizedFormat(ConversionError):
    """Детектор не смог определить формат файла."""


class TruncatedPayload(ConversionError):
    """Пиксельных данных меньше, чем требует геометрия."""

    def __init__(self, expected: int, available: int) -> None:
        super().__init__(f"Недостаточно пиксельных данных: нужно {expected} байт, доступно {available}")
        self.expected = expected
        self.available = available


class InvalidArgument(ConversionError, ValueError):
    """Нарушено предусловие вызова (например, конвертация `Unknown`)."""
