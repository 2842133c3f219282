"""Анализ файла: размер, распознанный формат и hex-дамп начала файла."""
from __future__ import annotations

from pathlib import Path
from typing import List

from bgi_converter.models.image_model import AnalysisReport, FormatKind, ImageDescriptor
from bgi_converter.services.detect_service import DetectService

HEAD_SIZE = 64
BYTES_PER_LINE = 16

_FORMAT_LABELS = {
    FormatKind.DIRECT_RGBA: "BGI RGBA (0x00000020)",
    FormatKind.DIRECT_RGB: "BGI RGB (0x00000000)",
    FormatKind.UNKNOWN: "Неизвестный формат",
}


def describe_format(descriptor: ImageDescriptor) -> str:
    """Короткое название формата для отчётов и интерфейса."""
    if descriptor.kind is FormatKind.STANDARD_BITMAP:
        return "BMP 24-bit (BGR)" if descriptor.bits_per_pixel == 24 else "BMP 32-bit (BGRA)"
    return _FORMAT_LABELS[descriptor.kind]


def format_hex_dump(data: bytes, bytes_per_line: int = BYTES_PER_LINE) -> List[str]:
    """Строки вида `0000: 42 4D 36 00 ...`."""
    lines = []
    for offset in range(0, len(data), bytes_per_line):
        chunk = data[offset:offset + bytes_per_line]
        lines.append(f"{offset:04X}: " + " ".join(f"{b:02X}" for b in chunk))
    return lines


def format_report(report: AnalysisReport) -> List[str]:
    """Текстовое представление отчёта (для консоли и боковой панели)."""
    d = report.descriptor
    lines = [
        f"Файл: {report.path}",
        f"Размер: {report.size_bytes} байт",
        f"Формат: {describe_format(d)}",
    ]
    if d.kind is not FormatKind.UNKNOWN:
        lines.append(f"Размеры: {d.width} x {d.height}")
        lines.append(f"BPP: {d.bits_per_pixel}")
        lines.append(f"Смещение данных: {d.pixel_data_offset}")
    lines.append(f"Первые {len(report.head)} байт:")
    lines.extend(format_hex_dump(report.head))
    return lines


class AnalysisService:
    def __init__(self, detector: DetectService | None = None) -> None:
        self._detector = detector or DetectService()

    def analyze(self, file_path: str | Path) -> AnalysisReport:
        """Собирает отчёт по файлу.

        Raises:
            OSError: если файл не удаётся открыть или прочитать.
        """
        path = Path(file_path)
        with open(path, "rb") as fh:
            head = fh.read(HEAD_SIZE)
        return AnalysisReport(
            path=path,
            size_bytes=path.stat().st_size,
            descriptor=self._detector.detect(path),
            head=head,
        )
