"""Конвертация одного файла и пакетная конвертация папки.

Принципы:
- Файлы обрабатываются строго по очереди, каждый независимо.
- Ошибка одного файла фиксируется в `BatchResult` и не прерывает пакет.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from bgi_converter.config import ConverterSettings
from bgi_converter.models.errors import ConversionError, UnrecognizedFormat
from bgi_converter.models.image_model import BatchResult, FormatKind
from bgi_converter.services.convert_service import ConvertService
from bgi_converter.services.detect_service import DetectService
from bgi_converter.services.tga_service import TgaService

logger = logging.getLogger(__name__)


class BatchService:
    def __init__(self, settings: ConverterSettings | None = None) -> None:
        self.settings = settings or ConverterSettings()
        self._detector = DetectService()
        self._converter = ConvertService(honor_top_down=self.settings.honor_top_down)
        self._writer = TgaService()

    def default_output(self, input_path: str | Path) -> Path:
        path = Path(input_path)
        return path.with_name(path.name + self.settings.output_suffix)

    def convert_file(self, input_path: str | Path, output_path: str | Path | None = None) -> Path:
        """Определяет формат, восстанавливает пиксели и пишет TGA.

        Returns:
            Путь к созданному файлу.

        Raises:
            UnrecognizedFormat: если формат не распознан.
            TruncatedPayload: если данных меньше, чем требует геометрия.
            OSError: при ошибках чтения или записи.
        """
        src = Path(input_path)
        descriptor = self._detector.detect(src)
        if descriptor.kind is FormatKind.UNKNOWN:
            raise UnrecognizedFormat(f"Формат не распознан: {src}")

        buffer = self._converter.convert(src, descriptor)
        out = Path(output_path) if output_path else self.default_output(src)
        return self._writer.write_container(out, buffer, buffer.width, buffer.height)

    def find_candidates(self, folder: str | Path, pattern: Optional[str] = None) -> List[Path]:
        """Файлы папки, содержащие `pattern` в имени и распознанные детектором, по имени."""
        pattern = self.settings.pattern if pattern is None else pattern
        found: List[Path] = []
        for entry in Path(folder).iterdir():
            if not entry.is_file():
                continue
            if pattern and pattern not in entry.name:
                continue
            # заголовок TGA читается как BGI RGB 0x0, прошлые результаты не берём
            if entry.name.endswith(self.settings.output_suffix):
                continue
            try:
                descriptor = self._detector.detect(entry)
            except OSError as exc:
                logger.warning("Пропущен %s: %s", entry, exc)
                continue
            if descriptor.kind is not FormatKind.UNKNOWN:
                found.append(entry)
        return sorted(found, key=lambda p: p.name)

    def convert_folder(self, folder: str | Path, pattern: Optional[str] = None) -> BatchResult:
        result = BatchResult(candidates=self.find_candidates(folder, pattern))
        total = result.total
        for index, path in enumerate(result.candidates, start=1):
            logger.info("[%d/%d] %s", index, total, path.name)
            try:
                result.converted.append(self.convert_file(path))
            except (ConversionError, OSError) as exc:
                logger.warning("Не удалось конвертировать %s: %s", path, exc)
                result.failures.append((path, str(exc)))

        logger.info("Конвертировано: %d/%d", result.succeeded, total)
        return result
