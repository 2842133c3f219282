"""Консольный интерфейс: анализ, конвертация одного файла и пакетная конвертация."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from bgi_converter.config import ConverterSettings, load_settings
from bgi_converter.models.errors import ConversionError
from bgi_converter.services.analysis_service import AnalysisService, format_report
from bgi_converter.services.batch_service import BatchService

_SUPPORTED = (
    "BMP 24-bit (BGR)",
    "BMP 32-bit (BGRA)",
    "BGI RGBA (0x00000020)",
    "BGI RGB (0x00000000)",
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bgi-converter",
        description="Конвертер BGI/BMP в TGA. Поддерживаемые форматы: " + ", ".join(_SUPPORTED),
        epilog="Без аргументов открывается окно приложения.",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-a", "--analyze", metavar="FILE", help="Анализировать файл")
    mode.add_argument(
        "-x",
        "--extract",
        nargs="+",
        metavar="FILE",
        help="Конвертировать файл в TGA: FILE [OUTPUT] (по умолчанию FILE.tga)",
    )
    mode.add_argument(
        "-b",
        "--batch",
        nargs="?",
        const="",
        metavar="PATTERN",
        help="Конвертировать все распознанные файлы папки (необязательный фильтр по имени)",
    )
    parser.add_argument("--folder", default=".", help="Папка для пакетной конвертации. Default: .")
    parser.add_argument("--config", default=None, help="JSON-файл с настройками")
    parser.add_argument(
        "--honor-top-down",
        action="store_true",
        default=None,
        help="Не переворачивать BMP с отрицательной высотой (строки уже сверху вниз)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный лог")
    return parser


def _run_analyze(path: str) -> int:
    report = AnalysisService().analyze(path)
    for line in format_report(report):
        print(line)
    return 0


def _run_extract(service: BatchService, paths: List[str]) -> int:
    if len(paths) > 2:
        print("Использование: bgi-converter -x FILE [OUTPUT]", file=sys.stderr)
        return 1
    src = paths[0]
    dst = paths[1] if len(paths) == 2 else None
    out = service.convert_file(src, dst)
    print(f"TGA создан: {out}")
    return 0


def _run_batch(service: BatchService, folder: str, pattern: str) -> int:
    result = service.convert_folder(folder, pattern or None)
    if not result.candidates:
        print("Файлы BGI не найдены")
        if pattern:
            print(f"  Фильтр: {pattern}")
        return 0
    for path, message in result.failures:
        print(f"Ошибка: {path}: {message}", file=sys.stderr)
    print(f"Конвертировано: {result.succeeded}/{result.total}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config) if args.config else ConverterSettings()
        settings = settings.with_overrides(honor_top_down=args.honor_top_down)
        service = BatchService(settings)

        if args.analyze is not None:
            return _run_analyze(args.analyze)
        if args.extract is not None:
            return _run_extract(service, args.extract)
        return _run_batch(service, args.folder, args.batch)
    except (ConversionError, OSError, ValueError) as exc:
        print(f"Ошибка: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
