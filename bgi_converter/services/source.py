"""Чтение байтов из источника: путь к файлу или уже загруженные байты."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

Source = Union[str, Path, bytes, bytearray, memoryview]


def read_source(source: Source, limit: Optional[int] = None) -> bytes:
    """Возвращает содержимое источника (или первые `limit` байт).

    Raises:
        OSError: если файл не удаётся открыть или прочитать.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        return data if limit is None else data[:limit]

    with open(Path(source), "rb") as fh:
        return fh.read() if limit is None else fh.read(limit)


def describe_source(source: Source) -> str:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return f"<{len(source)} bytes>"
    return str(source)
