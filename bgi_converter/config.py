"""Настройки конвертера и их загрузка из JSON."""
from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ConverterSettings:
    """Параметры запуска.

    Fields:
        output_suffix: Суффикс, добавляемый к имени входного файла.
        pattern: Подстрока-фильтр имён для пакетной конвертации.
        honor_top_down: Не переворачивать BMP с отрицательной высотой.
    """
    output_suffix: str = ".tga"
    pattern: str = ""
    honor_top_down: bool = False

    def with_overrides(self, **overrides: Any) -> "ConverterSettings":
        """Копия настроек; значения `None` не переопределяют текущие."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_settings(path: str | Path) -> ConverterSettings:
    """Загружает настройки из JSON-объекта.

    Raises:
        ValueError: если верхний уровень не объект, ключ неизвестен или тип значения неверен.
        OSError: если файл не удаётся прочитать.
    """
    config_path = Path(path)
    with config_path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Некорректный JSON в {str(config_path)!r}: {exc}") from exc

    if data is None:
        return ConverterSettings()
    if not isinstance(data, dict):
        raise ValueError(
            "Настройки должны быть JSON-объектом на верхнем уровне, "
            f"получено {type(data).__name__} из {str(config_path)!r}."
        )

    known = {f.name: f for f in fields(ConverterSettings)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ValueError(f"Неизвестные ключи настроек: {unknown}. Допустимые: {', '.join(sorted(known))}")

    defaults = ConverterSettings()
    for key, value in data.items():
        expected_type = type(getattr(defaults, key))
        if not isinstance(value, expected_type):
            raise ValueError(f"{key!r} должен быть {expected_type.__name__}, получено {type(value).__name__}")

    return ConverterSettings(**data)
