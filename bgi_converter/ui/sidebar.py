"""Боковая панель: открытие файла, конвертация, информация о формате, hex-дамп.

Принципы:
- SRP: управляет только UI, не содержит логики чтения и конвертации.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk

from bgi_converter.models.image_model import AnalysisReport, FormatKind
from bgi_converter.services.analysis_service import describe_format, format_hex_dump


def _rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    """Преобразует RGBA в HEX (без альфа)."""
    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, курсор, hex-дамп, пакетная конвертация."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=300, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_export: Optional[Callable[[], None]] = None
        self.on_batch: Optional[Callable[[], None]] = None
        self.on_top_down_change: Optional[Callable[[bool], None]] = None

        bold = ctk.CTkFont(size=16, weight="bold")

        # Файл
        self._title = ctk.CTkLabel(self, text="Файл", font=bold)
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть файл…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._export_btn = ctk.CTkButton(self, text="Сохранить как TGA…", command=self._emit_export, state="disabled")
        self._export_btn.grid(row=2, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._top_down_var = ctk.BooleanVar(value=False)
        self._top_down_check = ctk.CTkCheckBox(
            self,
            text="Учитывать знак высоты BMP",
            variable=self._top_down_var,
            command=self._emit_top_down_change,
        )
        self._top_down_check.grid(row=3, column=0, padx=8, pady=(0, 12), sticky="w")

        # Информация
        self._info_title = ctk.CTkLabel(self, text="Информация", font=bold)
        self._info_title.grid(row=4, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._format_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._offset_val = ctk.StringVar(value="—")

        info_vars = (self._path_val, self._size_val, self._format_val, self._dims_val, self._offset_val)
        for i, var in enumerate(info_vars):
            label = ctk.CTkLabel(self, textvariable=var, wraplength=270, anchor="w", justify="left")
            label.grid(row=5 + i, column=0, padx=8, pady=(0, 2), sticky="ew")

        # Курсор
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=bold)
        self._cursor_title.grid(row=10, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgba_val = ctk.StringVar(value="—")
        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_rgba = ctk.CTkLabel(self, textvariable=self._cursor_rgba_val, anchor="w", justify="left")
        self._cursor_xy.grid(row=11, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_rgba.grid(row=12, column=0, padx=8, pady=(0, 2), sticky="ew")

        # Hex-дамп первых байт
        self._hex_title = ctk.CTkLabel(self, text="Первые 64 байта", font=bold)
        self._hex_title.grid(row=13, column=0, padx=8, pady=(8, 4), sticky="w")
        self._hex_box = ctk.CTkTextbox(self, height=110, font=ctk.CTkFont(family="Courier", size=11), wrap="none")
        self._hex_box.grid(row=14, column=0, padx=8, pady=(0, 8), sticky="nsew")
        self._hex_box.configure(state="disabled")
        self.grid_rowconfigure(14, weight=1)

        # Пакетная конвертация
        self._batch_title = ctk.CTkLabel(self, text="Пакетная конвертация", font=bold)
        self._batch_title.grid(row=15, column=0, padx=8, pady=(8, 4), sticky="w")
        self._pattern_val = ctk.StringVar(value="")
        self._pattern_entry = ctk.CTkEntry(self, textvariable=self._pattern_val, placeholder_text="Фильтр имени (например, SGTitle)")
        self._pattern_entry.grid(row=16, column=0, padx=8, pady=(0, 6), sticky="ew")
        self._batch_btn = ctk.CTkButton(self, text="Конвертировать папку…", command=self._emit_batch)
        self._batch_btn.grid(row=17, column=0, padx=8, pady=(0, 8), sticky="ew")

    # ---- Public API ----
    def set_report(self, report: Optional[AnalysisReport]) -> None:
        """Заполняет блок информации и hex-дамп; `None` сбрасывает их."""
        if report is None:
            for var in (self._path_val, self._size_val, self._format_val, self._dims_val, self._offset_val):
                var.set("—")
            self._set_hex_text("")
            self.set_export_enabled(False)
            return

        d = report.descriptor
        self._path_val.set(f"Файл: {report.path}")
        self._size_val.set(f"Размер: {report.size_bytes} байт")
        self._format_val.set(f"Формат: {describe_format(d)}")
        if d.kind is FormatKind.UNKNOWN:
            self._dims_val.set("Размеры: —")
            self._offset_val.set("Смещение данных: —")
        else:
            self._dims_val.set(f"Размеры: {d.width} x {d.height}, {d.bits_per_pixel} бит")
            self._offset_val.set(f"Смещение данных: {d.pixel_data_offset}")
        self._set_hex_text("\n".join(format_hex_dump(report.head)))

    def set_export_enabled(self, enabled: bool) -> None:
        self._export_btn.configure(state="normal" if enabled else "disabled")

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        if x is None or y is None or rgba is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgba_val.set("—")
            return
        r, g, b, a = rgba
        self._cursor_xy_val.set(f"X: {x}  Y: {y}")
        self._cursor_rgba_val.set(f"RGBA: {r}, {g}, {b}, {a}  {_rgba_to_hex(rgba)}")

    def get_pattern(self) -> str:
        return self._pattern_val.get().strip()

    def get_honor_top_down(self) -> bool:
        return bool(self._top_down_var.get())

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_export(self) -> None:
        if self.on_export:
            self.on_export()

    def _emit_batch(self) -> None:
        if self.on_batch:
            self.on_batch()

    def _emit_top_down_change(self) -> None:
        if self.on_top_down_change:
            self.on_top_down_change(self.get_honor_top_down())

    # ---- Helpers ----
    def _set_hex_text(self, text: str) -> None:
        self._hex_box.configure(state="normal")
        self._hex_box.delete("1.0", "end")
        self._hex_box.insert("1.0", text)
        self._hex_box.configure(state="disabled")
