"""Контроллер приложения: оркестрация UI и сервисов конвертера.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без разбора форматов).
- DIP: зависит от сервисов как от ролей; конкретные реализации инкапсулированы.
Clean Code:
- Обработчики компактны; вся работа с байтами вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import TclError, filedialog
from typing import Optional, Tuple

import customtkinter as ctk

from bgi_converter.config import ConverterSettings
from bgi_converter.models.errors import ConversionError
from bgi_converter.models.image_model import FormatKind, PixelBuffer
from bgi_converter.services.analysis_service import AnalysisService, describe_format
from bgi_converter.services.batch_service import BatchService
from bgi_converter.services.convert_service import ConvertService
from bgi_converter.services.tga_service import TgaService
from bgi_converter.ui.bottom_bar import BottomBar
from bgi_converter.ui.image_viewer import ImageViewer
from bgi_converter.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с ядром конвертера.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Анализ и конвертация открытого файла, предпросмотр канонического буфера.
    - Сохранение в TGA и пакетная конвертация папки.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    settings: ConverterSettings = field(default_factory=ConverterSettings)
    _analysis_service: AnalysisService = field(default_factory=AnalysisService)
    _tga_service: TgaService = field(default_factory=TgaService)
    _current_path: Optional[Path] = None
    _current_buffer: Optional[PixelBuffer] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_export = self._handle_export
        self.sidebar.on_batch = self._handle_batch
        self.sidebar.on_top_down_change = self._handle_top_down_change

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self.bottom.set_zoom_percent

        self.bottom.on_zoom_change = self.viewer.set_zoom_percent
        self.bottom.on_zoom_preset = self.viewer.set_zoom_percent
        self.bottom.on_zoom_fit = self._handle_zoom_fit

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                parent=self.window,
                title="Выберите файл BGI или BMP",
                filetypes=(("All files", "*.*"), ("Bitmap", "*.bmp")),
            )
        except TclError:
            return
        if not file_path:
            return
        self.load_file(Path(file_path))

    def _handle_export(self) -> None:
        if self._current_buffer is None or self._current_path is None:
            return
        default = self._current_path.name + self.settings.output_suffix
        try:
            out_path = filedialog.asksaveasfilename(
                parent=self.window,
                title="Сохранить TGA",
                initialdir=str(self._current_path.parent),
                initialfile=default,
                defaultextension=".tga",
                filetypes=(("TGA", "*.tga"), ("All files", "*.*")),
            )
        except TclError:
            return
        if not out_path:
            return

        buf = self._current_buffer
        try:
            written = self._tga_service.write_container(out_path, buf, buf.width, buf.height)
        except (ConversionError, OSError) as exc:
            self.bottom.set_status(f"Ошибка записи: {exc}", error=True)
            return
        self.bottom.set_status(f"TGA создан: {written.name}")

    def _handle_batch(self) -> None:
        try:
            folder = filedialog.askdirectory(parent=self.window, title="Папка с файлами BGI")
        except TclError:
            return
        if not folder:
            return

        pattern = self.sidebar.get_pattern()
        result = BatchService(self.settings).convert_folder(folder, pattern)
        if not result.candidates:
            suffix = f" (фильтр: {pattern})" if pattern else ""
            self.bottom.set_status(f"Файлы BGI не найдены{suffix}", error=True)
            return
        self.bottom.set_status(
            f"Конвертировано: {result.succeeded}/{result.total}",
            error=bool(result.failures),
        )

    def _handle_top_down_change(self, honor: bool) -> None:
        self.settings = self.settings.with_overrides(honor_top_down=honor)
        if self._current_path is not None:
            self.load_file(self._current_path)

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgba)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    # ---- Helpers ----
    def load_file(self, path: Path) -> None:
        """Анализирует файл и, если формат известен, показывает канонический буфер."""
        self._current_path = path
        self._current_buffer = None
        self.sidebar.set_export_enabled(False)

        try:
            report = self._analysis_service.analyze(path)
        except OSError as exc:
            self.sidebar.set_report(None)
            self.viewer.set_image(None)
            self.bottom.set_status(f"Ошибка чтения: {exc}", error=True)
            return
        self.sidebar.set_report(report)

        descriptor = report.descriptor
        if descriptor.kind is FormatKind.UNKNOWN:
            self.viewer.set_image(None)
            self.bottom.set_status("Формат не распознан", error=True)
            return

        try:
            buffer = ConvertService(honor_top_down=self.settings.honor_top_down).convert(path, descriptor)
        except (ConversionError, OSError) as exc:
            logger.warning("Предпросмотр %s не удался: %s", path, exc)
            self.viewer.set_image(None)
            self.bottom.set_status(str(exc), error=True)
            return

        self._current_buffer = buffer
        self.viewer.set_image(buffer.to_pil())
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
        self.sidebar.set_export_enabled(True)
        self.bottom.set_status(f"{describe_format(descriptor)}, {buffer.width}x{buffer.height}")
