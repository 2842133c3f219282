from typing import Optional

import customtkinter as ctk

from bgi_converter.config import ConverterSettings
from bgi_converter.controllers.app_controller import AppController
from bgi_converter.ui.bottom_bar import BottomBar
from bgi_converter.ui.image_viewer import ImageViewer
from bgi_converter.ui.sidebar import Sidebar


class BgiConverterApp(ctk.CTk):
    def __init__(self, settings: Optional[ConverterSettings] = None) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("BGI Converter")
        self.minsize(900, 600)

        # root layout: left viewer, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(
            viewer=self._viewer,
            sidebar=self._sidebar,
            bottom=self._bottom,
            window=self,
            settings=settings or ConverterSettings(),
        )
        self._controller.bind_events()
