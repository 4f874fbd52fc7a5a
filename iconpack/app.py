

import customtkinter as ctk

from iconpack.config import PipelineSettings
from iconpack.controllers.app_controller import AppController
from iconpack.controllers.pipeline_controller import PipelineController
from iconpack.ui.preview_panel import PreviewPanel
from iconpack.ui.sidebar import Sidebar
from iconpack.ui.status_bar import StatusBar


class IconPackApp(ctk.CTk):
    def __init__(self, settings: PipelineSettings | None = None) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("PWA Icon Generator")
        self.minsize(800, 520)

        # root layout: left preview, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._preview = PreviewPanel(self)
        self._preview.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._status = StatusBar(self)
        self._status.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(
            preview=self._preview,
            sidebar=self._sidebar,
            status=self._status,
            window=self,
            pipeline=PipelineController(settings=settings or PipelineSettings.from_env()),
        )
        self._controller.bind_events()
