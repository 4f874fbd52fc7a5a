from __future__ import annotations

import customtkinter as ctk

from iconpack.models.pipeline_model import PipelineState

_STATUS_TEXT = {
    PipelineState.IDLE: "Готово к работе",
    PipelineState.RUNNING: "Конвертация…",
    PipelineState.SUCCEEDED: "Готово! Архив с иконками можно сохранить.",
    PipelineState.FAILED: "Ошибка конвертации",
}

_STATUS_COLOR = {
    PipelineState.SUCCEEDED: "#22c55e",
    PipelineState.FAILED: "#ef4444",
}


class StatusBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=48, **kwargs)

        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)  # text stretches

        self._status_value = ctk.StringVar(value=_STATUS_TEXT[PipelineState.IDLE])
        self._status_label = ctk.CTkLabel(self, textvariable=self._status_value, anchor="w")
        self._status_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="ew")
        self._default_color = self._status_label.cget("text_color")

        # progress (hidden until a run starts)
        self._progress = ctk.CTkProgressBar(self, mode="indeterminate", width=160)
        self._toggle_progress(visible=False)

    # public API (sync from controller)
    def set_state(self, state: PipelineState, detail: str | None = None) -> None:
        text = _STATUS_TEXT[state]
        if detail:
            text = f"{text}: {detail}"
        self._status_value.set(text)
        self._status_label.configure(text_color=_STATUS_COLOR.get(state, self._default_color))
        self._toggle_progress(visible=(state is PipelineState.RUNNING))

    # helpers
    def _toggle_progress(self, visible: bool) -> None:
        if visible:
            self._progress.grid(row=0, column=1, padx=(6, 10), pady=8, sticky="e")
            self._progress.start()
        else:
            self._progress.stop()
            self._progress.grid_remove()
