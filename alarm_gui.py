import logging
import tkinter as tk
from tkinter import messagebox, ttk

from alarms import AlarmController, DisplayEvent, EventKind, QueueDisplay, TimeUnit

logger = logging.getLogger(__name__)

APP_TITLE = "Alarm Clock with Sound"
PROMPT_STATUS = "Enter time for the alarm:"
IDLE_COUNTDOWN = "--:--"
POLL_MS = 50


class AlarmWindow:
    """Tk front end: the only consumer of the controller's display channel."""

    def __init__(
        self,
        master: tk.Tk,
        controller: AlarmController,
        display: QueueDisplay,
        default_unit: TimeUnit = TimeUnit.MINUTES,
    ) -> None:
        self.master = master
        self.controller = controller
        self.display = display
        self._alerting = False

        master.title(APP_TITLE)
        master.geometry("400x220")
        master.resizable(False, False)

        frame = ttk.Frame(master, padding=8)
        frame.pack(expand=True)

        self.status_var = tk.StringVar(value=PROMPT_STATUS)
        self.countdown_var = tk.StringVar(value=self._countdown_text(IDLE_COUNTDOWN))
        self.value_var = tk.StringVar()
        self.unit_var = tk.StringVar(value=default_unit.value)

        ttk.Label(frame, textvariable=self.status_var, font=("Segoe UI", 14, "bold")).grid(
            row=0, column=0, columnspan=2, pady=8
        )
        entry = ttk.Entry(frame, textvariable=self.value_var, width=8, justify="center", font=("Segoe UI", 14))
        entry.grid(row=1, column=0, padx=8, pady=8)
        entry.bind("<Return>", lambda _event: self.on_set_alarm())
        ttk.Combobox(
            frame,
            textvariable=self.unit_var,
            values=[TimeUnit.MINUTES.value, TimeUnit.SECONDS.value],
            state="readonly",
            width=10,
        ).grid(row=1, column=1, padx=8, pady=8)
        ttk.Button(frame, text="Set Alarm", command=self.on_set_alarm).grid(row=2, column=0, columnspan=2, pady=8)
        ttk.Label(frame, textvariable=self.countdown_var, font=("Segoe UI", 14)).grid(
            row=3, column=0, columnspan=2, pady=8
        )

        entry.focus_set()
        self._schedule_poll()

    def on_set_alarm(self) -> None:
        alarm = self.controller.set_alarm(self.value_var.get(), self.unit_var.get())
        if alarm is None:
            self.countdown_var.set(self._countdown_text(IDLE_COUNTDOWN))

    def handle_event(self, event: DisplayEvent) -> None:
        if event.kind is EventKind.STATUS:
            self.status_var.set(event.text)
        elif event.kind is EventKind.COUNTDOWN:
            self.countdown_var.set(self._countdown_text(event.text))
        elif event.kind is EventKind.COMPLETION:
            # Reports queued behind the completion wait until the popup is dismissed.
            self._alerting = True
            try:
                messagebox.showwarning("ALARM ALERT!", event.text, parent=self.master)
            finally:
                self._alerting = False
            self.countdown_var.set(self._countdown_text(IDLE_COUNTDOWN))

    def run(self) -> None:
        self.master.mainloop()

    def _schedule_poll(self) -> None:
        self.master.after(POLL_MS, self._poll)

    def _poll(self) -> None:
        if not self._alerting:
            self.display.drain(self.handle_event)
        self._schedule_poll()

    @staticmethod
    def _countdown_text(value: str) -> str:
        return f"Countdown: {value}"
