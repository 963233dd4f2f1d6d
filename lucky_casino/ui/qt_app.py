"""PyQt6 application bootstrap."""
from __future__ import annotations

from typing import Callable, Optional, Sequence

from PyQt6 import QtCore, QtWidgets

from ..core.config import CasinoConfig
from ..core.session import CasinoSession
from .lobby import LobbyWindow


class QtSaveScheduler:
    """Debounces saves on the Qt event loop with a single-shot QTimer."""

    def __init__(self, delay: float = 1.0) -> None:
        self._callback: Optional[Callable[[], None]] = None
        self._timer = QtCore.QTimer()
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(delay * 1000))
        self._timer.timeout.connect(self._fire)

    def schedule(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._callback = None

    def _fire(self) -> None:
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()


def launch_qt(config: CasinoConfig, argv: Sequence[str]) -> int:
    app = QtWidgets.QApplication(list(argv))
    session = CasinoSession(config, scheduler=QtSaveScheduler(config.save_debounce_seconds))
    app.aboutToQuit.connect(session.close)
    window = LobbyWindow(session)
    window.show()
    return app.exec()


__all__ = ["launch_qt", "QtSaveScheduler"]
