"""Application bootstrap for the casino lobby."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .core.config import CasinoConfig, load_casino_config
from .core.session import CasinoSession

LOGGER = logging.getLogger(__name__)


def load_config(argv: list[str]) -> CasinoConfig:
    """Use a JSON config passed as the first argument, if there is one."""

    if len(argv) > 1:
        candidate = Path(argv[1]).expanduser()
        if candidate.exists():
            try:
                return load_casino_config(candidate)
            except ValueError as exc:
                LOGGER.warning("Ignoring invalid config %s: %s", candidate, exc)
        else:
            LOGGER.warning("Config file %s not found, using defaults", candidate)
    return CasinoConfig()


def run(argv: Optional[list[str]] = None) -> int:
    """Run the casino GUI application."""

    argv = list(sys.argv if argv is None else argv)
    config = load_config(argv)
    try:
        from .ui.qt_app import launch_qt
    except Exception as exc:  # pragma: no cover - Qt not available during tests
        LOGGER.warning("Falling back to Tkinter UI due to PyQt6 load failure")
        LOGGER.debug("PyQt6 import error: %s", exc)
        from .ui.tk_app import launch_tk

        session = CasinoSession(config)
        try:
            return launch_tk(session)
        except Exception:  # pragma: no cover - headless CI
            LOGGER.warning("Tkinter fallback unavailable")
            print("Unable to launch a graphical interface in this environment.")
            return 1
        finally:
            session.close()

    return launch_qt(config, argv)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run())


__all__ = ["run", "load_config"]
