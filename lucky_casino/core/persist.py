"""Storage substrates, debounced saving and the progression load/save path."""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol

from .config import DATA_PATH, STORAGE_KEY
from .errors import MalformedStateError, PersistenceError
from .progression import PlayerProgression, from_document, initial_state, to_document

LOGGER = logging.getLogger(__name__)


class Storage(Protocol):
    """Single-key document store."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, document: Any) -> bool:
        ...


class JsonFileStorage:
    """Stores each key as ``<directory>/<key>.json``."""

    def __init__(self, directory: Path | str = DATA_PATH) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"could not read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise MalformedStateError(f"{path} is not valid JSON: {exc}") from exc

    def set(self, key: str, document: Any) -> bool:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(document, fh, indent=2)
                os.replace(tmp_name, path)
            finally:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"could not write {path}: {exc}") from exc
        return True


class MemoryStorage:
    """In-process store; documents are round-tripped through JSON."""

    def __init__(self) -> None:
        self.documents: Dict[str, str] = {}
        self.writes = 0

    def get(self, key: str) -> Optional[Any]:
        raw = self.documents.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MalformedStateError(f"stored value for {key!r} is not valid JSON") from exc

    def set(self, key: str, document: Any) -> bool:
        try:
            self.documents[key] = json.dumps(document)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"document for {key!r} is not serializable: {exc}") from exc
        self.writes += 1
        return True


class SaveScheduler(Protocol):
    """Runs a callback once an idle window passes without another request."""

    def schedule(self, callback: Callable[[], None]) -> None:
        ...

    def cancel(self) -> None:
        ...


class ThreadingSaveScheduler:
    """Debounces callbacks with :class:`threading.Timer`."""

    def __init__(self, delay: float = 1.0) -> None:
        self.delay = delay
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self.delay, self._fire, args=(callback,))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def _fire(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._timer is None or threading.current_thread() is not self._timer:
                return
            self._timer = None
        callback()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class ImmediateScheduler:
    """Runs every callback straight away."""

    def __init__(self) -> None:
        self.calls = 0

    def schedule(self, callback: Callable[[], None]) -> None:
        self.calls += 1
        callback()

    def cancel(self) -> None:
        pass


class ManualScheduler:
    """Holds the latest callback until :meth:`flush` is called."""

    def __init__(self) -> None:
        self.callback: Optional[Callable[[], None]] = None
        self.requests = 0

    @property
    def pending(self) -> bool:
        return self.callback is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        self.requests += 1
        self.callback = callback

    def cancel(self) -> None:
        self.callback = None

    def flush(self) -> None:
        callback, self.callback = self.callback, None
        if callback is not None:
            callback()


class ProgressionStore:
    """Loads and saves the progression record under one storage key."""

    def __init__(
        self,
        storage: Storage,
        key: str = STORAGE_KEY,
        *,
        starting_coins: int = 5000,
        leaderboard_size: int = 10,
    ) -> None:
        self.storage = storage
        self.key = key
        self.starting_coins = starting_coins
        self.leaderboard_size = leaderboard_size

    def load(self) -> PlayerProgression:
        """Return the saved record, or a fresh one if nothing usable is stored."""

        try:
            document = self.storage.get(self.key)
        except MalformedStateError as exc:
            LOGGER.warning("Discarding unreadable saved state: %s", exc)
            return initial_state(self.starting_coins)
        except PersistenceError as exc:
            LOGGER.warning("Saved state unavailable, starting fresh: %s", exc)
            return initial_state(self.starting_coins)
        if document is None:
            LOGGER.info("No saved state under %r, starting fresh", self.key)
            return initial_state(self.starting_coins)
        try:
            return from_document(document, leaderboard_size=self.leaderboard_size)
        except MalformedStateError as exc:
            LOGGER.warning("Discarding malformed saved state: %s", exc)
            return initial_state(self.starting_coins)

    def save(self, state: PlayerProgression) -> bool:
        try:
            saved = bool(self.storage.set(self.key, to_document(state)))
        except PersistenceError:
            LOGGER.exception("Failed to save casino state")
            return False
        if not saved:
            LOGGER.warning("Storage declined to save casino state")
        return saved


__all__ = [
    "Storage",
    "JsonFileStorage",
    "MemoryStorage",
    "SaveScheduler",
    "ThreadingSaveScheduler",
    "ImmediateScheduler",
    "ManualScheduler",
    "ProgressionStore",
]
