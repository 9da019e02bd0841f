"""Deduplicated log of user actions on jobs, persisted through a key-value port."""
from __future__ import annotations

import fcntl
import json
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Protocol

from gigfeed.log import get_logger
from gigfeed.models import Interaction, InteractionAction

log = get_logger(__name__)

INTERACTIONS_KEY = "job_interactions"


def now_ms() -> int:
    return int(time.time() * 1000)


class StoragePort(Protocol):
    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class MemoryStorage:
    """Dict-backed port; values round-trip through JSON like a real store."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {k: json.dumps(v) for k, v in (initial or {}).items()}

    def get(self, key: str) -> Any:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)


@contextmanager
def _flocked(f, exclusive: bool = True) -> Iterator[None]:
    """Hold an advisory fcntl lock on *f* for the block; no-op where unsupported."""
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
    except (OSError, AttributeError):
        pass
    try:
        yield
    finally:
        try:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except (OSError, AttributeError):
            pass


class JsonFileStorage:
    """One JSON document on disk, each key a top-level field.

    Writes go to a sibling temp file that is then renamed over the document,
    so a crash mid-write never leaves a truncated file behind. An unreadable
    document is moved aside to ``<name>.bak`` and replaced on the next write.
    Write failures are logged and swallowed: callers keep their in-memory state.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            with _flocked(f, exclusive=False):
                raw = f.read()
        if not raw.strip():
            return {}
        data = json.loads(raw)
        return data if isinstance(data, dict) else {}

    def _read_for_update(self) -> dict[str, Any]:
        try:
            return self._read_all()
        except ValueError as exc:
            backup = self.path.with_name(self.path.name + ".bak")
            log.warning("Store %s is corrupt (%s); moving it to %s", self.path, exc, backup.name)
            os.replace(self.path, backup)
            return {}

    def get(self, key: str) -> Any:
        return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            data = self._read_for_update()
            data[key] = value
            with open(tmp, "w", encoding="utf-8") as f:
                with _flocked(f):
                    json.dump(data, f, indent=2, sort_keys=True)
                    f.flush()
                    os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as exc:
            log.error("Failed to persist %r to %s: %s", key, self.path, exc)


def _parse_entry(raw: Any) -> Interaction | None:
    try:
        return Interaction(
            job_id=str(raw["job_id"]),
            action=InteractionAction(raw["action"]),
            timestamp=int(raw["timestamp"]),
        )
    except (KeyError, TypeError, ValueError):
        return None


class InteractionLog:
    """At most one entry per (job_id, action); repeats refresh the timestamp.

    The in-memory list is authoritative. Each record() flushes the whole log
    to the storage port, optionally on a single background worker.
    """

    def __init__(
        self,
        storage: StoragePort,
        *,
        key: str = INTERACTIONS_KEY,
        clock: Callable[[], int] = now_ms,
        background_flush: bool = False,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: list[Interaction] = self._load()
        self._executor = ThreadPoolExecutor(max_workers=1) if background_flush else None
        self._pending: list[Future] = []

    def _load(self) -> list[Interaction]:
        try:
            raw = self._storage.get(self._key)
        except Exception as exc:
            log.warning("Could not read interaction log %r: %s", self._key, exc)
            return []
        if not raw:
            return []
        if not isinstance(raw, list):
            log.warning("Interaction log %r is not a list; starting empty", self._key)
            return []

        entries: list[Interaction] = []
        skipped = 0
        for item in raw:
            entry = _parse_entry(item)
            if entry is None:
                skipped += 1
                continue
            entries.append(entry)
        if skipped:
            log.warning("Skipped %d malformed interaction(s) in %r", skipped, self._key)
        log.debug("Loaded %d interaction(s)", len(entries))
        return entries

    def record(self, job_id: str, action: InteractionAction | str) -> Interaction:
        act = InteractionAction(action)
        entry = Interaction(job_id=job_id, action=act, timestamp=self._clock())
        with self._lock:
            entries = [e for e in self._entries if not (e.job_id == job_id and e.action == act)]
            entries.append(entry)
            self._entries = entries
            # queued under the lock so writes reach storage in record order
            self._persist([e.to_dict() for e in entries])
        log.debug("Recorded %s on %s", act.value, job_id)
        return entry

    def all(self) -> tuple[Interaction, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _persist(self, payload: list[dict]) -> None:
        # caller holds self._lock
        if self._executor is None:
            self._write(payload)
            return
        pending = [f for f in self._pending if not f.done()]
        pending.append(self._executor.submit(self._write, payload))
        self._pending = pending

    def _write(self, payload: list[dict]) -> None:
        try:
            self._storage.set(self._key, payload)
        except Exception as exc:
            log.error("Interaction log flush failed: %s", exc)

    def flush(self) -> None:
        """Block until queued background writes are done."""
        with self._lock:
            pending, self._pending = self._pending, []
        for fut in pending:
            fut.result()

    def close(self) -> None:
        if self._executor is not None:
            self.flush()
            self._executor.shutdown(wait=True)
            self._executor = None
