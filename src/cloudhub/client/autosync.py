"""Debounced full-overwrite saving of a user's collections.

Front ends call :meth:`AutoSync.schedule` on every local edit. Only the
latest list is kept, and it is sent once the edits pause for ``delay``
seconds. Each save replaces the whole collection on the server, so a
dropped intermediate list never loses data.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from cloudhub.config import get_autosave_delay
from cloudhub.constants import CollectionKind

if TYPE_CHECKING:
    from cloudhub.client.api_client import CloudHubClient

logger = logging.getLogger(__name__)

Items = Sequence[Mapping[str, Any]]


class AutoSync:
    """Debounce saves of one collection.

    Args:
        save_fn: Called with the latest list when the timer fires.
        delay: Quiet period in seconds. Defaults to ``CLOUDHUB_AUTOSAVE_DELAY``.
        name: Label used in log messages.
    """

    def __init__(
        self,
        save_fn: Callable[[Items], Any],
        delay: float | None = None,
        name: str = "collection",
    ) -> None:
        self._save_fn = save_fn
        self.delay = get_autosave_delay() if delay is None else delay
        self.name = name
        self._lock = threading.Lock()
        # Held from taking the pending list until its save returns, so saves
        # reach the server in the order their lists were taken
        self._save_lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: list[Mapping[str, Any]] | None = None
        self.last_error: Exception | None = None
        self.save_count = 0

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def schedule(self, items: Items) -> None:
        """Remember ``items`` and restart the debounce timer."""
        with self._lock:
            self._pending = list(items)
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _take_pending(self) -> list[Mapping[str, Any]] | None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            items, self._pending = self._pending, None
            return items

    def _fire(self) -> None:
        with self._save_lock:
            self._save(self._take_pending())

    def _save(self, items: list[Mapping[str, Any]] | None) -> bool:
        if items is None:
            return False
        try:
            self._save_fn(items)
        except Exception as exc:
            # Failures surface through last_error; the next edit retries with fresh data
            logger.warning("Auto-save of %s failed: %s", self.name, exc)
            self.last_error = exc
            return False
        self.last_error = None
        self.save_count += 1
        logger.debug("Auto-saved %d %s", len(items), self.name)
        return True

    def flush(self) -> bool:
        """Save the pending list now.

        Returns:
            True if a list was pending and saved successfully.
        """
        with self._save_lock:
            return self._save(self._take_pending())

    def cancel(self) -> None:
        """Drop the pending list without saving it."""
        self._take_pending()


class SyncSession:
    """One :class:`AutoSync` per collection, bound to a client and user."""

    def __init__(
        self,
        client: CloudHubClient,
        email: str,
        delay: float | None = None,
    ) -> None:
        self.client = client
        self.email = email
        self.syncers: dict[CollectionKind, AutoSync] = {
            kind: AutoSync(self._saver(kind), delay=delay, name=kind.value)
            for kind in CollectionKind
        }

    def _saver(self, kind: CollectionKind) -> Callable[[Items], Any]:
        def save(items: Items) -> Any:
            return self.client.save_collection(kind.value, self.email, items)

        return save

    def update(self, kind: CollectionKind | str, items: Items) -> None:
        """Record a local change to a collection."""
        self.syncers[CollectionKind(kind)].schedule(items)

    def flush(self) -> dict[str, bool]:
        """Save every pending collection immediately, e.g. before logout."""
        return {kind.value: syncer.flush() for kind, syncer in self.syncers.items()}

    def cancel(self) -> None:
        for syncer in self.syncers.values():
            syncer.cancel()

    def errors(self) -> dict[str, Exception]:
        return {
            kind.value: syncer.last_error
            for kind, syncer in self.syncers.items()
            if syncer.last_error is not None
        }
