from __future__ import annotations

from dns_control.app.record_cache import RecordCacheStore
from dns_control.app.signal import Signal
from dns_control.app.state import RecordCacheKey


class SelectionController:
    """Multi-select over the records currently loaded for one key.

    The selection is kept a subset of the loaded record ids: whenever the
    cache drops ids (delete, fresh load, invalidation) they leave the
    selection too. ``select_all`` is a snapshot of what is loaded now, it does
    not extend to records appended later.
    """

    def __init__(self, store: RecordCacheStore) -> None:
        self.store = store
        self.key: RecordCacheKey | None = None
        self.is_select_mode = False
        self._selected: set[str] = set()
        self.changed = Signal()
        store.changed.connect(self._on_cache_changed)
        store.invalidated.connect(self._on_cache_changed)

    @property
    def selected_ids(self) -> frozenset[str]:
        return frozenset(self._selected)

    def ordered_selection(self) -> list[str]:
        return [record_id for record_id in self._loaded_ids() if record_id in self._selected]

    def bind(self, key: RecordCacheKey | None) -> None:
        if key == self.key:
            return
        self.key = key
        self.is_select_mode = False
        self._selected.clear()
        self.changed.emit()

    def toggle(self, record_id: str) -> bool:
        if record_id in self._selected:
            self._selected.discard(record_id)
        elif record_id in self._loaded_ids():
            self._selected.add(record_id)
        else:
            return False
        self.changed.emit()
        return True

    def select_all(self) -> None:
        self._selected = set(self._loaded_ids())
        self.changed.emit()

    def clear(self) -> None:
        if not self._selected:
            return
        self._selected.clear()
        self.changed.emit()

    def discard(self, record_ids: list[str]) -> None:
        before = len(self._selected)
        self._selected.difference_update(record_ids)
        if len(self._selected) != before:
            self.changed.emit()

    def toggle_select_mode(self) -> bool:
        if self.is_select_mode:
            self.exit_select_mode()
        else:
            self.is_select_mode = True
            self.changed.emit()
        return self.is_select_mode

    def exit_select_mode(self) -> None:
        self.is_select_mode = False
        self._selected.clear()
        self.changed.emit()

    def _loaded_ids(self) -> list[str]:
        if self.key is None:
            return []
        cache = self.store.get(self.key)
        return cache.record_ids() if cache is not None else []

    def _on_cache_changed(self, key: RecordCacheKey) -> None:
        if key != self.key or not self._selected:
            return
        self.discard(list(self._selected - set(self._loaded_ids())))
