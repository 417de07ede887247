import pytest

from dns_control.app.record_cache import RecordCacheStore
from dns_control.app.selection import SelectionController
from dns_control.app.state import RecordCacheKey
from dns_control.clients.dns_client_sdk.records_client import RecordsClient
from tests.helpers import ScriptedTransport, page

KEY = RecordCacheKey("acc-1", "dom-1")
OTHER = RecordCacheKey("acc-1", "dom-2")

pytestmark = pytest.mark.anyio


async def _loaded(*payloads):
    remaining = iter(payloads)
    store = RecordCacheStore(RecordsClient(ScriptedTransport(lambda command, args: next(remaining))))
    selection = SelectionController(store)
    store.activate(KEY)
    selection.bind(KEY)
    await store.load_full(KEY)
    return store, selection


async def test_only_loaded_records_can_be_selected():
    _, selection = await _loaded(page(["r1", "r2"], 2))

    assert selection.toggle("r1") is True
    assert selection.toggle("ghost") is False
    assert selection.selected_ids == {"r1"}

    assert selection.toggle("r1") is True
    assert selection.selected_ids == set()


async def test_select_all_is_a_snapshot_of_loaded_records():
    store, selection = await _loaded(
        page(["r1", "r2"], 4, has_more=True),
        page(["r3", "r4"], 4, page_number=2),
    )
    selection.select_all()

    await store.load_more(KEY)

    assert store.get(KEY).record_ids() == ["r1", "r2", "r3", "r4"]
    assert selection.selected_ids == {"r1", "r2"}


async def test_fresh_load_prunes_ids_no_longer_loaded():
    store, selection = await _loaded(page(["r1", "r2"], 2), page(["r2"], 1))
    selection.select_all()

    await store.load_full(KEY, keyword="r2")

    assert selection.selected_ids == {"r2"}


async def test_local_removal_keeps_selection_a_subset():
    store, selection = await _loaded(page(["r1", "r2", "r3"], 3))
    selection.select_all()

    store.remove_many_locally(KEY, ["r1", "r3"])

    assert selection.selected_ids == {"r2"}
    assert selection.ordered_selection() == ["r2"]


async def test_invalidation_empties_selection():
    store, selection = await _loaded(page(["r1"], 1))
    selection.select_all()

    store.invalidate(KEY)

    assert selection.selected_ids == set()


async def test_bind_to_new_key_resets_mode_and_selection():
    _, selection = await _loaded(page(["r1"], 1))
    selection.toggle_select_mode()
    selection.select_all()

    selection.bind(OTHER)

    assert selection.key == OTHER
    assert selection.is_select_mode is False
    assert selection.selected_ids == set()


async def test_leaving_select_mode_clears_selection():
    _, selection = await _loaded(page(["r1", "r2"], 2))
    events = []
    selection.changed.connect(lambda: events.append("changed"))

    assert selection.toggle_select_mode() is True
    selection.select_all()
    assert selection.toggle_select_mode() is False

    assert selection.selected_ids == set()
    assert len(events) == 3
