import pytest

from dns_control.app.listing_view import ListingViewState, sort_records, toggle_sort
from dns_control.clients.dns_client_sdk.models import DnsRecord


def _records():
    return [
        DnsRecord(id="1", name="www", record_type="A", content="192.0.2.10", ttl=300),
        DnsRecord(id="2", name="api", record_type="CNAME", content="lb.example.net", ttl=3600),
        DnsRecord(id="3", name="mail", record_type="MX", content="mx.example.net", ttl=600),
    ]


def test_toggle_cycles_asc_desc_unsorted():
    view = ListingViewState()

    toggle_sort(view, "name")
    assert (view.sort_by, view.sort_dir) == ("name", "asc")
    toggle_sort(view, "name")
    assert (view.sort_by, view.sort_dir) == ("name", "desc")
    toggle_sort(view, "name")
    assert (view.sort_by, view.sort_dir) == (None, "asc")


def test_switching_field_restarts_ascending():
    view = ListingViewState(sort_by="name", sort_dir="desc")

    toggle_sort(view, "ttl")

    assert (view.sort_by, view.sort_dir) == ("ttl", "asc")


def test_unknown_field_rejected():
    with pytest.raises(ValueError):
        toggle_sort(ListingViewState(), "priority")


def test_sort_records_orders_without_touching_input():
    records = _records()

    by_ttl_desc = sort_records(records, ListingViewState(sort_by="ttl", sort_dir="desc"))
    by_name = sort_records(records, ListingViewState(sort_by="name"))

    assert [record.id for record in by_ttl_desc] == ["2", "3", "1"]
    assert [record.id for record in by_name] == ["2", "3", "1"]
    assert [record.id for record in records] == ["1", "2", "3"]
    assert [record.id for record in sort_records(records, ListingViewState())] == ["1", "2", "3"]
