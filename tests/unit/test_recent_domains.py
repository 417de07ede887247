from dns_control.app.recent_domains import RecentDomains


def _ids(recent):
    return [(item.account_id, item.domain_id) for item in recent.items()]


def test_newest_first_without_duplicates():
    recent = RecentDomains(limit=5)
    recent.record("A", "d1", "example.com")
    recent.record("A", "d2", "example.org")
    recent.record("A", "d1", "example.com")

    assert _ids(recent) == [("A", "d1"), ("A", "d2")]


def test_capped_at_limit():
    recent = RecentDomains(limit=2)
    for domain_id in ("d1", "d2", "d3"):
        recent.record("A", domain_id)

    assert _ids(recent) == [("A", "d3"), ("A", "d2")]


def test_remove_and_remove_by_account():
    recent = RecentDomains()
    recent.record("A", "d1")
    recent.record("B", "d1")
    recent.record("A", "d2")

    assert recent.remove("B", "d1") is True
    assert recent.remove("B", "d1") is False
    assert recent.remove_by_account("A") == 2
    assert recent.items() == ()
