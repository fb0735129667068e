import sqlite3

from climate import Earth
from conftest import make_netherlands
from store import MAX_ENTRIES_PER_BUCKET, StateStore


def test_earth_persistence(tmp_path):
    store = StateStore(str(tmp_path / "world.db"))
    assert store.load_earth("e1") is None

    earth = Earth().tick(10.34)
    store.save_earth("e1", earth)
    assert store.load_earth("e1") == earth

    # Saving again replaces the earlier state
    store.save_earth("e1", earth.tick(10.34))
    assert store.load_earth("e1").current_year == 2017


def test_country_persistence(tmp_path):
    store = StateStore(str(tmp_path / "world.db"))
    nl = make_netherlands()
    de = make_netherlands(name="Germany", country_code="DE")
    store.save_countries("e1", [nl, de])

    assert store.load_country("e1", "NL") == nl
    assert store.load_country("e2", "NL") is None
    assert [c.country_code for c in store.load_countries("e1")] == ["DE", "NL"]

    ticked = nl.tick(Earth())
    store.save_country("e1", ticked)
    assert store.load_country("e1", "NL") == ticked
    assert len(store.load_countries("e1")) == 2


def test_reopening_keeps_state(tmp_path):
    path = str(tmp_path / "world.db")
    StateStore(path).save_earth("e1", Earth())
    assert StateStore(path).load_earth("e1") == Earth()


def test_log_buckets(tmp_path):
    store = StateStore(str(tmp_path / "world.db"))
    assert store.last_log_messages("e1") == []

    for i in range(MAX_ENTRIES_PER_BUCKET + 2):
        store.log_message("e1", f"message {i}")

    assert store.log_bucket_count("e1") == 2
    latest = store.last_log_messages("e1", max_entries=3)
    assert latest == ["message 129", "message 128", "message 127"]

    # Logs are kept per earth
    store.log_message("e2", "other earth")
    assert store.last_log_messages("e2") == ["other earth"]

    conn = sqlite3.connect(store.db_path)
    counts = [row[0] for row in conn.execute("SELECT entry_count FROM earth_logs WHERE earth_id = 'e1' ORDER BY id")]
    conn.close()
    assert counts == [MAX_ENTRIES_PER_BUCKET, 2]


def test_only_last_two_buckets_are_read(tmp_path):
    store = StateStore(str(tmp_path / "world.db"))
    for i in range(2 * MAX_ENTRIES_PER_BUCKET + 44):
        store.log_message("e1", f"message {i}")

    assert store.log_bucket_count("e1") == 3
    messages = store.last_log_messages("e1", max_entries=500)
    assert len(messages) == MAX_ENTRIES_PER_BUCKET + 44
    assert messages[0] == f"message {2 * MAX_ENTRIES_PER_BUCKET + 43}"
