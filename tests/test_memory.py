"""Session state transitions and store eviction."""

from fraudshield.memory import HoneypotSession, SessionStore


def test_new_session_defaults(store):
    session = store.get_or_create("sess-new")
    assert session.message_count == 0
    assert session.scam_detected is False
    assert session.finalized is False
    assert session.state == "ACTIVE"
    assert all(values == [] for values in session.intel.values())
    assert "sess-new" in store
    assert len(store) == 1


def test_get_or_create_returns_same_session(store):
    assert store.get_or_create("abc") is store.get_or_create("abc")
    assert store.get("missing") is None


def test_scam_flag_is_monotone():
    session = HoneypotSession(session_id="s1")
    assert session.mark_scam_detected() is True
    assert session.mark_scam_detected() is False
    assert session.scam_detected is True


def test_finalize_happens_once():
    session = HoneypotSession(session_id="s1")
    assert session.try_finalize() is True
    assert session.try_finalize() is False
    assert session.finalized is True
    assert session.state == "FINALIZED"


def test_idle_sessions_expire(store, clock):
    store.get_or_create("old")
    clock.advance(1800)
    store.get_or_create("recent")
    clock.advance(1801)

    assert store.get("old") is None
    assert store.get("recent") is not None


def test_activity_refreshes_ttl(store, clock):
    store.get_or_create("busy")
    clock.advance(3000)
    store.get_or_create("busy")
    clock.advance(3000)
    assert store.get("busy") is not None


def test_lru_eviction_when_full(clock):
    store = SessionStore(ttl_seconds=None, max_sessions=2, clock=clock)
    store.get_or_create("a")
    store.get_or_create("b")
    store.get_or_create("a")  # a is now most recently used
    store.get_or_create("c")

    assert "b" not in store
    assert "a" in store
    assert "c" in store
    assert len(store) == 2


def test_unbounded_store_keeps_everything(clock):
    store = SessionStore(ttl_seconds=None, max_sessions=None, clock=clock)
    for i in range(50):
        store.get_or_create(f"s{i}")
    clock.advance(10 ** 9)
    assert len(store) == 50


def test_remove_and_clear(store):
    store.get_or_create("x")
    store.get_or_create("y")
    store.remove("x")
    store.remove("never-existed")
    assert "x" not in store
    store.clear()
    assert len(store) == 0


def test_to_dict_copies_intel(store):
    session = store.get_or_create("copy-me")
    session.intel["upiIds"].append("a@paytm")
    snapshot = session.to_dict()
    snapshot["intel"]["upiIds"].append("b@ybl")
    assert session.intel["upiIds"] == ["a@paytm"]
    assert snapshot["sessionId"] == "copy-me"


def test_claim_finalize_only_once(store):
    assert store.is_finalized("sess-f") is False
    assert store.claim_finalize("sess-f") is True
    assert store.claim_finalize("sess-f") is False
    assert store.is_finalized("sess-f") is True


def test_finalized_ledger_survives_eviction(store, clock):
    store.get_or_create("gone")
    store.claim_finalize("gone")
    clock.advance(3601)
    assert store.get("gone") is None

    resumed = store.get_or_create("gone")
    assert resumed.finalized is True
    assert resumed.state == "FINALIZED"
    assert resumed.message_count == 0


def test_finalized_ledger_survives_remove(store):
    store.get_or_create("x")
    store.claim_finalize("x")
    store.remove("x")
    assert store.get_or_create("x").finalized is True

    store.clear()
    assert store.is_finalized("x") is False
    assert store.get_or_create("x").finalized is False


def test_finalized_ledger_is_bounded(clock):
    store = SessionStore(clock=clock, max_finalized=2)
    for sid in ("f1", "f2", "f3"):
        assert store.claim_finalize(sid) is True
    assert store.is_finalized("f1") is False
    assert store.is_finalized("f2") is True
    assert store.is_finalized("f3") is True
    assert store.stats()["finalizedSessions"] == 2


def test_stats_reports_size_and_limits(store):
    store.get_or_create("a")
    store.get_or_create("b")
    store.claim_finalize("a")
    assert store.stats() == {
        "sessions": 2,
        "finalizedSessions": 1,
        "maxSessions": 100,
        "ttlSeconds": 3600,
    }
