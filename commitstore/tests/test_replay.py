"""
Tests for replay helpers: aggregate rebuild and global projections.
"""

import pytest

from commitstore.core.commit import Commit
from commitstore.replay import project, replay_aggregate


def _count_events(state, commit):
    state = dict(state or {})
    state[commit.aggregate_id] = state.get(commit.aggregate_id, 0) + len(commit.events)
    return state


def _seed(store):
    store.append(Commit("acct-1", 0, [{"deposit": 10}]))
    store.append(Commit("acct-2", 0, [{"deposit": 5}]))
    store.append(Commit("acct-1", 1, [{"withdraw": 3}, {"deposit": 1}]))
    store.append(Commit("acct-2", 1, [{"withdraw": 5}]))
    store.append(Commit("acct-1", 2, [{"deposit": 2}]))


def _balance(state, commit):
    for event in commit.events:
        state += event.get("deposit", 0) - event.get("withdraw", 0)
    return state


def test_replay_aggregate(store):
    _seed(store)

    result = replay_aggregate(store, "acct-1", _balance, initial=0)

    assert result.state == 10
    assert result.applied == 3
    assert result.last_version == 2


def test_replay_aggregate_from_snapshot(store):
    _seed(store)

    # state known after version 0
    result = replay_aggregate(store, "acct-1", _balance, initial=10, from_version=1)

    assert result.state == 10
    assert result.applied == 2


def test_replay_unknown_aggregate(store):
    result = replay_aggregate(store, "nobody", _balance, initial=0)

    assert (result.state, result.applied, result.last_version) == (0, 0, None)


def test_project_pages_through_feed(store):
    _seed(store)
    seen = []

    def handler(state, commit):
        seen.append((commit.aggregate_id, commit.version))
        return _count_events(state, commit)

    result = project(store, handler, page_size=2)

    assert result.applied == 5
    assert result.state == {"acct-1": 4, "acct-2": 2}
    assert seen == [
        ("acct-1", 0),
        ("acct-2", 0),
        ("acct-1", 1),
        ("acct-2", 1),
        ("acct-1", 2),
    ]
    assert result.last_commit_id == store.scan()[-1].commit_id


def test_project_exact_multiple_of_page_size(store):
    for version in range(4):
        store.append(Commit("acct-1", version, [{}]))

    result = project(store, _count_events, page_size=2)

    assert result.applied == 4


def test_project_resumes_from_checkpoint(store):
    store.append(Commit("acct-1", 0, [{}]))
    store.append(Commit("acct-1", 1, [{}]))
    first = project(store, _count_events, page_size=10)

    store.append(Commit("acct-2", 0, [{}, {}]))
    nxt = store.scan(first.last_commit_id, exclusive=True)
    second = project(store, _count_events, state=first.state, from_commit_id=nxt[0].commit_id)

    assert second.applied == 1
    assert second.state == {"acct-1": 2, "acct-2": 2}


def test_project_empty_store(store):
    result = project(store, _count_events, state={})

    assert (result.state, result.applied, result.last_commit_id) == ({}, 0, None)


def test_project_rejects_bad_page_size(store):
    with pytest.raises(ValueError):
        project(store, _count_events, page_size=0)
