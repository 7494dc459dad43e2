"""
Tests for the attribute codec.
"""

import pytest

from commitstore.core.codec import (
    ACTIVE_MARKER,
    decode_commit,
    decode_commit_id,
    encode_commit,
    encode_commit_id,
)
from commitstore.core.commit import Commit
from commitstore.core.errors import DecodeError


def _committed(**overrides):
    fields = dict(
        aggregate_id="00000000-0000-0000-0000-000000000000",
        version=3,
        events=["foo", "bar"],
        commit_id=42,
        committed_at=1_500_000_000_123,
    )
    fields.update(overrides)
    return Commit(**fields)


def test_encode_layout():
    item = encode_commit(_committed())

    assert item == {
        "commitId": {"N": "42"},
        "committedAt": {"N": "1500000000123"},
        "aggregateId": {"S": "00000000-0000-0000-0000-000000000000"},
        "version": {"N": "3"},
        "events": {"S": '["foo","bar"]'},
        "active": {"S": ACTIVE_MARKER},
    }


def test_roundtrip_nested_event_tree():
    events = [
        {"type": "OrderPlaced", "lines": [{"sku": "A-1", "qty": 2, "price": 9.99}]},
        {"type": "Noted", "note": "ünïcødé", "tags": [], "meta": None, "flag": False},
        [1, [2, [3, {"deep": {"er": [None]}}]]],
        "plain",
        12,
    ]
    commit = _committed(events=events)

    assert decode_commit(encode_commit(commit)) == commit


def test_roundtrip_string_commit_id():
    commit = _committed(commit_id="2017071402400012300000000000000000003agg")

    decoded = decode_commit(encode_commit(commit))

    assert decoded == commit
    assert isinstance(decoded.commit_id, str)


def test_large_integers_stay_exact():
    big = 2**63 + 12345
    commit = _committed(version=big, commit_id=big, events=[big])

    decoded = decode_commit(encode_commit(commit))

    assert decoded.version == big
    assert decoded.commit_id == big
    assert decoded.events == [big]


def test_tuple_events_normalized():
    assert Commit("a", 0, ("x", "y")).events == ["x", "y"]
    assert Commit("a", 0, [("x", ("y",))]).events == [["x", ["y"]]]


def test_encode_requires_committed_fields():
    with pytest.raises(ValueError, match="commit_id"):
        encode_commit(Commit("a", 0, []))
    with pytest.raises(ValueError, match="committed_at"):
        encode_commit(Commit("a", 0, [], commit_id=1))


def test_commit_id_attribute_types():
    assert encode_commit_id(7) == {"N": "7"}
    assert encode_commit_id("x") == {"S": "x"}
    assert decode_commit_id({"N": "7"}) == 7
    assert decode_commit_id({"S": "x"}) == "x"
    with pytest.raises(TypeError):
        encode_commit_id(True)


@pytest.mark.parametrize("missing", ["aggregateId", "version", "commitId", "committedAt", "events"])
def test_decode_missing_attribute(missing):
    item = encode_commit(_committed())
    del item[missing]

    with pytest.raises(DecodeError, match=missing):
        decode_commit(item)


def test_decode_non_numeric_version():
    item = encode_commit(_committed())
    item["version"] = {"N": "three"}

    with pytest.raises(DecodeError, match="version"):
        decode_commit(item)


def test_decode_wrong_type_tag():
    item = encode_commit(_committed())
    item["version"] = {"S": "3"}

    with pytest.raises(DecodeError, match="must be N"):
        decode_commit(item)


def test_decode_invalid_events_blob():
    item = encode_commit(_committed())
    item["events"] = {"S": "[not json"}

    with pytest.raises(DecodeError, match="JSON"):
        decode_commit(item)


def test_decode_commit_id_without_type():
    with pytest.raises(DecodeError):
        decode_commit_id({"B": "AAAA"})
