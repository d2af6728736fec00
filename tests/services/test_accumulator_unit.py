"""
test: services/summary/accumulator.py

Unit tests for the folding of partial updates into the canonical result:
empty values are never written, files are upserted by path and leaves
follow the precedence policy.
"""

import pytest
from app.services.summary import accumulator as acc
from app.services.summary import summary_utils as su


# ==================================================================================
#                                 TEST: APPLY UPDATE
# ==================================================================================

def test_apply_update_creates_nested_structure():
    result = {}
    acc.apply_update(result, {"licensed": {"declared": "MIT"}})
    assert result == {"licensed": {"declared": "MIT"}}


def test_apply_update_skips_empty_values():
    result = {}
    acc.apply_update(result, {"licensed": {"declared": None}, "described": {"projectWebsite": ""}, "files": []})
    assert result == {}


def test_apply_update_last_writer_wins_by_default():
    result = {"licensed": {"declared": "MIT"}, "described": {"releaseDate": "2018-06-01"}}
    acc.apply_update(result, {"licensed": {"declared": "Apache-2.0"}})
    assert result == {"licensed": {"declared": "Apache-2.0"}, "described": {"releaseDate": "2018-06-01"}}


def test_apply_update_first_writer_wins_keeps_existing_leaf():
    result = {"licensed": {"declared": "MIT"}}
    acc.apply_update(
        result,
        {"licensed": {"declared": "Apache-2.0"}, "described": {"projectWebsite": "https://x"}},
        acc.FIRST_WRITER_WINS,
    )
    assert result == {"licensed": {"declared": "MIT"}, "described": {"projectWebsite": "https://x"}}


def test_apply_update_files_are_merged_regardless_of_policy():
    result = {"files": [{"path": "LICENSE", "token": "old"}]}
    acc.apply_update(result, {"files": [{"path": "LICENSE", "token": "new"}]}, acc.FIRST_WRITER_WINS)
    assert result == {"files": [{"path": "LICENSE", "token": "new"}]}


def test_apply_update_rejects_unknown_policy():
    with pytest.raises(ValueError):
        acc.apply_update({}, {"licensed": {"declared": "MIT"}}, "random-wins")


def test_merge_files_does_not_alias_incoming_descriptors():
    incoming = [{"path": "LICENSE"}]
    files = acc.merge_files(None, incoming)
    files[0]["token"] = "abcd"
    assert incoming == [{"path": "LICENSE"}]


# ==================================================================================
#                                  TEST: UTILITIES
# ==================================================================================

def test_set_if_value_only_writes_signal():
    target = {}
    assert su.set_if_value(target, "described.projectWebsite", "  ") is False
    assert su.set_if_value(target, "described.projectWebsite", None) is False
    assert target == {}
    assert su.set_if_value(target, "described.projectWebsite", "https://x") is True
    assert target == {"described": {"projectWebsite": "https://x"}}


def test_get_value_tolerates_non_mappings():
    assert su.get_value({"a": {"b": 1}}, "a.b") == 1
    assert su.get_value({"a": "text"}, "a.b") is None
    assert su.get_value(None, "a") is None
    assert su.get_value({"a": None}, "a.b", "default") == "default"


@pytest.mark.parametrize("value, expected", [
    ("2018-06-01T21:41:57.990052+00:00", "2018-06-01"),
    ("2018-06-01T21:41:57.99Z", "2018-06-01"),
    ("2018-06-01 21:41:57", "2018-06-01"),
    ("2018-06-01", "2018-06-01"),
    ("not a date", None),
    ("2018-06-01 garbage", None),
    ("2018-06-01Tjunk", None),
    (None, None),
    (20180601, None),
])
def test_extract_date(value, expected):
    assert su.extract_date(value) == expected
