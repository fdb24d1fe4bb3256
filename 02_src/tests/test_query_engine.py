"""Tests for the query engine."""

import pytest

from logstream.models import FILTER_KEYS
from logstream.query import evaluate
from logstream.query.engine import MATCHERS


def _messages(entries):
    return [entry.message for entry in entries]


class TestEvaluateOrdering:
    """Tests for result ordering."""

    def test_no_filters_newest_first(self, sample_entries):
        """Test that everything is returned newest first."""
        result = evaluate(sample_entries, {})
        assert [e.timestamp for e in result] == [
            "2024-01-15T14:00:00.000Z",
            "2024-01-15T12:00:00.000Z",
            "2024-01-14T10:00:00.000Z",
        ]

    def test_none_filters(self, sample_entries):
        """Test that a missing filter set means no constraint."""
        assert len(evaluate(sample_entries, None)) == 3

    def test_sorted_descending_property(self, make_entry):
        """Test A before B implies A.epoch >= B.epoch."""
        stamps = [
            "2024-03-01T00:00:00Z",
            "2023-12-31T23:59:59.999Z",
            "2024-03-01T00:00:00.001Z",
            "2024-02-29T12:00:00+05:00",
            "2024-01-01",
        ]
        result = evaluate([make_entry(timestamp=s) for s in stamps], {})
        epochs = [e.epoch for e in result]
        assert epochs == sorted(epochs, reverse=True)

    def test_compares_instants_not_strings(self, make_entry):
        """Test that offsets are compared as instants."""
        early = make_entry(message="early", timestamp="2024-01-15T13:00:00+02:00")  # 11:00Z
        late = make_entry(message="late", timestamp="2024-01-15T12:00:00Z")
        assert _messages(evaluate([early, late], {})) == ["late", "early"]

    def test_ties_keep_storage_order(self, make_entry):
        """Test that equal timestamps stay in storage order."""
        entries = [make_entry(message=f"m{i}") for i in range(5)]
        assert _messages(evaluate(entries, {})) == ["m0", "m1", "m2", "m3", "m4"]

    def test_input_not_mutated(self, sample_entries):
        """Test that the snapshot is left as it was."""
        before = list(sample_entries)
        result = evaluate(sample_entries, {"level": "error"})
        assert sample_entries == before
        assert result is not sample_entries


class TestEvaluateLevel:
    """Tests for the level filter."""

    def test_case_insensitive(self, sample_entries):
        """Test that ERROR matches error."""
        result = evaluate(sample_entries, {"level": "ERROR"})
        assert [e.level for e in result] == ["error"]

    def test_exact_not_substring(self, sample_entries):
        """Test that a partial level does not match."""
        assert evaluate(sample_entries, {"level": "err"}) == []


class TestEvaluateSubstringFilters:
    """Tests for substring filters."""

    def test_message_any_case(self, sample_entries):
        """Test that message matching ignores case."""
        result = evaluate(sample_entries, {"message": "CONN"})
        assert _messages(result) == ["Database connection failed"]

    def test_resource_id(self, sample_entries):
        """Test resourceId substring matching."""
        result = evaluate(sample_entries, {"resourceId": "1234"})
        assert len(result) == 2
        assert all("1234" in e.resource_id for e in result)

    @pytest.mark.parametrize(
        "key,value,expected",
        [
            ("traceId", "T1", ["Database connection failed"]),
            ("spanId", "s3", ["High memory usage"]),
            ("commit", "c2", ["Request processed"]),
        ],
    )
    def test_identifier_filters(self, sample_entries, key, value, expected):
        """Test traceId, spanId and commit matching."""
        assert _messages(evaluate(sample_entries, {key: value})) == expected

    def test_value_is_trimmed(self, sample_entries):
        """Test that surrounding whitespace is ignored."""
        assert len(evaluate(sample_entries, {"message": "  memory  "})) == 1


class TestEvaluateTimeRange:
    """Tests for timestamp bounds."""

    def test_start(self, sample_entries):
        """Test lower bound."""
        result = evaluate(sample_entries, {"timestamp_start": "2024-01-15T11:00:00.000Z"})
        assert len(result) == 2

    def test_end(self, sample_entries):
        """Test upper bound."""
        result = evaluate(sample_entries, {"timestamp_end": "2024-01-15T13:00:00.000Z"})
        assert len(result) == 2

    def test_bounds_inclusive(self, sample_entries):
        """Test that entries exactly on a bound are included."""
        result = evaluate(
            sample_entries,
            {
                "timestamp_start": "2024-01-15T12:00:00.000Z",
                "timestamp_end": "2024-01-15T14:00:00.000Z",
            },
        )
        assert _messages(result) == ["Database connection failed", "Request processed"]

    def test_bound_with_other_offset(self, sample_entries):
        """Test that a bound in another offset is compared as an instant."""
        result = evaluate(sample_entries, {"timestamp_start": "2024-01-15T16:00:00+02:00"})
        assert _messages(result) == ["Database connection failed"]

    def test_unparsable_bound_ignored(self, sample_entries):
        """Test that a bad bound is treated as no constraint."""
        assert len(evaluate(sample_entries, {"timestamp_start": "garbage"})) == 3
        assert len(evaluate(sample_entries, {"timestamp_end": "garbage"})) == 3

    def test_unparsable_bound_keeps_other_filters(self, sample_entries):
        """Test that the rest of the query still applies."""
        result = evaluate(sample_entries, {"timestamp_end": "garbage", "level": "warn"})
        assert _messages(result) == ["High memory usage"]

    def test_empty_range(self, sample_entries):
        """Test that an inverted range matches nothing."""
        result = evaluate(
            sample_entries,
            {
                "timestamp_start": "2024-01-16T00:00:00Z",
                "timestamp_end": "2024-01-14T00:00:00Z",
            },
        )
        assert result == []


class TestEvaluateCombination:
    """Tests for AND semantics and ignored input."""

    def test_and_is_intersection(self, sample_entries):
        """Test that two filters return the intersection of their results."""
        by_level = set(map(id, evaluate(sample_entries, {"level": "info"})))
        by_resource = set(map(id, evaluate(sample_entries, {"resourceId": "server-1234"})))
        both = evaluate(sample_entries, {"level": "info", "resourceId": "server-1234"})
        assert set(map(id, both)) == by_level & by_resource
        assert _messages(both) == ["Request processed"]

    @pytest.mark.parametrize("blank", ["", "   ", None])
    def test_blank_values_ignored(self, sample_entries, blank):
        """Test that blank values are no constraint, not a match on empty."""
        assert len(evaluate(sample_entries, {"message": blank, "level": blank})) == 3

    def test_unknown_keys_ignored(self, sample_entries):
        """Test that unrecognized keys never fail or filter."""
        assert len(evaluate(sample_entries, {"host": "nowhere", "limit": "1"})) == 3

    def test_no_match_is_empty(self, sample_entries):
        """Test that no match returns an empty list."""
        assert evaluate(sample_entries, {"message": "does not exist"}) == []

    def test_empty_snapshot(self):
        """Test that an empty snapshot returns an empty list."""
        assert evaluate([], {"level": "error"}) == []


def test_single_entry_needs_every_filter(make_entry):
    """Test that one failing key excludes an otherwise matching entry."""
    entry = make_entry(level="debug", commit="abc123")
    assert evaluate([entry], {"level": "DEBUG", "commit": "C12"}) == [entry]
    assert evaluate([entry], {"level": "debug", "commit": "zzz"}) == []


def test_every_filter_key_has_a_matcher():
    """Test that the recognized keys and the matcher table agree."""
    assert set(MATCHERS) == set(FILTER_KEYS)
