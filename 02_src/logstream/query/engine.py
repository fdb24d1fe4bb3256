"""Filter-and-sort over a snapshot of log entries."""

from collections.abc import Callable, Iterable, Mapping

from ..models import FILTER_KEYS, LogEntry, parse_instant

Matcher = Callable[[LogEntry, str], bool]


def _contains(attribute: str) -> Matcher:
    def match(entry: LogEntry, value: str) -> bool:
        return value.lower() in getattr(entry, attribute).lower()

    return match


def _level(entry: LogEntry, value: str) -> bool:
    return entry.level.lower() == value.lower()


# An unparsable bound is ignored rather than failing the whole query.
def _not_before(entry: LogEntry, value: str) -> bool:
    bound = parse_instant(value)
    return bound is None or entry.epoch >= bound.timestamp()


def _not_after(entry: LogEntry, value: str) -> bool:
    bound = parse_instant(value)
    return bound is None or entry.epoch <= bound.timestamp()


MATCHERS: dict[str, Matcher] = {
    "level": _level,
    "message": _contains("message"),
    "resourceId": _contains("resource_id"),
    "traceId": _contains("trace_id"),
    "spanId": _contains("span_id"),
    "commit": _contains("commit"),
    "timestamp_start": _not_before,
    "timestamp_end": _not_after,
}


def _constraints(filters: Mapping[str, object] | None) -> list[tuple[Matcher, str]]:
    """Recognized, non-blank filters as (matcher, trimmed value) pairs."""
    if not filters:
        return []
    constraints = []
    for key in FILTER_KEYS:
        value = filters.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            constraints.append((MATCHERS[key], text))
    return constraints


def evaluate(
    entries: Iterable[LogEntry], filters: Mapping[str, object] | None = None
) -> list[LogEntry]:
    """Entries matching all filters, newest first.

    Entries with equal timestamps keep their storage order.
    """
    constraints = _constraints(filters)
    selected = [
        entry
        for entry in entries
        if all(matcher(entry, value) for matcher, value in constraints)
    ]
    return sorted(selected, key=lambda entry: entry.epoch, reverse=True)
