"""
Dashboard statistics over an in-memory reservation list.

Every function here is pure: it never touches the database, the clock or the
input sequence. The reference instant ("now") and the reporting timezone are
always passed in by the caller, so the same input always yields the same output.

Records are read by attribute (ORM rows, pydantic models) or by key (plain
dicts) using the API field names: ``id``, ``carName``, ``carCategory``,
``source`` and ``createdAt``.

Calendar days are computed in one explicit timezone (``REPORT_TIMEZONE``,
UTC by default), never in the host's local zone. Naive timestamps are taken
to be UTC.
"""
from datetime import date, datetime, timedelta, timezone, tzinfo
from itertools import islice
from typing import Any, Callable, Iterable, NamedTuple, Sequence
from zoneinfo import ZoneInfo

UNCATEGORIZED  = "Uncategorized"
DEFAULT_SOURCE = "WhatsApp"

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class DailyCount(NamedTuple):
    label: str
    date:  date
    count: int


class NameCount(NamedTuple):
    name:  str
    count: int


# ─── Helpers ──────────────────────────────────────────────────────────────────
def resolve_timezone(name: str | None) -> tzinfo:
    """Map a configured zone name to a tzinfo; empty or "UTC" gives timezone.utc."""
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def _field(reservation: Any, name: str) -> Any:
    if isinstance(reservation, dict):
        return reservation.get(name)
    return getattr(reservation, name, None)


def as_utc(value: datetime | str) -> datetime:
    """Normalize a timestamp (aware, naive or ISO-8601 text) to an aware UTC datetime."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_day(value: date | datetime, tz: tzinfo) -> date:
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return as_utc(value).astimezone(tz).date()
    return value


def created_day(reservation: Any, tz: tzinfo = timezone.utc) -> date:
    return as_utc(_field(reservation, "createdAt")).astimezone(tz).date()


def _category(reservation: Any) -> str:
    return _field(reservation, "carCategory") or UNCATEGORIZED


def _tally(reservations: Iterable[Any] | None, key: Callable[[Any], str]) -> dict[str, int]:
    # dict keeps first-insertion order, which is what breaks ties below
    counts: dict[str, int] = {}
    for r in reservations or ():
        k = key(r)
        counts[k] = counts.get(k, 0) + 1
    return counts


# ─── Counts ───────────────────────────────────────────────────────────────────
def total_count(reservations: Sequence[Any] | None) -> int:
    if not reservations:
        return 0
    return len(reservations)


def count_on_day(
    reservations: Iterable[Any] | None,
    day: date | datetime,
    tz: tzinfo = timezone.utc,
) -> int:
    target = _to_day(day, tz)
    return sum(1 for r in reservations or () if created_day(r, tz) == target)


def count_since(reservations: Iterable[Any] | None, instant: datetime | str) -> int:
    """Records created strictly after ``instant``."""
    threshold = as_utc(instant)
    return sum(1 for r in reservations or () if as_utc(_field(r, "createdAt")) > threshold)


# ─── Rankings ─────────────────────────────────────────────────────────────────
def most_frequent(reservations: Iterable[Any] | None) -> NameCount | None:
    best: NameCount | None = None
    for name, count in _tally(reservations, lambda r: _field(r, "carName")).items():
        if best is None or count > best.count:
            best = NameCount(name, count)
    return best


def top_n(reservations: Iterable[Any] | None, n: int = 5) -> list[NameCount]:
    if n <= 0:
        return []
    counts = _tally(reservations, lambda r: _field(r, "carName"))
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])   # stable: ties keep input order
    return [NameCount(name, count) for name, count in ranked[:n]]


def count_by_category(reservations: Iterable[Any] | None) -> list[NameCount]:
    return [NameCount(name, count) for name, count in _tally(reservations, _category).items()]


# ─── Series ───────────────────────────────────────────────────────────────────
def day_label(day: date) -> str:
    return f"{_WEEKDAYS[day.weekday()]} {day.day:02d}"


def daily_series(
    reservations: Iterable[Any] | None,
    days: int = 7,
    reference_day: date | datetime | None = None,
    tz: tzinfo = timezone.utc,
) -> list[DailyCount]:
    """
    One entry per calendar day of [reference_day - (days-1), reference_day],
    oldest first. Days without reservations are present with count 0.
    """
    if days <= 0:
        return []
    if reference_day is None:
        reference_day = datetime.now(tz)
    end = _to_day(reference_day, tz)
    start = end - timedelta(days=days - 1)

    per_day: dict[date, int] = {}
    for r in reservations or ():
        d = created_day(r, tz)
        if start <= d <= end:
            per_day[d] = per_day.get(d, 0) + 1

    series = []
    for offset in range(days):
        d = start + timedelta(days=offset)
        series.append(DailyCount(day_label(d), d, per_day.get(d, 0)))
    return series


# ─── Selection ────────────────────────────────────────────────────────────────
def recent(reservations: Iterable[Any] | None, n: int = 5) -> list[Any]:
    """
    First ``n`` records in the order given. Callers pass newest-first lists
    (the store returns them that way); no sorting happens here.
    """
    return list(islice(reservations or (), max(n, 0)))


def search(reservations: Iterable[Any] | None, term: str | None) -> list[Any]:
    """Case-insensitive substring match on car name or category."""
    items = list(reservations or ())
    if not term or not term.strip():
        return items
    needle = term.strip().lower()
    return [
        r for r in items
        if needle in (_field(r, "carName") or "").lower()
        or needle in (_field(r, "carCategory") or "").lower()
    ]


def created_between(
    reservations: Iterable[Any] | None,
    start: date | None = None,
    end: date | None = None,
    tz: tzinfo = timezone.utc,
) -> list[Any]:
    """Records whose creation day falls in [start, end]; either bound may be open."""
    result = []
    for r in reservations or ():
        d = created_day(r, tz)
        if start is not None and d < _to_day(start, tz):
            continue
        if end is not None and d > _to_day(end, tz):
            continue
        result.append(r)
    return result


# ─── Presentation ─────────────────────────────────────────────────────────────
def display_row(reservation: Any, tz: tzinfo = timezone.utc) -> dict:
    created = as_utc(_field(reservation, "createdAt")).astimezone(tz)
    return {
        "id":          _field(reservation, "id"),
        "carName":     _field(reservation, "carName"),
        "carCategory": _category(reservation),
        "source":      _field(reservation, "source") or DEFAULT_SOURCE,
        "createdAt":   created.isoformat(),
        "date":        created.date().isoformat(),
        "time":        created.strftime("%H:%M"),
    }


def build_dashboard(
    reservations: Sequence[Any] | None,
    now: datetime,
    tz: tzinfo = timezone.utc,
    days: int = 7,
    top: int = 5,
    recent_limit: int = 5,
) -> dict:
    """Everything the admin dashboard renders, computed from one already-fetched list."""
    reservations = reservations or []
    now = as_utc(now)
    today = now.astimezone(tz).date()
    popular = most_frequent(reservations)

    return {
        "generatedAt": now.isoformat(),
        "timezone":    str(tz),
        "today":       today.isoformat(),
        "totals": {
            "total":    total_count(reservations),
            "today":    count_on_day(reservations, today, tz),
            "thisWeek": count_since(reservations, now - timedelta(days=7)),
        },
        "mostPopular": {"carName": popular.name, "count": popular.count} if popular else None,
        "dailySeries": [
            {"label": d.label, "date": d.date.isoformat(), "count": d.count}
            for d in daily_series(reservations, days, today, tz)
        ],
        "topCars":    [{"carName": c.name, "count": c.count} for c in top_n(reservations, top)],
        "byCategory": [{"category": c.name, "count": c.count} for c in count_by_category(reservations)],
        "recent":     [display_row(r, tz) for r in recent(reservations, recent_limit)],
    }
