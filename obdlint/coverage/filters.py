"""Debug-filter calculation and tightening from model-year coverage."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional, Union

from ..models import Filter, Generation

MIN_FILTER_YEAR = 0
MAX_FILTER_YEAR = 3000


class FilterRemoval(Enum):
    REMOVE = "remove"


#: Returned by `optimize_debug_filter` when the filter empties entirely and
#: the `dbgfilter` property should be deleted.
REMOVE_FILTER = FilterRemoval.REMOVE

OptimizeResult = Union[Filter, None, FilterRemoval]


def calculate_debug_filter(
    supported: Iterable[int],
    unsupported: Iterable[int],
    generation: Optional[Generation] = None,
) -> Optional[Filter]:
    """Derive a filter excluding years outside known coverage.

    Returns None when there is no coverage data at all (the caller should
    keep an unconditional debug flag) or when no bounded filter applies.
    """
    supported_set = set(supported)
    unsupported_set = set(unsupported)
    known = sorted(supported_set | unsupported_set)
    if not known:
        return None

    low, high = known[0], known[-1]
    if generation is not None:
        low = max(low, generation.start_year)
        if generation.end_year is not None:
            high = min(high, generation.end_year)
    # No year of the generation is known, so there is nothing to filter.
    if low > high:
        return None

    result = Filter()
    to = low - 1
    if (generation is None or to >= generation.start_year) and not any(
        year <= to for year in supported_set
    ):
        result.to = to
    # `from` is only emitted when it still falls inside the generation, so a
    # filter computed here optimizes to None rather than to itself.
    from_ = high + 1
    if (
        generation is None
        or generation.end_year is None
        or from_ <= generation.end_year + 1
    ) and not any(year >= from_ for year in supported_set):
        result.from_ = from_
    result.years = [
        year
        for year in range(low + 1, high)
        if year not in supported_set and year not in unsupported_set
    ]
    if result.is_empty():
        return None
    return result


def optimize_debug_filter(existing: Filter, supported: Iterable[int]) -> OptimizeResult:
    """Tighten an authored filter so it no longer excludes supported years.

    Returns None when nothing changed and `REMOVE_FILTER` when every
    component was dropped. Gap years are never added here.
    """
    supported_years = sorted(set(supported))
    changed = False
    result = Filter(to=existing.to, from_=existing.from_, years=list(existing.years))

    if existing.to is not None:
        covered = [year for year in supported_years if year <= existing.to]
        if covered:
            changed = True
            lowered = covered[-1] - 1
            result.to = lowered if lowered >= MIN_FILTER_YEAR else None

    if existing.from_ is not None:
        covered = [year for year in supported_years if year >= existing.from_]
        if covered:
            changed = True
            raised = covered[0] + 1
            result.from_ = raised if raised <= MAX_FILTER_YEAR else None

    if existing.years:
        remaining = [year for year in existing.years if year not in supported_years]
        if len(remaining) != len(existing.years):
            changed = True
            result.years = remaining

    if not changed:
        return None
    if result.is_empty():
        return REMOVE_FILTER
    return result


def format_years_as_ranges(years: Iterable[Union[int, str]]) -> str:
    """Collapse consecutive years: `2019, 2020, 2021, 2023` -> `2019-2021, 2023`."""
    values: List[int] = []
    for year in years:
        try:
            values.append(int(year))
        except (TypeError, ValueError):
            continue
    if not values:
        return ""
    values = sorted(set(values))

    ranges: List[str] = []
    start = end = values[0]
    for year in values[1:]:
        if year == end + 1:
            end = year
            continue
        ranges.append(_render_range(start, end))
        start = end = year
    ranges.append(_render_range(start, end))
    return ", ".join(ranges)


def _render_range(start: int, end: int) -> str:
    return str(start) if start == end else f"{start}-{end}"


__all__ = [
    "FilterRemoval",
    "MAX_FILTER_YEAR",
    "MIN_FILTER_YEAR",
    "OptimizeResult",
    "REMOVE_FILTER",
    "calculate_debug_filter",
    "format_years_as_ranges",
    "optimize_debug_filter",
]
