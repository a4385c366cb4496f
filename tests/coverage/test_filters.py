"""Tests for debug-filter calculation and optimisation."""

from __future__ import annotations

from typing import List, Optional

import pytest

from obdlint.coverage import (
    REMOVE_FILTER,
    calculate_debug_filter,
    format_years_as_ranges,
    optimize_debug_filter,
)
from obdlint.models import Filter, Generation


def test_calculate_with_ongoing_generation_lists_gap_year() -> None:
    generation = Generation(name="gen2", start_year=2018)

    result = calculate_debug_filter([2019, 2021], [], generation)

    assert result == Filter(to=2018, years=[2020], from_=2022)
    assert result.to_dict() == {"to": 2018, "years": [2020], "from": 2022}


def test_calculate_without_coverage_returns_none() -> None:
    assert calculate_debug_filter([], []) is None


def test_calculate_skips_to_below_generation_start() -> None:
    generation = Generation(name="gen1", start_year=2019, end_year=2023)

    result = calculate_debug_filter([2019, 2020], [2023], generation)

    assert result == Filter(years=[2021, 2022], from_=2024)


def test_calculate_clamps_to_generation_bounds() -> None:
    generation = Generation(name="gen1", start_year=2015, end_year=2020)

    result = calculate_debug_filter([2012, 2016, 2018], [2022], generation)

    # 2014 lies before the generation, so no lower bound is emitted.
    assert result == Filter(years=[2017, 2019], from_=2021)


def test_calculate_unsupported_years_are_not_gaps() -> None:
    result = calculate_debug_filter([2019], [2020, 2021])

    assert result == Filter(to=2018, from_=2022)


def test_optimize_lowers_to_and_raises_from() -> None:
    result = optimize_debug_filter(Filter(to=2020, from_=2022), [2019, 2023])

    assert result == Filter(to=2018, from_=2024)


def test_optimize_returns_none_when_already_optimal() -> None:
    assert optimize_debug_filter(Filter(to=2018, from_=2022, years=[2020]), [2019, 2021]) is None


def test_optimize_drops_supported_years_from_list() -> None:
    result = optimize_debug_filter(Filter(to=2015, years=[2017, 2018]), [2018])

    assert result == Filter(to=2015, years=[2017])


def test_optimize_signals_removal_when_filter_empties() -> None:
    assert optimize_debug_filter(Filter(years=[2019]), [2019]) is REMOVE_FILTER
    assert optimize_debug_filter(Filter(to=0), [0]) is REMOVE_FILTER


def test_optimize_drops_from_beyond_year_limit() -> None:
    result = optimize_debug_filter(Filter(to=2010, from_=3000), [3000])

    assert result == Filter(to=2010)


def test_optimize_never_adds_gap_years() -> None:
    # 2020 is neither supported nor listed; only calculate_debug_filter fills gaps.
    result = optimize_debug_filter(Filter(to=2022, years=[2015]), [2019, 2021])

    assert result == Filter(to=2020, years=[2015])
    result = optimize_debug_filter(Filter(to=2022), [2019, 2021])
    assert result == Filter(to=2020)
    assert result.years == []


@pytest.mark.parametrize(
    "supported, unsupported, generation",
    [
        ([2019, 2021], [], Generation(name="g", start_year=2018)),
        ([2016, 2017, 2020], [2014, 2022], None),
        ([2019], [2015, 2024], Generation(name="g", start_year=2016, end_year=2022)),
        ([2010, 2012, 2013], [], Generation(name="g", start_year=2005, end_year=2013)),
    ],
)
def test_optimize_of_calculated_filter_is_noop(
    supported: List[int], unsupported: List[int], generation: Optional[Generation]
) -> None:
    calculated = calculate_debug_filter(supported, unsupported, generation)

    assert calculated is not None
    assert optimize_debug_filter(calculated, supported) is None


@pytest.mark.parametrize(
    "existing, supported",
    [
        (Filter(to=2020, from_=2022, years=[2021]), [2019, 2021, 2023]),
        (Filter(to=2025), [2014, 2017, 2019]),
        (Filter(from_=2010, years=[2012, 2013]), [2011, 2013, 2016]),
    ],
)
def test_repeated_optimisation_converges(existing: Filter, supported: List[int]) -> None:
    current = existing
    # A covered bound moves to (nearest supported year) - 1, one supported year
    # per pass, so a pass count bounded by the number of supported years is
    # needed here rather than a single extra pass.
    for _ in range(len(supported) + 1):
        result = optimize_debug_filter(current, supported)
        if result is None or result is REMOVE_FILTER:
            break
        current = result
    else:
        pytest.fail("optimisation did not reach a fixed point")

    if isinstance(current, Filter):
        assert all(year not in current.years for year in supported)
        assert current.to is None or all(year > current.to for year in supported)
        assert current.from_ is None or all(year < current.from_ for year in supported)


def test_format_years_as_ranges() -> None:
    assert format_years_as_ranges(["2019", "2020", "2021", "2023"]) == "2019-2021, 2023"
    assert format_years_as_ranges([]) == ""
    assert format_years_as_ranges([2023, 2019, "n/a", 2020]) == "2019-2020, 2023"
