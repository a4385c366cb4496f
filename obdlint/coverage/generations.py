"""Vehicle generation metadata (generations.yaml)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import yaml

from ..logging import get_logger
from ..models import Generation

logger = get_logger("generations")

ALL_YEARS_GROUP = "All Years"
OTHER_YEARS_GROUP = "Other Years"


class GenerationSet:
    """Ordered collection of generations for one vehicle model."""

    def __init__(self, generations: Sequence[Generation]) -> None:
        self._generations = list(generations)

    def __iter__(self):
        return iter(self._generations)

    def __len__(self) -> int:
        return len(self._generations)

    def __bool__(self) -> bool:
        return bool(self._generations)

    def contains(self, year: int) -> bool:
        return any(generation.contains(year) for generation in self._generations)

    @property
    def first_year(self) -> Optional[int]:
        if not self._generations:
            return None
        return min(generation.start_year for generation in self._generations)

    @property
    def last_year(self) -> Optional[int]:
        """Final covered year, or None while any generation is ongoing."""
        if not self._generations or any(generation.ongoing for generation in self._generations):
            return None
        return max(
            generation.end_year for generation in self._generations if generation.end_year is not None
        )

    def bounds(self) -> Optional[Generation]:
        first = self.first_year
        if first is None:
            return None
        return Generation(name="all", start_year=first, end_year=self.last_year)

    def generation_for_year(self, year: Union[int, str]) -> Optional[Generation]:
        try:
            value = int(year)
        except (TypeError, ValueError):
            return None
        for generation in self._generations:
            if generation.contains(value):
                return generation
        return None

    def group_years_by_generation(self, years: Iterable[Union[int, str]]) -> Dict[str, List[str]]:
        """Bucket years by generation name; unmatched years go to "Other Years"."""
        year_list = [str(year) for year in years]
        if not self._generations:
            return {ALL_YEARS_GROUP: year_list}
        grouped: Dict[str, List[str]] = {}
        ungrouped: List[str] = []
        for year in year_list:
            generation = self.generation_for_year(year)
            if generation is None:
                ungrouped.append(year)
            else:
                grouped.setdefault(generation.name, []).append(year)
        if ungrouped:
            grouped[OTHER_YEARS_GROUP] = ungrouped
        return grouped


def load_generations(path: Path) -> GenerationSet:
    """Read generations.yaml; a missing or invalid file yields an empty set."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return GenerationSet([])
    except OSError as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return GenerationSet([])
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        logger.warning("Invalid generations file %s: %s", path, exc)
        return GenerationSet([])
    if not isinstance(data, dict) or not isinstance(data.get("generations"), list):
        logger.warning("Generations file %s has no 'generations' list", path)
        return GenerationSet([])

    generations: List[Generation] = []
    for raw in data["generations"]:
        generation = _parse_generation(raw)
        if generation is None:
            logger.debug("Ignoring malformed generation entry: %r", raw)
            continue
        generations.append(generation)
    return GenerationSet(generations)


def _parse_generation(raw: Any) -> Optional[Generation]:
    if not isinstance(raw, dict):
        return None
    start = raw.get("start_year")
    end = raw.get("end_year")
    if not isinstance(start, int) or isinstance(start, bool):
        return None
    if end is not None and (not isinstance(end, int) or isinstance(end, bool)):
        return None
    description = raw.get("description")
    return Generation(
        name=str(raw.get("name") or f"{start}-{end if end is not None else 'present'}"),
        start_year=start,
        end_year=end,
        description=str(description) if description is not None else None,
    )


__all__ = [
    "ALL_YEARS_GROUP",
    "GenerationSet",
    "OTHER_YEARS_GROUP",
    "load_generations",
]
