"""Model-year coverage: support manifests, generations, and debug filters."""

from .filters import (
    REMOVE_FILTER,
    FilterRemoval,
    calculate_debug_filter,
    format_years_as_ranges,
    optimize_debug_filter,
)
from .generations import GenerationSet, load_generations
from .manifest import ManifestError, SupportManifest, load_manifest
from .years import ModelYearIndex, YearCoverage

__all__ = [
    "FilterRemoval",
    "GenerationSet",
    "ManifestError",
    "ModelYearIndex",
    "REMOVE_FILTER",
    "SupportManifest",
    "YearCoverage",
    "calculate_debug_filter",
    "format_years_as_ranges",
    "load_generations",
    "load_manifest",
    "optimize_debug_filter",
]
