"""Static analysis and model-year coverage for OBD-II signal sets."""

__version__ = "0.1.0"
