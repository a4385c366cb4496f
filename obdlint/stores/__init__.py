"""In-process stores."""

from .lint_cache import LintCache, document_key

__all__ = ["LintCache", "document_key"]
