"""FastAPI application entrypoint for obdlint service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

try:  # pragma: no cover - optional dependency
    from fastapi import Depends, FastAPI
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel

    _FASTAPI_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - service mode optional
    FastAPI = None  # type: ignore[assignment]
    Depends = None  # type: ignore[assignment]
    JSONResponse = None  # type: ignore[assignment]
    BaseModel = object  # type: ignore[assignment]
    _FASTAPI_AVAILABLE = False

from ..coverage import REMOVE_FILTER, calculate_debug_filter, optimize_debug_filter
from ..document import DocumentParseError
from ..linter import LintReport, SignalLinter
from ..models import Filter, Generation, LintResult
from ..rules import RuleRegistry
from ..stores import LintCache


class HealthResponse(BaseModel):
    status: str


class RuleInfo(BaseModel):
    id: str
    name: str
    description: str
    severity: str
    enabled: bool


class LintRequest(BaseModel):
    text: str


class EditModel(BaseModel):
    offset: int
    length: int
    new_text: str


class SuggestionModel(BaseModel):
    title: str
    edits: List[EditModel]


class LintResultModel(BaseModel):
    rule_id: str
    message: str
    severity: str
    offset: int
    length: int
    suggestion: Optional[SuggestionModel] = None


class LintResponse(BaseModel):
    results: List[LintResultModel]
    has_errors: bool


class DebugFilterRequest(BaseModel):
    supported_years: List[int]
    unsupported_years: List[int] = []
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    existing: Optional[dict] = None


class DebugFilterResponse(BaseModel):
    status: str
    filter: Optional[dict] = None


def _default_registry() -> RuleRegistry:
    return RuleRegistry.default()


def create_app(
    registry_factory: Callable[[], RuleRegistry] = _default_registry,
    cache: LintCache | None = None,
) -> FastAPI:
    """Create the FastAPI application exposing lint and debug-filter operations."""

    if not _FASTAPI_AVAILABLE:  # pragma: no cover - validated via unit tests
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    app = FastAPI(title="obdlint Service", version="0.1.0")
    lint_cache = cache if cache is not None else LintCache()

    async def get_registry() -> RuleRegistry:
        return registry_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/rules", response_model=List[RuleInfo])
    async def list_rules(registry: RuleRegistry = Depends(get_registry)) -> List[RuleInfo]:
        return [
            RuleInfo(
                id=config.id,
                name=config.name,
                description=config.description,
                severity=config.severity.value,
                enabled=config.enabled,
            )
            for config in registry.rule_configs()
        ]

    @app.post("/lint", response_model=LintResponse)
    async def lint(
        payload: LintRequest,
        registry: RuleRegistry = Depends(get_registry),
    ) -> LintResponse:
        def _run_lint() -> LintReport:
            signature = registry.signature()
            cached = lint_cache.get(payload.text, signature=signature)
            if cached is not None:
                return cached
            report = SignalLinter(registry).lint_text(payload.text)
            lint_cache.store(payload.text, signature=signature, report=report)
            return report

        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, _run_lint)
        return LintResponse(
            results=[_result_model(result) for result in report.results],
            has_errors=report.has_errors,
        )

    @app.post("/debug-filter", response_model=DebugFilterResponse)
    async def debug_filter(payload: DebugFilterRequest) -> DebugFilterResponse:
        if payload.existing is not None:
            proposed = optimize_debug_filter(
                Filter.from_mapping(payload.existing), payload.supported_years
            )
            if proposed is REMOVE_FILTER:
                return DebugFilterResponse(status="remove")
            if proposed is None:
                return DebugFilterResponse(status="unchanged")
            return DebugFilterResponse(status="optimized", filter=proposed.to_dict())

        generation = None
        if payload.start_year is not None:
            generation = Generation(
                name="request", start_year=payload.start_year, end_year=payload.end_year
            )
        calculated = calculate_debug_filter(
            payload.supported_years, payload.unsupported_years, generation
        )
        if calculated is None:
            return DebugFilterResponse(status="none")
        return DebugFilterResponse(status="calculated", filter=calculated.to_dict())

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(DocumentParseError)
    async def parse_error_handler(_: Any, exc: DocumentParseError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc), "offset": exc.offset})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def _result_model(result: LintResult) -> LintResultModel:
    suggestion = None
    if result.suggestion is not None:
        suggestion = SuggestionModel(
            title=result.suggestion.title,
            edits=[
                EditModel(offset=edit.offset, length=edit.length, new_text=edit.new_text)
                for edit in result.suggestion.edits
            ],
        )
    return LintResultModel(
        rule_id=result.rule_id,
        message=result.message,
        severity=result.severity.value,
        offset=result.offset,
        length=result.length,
        suggestion=suggestion,
    )


def run_service(
    host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    if not _FASTAPI_AVAILABLE:
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app()
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
