"""Application-level exceptions and FastAPI exception handlers."""


from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

    def details(self) -> dict[str, Any] | None:
        return None

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: str | None = None):
        msg = f"{entity} not found" if not entity_id else f"{entity} '{entity_id}' not found"
        super().__init__(msg, status_code=404, code="NOT_FOUND")

class InvalidInputError(AppException):
    """Malformed request shape, rejected before any rule evaluation."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400, code="INVALID_INPUT")

class RuleViolationError(AppException):
    """A package selection failed validation and cannot be saved."""

    def __init__(self, message: str, validation: dict[str, Any]):
        self.validation = validation
        super().__init__(message, status_code=422, code="RULE_VIOLATION")

    def details(self) -> dict[str, Any] | None:
        return {"validation": self.validation}

class CatalogLoadError(AppException):
    """The catalog source is unreadable or contains malformed records.

    ``failures`` holds one entry per rejected record:
    ``{"index": int | None, "id": str | None, "reason": str}``.
    """

    def __init__(self, message: str, failures: list[dict[str, Any]] | None = None):
        self.failures = failures or []
        if self.failures:
            summary = "; ".join(
                f"record {f.get('index')} ({f.get('id') or '?'}): {f['reason']}"
                for f in self.failures
            )
            message = f"{message}: {summary}"
        super().__init__(message, status_code=500, code="CATALOG_LOAD_ERROR")

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_body(code: str, message: str, details: dict[str, Any] | None = None) -> dict:
    body: dict[str, Any] = {"error": {"code": code, "message": message}}
    if details:
        body.update(details)
    return body

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message, exc.details()),
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=_error_body("NOT_FOUND", "Resource not found"),
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred"),
        )
