from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse


def error_response(status_code: int, error: str, details: Any = None) -> JSONResponse:
    body: dict[str, Any] = {"error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)
