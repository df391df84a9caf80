"""FastAPI application dispatching JSON requests to the ultipdf tools."""

from __future__ import annotations

import asyncio
import json
from json import JSONDecodeError
from typing import Any

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ultipdf import __version__, registry, run_tool
from ultipdf.config import Settings
from ultipdf.core.utils import configure_logging, get_logger
from ultipdf.exceptions import UltiPDFError, UnknownOperationError

LOGGER = get_logger("ultipdf.backend")

SERVICE_NAME = "🚀 Ultimate PDF API"
TOOL_EXAMPLE = '{ "tool": "merge", "pdfs": [...] }'


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message, **extra})


def _service_info() -> dict[str, Any]:
    tools = [
        {"id": number, "name": name, "description": registry.resolve(name).description}
        for number, name in enumerate(registry.names(), start=1)
    ]
    return {
        "success": True,
        "name": SERVICE_NAME,
        "version": __version__,
        "status": "running",
        "totalTools": len(tools),
        "tools": tools,
        "usage": {
            "method": "POST",
            "endpoint": "/api/pdf",
            "body": '{ "tool": "tool-name", ...options }',
        },
    }


def _process(tool: str, body: dict[str, Any], settings: Settings) -> dict[str, Any]:
    """Run ``tool`` synchronously and render the response envelope."""

    result = run_tool(tool, body, settings=settings)
    return {"success": True, "tool": tool, **result.to_payload()}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the HTTP shell around the tool registry."""

    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="Ultimate PDF API", version=__version__)
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.get("/health", response_class=JSONResponse)
    async def health() -> dict[str, str]:
        """Lightweight health endpoint for uptime checks."""
        return {"status": "ok"}

    @app.get("/api/pdf", response_class=JSONResponse)
    async def service_info() -> dict[str, Any]:
        return _service_info()

    @app.post("/api/pdf")
    async def process(request: Request) -> JSONResponse:
        raw = await request.body()
        if len(raw) > settings.max_payload_bytes:
            return _error(413, f"Request body exceeds the {settings.max_payload_mb:g} MB limit.")

        try:
            body = json.loads(raw or b"{}")
        except (JSONDecodeError, UnicodeDecodeError):
            return _error(400, "Request body must be valid JSON.")
        if not isinstance(body, dict):
            return _error(400, "Request body must be a JSON object.")

        tool = body.get("tool")
        if not tool:
            return _error(400, "Tool name required", example=TOOL_EXAMPLE, availableTools=registry.names())

        try:
            payload = await asyncio.wait_for(
                run_in_threadpool(_process, tool, body, settings),
                timeout=settings.request_timeout,
            )
        except asyncio.TimeoutError:
            LOGGER.warning("Tool %s exceeded %.0f seconds", tool, settings.request_timeout)
            return _error(504, f"Processing exceeded {settings.request_timeout:g} seconds.")
        except UnknownOperationError as exc:
            return _error(400, exc.message, availableTools=exc.available)
        except UltiPDFError as exc:
            LOGGER.info("Tool %s rejected request: %s", tool, exc.message)
            return _error(400, exc.message)
        except Exception as exc:  # pragma: no cover - defensive conversion to HTTP error
            LOGGER.exception("Tool %s failed", tool)
            return _error(500, str(exc) or "Internal server error")
        return JSONResponse(payload)

    return app


app = create_app()
