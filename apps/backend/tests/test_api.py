"""Integration tests for the JSON dispatch endpoint."""

from __future__ import annotations

import base64
import sys
import time
from io import BytesIO
from pathlib import Path

from fastapi.testclient import TestClient
from pypdf import PdfReader, PdfWriter

sys.path.append(str(Path(__file__).resolve().parents[1]))
sys.path.append(str(Path(__file__).resolve().parents[3]))

from app import main  # noqa: E402
from app.main import app, create_app  # noqa: E402
from ultipdf.config import Settings  # noqa: E402

client = TestClient(app)


def _pdf_b64(pages: int = 3) -> str:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    buffer = BytesIO()
    writer.write(buffer)
    return "data:application/pdf;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_service_info_lists_tools() -> None:
    payload = client.get("/api/pdf").json()
    assert payload["success"] is True
    assert payload["version"] == "1.0.0"
    assert payload["totalTools"] == 11
    assert {tool["name"] for tool in payload["tools"]} >= {"merge", "add-text", "extract-pages"}
    assert payload["usage"]["endpoint"] == "/api/pdf"


def test_rotate_round_trip() -> None:
    response = client.post("/api/pdf", json={"tool": "ROTATE", "pdf": _pdf_b64(), "rotation": 180})

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["tool"] == "ROTATE"
    assert payload["rotatedPages"] == [1, 2, 3]
    assert payload["filename"].startswith("rotated_180deg_")
    reader = PdfReader(BytesIO(base64.b64decode(payload["pdf"])))
    assert [page.rotation for page in reader.pages] == [180, 180, 180]
    assert payload["fileSizeBytes"] == len(base64.b64decode(payload["pdf"]))


def test_split_returns_documents() -> None:
    payload = client.post("/api/pdf", json={"tool": "split", "pdf": _pdf_b64(2)}).json()
    assert payload["documentsCreated"] == 2
    assert [document["range"] for document in payload["documents"]] == ["1-1", "2-2"]


def test_missing_tool() -> None:
    response = client.post("/api/pdf", json={"pdf": _pdf_b64()})
    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["error"] == "Tool name required"
    assert "merge" in payload["availableTools"]
    assert payload["example"]


def test_unknown_tool() -> None:
    response = client.post("/api/pdf", json={"tool": "shred"})
    assert response.status_code == 400
    payload = response.json()
    assert payload["error"] == 'Unknown tool: "shred"'
    assert "extract-pages" in payload["availableTools"]


def test_domain_errors_map_to_bad_request() -> None:
    response = client.post("/api/pdf", json={"tool": "delete-pages", "pdf": _pdf_b64(3), "pages": [1, 2, 3]})
    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Cannot delete all pages. At least one page must remain.",
    }


def test_invalid_json_body() -> None:
    response = client.post("/api/pdf", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_oversized_body_is_rejected() -> None:
    small = TestClient(create_app(Settings(max_payload_mb=0.001)))
    response = small.post("/api/pdf", json={"tool": "compress", "pdf": _pdf_b64(20)})
    assert response.status_code == 413


def test_slow_tool_times_out(monkeypatch) -> None:
    def _slow(tool, body, settings):
        time.sleep(0.5)
        return {"success": True}

    monkeypatch.setattr(main, "_process", _slow)
    slow = TestClient(create_app(Settings(request_timeout=0.05)))
    response = slow.post("/api/pdf", json={"tool": "merge"})
    assert response.status_code == 504


def test_cors_preflight() -> None:
    response = client.options(
        "/api/pdf",
        headers={"Origin": "https://example.com", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in {"*", "https://example.com"}
