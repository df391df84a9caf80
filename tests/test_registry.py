from __future__ import annotations

import dataclasses

import pytest

import ultipdf
from ultipdf.exceptions import MissingInputError, UnknownOperationError
from ultipdf.tools import load_builtin_plugins
from ultipdf.tools.common.interfaces import BaseTool, ToolContext, ToolOptions
from ultipdf.tools.common.pipeline import ToolRegistry, registry, run_tool
from ultipdf.tools.common.results import ToolResult

CANONICAL_TOOLS = {
    "merge",
    "compress",
    "split",
    "jpg-to-pdf",
    "pdf-to-jpg",
    "rotate",
    "delete-pages",
    "protect",
    "unlock",
    "add-text",
    "extract-pages",
}


def setup_module(module):
    load_builtin_plugins()


def test_builtin_tools_are_registered() -> None:
    assert set(registry.names()) == CANONICAL_TOOLS


@pytest.mark.parametrize(
    ("alias", "canonical"),
    [
        ("image-to-pdf", "jpg-to-pdf"),
        ("img-to-pdf", "jpg-to-pdf"),
        ("pdf-to-image", "pdf-to-jpg"),
        ("remove-pages", "delete-pages"),
        ("add-password", "protect"),
        ("lock", "protect"),
        ("remove-password", "unlock"),
        ("watermark", "add-text"),
        ("text", "add-text"),
        ("editor", "add-text"),
        ("extract", "extract-pages"),
        ("MERGE", "merge"),
        (" Rotate ", "rotate"),
    ],
)
def test_synonyms_resolve_case_insensitively(alias: str, canonical: str) -> None:
    assert registry.canonical_name(alias) == canonical


@pytest.mark.parametrize("name", ["explode", "", None, 3])
def test_unknown_tool_lists_available_names(name: object) -> None:
    with pytest.raises(UnknownOperationError) as excinfo:
        registry.resolve(name)
    assert excinfo.value.message == f'Unknown tool: "{name}"'
    assert set(excinfo.value.available) == CANONICAL_TOOLS


def test_aliases_listing() -> None:
    assert registry.aliases("protect") == ["add-password", "lock"]
    assert registry.aliases("merge") == []


def test_load_builtin_plugins_is_idempotent() -> None:
    load_builtin_plugins()
    assert set(registry.names()) == CANONICAL_TOOLS


def test_validation_happens_before_any_document_work() -> None:
    with pytest.raises(MissingInputError) as excinfo:
        run_tool("rotate", {})
    assert excinfo.value.message.startswith("PDF file required")


class _EchoOptions(ToolOptions):
    def __init__(self, value: str) -> None:
        self.value = value

    @classmethod
    def from_mapping(cls, payload):
        return cls(payload.get("value", ""))


class _EchoTool(BaseTool):
    name = "echo"
    description = "Echo a value"
    options_class = _EchoOptions

    def run(self) -> ToolResult:
        return ToolResult(tool=self.name, message=self.options.value, page_count=0)


def test_custom_registry_and_duplicate_names() -> None:
    custom = ToolRegistry()
    custom.register("echo", _EchoTool, aliases=("say",))
    result = run_tool("SAY", {"value": "hi"}, tool_registry=custom)
    assert result.message == "hi"
    assert result.to_payload() == {"message": "hi"}

    with pytest.raises(ValueError):
        custom.register("say", _EchoTool)


def test_tool_rejects_foreign_options() -> None:
    with pytest.raises(TypeError):
        _EchoTool(ToolContext(options=ToolOptions()))


def test_package_exports_convenience_wrappers() -> None:
    assert ultipdf.__version__ == "1.0.0"
    assert callable(ultipdf.merge_documents)
    assert ultipdf.run_tool is run_tool


def test_tool_context_holds_only_options_and_settings() -> None:
    context = ToolContext(options=_EchoOptions("x"))
    assert [field.name for field in dataclasses.fields(context)] == ["options", "settings"]
    assert _EchoTool(context).run().message == "x"
