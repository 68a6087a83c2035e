"""Execution collaborator tests."""

from typing import Any

import pytest

from toolrun.kernel.executor.invokers import EchoInvoker, HandlerInvoker
from toolrun.kernel.executor.tool import Tool


@pytest.fixture
def tool(simple_tool_spec: dict[str, Any]) -> Tool:
    return Tool.new_or_raise(simple_tool_spec)


@pytest.mark.unit
@pytest.mark.deterministic
class TestEchoInvoker:
    def test_echoes_name_and_input(self, tool: Tool) -> None:
        assert EchoInvoker().invoke(tool, {"message": "hi"}) == {
            "executed": True,
            "tool": "simple",
            "input": {"message": "hi"},
        }


@pytest.mark.unit
@pytest.mark.deterministic
class TestHandlerInvoker:
    def test_calls_handler_with_input(self, tool: Tool) -> None:
        received: list[dict[str, Any]] = []

        def handler(payload: dict[str, Any]) -> str:
            received.append(payload)
            return "handled"

        with_handler = tool.merge_defaults({"handler": handler})

        assert HandlerInvoker().invoke(with_handler, {"x": 1}) == "handled"
        assert received == [{"x": 1}]

    def test_without_handler_uses_fallback(self, tool: Tool) -> None:
        class Recording:
            def __init__(self) -> None:
                self.seen: list[str] = []

            def invoke(self, tool: Tool, input: dict[str, Any]) -> Any:
                self.seen.append(tool.name)
                return "fallback"

        fallback = Recording()

        assert HandlerInvoker(fallback=fallback).invoke(tool, {}) == "fallback"
        assert fallback.seen == ["simple"]

    def test_default_fallback_echoes(self, tool: Tool) -> None:
        assert HandlerInvoker().invoke(tool, {})["executed"] is True

    def test_handler_errors_propagate(self, tool: Tool) -> None:
        def handler(payload: dict[str, Any]) -> None:
            raise ConnectionError("upstream down")

        with pytest.raises(ConnectionError, match="upstream down"):
            HandlerInvoker().invoke(tool.merge_defaults({"handler": handler}), {})
