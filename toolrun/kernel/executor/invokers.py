"""Execution collaborators: the only place tool-specific work happens.

An invoker returns the tool's result or raises to signal failure. The
orchestrator does not inspect either.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from toolrun.kernel.executor.tool import Tool

logger = logging.getLogger(__name__)


class ToolInvoker(Protocol):
    """Performs the tool-specific work for one attempt."""

    def invoke(self, tool: Tool, input: dict[str, Any]) -> Any:
        """Run ``tool`` on ``input``.

        Args:
            tool: Validated tool definition
            input: Input mapping, passed through unchanged

        Returns:
            The tool's result, uninterpreted by the caller

        Raises:
            Exception: Any exception signals a failed attempt
        """
        ...


@dataclass
class EchoInvoker:
    """Simulated execution: echoes the tool name and input back.

    Stands in for an external agent SDK until one is wired up.
    """

    def invoke(self, tool: Tool, input: dict[str, Any]) -> Any:
        """Return ``{"executed": True, "tool": name, "input": input}``."""
        return {"executed": True, "tool": tool.name, "input": input}


@dataclass
class HandlerInvoker:
    """Runs ``tool.handler(input)``; tools without a handler go to ``fallback``."""

    fallback: ToolInvoker = field(default_factory=EchoInvoker)

    def invoke(self, tool: Tool, input: dict[str, Any]) -> Any:
        """Call the tool's handler, or the fallback when it has none.

        Args:
            tool: Validated tool definition
            input: Input mapping for the handler

        Returns:
            Whatever the handler (or fallback) returns
        """
        if tool.handler is None:
            return self.fallback.invoke(tool, input)

        logger.debug("calling handler for tool %s", tool.name)
        return tool.handler(input)
