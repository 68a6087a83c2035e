"""toolrun: run schema-described tools with classified errors and bounded retry."""

__version__ = "0.1.0"

from toolrun.kernel.executor import (  # noqa: E402
    ErrorKind,
    ExecutionOptions,
    Orchestrator,
    Result,
    Tool,
    execute,
    execute_with_context,
)

__all__ = [
    "__version__",
    "ErrorKind",
    "ExecutionOptions",
    "Orchestrator",
    "Result",
    "Tool",
    "execute",
    "execute_with_context",
]
