"""Executor module: tool definition, validation and execution with retry."""

from toolrun.kernel.executor.errors import (
    ClassifiedError,
    ConfigError,
    ErrorKind,
    ExecutionFailure,
    InvalidInput,
    UnknownInternal,
    classify,
    make_config,
    make_execution,
    make_invalid,
)
from toolrun.kernel.executor.results import Result
from toolrun.kernel.executor.tool import Tool
from toolrun.kernel.executor.schema_validator import (
    SchemaValidationError,
    SchemaValidator,
    ValidationErrorCode,
)
from toolrun.kernel.executor.invokers import EchoInvoker, HandlerInvoker, ToolInvoker
from toolrun.kernel.executor.orchestrator import (
    ExecutionOptions,
    Orchestrator,
    ToolTimeoutError,
    execute,
    execute_with_context,
)

__all__ = [
    "ClassifiedError",
    "ConfigError",
    "ErrorKind",
    "ExecutionFailure",
    "InvalidInput",
    "UnknownInternal",
    "classify",
    "make_config",
    "make_execution",
    "make_invalid",
    "Result",
    "Tool",
    "SchemaValidator",
    "SchemaValidationError",
    "ValidationErrorCode",
    "ToolInvoker",
    "EchoInvoker",
    "HandlerInvoker",
    "ExecutionOptions",
    "Orchestrator",
    "ToolTimeoutError",
    "execute",
    "execute_with_context",
]
