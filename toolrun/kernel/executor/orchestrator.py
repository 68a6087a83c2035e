"""Orchestrator: validate a tool and its input, then execute with bounded retry.

Flow for a single call::

    Tool.new(spec) -> tool.validate_input(input) -> invoker.invoke(tool, input)

Validation failures end the call at once. Only invocation failures are
retried, immediately and with no backoff, ``retry`` times. Every outcome is
returned as a Result; nothing is raised to the caller.
"""

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt, ValidationError

from toolrun.config import get_settings
from toolrun.kernel.executor.errors import (
    ClassifiedError,
    classify,
    make_execution,
    make_invalid,
)
from toolrun.kernel.executor.invokers import HandlerInvoker, ToolInvoker
from toolrun.kernel.executor.results import Result
from toolrun.kernel.executor.schema_validator import SchemaValidationError, SchemaValidator
from toolrun.kernel.executor.tool import Tool

logger = logging.getLogger(__name__)


class ToolTimeoutError(Exception):
    """Raised when an attempt outlives its deadline."""


class ExecutionOptions(BaseModel):
    """Per-call execution options.

    ``context`` is carried for caller-side correlation only and never
    changes control flow. Unknown keys are rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout: PositiveInt = Field(default_factory=lambda: get_settings().default_timeout_ms)
    retry: NonNegativeInt = Field(default_factory=lambda: get_settings().default_retry)
    context: dict[str, Any] = Field(default_factory=dict)

    enforce_timeout: bool = Field(default_factory=lambda: get_settings().enforce_timeout)
    strict_schema: bool = Field(default_factory=lambda: get_settings().strict_schema)


def _options_mapping(options: ExecutionOptions | Mapping[str, Any] | None) -> Mapping[str, Any]:
    # Only explicitly set fields, so "timeout" keeps its precedence over tool.timeout.
    if isinstance(options, ExecutionOptions):
        return {name: getattr(options, name) for name in options.model_fields_set}
    return options if options is not None else {}


def _spec_name(tool_spec: Any) -> Any:
    return tool_spec.get("name") if isinstance(tool_spec, Mapping) else None


class Orchestrator:
    """Single entry point for running tools.

    Args:
        invoker: Execution collaborator; defaults to HandlerInvoker
        validator: Schema validator used when ``strict_schema`` is set
    """

    def __init__(
        self,
        invoker: ToolInvoker | None = None,
        validator: SchemaValidator | None = None,
    ) -> None:
        self.invoker = invoker or HandlerInvoker()
        self.validator = validator or SchemaValidator()

    def execute(
        self,
        tool_spec: Any,
        input: Any,
        options: ExecutionOptions | Mapping[str, Any] | None = None,
    ) -> Result[Any]:
        """Execute a tool with the given input.

        Args:
            tool_spec: Raw tool specification (name, description, input_schema)
            input: Mapping of input parameters for the tool
            options: ExecutionOptions or a mapping of its fields

        Returns:
            Result with the invoker's value unchanged, or a ClassifiedError:
            InvalidInput for a bad spec, input or options, ExecutionFailure
            once retries are exhausted
        """
        try:
            return self._execute(tool_spec, input, options)
        except ClassifiedError as e:
            logger.error("Failed executing tool %s: %s", _spec_name(tool_spec), e)
            return Result.failure(e)
        except Exception as e:
            logger.exception("Unclassified failure executing tool %s", _spec_name(tool_spec))
            return Result.failure(classify(e))

    def execute_with_context(
        self,
        tool_spec: Any,
        input: Any,
        context: Mapping[str, Any],
        options: ExecutionOptions | Mapping[str, Any] | None = None,
    ) -> Result[Any]:
        """Execute a tool, carrying ``context`` in the options.

        Keys in ``context`` are merged over any context already in ``options``.
        """
        logger.debug(
            "Executing tool %s with context",
            _spec_name(tool_spec),
            extra={"tool": _spec_name(tool_spec), "context": context},
        )

        if options is not None and not isinstance(options, (Mapping, ExecutionOptions)):
            # Let execute reject the malformed options.
            return self.execute(tool_spec, input, options)

        merged = dict(_options_mapping(options))
        base = merged.get("context")
        if isinstance(base, Mapping) and isinstance(context, Mapping):
            merged["context"] = {**base, **context}
        else:
            merged["context"] = context

        return self.execute(tool_spec, input, merged)

    def _execute(self, tool_spec: Any, input: Any, options: Any) -> Result[Any]:
        built = Tool.new(tool_spec)
        if not built.ok:
            return built
        tool = built.unwrap()

        try:
            tool.validate_input(input)
        except ValueError as e:
            return Result.failure(
                make_invalid(
                    f"Invalid input: {e}",
                    {"field": "input", "value": input, "tool": tool.name},
                )
            )

        resolved = self._resolve_options(options)
        if not resolved.ok:
            return resolved
        opts = resolved.unwrap()

        if opts.strict_schema:
            try:
                self.validator.validate(dict(input), tool.input_schema)
            except SchemaValidationError as e:
                return Result.failure(
                    make_invalid(
                        f"Invalid input: {e.message}",
                        {
                            "field": e.path or None,
                            "code": e.code.value,
                            "schema_path": e.schema_path,
                            "tool": tool.name,
                        },
                    )
                )

        return self._execute_with_retry(tool, input, opts)

    def _resolve_options(self, options: Any) -> Result[ExecutionOptions]:
        if isinstance(options, ExecutionOptions):
            return Result.success(options)
        if options is not None and not isinstance(options, Mapping):
            return Result.failure(
                make_invalid(
                    "Invalid options: options must be a map",
                    {"field": "options", "value": options},
                )
            )

        try:
            return Result.success(ExecutionOptions.model_validate(dict(options or {})))
        except ValidationError as e:
            first = e.errors(include_url=False)[0]
            field = ".".join(str(p) for p in first["loc"])
            return Result.failure(
                make_invalid(
                    f"Invalid options: {field}: {first['msg']}",
                    {"field": field, "value": first.get("input")},
                )
            )

    def _execute_with_retry(self, tool: Tool, input: Any, opts: ExecutionOptions) -> Result[Any]:
        attempts_left = opts.retry
        attempt = 0

        while True:
            attempt += 1
            logger.debug(
                "Executing tool %s",
                tool.name,
                extra={
                    "tool": tool.name,
                    "input": input,
                    "attempt": attempt,
                    "context": opts.context,
                },
            )
            try:
                value = self._invoke(tool, input, opts)
            except Exception as e:
                if attempts_left > 0:
                    logger.warning(
                        "Tool %s failed, retrying (%d attempts left)",
                        tool.name,
                        attempts_left,
                        extra={
                            "tool": tool.name,
                            "attempts_left": attempts_left,
                            "context": opts.context,
                        },
                    )
                    attempts_left -= 1
                    continue

                logger.error(
                    "Tool %s failed after %d attempt(s): %r",
                    tool.name,
                    attempt,
                    e,
                    extra={"tool": tool.name, "context": opts.context},
                )
                return Result.failure(
                    make_execution(
                        f"Tool execution failed: {e!r}",
                        {"tool": tool.name, "reason": e, "attempts": attempt},
                    )
                )

            return Result.success(value)

    def _invoke(self, tool: Tool, input: Any, opts: ExecutionOptions) -> Any:
        if not opts.enforce_timeout:
            return self.invoker.invoke(tool, input)

        # An explicit per-call timeout beats the tool's own.
        if "timeout" in opts.model_fields_set or tool.timeout is None:
            timeout_ms = opts.timeout
        else:
            timeout_ms = tool.timeout

        pool = ThreadPoolExecutor(max_workers=1)
        future = pool.submit(self.invoker.invoke, tool, input)
        try:
            return future.result(timeout=timeout_ms / 1000)
        except FuturesTimeoutError as e:
            future.cancel()
            raise ToolTimeoutError(f"tool '{tool.name}' timed out after {timeout_ms}ms") from e
        finally:
            # The worker may still be running; never block on it.
            pool.shutdown(wait=False, cancel_futures=True)


_default_orchestrator: Orchestrator | None = None


def _orchestrator() -> Orchestrator:
    global _default_orchestrator
    if _default_orchestrator is None:
        _default_orchestrator = Orchestrator()
    return _default_orchestrator


def execute(
    tool_spec: Any,
    input: Any,
    options: ExecutionOptions | Mapping[str, Any] | None = None,
) -> Result[Any]:
    """Execute with the default orchestrator. See ``Orchestrator.execute``."""
    return _orchestrator().execute(tool_spec, input, options)


def execute_with_context(
    tool_spec: Any,
    input: Any,
    context: Mapping[str, Any],
    options: ExecutionOptions | Mapping[str, Any] | None = None,
) -> Result[Any]:
    """Execute with context using the default orchestrator."""
    return _orchestrator().execute_with_context(tool_spec, input, context, options)
