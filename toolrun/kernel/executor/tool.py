"""Tool: validated, immutable tool definition.

Built from an untrusted mapping with the keys ``name``, ``description``,
``input_schema`` and optionally ``handler``, ``timeout`` (ms) and ``tags``.
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError

from toolrun.kernel.executor.errors import InvalidInput, make_invalid
from toolrun.kernel.executor.results import Result

INPUT_NOT_A_MAP = "input must be a map"

# Fields that merge_defaults never overrides. ``tags`` is deliberately absent.
PROTECTED_FIELDS = frozenset({"name", "description", "input_schema"})


def _error_from_validation(exc: ValidationError, spec: Mapping[str, Any]) -> InvalidInput:
    errors = exc.errors(include_url=False)
    first = errors[0]
    field = ".".join(str(p) for p in first["loc"])
    return make_invalid(
        f"Invalid tool: {field}: {first['msg']}",
        {
            "field": field,
            "value": spec.get(str(first["loc"][0])) if first["loc"] else None,
            "errors": [{"loc": e["loc"], "msg": e["msg"], "type": e["type"]} for e in errors],
        },
    )


class Tool(BaseModel):
    """Named, schema-described unit of work.

    Instances are frozen and ``tags`` is a tuple; ``merge_defaults`` returns a
    new Tool. ``input_schema`` stays a plain dict so jsonschema can check it,
    and must not be edited in place.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    input_schema: dict[str, Any]  # JSON Schema, may be empty

    # Optional fields
    handler: Callable[..., Any] | None = None
    timeout: PositiveInt | None = None  # milliseconds
    tags: tuple[str, ...] = ()

    @classmethod
    def new(cls, spec: Any) -> Result["Tool"]:
        """Validate a raw spec into a Tool.

        Args:
            spec: Untrusted tool specification

        Returns:
            Result holding the Tool, or an InvalidInput error when ``spec`` is
            not a mapping or a required field is missing or mistyped
        """
        if not isinstance(spec, Mapping):
            return Result.failure(
                make_invalid("Invalid tool: spec must be a map", {"value": spec})
            )

        try:
            return Result.success(cls.model_validate(dict(spec)))
        except ValidationError as e:
            return Result.failure(_error_from_validation(e, spec))

    @classmethod
    def new_or_raise(cls, spec: Any) -> "Tool":
        """Like ``new`` but raises on an invalid spec.

        Only for call sites where a bad spec is a programming error.

        Raises:
            InvalidInput: If the spec does not validate
        """
        return cls.new(spec).unwrap()

    def validate_input(self, input: Any) -> None:
        """Check candidate input for this tool.

        Only the shape is checked: input must be a mapping. The declared
        ``input_schema`` is not consulted here (see SchemaValidator).

        Raises:
            ValueError: With the message ``"input must be a map"``
        """
        if not isinstance(input, Mapping):
            raise ValueError(INPUT_NOT_A_MAP)

    def merge_defaults(self, defaults: Mapping[str, Any]) -> "Tool":
        """Return a new Tool with ``defaults`` applied.

        ``name``, ``description`` and ``input_schema`` are never overridden;
        keys that are not Tool fields are ignored. This tool is left unchanged.

        Raises:
            pydantic.ValidationError: If a default has the wrong type
        """
        values = {name: getattr(self, name) for name in type(self).model_fields}
        for key, value in defaults.items():
            if key in PROTECTED_FIELDS or key not in values:
                continue
            values[key] = value

        return type(self).model_validate(values)
