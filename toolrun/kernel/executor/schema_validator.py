"""SchemaValidator: JSON Schema validation for tool input.

Opt-in deep check run by the orchestrator when ``strict_schema`` is set.
The default input check only requires a mapping.
"""

from enum import Enum
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError


class ValidationErrorCode(str, Enum):
    """Standardized validation error codes."""

    SCHEMA_INVALID = "SCHEMA_INVALID"  # Input violates the tool's input_schema
    SCHEMA_MALFORMED = "SCHEMA_MALFORMED"  # input_schema itself is not valid JSON Schema


class SchemaValidationError(Exception):
    """Raised when schema validation fails.

    Attributes:
        code: Standardized error code
        message: Human-readable error description
        path: Dotted path to the invalid field (empty for the root)
        schema_path: Dotted path within the schema that was violated
    """

    def __init__(
        self,
        code: ValidationErrorCode,
        message: str,
        path: str = "",
        schema_path: str = "",
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.path = path
        self.schema_path = schema_path


def _dotted(parts: Any) -> str:
    return ".".join(str(p) for p in parts)


class SchemaValidator:
    """Validates data against a Draft 7 JSON Schema."""

    def check_schema(self, schema: dict[str, Any]) -> None:
        """Ensure a schema is itself well formed.

        Raises:
            SchemaValidationError: With code SCHEMA_MALFORMED
        """
        try:
            Draft7Validator.check_schema(schema)
        except SchemaError as e:
            raise SchemaValidationError(
                code=ValidationErrorCode.SCHEMA_MALFORMED,
                message=f"Schema is malformed: {e.message}",
                schema_path=_dotted(e.schema_path),
            ) from e

    def validate(self, data: Any, schema: dict[str, Any]) -> None:
        """Validate data against JSON Schema.

        Only the first violation is reported.

        Args:
            data: Data to validate (typically dict)
            schema: JSON Schema to validate against

        Raises:
            SchemaValidationError: SCHEMA_MALFORMED for a bad schema,
                SCHEMA_INVALID when ``data`` does not conform
        """
        self.check_schema(schema)

        errors = list(Draft7Validator(schema).iter_errors(data))
        if not errors:
            return

        first_error = errors[0]
        raise SchemaValidationError(
            code=ValidationErrorCode.SCHEMA_INVALID,
            message=first_error.message,
            path=_dotted(first_error.path),
            schema_path=_dotted(first_error.schema_path),
        )
