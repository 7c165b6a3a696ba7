"""Job file loader with error reporting.

Loads JSON cutting job files and validates them against the job schema.
Reading, parsing and validation happen in separate steps so that every
failure becomes a ConfigError naming the step that failed.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from panelcut.application.config.schema import CuttingJobConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Exception raised for job configuration errors.

    The CLI prints it and exits with status 1; the REST API answers it with
    a 422 response carrying ``error_type`` and ``details``.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the job file (if applicable)
        details: Additional error details (line/column for JSON, field errors)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Args:
        loc: Path segments, strings for object keys and ints for list indices

    Returns:
        Dotted path with bracketed indices, or "" for the document root

    Examples:
        >>> _format_json_path(("parts", 1, "length"))
        'parts[1].length'
        >>> _format_json_path(("optimization", "weights"))
        'optimization.weights'
    """
    segments: list[str] = []
    for key in loc:
        if not isinstance(key, int):
            segments.append(str(key))
        elif segments:
            segments[-1] += f"[{key}]"
        else:
            segments.append(f"[{key}]")
    return ".".join(segments)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Flatten a Pydantic ValidationError into one dict per offending field.

    Args:
        error: The ValidationError raised by the job schema

    Returns:
        Dicts with ``path``, ``message``, ``value`` (the rejected input) and
        ``error_type`` (Pydantic's error code) keys, in schema order
    """
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    """Build the multi-line message shown for a rejected job.

    Rejected scalar values are echoed back; whole stock or part rows are not,
    since they would swamp the message.

    Args:
        details: Field errors from _extract_validation_errors

    Returns:
        A "Job validation failed:" header followed by one line per field
    """
    lines = ["Job validation failed:"]
    for detail in details:
        line = f"  - {detail['path'] or '(root)'}: {detail['message']}"
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            line += f" (got: {value!r})"
        lines.append(line)
    return "\n".join(lines)


def _read_job_text(path: Path) -> str:
    if not path.exists():
        raise ConfigError(
            message=f"Job file not found: {path}",
            error_type="file_not_found",
            path=path,
        )
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading job file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading job file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )


def _parse_job_json(content: str, path: Path) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in job file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate_job(data: Any, path: Path | None = None) -> CuttingJobConfiguration:
    try:
        config = CuttingJobConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        logger.debug("Job rejected with %d field error(s)", len(details))
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        )
    logger.debug(
        "Job accepted: %d stock row(s), %d part row(s), kerf %.2fmm",
        len(config.stocks),
        len(config.parts),
        config.kerf,
    )
    return config


def load_config(path: Path) -> CuttingJobConfiguration:
    """Load and validate a cutting job from a JSON file.

    Args:
        path: Path to the JSON job file

    Returns:
        A validated CuttingJobConfiguration instance

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
            The error_type attribute indicates the specific category:
            - "file_not_found" / "permission_denied" / "file_read_error"
            - "json_parse": Invalid JSON syntax, with line and column
            - "validation": The job does not match the schema

    Example:
        >>> try:
        ...     job = load_config(Path("bookcase.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(detail["path"], detail["message"])
    """
    data = _parse_job_json(_read_job_text(path), path)
    logger.debug("Loaded job file %s", path)
    return _validate_job(data, path)


def load_config_from_dict(data: dict[str, Any]) -> CuttingJobConfiguration:
    """Validate a cutting job that is already decoded, such as an API body.

    Args:
        data: Decoded job document

    Returns:
        A validated CuttingJobConfiguration instance

    Raises:
        ConfigError: With error_type "validation" if the data fails the schema.
    """
    return _validate_job(data)
