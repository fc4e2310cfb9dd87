"""Input file loading and the sample input file.

This module reads the package input JSON, validates it against
PackageInputSchema, and writes a sample input file users can copy
when their input was rejected.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rso_packager.inputs.schema import PackageInputSchema

logger = logging.getLogger(__name__)

INPUT_SUFFIX = ".json"

SAMPLE_INPUT: dict[str, Any] = {
    "PACKAGE_NAME": "RSO_Forms_Update_2024_01",
    "DATE": "2024-01-01",
    "BUSINESS_ITEM": "BI-000000",
    "PREREQUISITES": [
        "Terminal is running the current NCRDiag release",
        "Terminal has been rebooted within the last 24 hours",
    ],
    "PACKAGE_DESCRIPTION": "Updates the customer-facing forms on the terminal CDU.",
}


class InputFileError(Exception):
    """Raised when the input file cannot be read or fails validation."""

    def __init__(
        self,
        message: str,
        problems: list[str] | None = None,
        code: str = "input_file_error",
    ) -> None:
        super().__init__(message)
        self.problems = problems or []
        self.code = code


def load_json(path: Path) -> dict[str, Any]:
    """Load a JSON file and return its contents as a dict.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed JSON content as a dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the JSON content is not an object.
    """
    with open(path, encoding="utf-8-sig") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def format_validation_errors(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into one message per field."""
    problems: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "(root)"
        problems.append(f"{loc}: {err['msg']}")
    return problems


def parse_package_input(data: dict[str, Any]) -> PackageInputSchema:
    """Validate input data, collecting every field error before failing.

    Raises:
        InputFileError: If data does not match the schema.
    """
    try:
        return PackageInputSchema.model_validate(data)
    except ValidationError as e:
        problems = format_validation_errors(e)
        raise InputFileError(
            f"Input file has {len(problems)} invalid field(s)",
            problems=problems,
            code="input_invalid",
        ) from e


def load_package_input(path: Path) -> PackageInputSchema:
    """Load and validate the package input file.

    Args:
        path: Path to the JSON input file.

    Returns:
        Validated PackageInputSchema instance.

    Raises:
        InputFileError: If the file cannot be read, is not JSON or fails validation.
    """
    logger.info("Reading input file %s", path)
    try:
        data = load_json(path)
    except OSError as e:
        raise InputFileError(
            f"Fatal Error reading input file: {e}", code="input_unreadable"
        ) from e
    except json.JSONDecodeError as e:
        raise InputFileError(
            f"Fatal Error reading input file: {e}", code="input_not_json"
        ) from e
    except ValueError as e:
        raise InputFileError(
            f"Fatal Error reading input file: {e}", code="input_not_object"
        ) from e

    package_input = parse_package_input(data)
    logger.info("Finished reading input file")
    return package_input


def write_sample_input(folder: Path, name: str = "sample-input.json") -> Path:
    """Write the sample input file into folder unless one already exists.

    Returns:
        Path to the sample input file.
    """
    sample_path = folder / name
    if sample_path.exists():
        logger.info("%s already exists as a file", sample_path)
        return sample_path

    folder.mkdir(parents=True, exist_ok=True)
    with sample_path.open("w", encoding="utf-8") as f:
        json.dump(SAMPLE_INPUT, f, indent=2)
        f.write("\n")
    logger.info("Sample input file created successfully at %s", sample_path)
    return sample_path


__all__ = [
    "INPUT_SUFFIX",
    "SAMPLE_INPUT",
    "InputFileError",
    "format_validation_errors",
    "load_json",
    "load_package_input",
    "parse_package_input",
    "write_sample_input",
]
