"""Package input handling.

This module handles:
- Validation of the JSON input file (PackageInputSchema)
- Loading the input file with field-level error collection
- Writing the sample input file shown to users on fatal errors
"""

from rso_packager.inputs.io import (
    SAMPLE_INPUT,
    InputFileError,
    load_package_input,
    parse_package_input,
    write_sample_input,
)
from rso_packager.inputs.schema import PackageInputSchema

__all__ = [
    "SAMPLE_INPUT",
    "InputFileError",
    "PackageInputSchema",
    "load_package_input",
    "parse_package_input",
    "write_sample_input",
]
