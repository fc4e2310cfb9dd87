"""Pydantic model for the package input file.

The input file is a JSON object with upper-case keys (PACKAGE_NAME,
DATE, BUSINESS_ITEM, PREREQUISITES, PACKAGE_DESCRIPTION). Field aliases
map those keys onto snake_case attributes.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Characters that cannot appear in a Windows or POSIX folder name
INVALID_NAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


class PackageInputSchema(BaseModel):
    """Schema for the package input file.

    Attributes:
        package_name: Package name, also used as the output folder name.
        date: Release date as written in the changelog.
        business_item: Business item (change ticket) identifier.
        prerequisites: Pre-requisite steps listed in the install readme.
        package_description: Free-text description for the root readme.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    package_name: str = Field(
        alias="PACKAGE_NAME", min_length=1, max_length=255, description="Package name"
    )
    date: str = Field(alias="DATE", min_length=1, description="Release date")
    business_item: str = Field(
        alias="BUSINESS_ITEM", min_length=1, description="Business item identifier"
    )
    prerequisites: list[str] = Field(
        alias="PREREQUISITES", description="Installation pre-requisites"
    )
    package_description: str = Field(
        alias="PACKAGE_DESCRIPTION", description="Package description"
    )

    @field_validator("package_name")
    @classmethod
    def validate_package_name(cls, v: str) -> str:
        """Validate package_name can be used as a folder name."""
        if v in (".", ".."):
            raise ValueError(f"PACKAGE_NAME cannot be '{v}'")
        bad = INVALID_NAME_CHARS.search(v)
        if bad:
            raise ValueError(
                f"PACKAGE_NAME must be usable as a folder name, found {bad.group()!r}"
            )
        return v

    @field_validator("prerequisites")
    @classmethod
    def validate_prerequisites(cls, v: list[str]) -> list[str]:
        """Validate prerequisites are non-empty strings."""
        cleaned = [item.strip() for item in v]
        if any(not item for item in cleaned):
            raise ValueError("PREREQUISITES items must be non-empty strings")
        return cleaned


__all__ = ["INVALID_NAME_CHARS", "PackageInputSchema"]
