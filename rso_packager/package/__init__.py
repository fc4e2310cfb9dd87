"""Package assembly module.

This module handles:
- The per-run package context
- Content-category branching (forms, firmware or both)
- Staging folder moves and the package folder layout
- Readme, changelog and batch script generation
- Content manifest generation via an external hashing command
- End-to-end package creation
"""

from rso_packager.package.content import NoContentError, classify_content
from rso_packager.package.context import PackageContext
from rso_packager.package.layout import LayoutError
from rso_packager.package.manifest import ManifestError
from rso_packager.package.service import PackageValidationError, create_package

__all__ = [
    "LayoutError",
    "ManifestError",
    "NoContentError",
    "PackageContext",
    "PackageValidationError",
    "classify_content",
    "create_package",
]
