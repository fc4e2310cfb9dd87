"""RSO Packager - assemble point-of-sale terminal deployment packages.

This package builds RSO package directory trees for forms and firmware:
install and rollback scripts, readme files, a changelog and a content
manifest, from a JSON input file and four staging folders.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
