"""Allow running as ``python -m rso_packager``."""

from rso_packager.cli import app

app(prog_name="rso-packager")
