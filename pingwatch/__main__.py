"""Allow ``python -m pingwatch``."""

from pingwatch.cli.main import cli


cli()
