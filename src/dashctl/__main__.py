"""Allow ``python -m dashctl``."""

from dashctl.cli import cli

cli()
