"""Allow running psmodctl with ``python -m psmodctl``."""

from psmodctl.cli.main import app

app(prog_name="psmodctl")
