"""Allow `python -m pmv`."""

from pmv.cli import app

app()
