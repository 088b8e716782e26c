"""Allow ``python -m md2adf``."""

from .cli import run

run()
