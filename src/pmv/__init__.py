"""pmv: rename a project directory and every mention of its name."""

__version__ = "0.1.0"
