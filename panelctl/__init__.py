"""panelctl — lifecycle control for the x-ui network panel service."""

__version__ = "0.1.0"
