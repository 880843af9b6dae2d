"""POS vendor adapter layer for the drink-ordering platform."""

__version__ = "0.1.0"
