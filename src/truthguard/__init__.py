"""truthguard: flag JS/TS collections used as booleans."""

__version__ = "0.1.0"
