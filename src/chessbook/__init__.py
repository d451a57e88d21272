"""Opening-book trainer: parse annotated chess lines and drill them."""

__version__ = "0.1.0"
