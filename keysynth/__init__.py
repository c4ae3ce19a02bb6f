"""A keyboard-played synthesizer with sine and square voices, a block sample generator and a pygame front end."""

__version__ = "0.1.0"
__all__ = ["__version__"]