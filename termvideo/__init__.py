"""Play video as coloured ASCII glyphs in a true-colour terminal."""

__version__ = "0.1.0"