"""cavegen - procedural cave level synthesis for 2D platformers."""

__version__ = "0.3.0"
