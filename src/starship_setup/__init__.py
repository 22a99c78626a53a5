"""starship-setup — install and configure the Starship prompt."""

__version__ = "0.1.0"
