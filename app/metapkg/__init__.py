"""metapkg - one command line for many package managers."""

__version__ = "0.1.0"
