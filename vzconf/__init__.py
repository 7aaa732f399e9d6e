"""vzconf - OpenVZ container definitions and configuration files."""

__version__ = "0.3.0"
