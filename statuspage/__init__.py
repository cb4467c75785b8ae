"""statuspage: a minimal uptime monitor for wavy.fm."""

__version__ = "0.1.0"
