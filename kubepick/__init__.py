"""kubepick - session and cache core for a kubectl pod picker."""

__version__ = "0.1.0"
