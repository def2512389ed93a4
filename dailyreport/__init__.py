"""Daily report schema versioning and record migration."""

__version__ = "0.1.0"
