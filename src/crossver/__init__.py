"""Cross-version compatibility test matrix generation."""

__version__ = "0.1.0"
