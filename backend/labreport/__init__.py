"""Lab report engine: analyte templates, reference ranges and derived values."""

__version__ = "0.1.0"
