"""Filter normalization and canonical slice resolution for job listings."""

__version__ = "0.1.0"
