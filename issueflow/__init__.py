"""issueflow: filter and rank repository issues with a small query language."""

__version__ = "0.1.0"
