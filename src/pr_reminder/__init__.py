"""Find your open GitHub pull requests that are approved but not merged."""

__version__ = "0.1.0"
