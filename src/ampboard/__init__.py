"""AMPBoard: local development dashboard for folder listings and exports."""

__version__ = "0.1.0"
