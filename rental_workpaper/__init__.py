"""Rental property workpapers: calculation, diagnostics and review workflow."""

__version__ = "0.1.0"
