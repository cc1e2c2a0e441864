"""Fixture-driven conformance oracle for subword tokenizers."""

__version__ = "0.1.0"
