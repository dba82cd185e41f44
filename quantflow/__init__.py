"""QuantFlow - simulated market feed, technical indicators and AI trading advisor."""

__version__ = "0.1.0"
