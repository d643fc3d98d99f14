"""Async client for the Jupiter swap aggregator HTTP API: quotes, swaps and swap instructions."""

__version__ = "0.1.0"