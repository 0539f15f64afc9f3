"""Batch fetchers, throttling policies and identifier resolution."""
