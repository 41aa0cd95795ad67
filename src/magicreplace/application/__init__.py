"""Application services wiring features to adapters."""
