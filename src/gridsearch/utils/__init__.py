"""Configuration, cost-map and geometry helpers."""
