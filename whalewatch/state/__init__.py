"""Reactive chart and pointer state."""
