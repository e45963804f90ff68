"""Theme tokens and engine."""
