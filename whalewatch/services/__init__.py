"""Chart computation services (transform, bounds, scales, axes, paths)."""
