"""Services Layer — build cache gateway and the per-request decision engine."""
