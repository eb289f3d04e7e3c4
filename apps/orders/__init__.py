"""Order history: purchases of snack requests."""
