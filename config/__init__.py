"""Per-system settings for the attractor trail renderer."""
