"""Domain layer - entities, errors and protocols."""
