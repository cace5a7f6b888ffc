"""Infrastructure layer - database, providers, telemetry."""
