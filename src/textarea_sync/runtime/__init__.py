"""Runtime services (telemetry, configuration) shared across the package."""
