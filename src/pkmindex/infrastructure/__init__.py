"""Infrastructure layer — database, filesystem and subprocess access."""
