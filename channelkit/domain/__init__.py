"""Domain layer — welcome channel, tags and log retrieval logic, no framework dependencies."""
