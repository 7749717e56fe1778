"""Domain services: meal catalog, preference filtering and plan generation."""
