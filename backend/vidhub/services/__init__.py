"""Application services (use-cases)."""
