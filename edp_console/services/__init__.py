"""Service layer for CD pipeline business logic."""
