"""Application layer: DTOs and the task service."""
