"""Task Service - project-scoped task management microservice."""

__version__ = "1.0.0"
