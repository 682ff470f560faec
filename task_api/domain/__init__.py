"""Domain layer: task entity, value objects, roles and the ports it depends on."""
