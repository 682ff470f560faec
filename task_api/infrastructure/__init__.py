"""Infrastructure layer: remote clients, persistence, auth and web adapters."""
