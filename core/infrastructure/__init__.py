"""Infrastructure layer - database, gateways and notification adapters."""
