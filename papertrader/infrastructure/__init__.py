"""Infrastructure layer: engine, audit trail, market data, configuration, monitoring."""
