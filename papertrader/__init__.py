"""
Paper trading engine: simulated order execution and portfolio accounting.

Layers:
- domain: entities, value objects, ledger and sizing services, exceptions
- application: contracts for external collaborators (price source)
- infrastructure: the paper trading engine, audit log, market data adapters,
  configuration and monitoring
"""

__version__ = "0.1.0"
