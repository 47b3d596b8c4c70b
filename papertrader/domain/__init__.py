"""
Domain Layer - Pure Business Logic

This layer contains:
- Entities: orders, positions and portfolio snapshots
- Value Objects: symbols and the monetary rounding policy
- Services: the portfolio ledger and the position sizing calculator

No external dependencies allowed in this layer.
"""
