"""Data stores for persistence and caching.

Stores handle:
- PostgreSQL: DB session, ORM operations
- Redis: caching with TTL policies

No business rules in stores - pricing, activity windows and counters belong in services.
"""
