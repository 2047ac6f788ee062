"""
Storage backends used by kv_facade.

Subpackages:
    - kv: key-value store client (PostgreSQL and in-memory backends)
"""
