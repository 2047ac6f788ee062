"""
kv_facade: a small HTTP façade over a key-value store.
"""

__version__ = "1.0.0"
