"""Routing core for a Redis and Memcache proxy: hashing, slot tables, ketama rings, redirects, health and config versions."""

__version__ = "0.1.0"