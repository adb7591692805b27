"""Ingestion layer.

This package turns the host's raw case record (plain strings keyed by
camelCase field names) into typed, frozen case snapshots.
"""

__all__: list[str] = []
