"""
Aspect storage utilities for the old-to-new schema migration.
Row decoding, soft-delete detection and dual-read result comparison.
"""

__version__ = "0.1.0"
