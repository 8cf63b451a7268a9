"""Incremental digest of new LeetCode Discuss articles."""

__version__ = "1.0.0"
