"""Sv39 page tables over simulated memory, a free-list heap, a shell parser and small Unix utilities."""

__version__ = "0.1.0"