"""
C++ wrapper stub generator.

A small concrete generator that exercises the core: one wrapper source
per class plus a module index.
"""

from .generator import StubGenerator

__all__ = ["StubGenerator"]
