"""
Concrete binding generators.
"""

from .stub import StubGenerator

__all__ = ["StubGenerator"]
