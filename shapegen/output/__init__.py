"""
Output module exports
"""
from .diagnostics import GenerationDiagnostics

__all__ = [
    'GenerationDiagnostics'
]
