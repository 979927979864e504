"""
System Use Cases

Initialization and maintenance routines.
"""

from .initialize_use_case import InitializeResult, InitializeUseCase

__all__ = [
    "InitializeUseCase",
    "InitializeResult",
]
