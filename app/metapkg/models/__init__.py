"""Data models for metapkg.

This module exports the core data structures used throughout the application.
"""

from metapkg.models.operation import Operation, OperationResult
from metapkg.models.package import Package, PackageFormat

__all__ = [
    "Operation",
    "OperationResult",
    "Package",
    "PackageFormat",
]
