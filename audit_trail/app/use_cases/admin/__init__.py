"""
Admin Use Cases

Start-up and maintenance operations.
"""

from .seed_action_types_use_case import (
    DEFAULT_ACTION_TYPES,
    SeedActionTypesResponse,
    SeedActionTypesUseCase,
)

__all__ = [
    "DEFAULT_ACTION_TYPES",
    "SeedActionTypesResponse",
    "SeedActionTypesUseCase",
]
