# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Custom Exception Hierarchy for Skilldex


Provides standardized exceptions for consistent error handling across the package.

Usage:
    from skilldex.core.exceptions import SkillLoadError

    try:
        await store.load()
    except SkillLoadError as e:
        logger.error(e.to_dict())

Architecture:
- Base SkilldexException for all custom exceptions
- SkillLoadError wraps every I/O, parse and validation failure raised while
  loading the catalog (the original error is chained as __cause__)
- InvalidQueryError for malformed filter/sort/pagination options
- All exceptions carry a message and a detail dict
"""

from typing import Optional, Dict, Any


# =============================================================================
# Base Exception
# =============================================================================

class SkilldexException(Exception):
    """
    Base exception for all Skilldex custom exceptions.

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the package.
    """

    def __init__(
        self,
        message: str,
        detail: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.detail = detail or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "detail": self.detail
        }


# =============================================================================
# Catalog Exceptions
# =============================================================================

class SkillLoadError(SkilldexException):
    """Loading the skill catalog failed (missing source, parse error, bad record)."""

    def __init__(
        self,
        source: Any,
        message: str,
        detail: Optional[Dict[str, Any]] = None
    ):
        full_message = f"Failed to load skills from {source}: {message}"
        detail = detail or {}
        detail["source"] = str(source)
        super().__init__(full_message, detail=detail)


class InvalidQueryError(SkilldexException):
    """A filter, sort or pagination option is invalid."""

    def __init__(
        self,
        field: str,
        message: str,
        detail: Optional[Dict[str, Any]] = None
    ):
        full_message = f"Invalid query option '{field}': {message}"
        detail = detail or {}
        detail["field"] = field
        super().__init__(full_message, detail=detail)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Base
    "SkilldexException",

    # Catalog
    "SkillLoadError",
    "InvalidQueryError",
]
