"""
Type definitions for biscuit.
"""

from collections.abc import Mapping
from typing import Any, Literal, TypeAlias

SameSite: TypeAlias = Literal["None", "Lax", "Strict"]
OptionsMapping: TypeAlias = Mapping[str, Any]
