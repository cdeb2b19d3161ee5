"""Parser configuration for Oxide.

Settings default to safe values and can be overridden through environment
variables (read only by front ends via `ParserConfig.from_env`) or passed
explicitly to `parse_source`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 128


@dataclass(frozen=True)
class ParserConfig:
    """Limits applied to a single parse call.

    Attributes:
        max_depth (int): Deepest allowed nesting of unary chains, groupings,
            and blocks before the parser reports `NestingTooDeep`.
    """

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

    @classmethod
    def from_env(cls) -> ParserConfig:
        """Build config from environment variables, falling back to defaults."""
        if val := os.environ.get("OXIDE_MAX_DEPTH"):
            try:
                depth = int(val)
            except ValueError as e:
                raise ValueError(f"OXIDE_MAX_DEPTH must be an integer, got {val!r}") from e
            return cls(max_depth=depth)
        return cls()
