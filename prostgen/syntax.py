"""The syntax level declared by a .proto file."""

from __future__ import annotations

import enum

__all__ = ["Syntax"]


class Syntax(enum.Enum):
    """Protobuf syntax version."""

    PROTO2 = "proto2"
    PROTO3 = "proto3"

    @classmethod
    def from_name(cls, name: str | None) -> Syntax:
        """Parse the ``syntax`` field of a file descriptor; a missing value means proto2."""
        if name is None:
            return cls.PROTO2
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"unknown syntax: {name}") from None