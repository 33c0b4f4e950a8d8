"""Mapping of Protobuf packages and types to externally provided Rust paths."""

from __future__ import annotations

from collections.abc import Iterable

from prostgen.ident import to_snake, to_upper_camel

__all__ = ["ExternPathError", "ExternPaths"]

_WELL_KNOWN_TYPES = (
    (".google.protobuf", "::prost_types"),
    (".google.protobuf.BoolValue", "bool"),
    (".google.protobuf.BytesValue", "::prost::alloc::vec::Vec<u8>"),
    (".google.protobuf.DoubleValue", "f64"),
    (".google.protobuf.Empty", "()"),
    (".google.protobuf.FloatValue", "f32"),
    (".google.protobuf.Int32Value", "i32"),
    (".google.protobuf.Int64Value", "i64"),
    (".google.protobuf.StringValue", "::prost::alloc::string::String"),
    (".google.protobuf.UInt32Value", "u32"),
    (".google.protobuf.UInt64Value", "u64"),
)


class ExternPathError(ValueError):
    """Raised for an invalid or duplicate extern Protobuf path."""


def _validate_proto_path(path: str) -> None:
    if not path.startswith("."):
        raise ExternPathError(
            f"Protobuf paths must be fully qualified (begin with a leading '.'): {path}"
        )
    if any(not part for part in path.split(".")[1:]):
        raise ExternPathError(f"invalid fully-qualified Protobuf path: {path}")


class ExternPaths:
    """Resolves fully-qualified Protobuf identifiers to extern Rust paths."""

    def __init__(self, paths: Iterable[tuple[str, str]], prost_types: bool) -> None:
        self._paths: dict[str, str] = {}
        for proto_path, rust_path in paths:
            self._insert(proto_path, rust_path)
        if prost_types:
            for proto_path, rust_path in _WELL_KNOWN_TYPES:
                self._insert(proto_path, rust_path)

    def _insert(self, proto_path: str, rust_path: str) -> None:
        _validate_proto_path(proto_path)
        if proto_path in self._paths:
            raise ExternPathError(f"duplicate extern Protobuf path: {proto_path}")
        self._paths[proto_path] = rust_path

    def __repr__(self) -> str:
        return f"ExternPaths({self._paths!r})"

    def resolve_ident(self, pb_ident: str) -> str | None:
        """Return the Rust path for ``pb_ident``, or None if it is not extern."""
        if not pb_ident.startswith("."):
            raise ValueError(f"identifier must be fully qualified: {pb_ident}")

        exact = self._paths.get(pb_ident)
        if exact is not None:
            return exact

        idx = pb_ident.rfind(".")
        while idx >= 0:
            rust_path = self._paths.get(pb_ident[:idx])
            if rust_path is not None:
                *modules, ident_type = pb_ident[idx + 1 :].split(".")
                segments = [*rust_path.split("::"), *modules]
                converted = [
                    segment if position == 0 and segment == "crate" else to_snake(segment)
                    for position, segment in enumerate(segments)
                ]
                converted.append(to_upper_camel(ident_type))
                return "::".join(converted)
            idx = pb_ident.rfind(".", 0, idx)

        return None