"""Helpers that turn Protobuf descriptors into the names and tags of generated Rust code."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from google.protobuf import descriptor_pb2

from prostgen.extern_paths import ExternPaths
from prostgen.ident import strip_enum_prefix, to_snake, to_upper_camel

__all__ = [
    "EnumVariantMapping",
    "EnumVariantOverlapError",
    "can_pack",
    "fq_name",
    "resolve_ident",
    "field_type_tag",
    "map_value_type_tag",
    "build_enum_value_mappings",
]

_FD = descriptor_pb2.FieldDescriptorProto

_PACKABLE_TYPES = frozenset(
    {
        _FD.TYPE_FLOAT,
        _FD.TYPE_DOUBLE,
        _FD.TYPE_INT32,
        _FD.TYPE_INT64,
        _FD.TYPE_UINT32,
        _FD.TYPE_UINT64,
        _FD.TYPE_SINT32,
        _FD.TYPE_SINT64,
        _FD.TYPE_FIXED32,
        _FD.TYPE_FIXED64,
        _FD.TYPE_SFIXED32,
        _FD.TYPE_SFIXED64,
        _FD.TYPE_BOOL,
        _FD.TYPE_ENUM,
    }
)

_TYPE_TAGS = {
    _FD.TYPE_FLOAT: "float",
    _FD.TYPE_DOUBLE: "double",
    _FD.TYPE_INT32: "int32",
    _FD.TYPE_INT64: "int64",
    _FD.TYPE_UINT32: "uint32",
    _FD.TYPE_UINT64: "uint64",
    _FD.TYPE_SINT32: "sint32",
    _FD.TYPE_SINT64: "sint64",
    _FD.TYPE_FIXED32: "fixed32",
    _FD.TYPE_FIXED64: "fixed64",
    _FD.TYPE_SFIXED32: "sfixed32",
    _FD.TYPE_SFIXED64: "sfixed64",
    _FD.TYPE_BOOL: "bool",
    _FD.TYPE_STRING: "string",
    _FD.TYPE_BYTES: "bytes",
    _FD.TYPE_GROUP: "group",
    _FD.TYPE_MESSAGE: "message",
}

_DEBUG_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}


class EnumVariantOverlapError(ValueError):
    """Raised when two enum values would produce the same Rust variant name."""


@dataclass(frozen=True)
class EnumVariantMapping:
    """How one Protobuf enum value maps onto a generated Rust variant."""

    path_idx: int
    proto_name: str
    proto_number: int
    generated_variant_name: str


def _field_type(field: descriptor_pb2.FieldDescriptorProto) -> int:
    """The field's type; unset or unknown types count as double."""
    return field.type if field.type in _FD.Type.values() else _FD.TYPE_DOUBLE


def _debug_str(s: str) -> str:
    """Quote ``s`` the way a debug-formatted string literal is written."""
    parts = []
    for c in s:
        if c in _DEBUG_ESCAPES:
            parts.append(_DEBUG_ESCAPES[c])
        elif not c.isprintable():
            parts.append(f"\\u{{{ord(c):x}}}")
        else:
            parts.append(c)
    return '"' + "".join(parts) + '"'


def can_pack(field: descriptor_pb2.FieldDescriptorProto) -> bool:
    """Return True if a repeated field of this type can use packed encoding."""
    return _field_type(field) in _PACKABLE_TYPES


def fq_name(package: str, type_path: Sequence[str], name: str) -> str:
    """Return the fully-qualified Protobuf name, starting with a dot."""
    return "{}{}{}{}.{}".format(
        "." if package else "",
        package.strip("."),
        "." if type_path else "",
        ".".join(type_path),
        name,
    )


def resolve_ident(
    package: str,
    type_path: Sequence[str],
    extern_paths: ExternPaths | None,
    pb_ident: str,
) -> str:
    """Resolve a fully-qualified Protobuf identifier to a Rust path relative to the current module."""
    if not pb_ident.startswith("."):
        raise ValueError(f"identifier must be fully qualified: {pb_ident}")

    if extern_paths is not None:
        extern = extern_paths.resolve_ident(pb_ident)
        if extern is not None:
            return extern

    local_path = [*package.split("."), *type_path]
    # A missing package splits into a single empty segment, which must not take part.
    if local_path and local_path[0] == "":
        local_path = local_path[1:]

    *ident_path, ident_type = pb_ident[1:].split(".")

    common = 0
    for local, ident in zip(local_path, ident_path):
        if local != ident:
            break
        common += 1

    segments = ["super"] * (len(local_path) - common)
    segments.extend(to_snake(part) for part in ident_path[common:])
    segments.append(to_upper_camel(ident_type))
    return "::".join(segments)


def field_type_tag(
    field: descriptor_pb2.FieldDescriptorProto,
    package: str,
    type_path: Sequence[str],
    extern_paths: ExternPaths | None,
) -> str:
    """Return the type part of a field's ``#[prost(...)]`` annotation."""
    field_type = _field_type(field)
    if field_type == _FD.TYPE_ENUM:
        resolved = resolve_ident(package, type_path, extern_paths, field.type_name)
        return f"enumeration={_debug_str(resolved)}"
    return _TYPE_TAGS[field_type]


def map_value_type_tag(
    field: descriptor_pb2.FieldDescriptorProto,
    package: str,
    type_path: Sequence[str],
    extern_paths: ExternPaths | None,
) -> str:
    """Return the type tag of a map value field, as used inside a map annotation."""
    if _field_type(field) == _FD.TYPE_ENUM:
        resolved = resolve_ident(package, type_path, extern_paths, field.type_name)
        return f"enumeration({resolved})"
    return field_type_tag(field, package, type_path, extern_paths)


def build_enum_value_mappings(
    generated_enum_name: str,
    do_strip_enum_prefix: bool,
    enum_values: Iterable[descriptor_pb2.EnumValueDescriptorProto],
) -> list[EnumVariantMapping]:
    """Map enum values to Rust variant names, skipping aliases of an earlier number."""
    numbers: set[int] = set()
    generated_names: dict[str, str] = {}
    mappings: list[EnumVariantMapping] = []

    for idx, value in enumerate(enum_values):
        # Aliased values (allow_alias) share a number; only the first one is kept.
        if value.number in numbers:
            continue
        numbers.add(value.number)

        variant_name = to_upper_camel(value.name)
        if do_strip_enum_prefix:
            variant_name = strip_enum_prefix(generated_enum_name, variant_name)

        previous = generated_names.get(variant_name)
        if previous is not None:
            raise EnumVariantOverlapError(
                f"Generated enum variant names overlap: `{variant_name}` variant name to be "
                f"used both by `{previous}` and `{value.name}` ProtoBuf enum values"
            )
        generated_names[variant_name] = value.name

        mappings.append(
            EnumVariantMapping(
                path_idx=idx,
                proto_name=value.name,
                proto_number=value.number,
                generated_variant_name=variant_name,
            )
        )
    return mappings