"""Rendering of Rust enums, nested modules and `Name` impls for generated code."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from prostgen.descriptor_util import EnumVariantMapping
from prostgen.ident import to_snake, to_upper_camel

__all__ = [
    "push_indent",
    "render_enum",
    "render_mod_open",
    "render_mod_close",
    "render_type_name",
]

_INDENT = "    "
_DEFAULT_PROST_PATH = "::prost"


def push_indent(depth: int) -> str:
    """Return the indentation for ``depth`` levels, four spaces each."""
    return _INDENT * depth


def render_enum(
    enum_name: str,
    variants: Sequence[EnumVariantMapping],
    depth: int = 0,
    prost_path: str | None = None,
    skip_debug: bool = False,
    attributes: Iterable[str] = (),
) -> str:
    """Render a Rust enum for a Protobuf enum, with its ``as_str_name``/``from_str_name`` impl."""
    prost = prost_path or _DEFAULT_PROST_PATH
    dbg = "" if skip_debug else "Debug, "
    lines: list[tuple[int, str]] = [(depth, attribute) for attribute in attributes]

    lines.append(
        (
            depth,
            f"#[derive(Clone, Copy, {dbg}PartialEq, Eq, Hash, PartialOrd, Ord, "
            f"{prost}::Enumeration)]",
        )
    )
    lines.append((depth, "#[repr(i32)]"))
    lines.append((depth, f"pub enum {enum_name} {{"))
    lines.extend(
        (depth + 1, f"{v.generated_variant_name} = {v.proto_number},") for v in variants
    )
    lines.append((depth, "}"))

    lines.append((depth, f"impl {enum_name} {{"))
    body = depth + 1
    lines.extend(
        [
            (body, "/// String value of the enum field names used in the ProtoBuf definition."),
            (body, "///"),
            (body, "/// The values are not transformed in any way and thus are considered stable"),
            (body, "/// (if the ProtoBuf definition does not change) and safe for programmatic use."),
            (body, "pub fn as_str_name(&self) -> &'static str {"),
            (body + 1, "match self {"),
        ]
    )
    lines.extend(
        (body + 2, f'{enum_name}::{v.generated_variant_name} => "{v.proto_name}",')
        for v in variants
    )
    lines.extend(
        [
            (body + 1, "}"),
            (body, "}"),
            (body, "/// Creates an enum from field names used in the ProtoBuf definition."),
            (body, "pub fn from_str_name(value: &str) -> ::core::option::Option<Self> {"),
            (body + 1, "match value {"),
        ]
    )
    lines.extend(
        (body + 2, f'"{v.proto_name}" => Some(Self::{v.generated_variant_name}),')
        for v in variants
    )
    lines.extend(
        [
            (body + 2, "_ => None,"),
            (body + 1, "}"),
            (body, "}"),
            (depth, "}"),
        ]
    )
    return "".join(f"{push_indent(level)}{text}\n" for level, text in lines)


def render_mod_open(module: str, depth: int = 0) -> str:
    """Open the nested module holding a message's nested types."""
    indent = push_indent(depth)
    return (
        f"{indent}/// Nested message and enum types in `{module}`.\n"
        f"{indent}pub mod {to_snake(module)} {{\n"
    )


def render_mod_close(depth: int = 0) -> str:
    """Close a nested module opened at ``depth``."""
    return f"{push_indent(depth)}}}\n"


def render_type_name(
    message_name: str,
    package: str,
    type_path: Sequence[str],
    domain: str | None = None,
    prost_path: str | None = None,
) -> str:
    """Render the ``Name`` trait impl giving a message's name, package and type URL."""
    prost = prost_path or _DEFAULT_PROST_PATH
    string_path = f"{prost}::alloc::string::String"
    full_name = "{}{}{}{}{}".format(
        package.strip("."),
        "." if package else "",
        ".".join(type_path),
        "." if type_path else "",
        message_name,
    )
    domain_name = domain or ""
    return (
        f"impl {prost}::Name for {to_upper_camel(message_name)} {{\n"
        f"const NAME: &'static str = \"{message_name}\";\n"
        f"const PACKAGE: &'static str = \"{package}\";\n"
        f'fn full_name() -> {string_path} {{ "{full_name}".into() }}'
        f'fn type_url() -> {string_path} {{ "{domain_name}/{full_name}".into() }}'
        "}\n"
    )