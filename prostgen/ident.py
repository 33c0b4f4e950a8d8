"""Identifier helpers: case conversion and keyword sanitising for generated Rust code."""

from __future__ import annotations

from collections.abc import Callable, Iterator

__all__ = ["sanitize_identifier", "to_snake", "to_upper_camel", "strip_enum_prefix"]

_RAW_KEYWORDS = frozenset(
    {
        # 2015 strict keywords.
        "as", "break", "const", "continue", "else", "enum", "false", "fn", "for",
        "if", "impl", "in", "let", "loop", "match", "mod", "move", "mut", "pub",
        "ref", "return", "static", "struct", "trait", "true", "type", "unsafe",
        "use", "where", "while",
        # 2018 strict keywords.
        "dyn",
        # 2015 reserved keywords.
        "abstract", "become", "box", "do", "final", "macro", "override", "priv",
        "typeof", "unsized", "virtual", "yield",
        # 2018 reserved keywords.
        "async", "await", "try",
    }
)

# Keywords that cannot be raw identifiers; they get an underscore suffix instead.
_SUFFIXED_KEYWORDS = frozenset({"_", "super", "self", "Self", "extern", "crate"})


def sanitize_identifier(s: str) -> str:
    """Make ``s`` usable as a Rust identifier."""
    if s in _RAW_KEYWORDS:
        return f"r#{s}"
    if s in _SUFFIXED_KEYWORDS:
        return f"{s}_"
    if s and s[0].isnumeric():
        return f"_{s}"
    return s


def _split_words(s: str) -> Iterator[str]:
    """Yield the words of ``s``, splitting on separators and case changes."""
    for chunk in "".join(c if c.isalnum() else " " for c in s).split(" "):
        if not chunk:
            continue
        start = 0
        mode = None  # None: at a boundary, "lower" or "upper" otherwise
        for i, (c, nxt) in enumerate(zip(chunk, chunk[1:] + "\0")):
            if i == len(chunk) - 1:
                yield chunk[start:]
                break
            if c.islower():
                next_mode = "lower"
            elif c.isupper():
                next_mode = "upper"
            else:
                next_mode = mode
            if next_mode == "lower" and nxt.isupper():
                yield chunk[start : i + 1]
                start = i + 1
                mode = None
            elif mode == "upper" and c.isupper() and nxt.islower():
                yield chunk[start:i]
                start = i
                mode = None
            else:
                mode = next_mode


def _convert(s: str, word: Callable[[str], str], separator: str) -> str:
    return separator.join(word(w) for w in _split_words(s) if w)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_snake(s: str) -> str:
    """Convert a camelCase or SCREAMING_SNAKE_CASE name to a lower_snake Rust identifier."""
    return sanitize_identifier(_convert(s, str.lower, "_"))


def to_upper_camel(s: str) -> str:
    """Convert a snake_case name to an UpperCamel Rust type identifier."""
    return sanitize_identifier(_convert(s, _capitalize, ""))


def strip_enum_prefix(prefix: str, name: str) -> str:
    """Strip an enum's type name from the front of one of its value names.

    Both names are expected in UpperCamel case. The prefix is only removed when
    what follows it starts with an upper-case letter.
    """
    stripped = name[len(prefix):] if name.startswith(prefix) else name
    if not (stripped and stripped[0].isupper()):
        stripped = name
    return sanitize_identifier(stripped)