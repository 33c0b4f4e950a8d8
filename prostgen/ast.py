"""Comments and service descriptions handed to code and service generators."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from google.protobuf import descriptor_pb2

__all__ = ["Comments", "Service", "Method", "get_lines"]

_RULE_URL = re.compile(r"https?://[^\s)]+")
_RULE_BRACKETS = re.compile(r"(^|[^\]\\])\[(([^\]]*[^\\])?)\]([^(\[]|$)")

_INDENT = "    "


def get_lines(comments: str) -> list[str]:
    """Split a comment block into lines, without line terminators."""
    if not comments:
        return []
    lines = comments.split("\n")
    if comments.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _should_indent(line: str) -> bool:
    """A doc line gets a leading space unless it already starts with exactly one."""
    if not line:
        return False
    return line[0] != " " or line[1:2] == " "


def _escape_brackets(match: re.Match[str]) -> str:
    return f"{match.group(1)}\\[{match.group(2) or ''}\\]{match.group(4) or ''}"


def _sanitize_line(line: str) -> str:
    """Wrap URLs in angle brackets and escape bare square brackets."""
    s = _RULE_URL.sub(lambda m: f"<{m.group(0)}>", line)
    s = _RULE_BRACKETS.sub(_escape_brackets, s)
    if _should_indent(s):
        s = " " + s
    return s


@dataclass
class Comments:
    """Comments attached to a Protobuf item."""

    leading_detached: list[list[str]] = field(default_factory=list)
    leading: list[str] = field(default_factory=list)
    trailing: list[str] = field(default_factory=list)

    @classmethod
    def from_location(cls, location: Any) -> Comments:
        """Build comments from a ``SourceCodeInfo.Location``."""
        return cls(
            leading_detached=[get_lines(block) for block in location.leading_detached_comments],
            leading=get_lines(location.leading_comments or ""),
            trailing=get_lines(location.trailing_comments or ""),
        )

    def append_with_indent(self, indent_level: int) -> str:
        """Render the comments as Rust comment lines, four spaces per indent level."""
        indent = _INDENT * indent_level
        out: list[str] = []

        for block in self.leading_detached:
            out.extend(f"{indent}//{_sanitize_line(line)}\n" for line in block)
            out.append("\n")

        out.extend(f"{indent}///{_sanitize_line(line)}\n" for line in self.leading)

        if self.leading and self.trailing:
            out.append(f"{indent}///\n")

        out.extend(f"{indent}///{_sanitize_line(line)}\n" for line in self.trailing)
        return "".join(out)


@dataclass
class Method:
    """A service method descriptor."""

    name: str
    proto_name: str
    comments: Comments
    input_type: str
    output_type: str
    input_proto_type: str
    output_proto_type: str
    options: descriptor_pb2.MethodOptions = field(default_factory=descriptor_pb2.MethodOptions)
    client_streaming: bool = False
    server_streaming: bool = False


@dataclass
class Service:
    """A service descriptor."""

    name: str
    proto_name: str
    package: str
    comments: Comments
    methods: list[Method] = field(default_factory=list)
    options: descriptor_pb2.ServiceOptions = field(default_factory=descriptor_pb2.ServiceOptions)