"""Running ``protoc`` to obtain file descriptor sets, and related file helpers."""

from __future__ import annotations

import contextlib
import logging
import os
import platform
import subprocess
import tempfile
from collections.abc import Iterable
from pathlib import Path

from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError

__all__ = [
    "ProtocError",
    "error_message_protoc_not_found",
    "protoc_from_env",
    "protoc_include_from_env",
    "write_file_if_changed",
    "load_file_descriptor_set",
]

_log = logging.getLogger(__name__)

StrPath = str | os.PathLike


class ProtocError(OSError):
    """Raised when protoc cannot be found or run, or its output cannot be read."""


def error_message_protoc_not_found() -> str:
    """The message reported when the ``protoc`` executable cannot be found."""
    error_msg = (
        "Could not find `protoc`. If `protoc` is installed, try setting the `PROTOC` "
        "environment variable to the path of the `protoc` binary."
    )
    system = platform.system()
    if system == "Darwin":
        os_specific_hint = "To install it on macOS, run `brew install protobuf`."
    elif system == "Linux":
        os_specific_hint = "To install it on Debian, run `apt-get install protobuf-compiler`."
    else:
        os_specific_hint = (
            "Try installing `protobuf-compiler` or `protobuf` using your package manager."
        )
    download_msg = "It is also available from the release downloads of the protobuf project."
    return f"{error_msg} {os_specific_hint} {download_msg}"


def protoc_from_env() -> Path:
    """Return the ``protoc`` executable named by ``PROTOC``, or plain ``protoc``."""
    return Path(os.environ.get("PROTOC") or "protoc")


def protoc_include_from_env() -> Path | None:
    """Return the directory named by ``PROTOC_INCLUDE``, or None if it is unset."""
    value = os.environ.get("PROTOC_INCLUDE")
    if value is None:
        return None
    protoc_include = Path(value)
    if not protoc_include.exists():
        raise ProtocError(
            "PROTOC_INCLUDE environment variable points to non-existent directory "
            f"({str(protoc_include)!r})"
        )
    if not protoc_include.is_dir():
        raise ProtocError(
            "PROTOC_INCLUDE environment variable points to a non-directory file "
            f"({str(protoc_include)!r})"
        )
    return protoc_include


def write_file_if_changed(path: StrPath, content: bytes) -> bool:
    """Write ``content`` to ``path`` unless it already holds exactly that.

    Returns True if the file was written.
    """
    path = Path(path)
    try:
        previous = path.read_bytes()
    except OSError:
        previous = None
    if previous == content:
        _log.debug("unchanged: %s", path)
        return False
    _log.debug("writing: %s", path)
    path.write_bytes(content)
    return True


def _run_protoc(
    protoc: Path,
    descriptor_set_path: Path,
    protos: Iterable[StrPath],
    includes: Iterable[StrPath],
    protoc_args: Iterable[str],
) -> None:
    cmd: list[str] = [
        os.fspath(protoc),
        "--include_imports",
        "--include_source_info",
        "-o",
        os.fspath(descriptor_set_path),
    ]
    for include in includes:
        if Path(include).exists():
            cmd.extend(["-I", os.fspath(include)])
        else:
            _log.debug("ignoring %s since it does not exist.", include)

    # The built-in include directory goes after the user's so theirs can override it.
    protoc_include = protoc_include_from_env()
    if protoc_include is not None:
        cmd.extend(["-I", os.fspath(protoc_include)])

    cmd.extend(os.fspath(arg) for arg in protoc_args)
    cmd.extend(os.fspath(proto) for proto in protos)

    _log.debug("Running: %r", cmd)
    try:
        result = subprocess.run(cmd, capture_output=True, check=False)
    except FileNotFoundError as err:
        raise ProtocError(error_message_protoc_not_found()) from err
    except OSError as err:
        raise ProtocError(f"failed to invoke protoc (path: {str(protoc)!r}): {err}") from err

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", "replace") if result.stderr else ""
        raise ProtocError(f"protoc failed: {stderr}")


def load_file_descriptor_set(
    protos: Iterable[StrPath],
    includes: Iterable[StrPath],
    protoc: StrPath | None = None,
    protoc_args: Iterable[str] = (),
    descriptor_set_path: StrPath | None = None,
    skip_protoc_run: bool = False,
) -> descriptor_pb2.FileDescriptorSet:
    """Compile ``protos`` with protoc and return the resulting ``FileDescriptorSet``.

    With ``skip_protoc_run`` the set is read from ``descriptor_set_path`` instead,
    which is then required.
    """
    with contextlib.ExitStack() as stack:
        if descriptor_set_path is not None:
            set_path = Path(descriptor_set_path)
        else:
            if skip_protoc_run:
                raise ProtocError("file_descriptor_set_path is required with skip_protoc_run")
            tmp = stack.enter_context(tempfile.TemporaryDirectory(prefix="prost-build"))
            set_path = Path(tmp) / "prost-descriptor-set"

        if not skip_protoc_run:
            executable = Path(protoc) if protoc is not None else protoc_from_env()
            _run_protoc(executable, set_path, protos, includes, protoc_args)

        try:
            data = set_path.read_bytes()
        except OSError as err:
            raise ProtocError(
                f"unable to open file_descriptor_set_path: {str(set_path)!r}, OS: {err}"
            ) from err

    try:
        return descriptor_pb2.FileDescriptorSet.FromString(data)
    except DecodeError as err:
        raise ProtocError(f"invalid FileDescriptorSet: {err}") from err