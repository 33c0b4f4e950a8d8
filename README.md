# prostgen

Building blocks for turning Protocol Buffers descriptors into typed message
source code: identifier conversion, C-escape decoding of default values,
extern path resolution, doc comment rendering, field type tags, enum and
module rendering, and running `protoc` to obtain a `FileDescriptorSet`.

## Installation

```
pip install prostgen
```

`protoc` must be available when descriptor sets are produced from `.proto`
files. Set the `PROTOC` environment variable to point at a specific binary,
and `PROTOC_INCLUDE` to add a directory of well-known `.proto` files; it is
passed to `protoc` after your own include directories.

## Modules

- `prostgen.ident`: `to_snake`, `to_upper_camel`, `sanitize_identifier` and
  `strip_enum_prefix` turn Protobuf names into identifiers that are safe in
  generated code (keywords become `r#name` or get a trailing underscore, names
  starting with a digit get a leading underscore).
- `prostgen.c_escaping`: `unescape_c_escape_string` decodes C-escaped default
  values of `bytes` fields to `bytes` and raises `CEscapeError` (a
  `ValueError`) on a trailing backslash, an unknown escape or a bad hex value.
- `prostgen.syntax`: `Syntax.from_name` maps a file's `syntax` value
  (`None` counts as proto2) and raises `ValueError` for anything else.
- `prostgen.extern_paths`: `ExternPaths(paths, prost_types)` resolves
  fully-qualified Protobuf identifiers to externally provided paths; with
  `prost_types=True` the well-known `google.protobuf` types are added.
  Invalid or duplicate paths raise `ExternPathError`.
- `prostgen.ast`: `Comments`, `Service` and `Method` dataclasses.
  `Comments.from_location` reads a `SourceCodeInfo.Location`, and
  `Comments.append_with_indent(level)` returns the comments as doc-comment
  lines, wrapping URLs in angle brackets and escaping bare square brackets.
  `get_lines` splits a comment block into lines.
- `prostgen.descriptor_util`: `can_pack`, `fq_name`, `resolve_ident`,
  `field_type_tag`, `map_value_type_tag` and `build_enum_value_mappings`
  (which skips aliased numbers and raises `EnumVariantOverlapError` when two
  values would get the same variant name).
- `prostgen.enum_codegen`: `render_enum`, `render_mod_open`,
  `render_mod_close`, `render_type_name` and `push_indent` return pieces of
  generated source as strings.
- `prostgen.protoc`: `load_file_descriptor_set` runs `protoc` (or, with
  `skip_protoc_run`, reads an existing descriptor set file) and returns a
  `descriptor_pb2.FileDescriptorSet`; failures raise `ProtocError`.
  `write_file_if_changed` writes only when the content differs and returns
  whether it wrote. `protoc_from_env`, `protoc_include_from_env` and
  `error_message_protoc_not_found` cover the environment settings.

## Example

```python
from google.protobuf import descriptor_pb2

from prostgen.ident import to_snake, to_upper_camel
from prostgen.extern_paths import ExternPaths
from prostgen.descriptor_util import build_enum_value_mappings
from prostgen.enum_codegen import render_enum

to_snake("XMLHttpRequest")        # "xml_http_request"
to_upper_camel("FOO_BAR")         # "FooBar"

paths = ExternPaths([(".foo", "::foo1")], prost_types=True)
paths.resolve_ident(".foo.Bar")                  # "::foo1::Bar"
paths.resolve_ident(".google.protobuf.Duration")  # "::prost_types::Duration"

values = [
    descriptor_pb2.EnumValueDescriptorProto(name="UNKNOWN", number=0),
    descriptor_pb2.EnumValueDescriptorProto(name="SERVING", number=1),
]
variants = build_enum_value_mappings("ServingStatus", True, values)
print(render_enum("ServingStatus", variants))
```

## What this package does not do

- It has no command-line tool and no single entry point that turns a whole
  `FileDescriptorSet` into output files; messages, fields and oneofs are not
  rendered, only the pieces listed above.
- It does not write the include file that nests generated modules, and it
  offers no choice of collection types for `map` and `bytes` fields.

## Running the tests

```
pip install -e ".[test]"
pytest
```