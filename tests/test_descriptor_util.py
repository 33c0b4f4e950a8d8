import pytest
from google.protobuf import descriptor_pb2

from prostgen.descriptor_util import (
    EnumVariantMapping,
    EnumVariantOverlapError,
    build_enum_value_mappings,
    can_pack,
    field_type_tag,
    fq_name,
    map_value_type_tag,
    resolve_ident,
)
from prostgen.extern_paths import ExternPaths

FD = descriptor_pb2.FieldDescriptorProto


def make_field(type_, type_name=None, name="f"):
    field = FD(name=name, number=1, type=type_)
    if type_name is not None:
        field.type_name = type_name
    return field


def make_values(*pairs):
    return [descriptor_pb2.EnumValueDescriptorProto(name=n, number=v) for n, v in pairs]


@pytest.mark.parametrize(
    "type_, expected",
    [
        (FD.TYPE_INT32, True),
        (FD.TYPE_DOUBLE, True),
        (FD.TYPE_BOOL, True),
        (FD.TYPE_ENUM, True),
        (FD.TYPE_SFIXED64, True),
        (FD.TYPE_STRING, False),
        (FD.TYPE_BYTES, False),
        (FD.TYPE_MESSAGE, False),
        (FD.TYPE_GROUP, False),
    ],
)
def test_can_pack(type_, expected):
    assert can_pack(make_field(type_)) is expected


def test_fq_name_with_package():
    assert fq_name("my_messages", [], "MyMessageType") == ".my_messages.MyMessageType"


def test_fq_name_nested():
    assert (
        fq_name("my_messages", ["MyMessageType"], "MyNestedMessageType")
        == ".my_messages.MyMessageType.MyNestedMessageType"
    )


def test_fq_name_trims_package_dots():
    assert fq_name(".my_messages.", [], "MyMessageType") == fq_name(
        "my_messages", [], "MyMessageType"
    )


def test_fq_name_without_package():
    assert fq_name("", [], "Qux") == ".Qux"


def test_resolve_ident_same_scope():
    assert resolve_ident("", [], None, ".Qux") == "Qux"


def test_resolve_ident_from_nested_module():
    assert resolve_ident("", ["Container"], None, ".Foo") == "super::Foo"


def test_resolve_ident_same_package_is_local():
    assert resolve_ident("my_messages", [], None, ".my_messages.MyMessageType") == "MyMessageType"


def test_resolve_ident_climbs_once_per_extra_scope():
    one = resolve_ident("a.b", [], None, ".x.Msg")
    two = resolve_ident("a.b", ["Outer"], None, ".x.Msg")
    assert one.count("super::") == 2
    assert two == "super::" + one


def test_resolve_ident_uses_extern_paths():
    paths = ExternPaths([], True)
    assert resolve_ident("foo", [], paths, ".google.protobuf.Duration") == "::prost_types::Duration"
    assert resolve_ident("foo", [], paths, ".google.protobuf.Empty") == "()"


def test_resolve_ident_requires_fully_qualified():
    with pytest.raises(ValueError):
        resolve_ident("", [], None, "Foo")


@pytest.mark.parametrize(
    "type_, tag",
    [
        (FD.TYPE_STRING, "string"),
        (FD.TYPE_MESSAGE, "message"),
        (FD.TYPE_INT32, "int32"),
        (FD.TYPE_SINT64, "sint64"),
        (FD.TYPE_BYTES, "bytes"),
        (FD.TYPE_GROUP, "group"),
    ],
)
def test_field_type_tag_scalars(type_, tag):
    assert field_type_tag(make_field(type_), "", [], None) == tag


def test_field_type_tag_enum_is_quoted_resolved_ident():
    field = make_field(FD.TYPE_ENUM, ".Qux")
    resolved = resolve_ident("", [], None, ".Qux")
    assert field_type_tag(field, "", [], None) == f'enumeration="{resolved}"'


def test_map_value_type_tag_enum_is_parenthesised():
    field = make_field(FD.TYPE_ENUM, ".Foo")
    resolved = resolve_ident("", ["Container"], None, ".Foo")
    assert map_value_type_tag(field, "", ["Container"], None) == f"enumeration({resolved})"


@pytest.mark.parametrize("type_", [FD.TYPE_STRING, FD.TYPE_MESSAGE, FD.TYPE_UINT64])
def test_map_value_type_tag_matches_field_tag_for_non_enums(type_):
    field = make_field(type_, ".Qux" if type_ == FD.TYPE_MESSAGE else None)
    assert map_value_type_tag(field, "", [], None) == field_type_tag(field, "", [], None)


def test_build_enum_value_mappings_helloworld():
    values = make_values(("UNKNOWN", 0), ("SERVING", 1), ("NOT_SERVING", 2))
    mappings = build_enum_value_mappings("ServingStatus", True, values)
    assert [m.generated_variant_name for m in mappings] == ["Unknown", "Serving", "NotServing"]
    assert [m.proto_name for m in mappings] == ["UNKNOWN", "SERVING", "NOT_SERVING"]
    assert [m.proto_number for m in mappings] == [0, 1, 2]
    assert [m.path_idx for m in mappings] == [0, 1, 2]


def test_build_enum_value_mappings_strips_prefix():
    values = make_values(("SERVING_STATUS_UNKNOWN", 0))
    stripped = build_enum_value_mappings("ServingStatus", True, values)
    kept = build_enum_value_mappings("ServingStatus", False, values)
    assert stripped[0].generated_variant_name == "Unknown"
    assert kept[0].generated_variant_name == "ServingStatusUnknown"


def test_build_enum_value_mappings_skips_aliases():
    values = make_values(("UNKNOWN", 0), ("SERVING", 1), ("RUNNING", 1), ("NOT_SERVING", 2))
    mappings = build_enum_value_mappings("ServingStatus", True, values)
    assert [m.proto_name for m in mappings] == ["UNKNOWN", "SERVING", "NOT_SERVING"]
    assert mappings[-1] == EnumVariantMapping(3, "NOT_SERVING", 2, "NotServing")


def test_build_enum_value_mappings_overlap_raises():
    values = make_values(("FOO_BAR", 0), ("foo_bar", 1))
    with pytest.raises(EnumVariantOverlapError, match="overlap"):
        build_enum_value_mappings("Thing", False, values)


def test_build_enum_value_mappings_overlap_after_stripping():
    values = make_values(("SERVING_STATUS_UNKNOWN", 0), ("UNKNOWN", 1))
    with pytest.raises(EnumVariantOverlapError):
        build_enum_value_mappings("ServingStatus", True, values)
    assert len(build_enum_value_mappings("ServingStatus", False, values)) == 2