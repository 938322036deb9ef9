from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest

from secrets_searcher.manip.params import Param, StructParams, basic_param

TAG = "param"
SQUASH = {TAG: ",squash"}


@dataclass
class Leaf:
    ChildField: str = ""


@dataclass
class Nested:
    Child: Leaf = field(default_factory=Leaf)


@dataclass
class NestedOptional:
    Child: Optional[Leaf] = None


@dataclass
class Embedded:
    ChildStruct: Leaf = field(default_factory=Leaf, metadata=SQUASH)


@dataclass
class GrandLeaf:
    GrandChildField: str = ""


@dataclass
class ChildOfGrand:
    GrandChild: GrandLeaf = field(default_factory=GrandLeaf)


@dataclass
class ParentOfChild:
    Child: ChildOfGrand = field(default_factory=ChildOfGrand)


@dataclass
class OptionalChildOfGrand:
    GrandChild: Optional[GrandLeaf] = None


@dataclass
class OptionalParentOfChild:
    Child: Optional[OptionalChildOfGrand] = None


@dataclass
class ChildEmbeddingGrand:
    GrandChildStruct: GrandLeaf = field(default_factory=GrandLeaf, metadata=SQUASH)


@dataclass
class ParentOfEmbedding:
    Child: ChildEmbeddingGrand = field(default_factory=ChildEmbeddingGrand)


@dataclass
class ParentSquashing:
    ChildStruct: ChildEmbeddingGrand = field(
        default_factory=ChildEmbeddingGrand, metadata=SQUASH
    )


@dataclass
class GreatLeaf:
    GreatGrandChildField: str = ""


@dataclass
class GrandOfGreat:
    GreatGrandChild: GreatLeaf = field(default_factory=GreatLeaf)


@dataclass
class ChildOfGrandOfGreat:
    GrandChild: GrandOfGreat = field(default_factory=GrandOfGreat)


@dataclass
class ParentChain:
    Child: ChildOfGrandOfGreat = field(default_factory=ChildOfGrandOfGreat)


@dataclass
class GrandEmbeddingGreat:
    GreatGrandChildStruct: GreatLeaf = field(default_factory=GreatLeaf, metadata=SQUASH)


@dataclass
class ChildEmbeddingGrand3:
    GrandChildStruct: GrandEmbeddingGreat = field(
        default_factory=GrandEmbeddingGreat, metadata=SQUASH
    )


@dataclass
class ParentSquashing3:
    ChildStruct: ChildEmbeddingGrand3 = field(
        default_factory=ChildEmbeddingGrand3, metadata=SQUASH
    )


@dataclass
class NamedLeaf:
    ChildField: str = field(default="", metadata={TAG: "child-field"})


@dataclass
class NamedParent:
    ChildStruct: NamedLeaf = field(default_factory=NamedLeaf, metadata=SQUASH)


@dataclass
class NamedGrandLeaf:
    GrandChildField: str = field(default="", metadata={TAG: "grand-child-field"})


@dataclass
class NamedChild:
    GrandChildStruct: NamedGrandLeaf = field(
        default_factory=NamedGrandLeaf, metadata={TAG: "grand-child"}
    )


@dataclass
class NamedParent2:
    ChildStruct: NamedChild = field(default_factory=NamedChild, metadata=SQUASH)


@dataclass
class NamedChild3:
    GrandChildStruct: GrandEmbeddingGreat = field(
        default_factory=GrandEmbeddingGreat, metadata={TAG: "grand-child"}
    )


@dataclass
class NamedParent3:
    ChildStruct: NamedChild3 = field(default_factory=NamedChild3, metadata={TAG: "child"})


@dataclass
class Settings:
    name: str = ""
    verbose: bool = False
    count: int = 0
    ratio: float = 0.5
    _hidden: str = ""


@dataclass
class Empty:
    _hidden: int = 0


@pytest.mark.parametrize(
    "factory, path, tag, expected",
    [
        (Nested, "Child.ChildField", "", "Child.ChildField"),
        (lambda: NestedOptional(Child=Leaf()), "Child.ChildField", "", "Child.ChildField"),
        (Embedded, "ChildStruct.ChildField", "", "ChildStruct.ChildField"),
        (ParentOfChild, "Child.GrandChild.GrandChildField", "", "Child.GrandChild.GrandChildField"),
        (
            lambda: OptionalParentOfChild(OptionalChildOfGrand(GrandLeaf())),
            "Child.GrandChild.GrandChildField",
            "",
            "Child.GrandChild.GrandChildField",
        ),
        (
            ParentOfEmbedding,
            "Child.GrandChildStruct.GrandChildField",
            "",
            "Child.GrandChildStruct.GrandChildField",
        ),
        (
            ParentChain,
            "Child.GrandChild.GreatGrandChild.GreatGrandChildField",
            "",
            "Child.GrandChild.GreatGrandChild.GreatGrandChildField",
        ),
        (Embedded, "ChildStruct.ChildField", TAG, "ChildField"),
        (ParentSquashing, "ChildStruct.GrandChildStruct.GrandChildField", TAG, "GrandChildField"),
        (
            ParentSquashing3,
            "ChildStruct.GrandChildStruct.GreatGrandChildStruct.GreatGrandChildField",
            TAG,
            "GreatGrandChildField",
        ),
        (NamedParent, "ChildStruct.ChildField", TAG, "child-field"),
        (
            NamedParent2,
            "ChildStruct.GrandChildStruct.GrandChildField",
            TAG,
            "grand-child.grand-child-field",
        ),
        (
            NamedParent3,
            "ChildStruct.GrandChildStruct.GreatGrandChildStruct.GreatGrandChildField",
            TAG,
            "child.grand-child.GreatGrandChildField",
        ),
    ],
)
def test_param_path_name(factory, path, tag, expected):
    subject = Param(factory(), path, tag, None)
    assert subject.path_name() == expected


@pytest.mark.parametrize(
    "factory, tag, expected",
    [
        (Nested, "", ["Child", "Child.ChildField"]),
        (lambda: NestedOptional(Child=Leaf()), "", ["Child", "Child.ChildField"]),
        (Embedded, "", ["ChildStruct", "ChildStruct.ChildField"]),
        (
            ParentOfChild,
            "",
            ["Child", "Child.GrandChild", "Child.GrandChild.GrandChildField"],
        ),
        (
            lambda: OptionalParentOfChild(OptionalChildOfGrand(GrandLeaf())),
            "",
            ["Child", "Child.GrandChild", "Child.GrandChild.GrandChildField"],
        ),
        (
            ParentOfEmbedding,
            "",
            ["Child", "Child.GrandChildStruct", "Child.GrandChildStruct.GrandChildField"],
        ),
        (
            ParentChain,
            "",
            [
                "Child",
                "Child.GrandChild",
                "Child.GrandChild.GreatGrandChild",
                "Child.GrandChild.GreatGrandChild.GreatGrandChildField",
            ],
        ),
        (Embedded, TAG, ["ChildStruct", "ChildField"]),
        (ParentSquashing, TAG, ["ChildStruct", "GrandChildStruct", "GrandChildField"]),
        (
            ParentSquashing3,
            TAG,
            [
                "ChildStruct",
                "GrandChildStruct",
                "GreatGrandChildStruct",
                "GreatGrandChildField",
            ],
        ),
    ],
)
def test_struct_params_path_names(factory, tag, expected):
    subject = StructParams(factory(), tag, None)
    assert len(subject.params) == len(expected)
    assert [param.path_name() for param in subject] == expected


def test_basic_param_accepts_sequence_path():
    root = ParentOfChild()
    subject = basic_param(root, ["Child", "GrandChild", "GrandChildField"])
    assert subject.path == ("Child", "GrandChild", "GrandChildField")
    assert subject.path_name() == "Child.GrandChild.GrandChildField"


def test_leaf_value_and_str():
    root = Nested(Leaf("abc"))
    subject = basic_param(root, "Child.ChildField")
    assert subject.leaf_value() == "abc"
    assert str(subject) == "Child.ChildField (abc)"


def test_str_without_value():
    subject = basic_param(Nested(), "Child.ChildField")
    assert str(subject) == "Child.ChildField"


def test_set_from_string_string_field():
    root = Nested()
    subject = basic_param(root, "Child.ChildField")
    subject.set_from_string("value")
    assert root.Child.ChildField == "value"


@pytest.mark.parametrize("text, expected", [("true", True), ("1", True), ("T", True), ("no", False)])
def test_set_from_string_bool_field(text, expected):
    root = Settings()
    basic_param(root, "verbose").set_from_string(text)
    assert root.verbose is expected


def test_set_from_string_int_field():
    root = Settings()
    subject = basic_param(root, "count")
    subject.set_from_string("-42")
    assert root.count == -42
    with pytest.raises(ValueError):
        subject.set_from_string("forty")
    assert root.count == -42


def test_set_from_string_unsupported_kind():
    with pytest.raises(TypeError):
        basic_param(Settings(), "ratio").set_from_string("1.5")


def test_set_from_string_requires_string():
    with pytest.raises(TypeError):
        basic_param(Settings(), "count").set_from_string(3)


def test_param_unknown_field():
    with pytest.raises(LookupError):
        basic_param(Nested(), "Child.Missing")


def test_param_through_non_struct():
    with pytest.raises(LookupError):
        basic_param(NestedOptional(), "Child.ChildField")


def test_param_root_must_be_dataclass_instance():
    with pytest.raises(TypeError):
        basic_param(object(), "x")
    with pytest.raises(TypeError):
        basic_param(Nested, "Child")


def test_param_struct_filter_blocks_descent():
    with pytest.raises(LookupError):
        Param(Nested(), "Child.ChildField", "", lambda struct: False)
    allowed = Param(Nested(), "Child.ChildField", "", lambda struct: True)
    assert allowed.path_name() == "Child.ChildField"


def test_struct_params_respects_filter():
    subject = StructParams(ParentOfChild(), "", lambda struct: not isinstance(struct, ChildOfGrand))
    assert [param.path_name() for param in subject] == ["Child"]


def test_struct_params_skips_private_fields_in_reverse_order():
    subject = StructParams(Settings(), "", None)
    assert [param.path_name() for param in subject] == ["ratio", "count", "verbose", "name"]


def test_struct_params_without_fields():
    with pytest.raises(ValueError):
        StructParams(Empty(), "", None)