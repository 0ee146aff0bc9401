#
# Valprint - Options Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import collections
import dataclasses
from dataclasses import dataclass
from typing import NamedTuple

# Third Party ----------------------------------------------------------------------------------------------------------
import pytest
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
import valprint
from valprint.options import DEFAULT_INDENT, DEFAULT_MAX_DEPTH, Formatter, configure, get_options


@dataclass
class Base:
    id: int = 0
    secret: str = ""


@dataclass
class Derived(Base):
    token: str = ""


class Pair(NamedTuple):
    a: int
    b: int


class Plain:
    pass


class TestFormatter:
    def test_defaults(self):
        fmt = Formatter()
        assert fmt.show_zero is False
        assert fmt.max_width == 0
        assert fmt.compact is True
        assert fmt.indent == DEFAULT_INDENT
        assert fmt.max_depth == DEFAULT_MAX_DEPTH
        assert fmt.max_elements == 0
        assert fmt.omit_namespace is False
        assert fmt.exclusions == {}

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Formatter().compact = False

    def test_hashable(self):
        assert hash(Formatter()) == hash(Formatter())
        assert hash(Formatter().exclude(Base, "secret")) == hash(Formatter(exclusions={Base: ["secret"]}))

    @pytest.mark.parametrize("max_depth", [0, -1, -100])
    def test_max_depth_normalized(self, max_depth):
        assert Formatter(max_depth=max_depth).max_depth == DEFAULT_MAX_DEPTH

    def test_empty_indent_normalized(self):
        assert Formatter(indent="").indent == DEFAULT_INDENT

    def test_custom_indent(self):
        assert Formatter(indent="\t").indent == "\t"

    @pytest.mark.parametrize(
        "kwargs, error, match",
        [
            pytest.param({"show_zero": 1}, TypeError, "show_zero must be bool", id="show_zero_int"),
            pytest.param({"compact": "yes"}, TypeError, "compact must be bool", id="compact_str"),
            pytest.param({"omit_namespace": None}, TypeError, "omit_namespace must be bool", id="omit_none"),
            pytest.param({"max_width": 1.5}, TypeError, "max_width must be int", id="max_width_float"),
            pytest.param({"max_depth": True}, TypeError, "max_depth must be int", id="max_depth_bool"),
            pytest.param({"max_elements": "3"}, TypeError, "max_elements must be int", id="max_elements_str"),
            pytest.param({"max_width": -1}, ValueError, "max_width must be >=0", id="max_width_negative"),
            pytest.param({"max_elements": -1}, ValueError, "max_elements must be >=0", id="max_elements_neg"),
            pytest.param({"indent": 4}, TypeError, "indent must be str", id="indent_int"),
            pytest.param({"exclusions": [Base]}, TypeError, "exclusions must be a mapping", id="exclusions_list"),
            pytest.param({"exclusions": {int: "x"}}, TypeError, "record types only", id="exclusions_int"),
            pytest.param({"exclusions": {Base: 3}}, TypeError, "must be str names", id="exclusions_names"),
            pytest.param({"exclusions": {Base: [3]}}, TypeError, "field name must be str", id="exclusions_name"),
        ],
    )
    def test_invalid(self, kwargs, error, match):
        with pytest.raises(error, match=match):
            Formatter(**kwargs)

    def test_exclusions_frozen(self):
        fmt = Formatter(exclusions={Base: ["secret"]})
        assert isinstance(fmt.exclusions, frozendict)
        assert fmt.exclusions[Base] == frozenset({"secret"})

    def test_exclusions_single_name(self):
        fmt = Formatter(exclusions={Base: "secret"})
        assert fmt.exclusions[Base] == frozenset({"secret"})


class TestPresets:
    @pytest.mark.parametrize(
        "preset, expected",
        [
            pytest.param("default", Formatter(), id="default"),
            pytest.param("expanded", Formatter(compact=False), id="expanded"),
            pytest.param(
                "debug", Formatter(compact=False, show_zero=True, max_depth=8, max_elements=32), id="debug"
            ),
            pytest.param("brief", Formatter(omit_namespace=True, max_depth=4, max_elements=8), id="brief"),
        ],
    )
    def test_from_preset(self, preset, expected):
        assert Formatter.from_preset(preset) == expected

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="preset must be one of"):
            Formatter.from_preset("verbose")


class TestMerge:
    def test_overrides(self):
        base = Formatter()
        merged = base.merge(compact=False, max_elements=3)
        assert merged.compact is False
        assert merged.max_elements == 3
        assert base.compact is True

    def test_validates(self):
        with pytest.raises(ValueError):
            Formatter().merge(max_width=-5)

    def test_unknown_field(self):
        with pytest.raises(TypeError):
            Formatter().merge(colour=True)

    def test_keeps_exclusions(self):
        fmt = Formatter().exclude(Base, "secret").merge(compact=False)
        assert fmt.excluded(Base) == frozenset({"secret"})


class TestExclude:
    def test_returns_new_formatter(self):
        base = Formatter()
        fmt = base.exclude(Base, "secret")
        assert fmt.excluded(Base) == frozenset({"secret"})
        assert base.excluded(Base) == frozenset()

    def test_accumulates(self):
        fmt = Formatter().exclude(Base, "secret").exclude(Base, "id")
        assert fmt.excluded(Base) == frozenset({"secret", "id"})

    def test_inherited(self):
        fmt = Formatter().exclude(Base, "secret").exclude(Derived, "token")
        assert fmt.excluded(Derived) == frozenset({"secret", "token"})
        assert fmt.excluded(Base) == frozenset({"secret"})

    @pytest.mark.parametrize(
        "shape",
        [
            pytest.param(Base, id="dataclass"),
            pytest.param(Pair, id="named_tuple"),
            pytest.param(Plain, id="plain"),
        ],
    )
    def test_record_types(self, shape):
        assert "a" in Formatter().exclude(shape, "a").excluded(shape)

    @pytest.mark.parametrize(
        "shape, match",
        [
            pytest.param(int, "type int", id="int"),
            pytest.param(str, "type str", id="str"),
            pytest.param(list, "type list", id="list"),
            pytest.param(dict, "type dict", id="dict"),
            pytest.param(collections.UserDict, "type UserDict", id="user_dict"),
            pytest.param(Base(), "Base instance", id="instance"),
            pytest.param("Base", "str instance", id="name"),
        ],
    )
    def test_non_record(self, shape, match):
        with pytest.raises(TypeError, match=f"record types only, but got {match}"):
            Formatter().exclude(shape, "x")

    def test_name_type(self):
        with pytest.raises(TypeError, match="field name must be str"):
            Formatter().exclude(Base, 1)


class TestConfigure:
    def test_default(self):
        assert get_options() == Formatter()

    def test_overrides_accumulate(self):
        configure(max_elements=5)
        fmt = configure(compact=False)
        assert fmt is get_options()
        assert fmt.max_elements == 5
        assert fmt.compact is False

    def test_preset_resets(self):
        configure(max_elements=5)
        fmt = configure(preset="expanded")
        assert fmt == Formatter(compact=False)

    def test_used_by_entry_points(self):
        configure(max_elements=1)
        assert valprint.sprint([1, 2]) == "[]{1, ...}"

    def test_invalid_keeps_previous(self):
        configure(max_elements=2)
        with pytest.raises(TypeError):
            configure(max_elements="many")
        assert get_options().max_elements == 2
