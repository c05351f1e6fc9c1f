"""
InheritableOptions 测试套件

覆盖父链查找/写入隔离/合并视图/相等比较/inheritable_copy.
"""

import pytest

from pwt.options.errors import BlankOrMissingKeyError, InvalidSeedError
from pwt.options.options import InheritableOptions, Options, OrderedOptions


@pytest.fixture
def parent():
    return OrderedOptions(girl="Mary", boy="John")


@pytest.fixture
def child(parent):
    return InheritableOptions(parent)


class TestLookup:
    """测试父链查找"""

    def test_continues_lookup_in_parent(self, child):
        assert child.girl == "Mary"
        assert child["boy"] == "John"
        assert child.get("girl") == "Mary"
        assert child.missing is None
        assert child.get("missing", 7) == 7

    def test_plain_mapping_parent(self):
        options = InheritableOptions({"foo": True})
        assert options.foo is True
        assert "foo" in options
        assert "bar" not in options

    def test_without_parent(self):
        options = InheritableOptions()
        assert options.foo is None
        assert len(options) == 0
        assert options.to_dict() == {}

    def test_parent_changes_are_visible(self, parent, child):
        parent.dog = "Rex"
        assert child.dog == "Rex"

    def test_require_through_parent(self, child):
        assert child.required.girl == "Mary"
        with pytest.raises(BlankOrMissingKeyError):
            child.require("dog")

    def test_dig_through_parent(self, parent, child):
        parent["nested"] = {"k": [1, 2]}
        assert child.dig("nested", "k", 1) == 2

    def test_non_mapping_parent(self):
        with pytest.raises(InvalidSeedError):
            InheritableOptions(5)

    @pytest.mark.parametrize(
        "args, kwargs", [(({}, {}), {}), (({},), {"extra": 1}), ((), {"parent": {}})]
    )
    def test_extra_arguments(self, args, kwargs):
        with pytest.raises(InvalidSeedError) as excinfo:
            InheritableOptions(*args, **kwargs)
        assert isinstance(excinfo.value, TypeError)


class TestWrites:
    """测试写入只作用于子容器"""

    def test_can_override_parent(self, parent, child):
        child.girl = "Alice"

        assert child.girl == "Alice"
        assert parent.girl == "Mary"

    def test_override_with_blank_value_shadows_parent(self, parent, child):
        child.girl = None

        assert child.girl is None
        assert parent.girl == "Mary"
        with pytest.raises(BlankOrMissingKeyError):
            child.required.girl

    def test_delete_only_removes_own_entries(self, parent, child):
        child.girl = "Alice"
        del child["girl"]
        assert child.girl == "Mary"

        with pytest.raises(KeyError):
            del child["boy"]
        assert parent.boy == "John"

    def test_popitem_and_clear_only_touch_own_entries(self, parent, child):
        child.cat = "Tom"
        assert child.popitem() == ("cat", "Tom")
        child.cat = "Tom"
        child.clear()
        assert child.to_dict() == {"girl": "Mary", "boy": "John"}


class TestMaterializedView:
    """测试合并视图"""

    def test_to_dict_overlays_child(self):
        child = InheritableOptions(OrderedOptions(a=1, b=2))
        child.b = 3
        child.c = 4

        assert child.to_dict() == {"a": 1, "b": 3, "c": 4}
        assert list(child) == ["a", "b", "c"]
        assert len(child) == 3
        assert list(child.items()) == [("a", 1), ("b", 3), ("c", 4)]
        assert list(child.own_keys()) == ["b", "c"]

    def test_repr(self):
        child = InheritableOptions({"a": 1})
        child.b = 2
        assert repr(child) == "InheritableOptions({'a': 1, 'b': 2})"

    def test_to_dict_does_not_mutate_parent(self, parent, child):
        child.cat = "Tom"
        child.to_dict()["dog"] = "Rex"
        assert parent.to_dict() == {"girl": "Mary", "boy": "John"}
        assert list(child.own_keys()) == ["cat"]

    def test_equality_uses_materialized_view(self):
        split = InheritableOptions({"a": 1})
        split.b = 2
        flat = InheritableOptions()
        flat.a = 1
        flat.b = 2

        assert split == flat
        assert split == {"a": 1, "b": 2}
        assert split == Options(a=1, b=2)

    def test_equality_with_opposite_splits(self):
        left = InheritableOptions({"b": 2})
        left.a = 1
        right = InheritableOptions({"a": 1})
        right.b = 2

        assert list(left) == ["b", "a"]
        assert list(right) == ["a", "b"]
        assert left == right
        right.b = 3
        assert left != right


class TestInheritableCopy:
    """测试 inheritable_copy"""

    def test_returns_new_container_of_same_class(self):
        original = InheritableOptions()
        duplicate = original.inheritable_copy()

        assert isinstance(duplicate, type(original))
        assert duplicate is not original

    def test_chains_one_level_per_call(self):
        root = InheritableOptions({"x": 1})
        middle = root.inheritable_copy()
        leaf = middle.inheritable_copy()

        assert leaf.x == 1
        middle.x = 2
        assert leaf.x == 2
        assert root.x == 1
        leaf.x = 3
        assert (root.x, middle.x, leaf.x) == (1, 2, 3)
