"""
SafeOptions 测试套件

属性访问只允许已存在的键, 索引访问不受限制.
"""

import pytest

from pwt.options.errors import BlankOrMissingKeyError, UnknownKeyError
from pwt.options.options import SafeOptions


@pytest.fixture
def options():
    return SafeOptions(host="localhost")


class TestSafeOptions:

    def test_known_key_attribute_access(self, options):
        assert options.host == "localhost"
        options.host = "example.org"
        assert options.host == "example.org"

    def test_unknown_attribute_read(self, options):
        with pytest.raises(UnknownKeyError) as excinfo:
            options.port
        assert excinfo.value.key == "port"
        assert isinstance(excinfo.value, KeyError)
        assert str(excinfo.value) == "'port' does not exist"

    def test_unknown_attribute_write(self, options):
        with pytest.raises(UnknownKeyError):
            options.port = 3000
        assert "port" not in options

    def test_unknown_required_read(self, options):
        with pytest.raises(UnknownKeyError):
            options.required.port
        with pytest.raises(UnknownKeyError):
            options.require("port")

    def test_known_blank_required_read(self, options):
        options["empty"] = ""
        with pytest.raises(BlankOrMissingKeyError):
            options.required.empty
        assert options.required.host == "localhost"

    def test_indexed_access_is_not_guarded(self, options):
        assert options["role"] is None
        options["port"] = 3000
        assert options["port"] == 3000
        assert options.port == 3000
        options.port = 3001
        assert options.port == 3001

    def test_explicit_accessors_are_not_guarded(self, options):
        assert options.get("role") is None
        assert options.dig("role", 0) is None
        options.set("role", "admin")
        assert options.role == "admin"

    def test_role_still_rejected_after_indexed_read(self, options):
        assert options["role"] is None
        with pytest.raises(UnknownKeyError):
            options.role

    def test_key_shadowed_by_required_accessor(self):
        options = SafeOptions(required=1, host="localhost")
        assert options["required"] == 1
        assert options.required != 1
        assert options.required.host == "localhost"
        with pytest.raises(UnknownKeyError):
            options.required.port
