import json

import pytest
import yaml

from webhelper.framework.exceptions import (
    ConfigLoadError,
    KeyNotFoundError,
    NotAnObjectError,
    TypeMismatchError,
)
from webhelper.locators.config_resolver import ConfigResolver, Nested, Scalar, build_tree, lookup


def write_json(tmp_path, data, name="config.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_resolve_returns_leaf_string(tmp_path):
    path = write_json(tmp_path, {"login": {"username": {"type": "id", "locator": "user-input"}}})
    resolver = ConfigResolver(path)

    assert resolver.resolve("login#username#type") == "id"
    assert resolver.resolve("login#username#locator") == "user-input"


def test_resolve_top_level_scalar(tmp_path):
    resolver = ConfigResolver(write_json(tmp_path, {"browser-mode": "headless"}))
    assert resolver.resolve("browser-mode") == "headless"


def test_navigation_through_scalar_is_not_an_object(tmp_path):
    resolver = ConfigResolver(write_json(tmp_path, {"a": {"b": "x"}}))

    with pytest.raises(NotAnObjectError) as exc_info:
        resolver.resolve("a#b#c")
    assert exc_info.value.path == "a#b#c"
    assert "a#b#c" in str(exc_info.value)


def test_missing_navigation_segment_is_not_an_object(tmp_path):
    resolver = ConfigResolver(write_json(tmp_path, {"a": {}}))
    with pytest.raises(NotAnObjectError):
        resolver.resolve("missing#b")


def test_missing_field_is_key_not_found(tmp_path):
    resolver = ConfigResolver(write_json(tmp_path, {"a": {"b": "x"}}))
    with pytest.raises(KeyNotFoundError) as exc_info:
        resolver.resolve("a#c")
    assert exc_info.value.path == "a#c"


@pytest.mark.parametrize("value", [{"nested": "x"}, 5, True, None, ["x"]])
def test_non_string_field_is_type_mismatch(tmp_path, value):
    resolver = ConfigResolver(write_json(tmp_path, {"a": {"b": value}}))
    with pytest.raises(TypeMismatchError):
        resolver.resolve("a#b")


def test_document_is_reloaded_on_every_call(tmp_path):
    path = write_json(tmp_path, {"k": "first"})
    resolver = ConfigResolver(path)
    assert resolver.resolve("k") == "first"

    write_json(tmp_path, {"k": "second"})
    assert resolver.resolve("k") == "second"


def test_tab_indented_json_document(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        '{\n\t"login": {\n\t\t"username": {"type": "id", "locator": "user-input"}\n\t}\n}',
        encoding="utf-8",
    )
    assert ConfigResolver(path).resolve("login#username#locator") == "user-input"


def test_malformed_json_raises_config_load_error(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"login": ', encoding="utf-8")
    with pytest.raises(ConfigLoadError):
        ConfigResolver(path).resolve("login")


def test_yaml_documents_are_supported(tmp_path):
    path = tmp_path / "locators.yaml"
    path.write_text(yaml.dump({"page": {"title": "Home"}}), encoding="utf-8")
    assert ConfigResolver(path).resolve("page#title") == "Home"


def test_missing_file_raises_config_load_error(tmp_path):
    with pytest.raises(ConfigLoadError):
        ConfigResolver(tmp_path / "nope.json").resolve("a")


def test_non_object_document_raises_config_load_error(tmp_path):
    resolver = ConfigResolver(write_json(tmp_path, ["not", "an", "object"]))
    with pytest.raises(ConfigLoadError):
        resolver.resolve("a")


def test_get_returns_default_for_unresolvable_path(tmp_path):
    resolver = ConfigResolver(write_json(tmp_path, {"a": {"b": "x"}}))
    assert resolver.get("a#b") == "x"
    assert resolver.get("a#missing", "fallback") == "fallback"
    assert resolver.get("a#b#c") is None


def test_build_tree_uses_variant_nodes():
    tree = build_tree({"a": {"b": "x", "n": 1}})
    assert isinstance(tree, Nested)
    assert tree.children["a"].children["b"] == Scalar("x")
    assert tree.children["a"].children["n"] == Scalar(1)


def test_lookup_on_prebuilt_tree():
    tree = build_tree({"deep": {"er": {"est": {"field": "value"}}}})
    assert lookup(tree, "deep#er#est#field") == "value"
