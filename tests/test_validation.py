from __future__ import annotations

import logging
from pathlib import Path

import pytest

from wp_env.config.errors import ConfigValidationError, InvalidSourceError
from wp_env.config.sources import SourceContext
from wp_env.config.validation import ensure_mapping, validate_config


@pytest.fixture
def context(tmp_path: Path) -> SourceContext:
    return SourceContext(
        work_directory_path=tmp_path / "work",
        config_directory_path=tmp_path / "project",
        home_directory=tmp_path / "home",
    )


def _validate(payload, context: SourceContext):
    return validate_config(payload, context, config_file=".wp-env.json")


def test_valid_document_is_returned_unchanged(context: SourceContext) -> None:
    payload = {
        "core": "WordPress/WordPress#5.4",
        "plugins": ["./plugin"],
        "themes": [],
        "port": 1000,
        "testsPort": 2000,
        "mappings": {"wp-content/mu-plugins": "./mu-plugins"},
        "env": {"tests": {"core": None, "port": 3000}},
    }
    assert _validate(payload, context) is payload


def test_empty_document_is_valid(context: SourceContext) -> None:
    assert _validate({}, context) == {}


def test_top_level_must_be_object(context: SourceContext) -> None:
    with pytest.raises(ConfigValidationError, match="must be a JSON object"):
        _validate(["core"], context)


def test_core_must_be_null_or_string(context: SourceContext) -> None:
    with pytest.raises(ConfigValidationError, match="must be null or a string"):
        _validate({"core": 123}, context)


@pytest.mark.parametrize("field", ["plugins", "themes"])
def test_plugins_and_themes_must_be_string_arrays(context: SourceContext, field: str) -> None:
    with pytest.raises(ConfigValidationError, match="must be an array of strings"):
        _validate({field: ["test", 123]}, context)
    with pytest.raises(ConfigValidationError, match="must be an array of strings"):
        _validate({field: "test"}, context)


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"port": "string"}, "port"),
        ({"testsPort": []}, "env.tests.port"),
        ({"port": {}}, "port"),
        ({"testsPort": False}, "env.tests.port"),
        ({"port": None}, "port"),
        ({"port": 8888.5}, "port"),
        ({"env": {"development": {"port": "8000"}}}, "env.development.port"),
    ],
)
def test_ports_must_be_integers(context: SourceContext, payload, field: str) -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        _validate(payload, context)
    assert f'Invalid .wp-env.json: "{field}" must be an integer.' in str(excinfo.value)


def test_ports_must_be_positive(context: SourceContext) -> None:
    with pytest.raises(ConfigValidationError, match="must be greater than zero"):
        _validate({"port": 0}, context)


def test_mappings_must_be_object(context: SourceContext) -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        _validate({"mappings": "not object"}, context)
    assert 'Invalid .wp-env.json: "mappings" must be an object.' in str(excinfo.value)


def test_mapping_values_must_be_strings(context: SourceContext) -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        _validate({"mappings": {"test": None}}, context)
    assert 'Invalid .wp-env.json: "mappings.test" should be a string.' in str(excinfo.value)


def test_mapping_values_must_be_sources(context: SourceContext) -> None:
    with pytest.raises(InvalidSourceError, match="Invalid or unrecognized source") as excinfo:
        _validate({"mappings": {"test": "false"}}, context)
    assert "mappings.test" in str(excinfo.value)


def test_env_overrides_are_validated_with_dotted_paths(context: SourceContext) -> None:
    with pytest.raises(ConfigValidationError, match=r'"env\.tests\.plugins" must be an array of strings'):
        _validate({"env": {"tests": {"plugins": [1]}}}, context)
    with pytest.raises(ConfigValidationError, match=r'"env\.development\.mappings\.x" should be a string'):
        _validate({"env": {"development": {"mappings": {"x": 1}}}}, context)


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"env": "tests"}, "env"),
        ({"env": {"tests": []}}, "env.tests"),
    ],
)
def test_env_blocks_must_be_objects(context: SourceContext, payload, field: str) -> None:
    with pytest.raises(ConfigValidationError) as excinfo:
        _validate(payload, context)
    assert f'"{field}" must be an object.' in str(excinfo.value)


def test_first_violation_in_declaration_order_wins(context: SourceContext) -> None:
    with pytest.raises(ConfigValidationError, match='"core"'):
        _validate({"mappings": "bad", "port": "bad", "core": 1}, context)
    with pytest.raises(ConfigValidationError, match='"port"'):
        _validate({"env": {"tests": {"port": "bad"}}, "port": "bad"}, context)


def test_unknown_fields_are_logged(context: SourceContext, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="wp_env.config.validation"):
        _validate({"phpVersion": "7.4", "env": {"staging": {}}}, context)
    assert "phpVersion" in caplog.text
    assert "env.staging" in caplog.text


def test_ensure_mapping_rejects_lists() -> None:
    with pytest.raises(ConfigValidationError, match='"things" must be an object'):
        ensure_mapping([], name="things", config_file="x.json")
