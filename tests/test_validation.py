"""Tests for argument validation."""

import pytest

from premiere_mcp.registry.errors import ArgumentValidationError, SchemaTranslationError
from premiere_mcp.registry.schema import array, boolean, number, obj, record, string
from premiere_mcp.registry.validation import ArgumentValidator

EXPORT_FRAME = obj({
    "sequenceId": string("Sequence"),
    "time": number("Seconds"),
    "outputPath": string("Image path"),
    "format": string("Image format", enum=("png", "jpg", "tiff"), default="png"),
})


class TestValidate:
    def test_valid_arguments_pass_through(self):
        validator = ArgumentValidator(EXPORT_FRAME)
        args = validator.validate({"sequenceId": "s1", "time": 2.5, "outputPath": "/tmp/f.png", "format": "jpg"})
        assert args == {"sequenceId": "s1", "time": 2.5, "outputPath": "/tmp/f.png", "format": "jpg"}

    def test_defaults_are_filled(self):
        args = ArgumentValidator(EXPORT_FRAME).validate({"sequenceId": "s1", "time": 0, "outputPath": "/a"})
        assert args["format"] == "png"

    def test_unknown_keys_are_stripped(self):
        args = ArgumentValidator(EXPORT_FRAME).validate(
            {"sequenceId": "s1", "time": 1, "outputPath": "/a", "extra": True}
        )
        assert "extra" not in args

    def test_missing_required_field(self):
        with pytest.raises(ArgumentValidationError) as exc_info:
            ArgumentValidator(EXPORT_FRAME).validate({"sequenceId": "s1", "outputPath": "/a"})
        assert exc_info.value.field == "time"
        assert "missing required field 'time'" in exc_info.value.message

    def test_wrong_type(self):
        with pytest.raises(ArgumentValidationError) as exc_info:
            ArgumentValidator(EXPORT_FRAME).validate({"sequenceId": "s1", "time": "soon", "outputPath": "/a"})
        assert exc_info.value.field == "time"
        assert "'time'" in exc_info.value.message

    def test_boolean_is_not_a_number(self):
        with pytest.raises(ArgumentValidationError):
            ArgumentValidator(EXPORT_FRAME).validate({"sequenceId": "s1", "time": True, "outputPath": "/a"})

    def test_enum_violation(self):
        with pytest.raises(ArgumentValidationError) as exc_info:
            ArgumentValidator(EXPORT_FRAME).validate(
                {"sequenceId": "s1", "time": 1, "outputPath": "/a", "format": "gif"}
            )
        assert exc_info.value.field == "format"

    def test_none_means_no_arguments(self):
        assert ArgumentValidator(obj({"flag": boolean(required=False)})).validate(None) == {}

    def test_non_object_arguments(self):
        with pytest.raises(ArgumentValidationError) as exc_info:
            ArgumentValidator(EXPORT_FRAME).validate(["s1", 1])
        assert "must be an object" in exc_info.value.message

    def test_shallowest_error_is_reported(self):
        schema = obj({
            "name": string(),
            "clips": array(obj({"id": string()})),
        })
        with pytest.raises(ArgumentValidationError) as exc_info:
            ArgumentValidator(schema).validate({"clips": [{"id": 5}]})
        assert exc_info.value.field == "name"

    def test_nested_objects_are_cleaned(self):
        schema = obj({"clips": array(obj({"id": string(), "speed": number(default=1.0)}))})
        args = ArgumentValidator(schema).validate({"clips": [{"id": "c1", "junk": 1}]})
        assert args == {"clips": [{"id": "c1", "speed": 1.0}]}

    def test_records_are_kept_whole(self):
        schema = obj({"parameters": record(required=False)})
        args = ArgumentValidator(schema).validate({"parameters": {"Opacity": 50, "Blend": "Normal"}})
        assert args["parameters"] == {"Opacity": 50, "Blend": "Normal"}

    def test_input_is_not_mutated(self):
        raw = {"sequenceId": "s1", "time": 1, "outputPath": "/a", "extra": 1}
        ArgumentValidator(EXPORT_FRAME).validate(raw)
        assert raw == {"sequenceId": "s1", "time": 1, "outputPath": "/a", "extra": 1}


class TestConstruction:
    def test_wire_schema_matches_translation(self):
        validator = ArgumentValidator(EXPORT_FRAME)
        assert validator.wire_schema["required"] == ["sequenceId", "time", "outputPath"]

    def test_non_object_schema_rejected(self):
        with pytest.raises(SchemaTranslationError):
            ArgumentValidator(string())
