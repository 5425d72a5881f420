"""Form template catalog tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from schema_form_converter.form_model import FieldKind, FormTemplateError, load_form_template
from schema_form_converter.form_model.form_models import FieldAccess
from schema_form_converter.form_model.form_template import ENUM_SYMBOL_SHAPE, FIELD_SHAPE


def _packaged_template() -> dict:
    catalog_source = Path(__file__).resolve().parents[3] / "src" / "schema_form_converter"
    text = (catalog_source / "form_model" / "form_template.yaml").read_text(encoding="utf-8")
    return yaml.safe_load(text)


def test_packaged_template_defines_every_shape() -> None:
    catalog = load_form_template()

    for kind in FieldKind:
        assert catalog.shape(kind).name == kind.value
    assert catalog.shape(FIELD_SHAPE).supports("weight")
    assert catalog.shape(ENUM_SYMBOL_SHAPE).supports("display_name")
    assert catalog.shape(FieldKind.STRING).supports("input_type")
    assert not catalog.shape(FieldKind.BOOLEAN).supports("max_length")


def test_template_is_loaded_once_per_source() -> None:
    assert load_form_template() is load_form_template()


def test_unknown_shape_lookup_raises() -> None:
    with pytest.raises(FormTemplateError, match="Invalid form shape name: map"):
        load_form_template().shape("map")


def test_ctl_attributes_are_hidden_until_enabled() -> None:
    catalog = load_form_template()
    record = catalog.shape(FieldKind.RECORD)
    assert not record.supports("version")
    assert not record.supports("dependencies")

    ctl_record = catalog.with_ctl_attributes().shape(FieldKind.RECORD)

    names = [attribute.name for attribute in ctl_record.attributes]
    assert names.index("version") == names.index("record_namespace") + 1
    assert names.index("dependencies") == names.index("fields") - 1
    version = ctl_record.attribute("version")
    assert version is not None
    assert version.access is FieldAccess.EDITABLE
    assert version.display_prompt == "Enter type version"
    assert catalog.with_ctl_attributes().shape(FieldKind.STRING) == catalog.shape(
        FieldKind.STRING
    )


def test_custom_template_without_optional_attributes_loads(tmp_path: Path) -> None:
    template = _packaged_template()
    template["shapes"]["field"]["attributes"] = [
        attribute
        for attribute in template["shapes"]["field"]["attributes"]
        if attribute["name"] != "weight"
    ]
    path = tmp_path / "template.yaml"
    path.write_text(yaml.safe_dump(template), encoding="utf-8")

    catalog = load_form_template(path)

    assert not catalog.shape(FIELD_SHAPE).supports("weight")


@pytest.mark.parametrize(
    ("mutate", "message"),
    [
        (lambda template: template["shapes"].pop("union"), "lacks shapes: union"),
        (
            lambda template: template["shapes"].__setitem__("map", {"attributes": []}),
            "Unknown form shape 'map'",
        ),
        (
            lambda template: template["shapes"]["string"]["attributes"].append(
                {"name": "symbols", "display_name": "Symbols"}
            ),
            "Shape 'string' has no attribute 'symbols'",
        ),
        (
            lambda template: template["shapes"]["record"].__setitem__("attributes", []),
            "requires attribute 'record_name'",
        ),
    ],
)
def test_malformed_templates_are_rejected(tmp_path: Path, mutate, message: str) -> None:
    template = _packaged_template()
    mutate(template)
    path = tmp_path / "template.yaml"
    path.write_text(yaml.safe_dump(template), encoding="utf-8")

    with pytest.raises(FormTemplateError, match=message):
        load_form_template(path)


def test_missing_template_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(FormTemplateError, match="not readable"):
        load_form_template(tmp_path / "missing.yaml")
