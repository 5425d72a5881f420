"""Schema/form converter facade."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from schema_form_converter.form_model.field_ordering import normalize_field_order
from schema_form_converter.form_model.form_models import FieldType, RecordFieldType
from schema_form_converter.form_model.form_template import FormShapeCatalog, load_form_template
from schema_form_converter.schema_management.name_validation import SchemaError
from schema_form_converter.schema_management.schema_models import (
    Fqn,
    NamedSchema,
    RecordSchema,
    Schema,
)
from schema_form_converter.schema_management.schema_reading import (
    parse_schema_tree,
    read_dependency_fqns,
)
from schema_form_converter.schema_management.schema_writing import write_schema_text

from .conversion_contracts import ConversionHooks
from .form_to_schema import convert_form_to_schema
from .named_type_registry import EmittedTypeNames, NamedSchemaRegistry
from .schema_to_form import convert_schema_to_form

_LOGGER = logging.getLogger(__name__)


class SchemaFormConverter:
    """Converts schemas to editable form trees and back.

    Args:
      ctl_enabled: Carry record versions and cross-schema dependencies.
      hooks: Optional callbacks run after each converted node.
      template_path: Form template to use instead of the packaged one.

    Raises:
      FormTemplateError: If the form template cannot be loaded.
    """

    def __init__(
        self,
        *,
        ctl_enabled: bool = False,
        hooks: ConversionHooks | None = None,
        template_path: Path | str | None = None,
    ) -> None:
        catalog = load_form_template(template_path)
        self._catalog = catalog.with_ctl_attributes() if ctl_enabled else catalog
        self._ctl_enabled = ctl_enabled
        self._hooks = hooks or ConversionHooks()

    @property
    def ctl_enabled(self) -> bool:
        return self._ctl_enabled

    @property
    def catalog(self) -> FormShapeCatalog:
        return self._catalog

    def empty_schema_form(self) -> RecordFieldType:
        """Return a blank root record form."""
        return RecordFieldType(
            record_name="",
            fields=[],
            dependencies=[] if self._ctl_enabled else None,
        )

    def create_form_from_schema_text(self, schema_text: str) -> FieldType | None:
        """Parse schema JSON text and build its form tree.

        In CTL mode the declared dependencies are registered as empty
        placeholder records first, so references to them resolve.
        """
        try:
            tree = json.loads(schema_text)
        except json.JSONDecodeError as exc:
            raise SchemaError(f"Invalid schema JSON: {exc}") from exc

        dependency_fqns: list[Fqn] = []
        placeholders: dict[Fqn, NamedSchema] = {}
        if self._ctl_enabled:
            dependency_fqns = read_dependency_fqns(tree)
            placeholders = {
                fqn: RecordSchema(name=fqn.name, namespace=fqn.namespace) for fqn in dependency_fqns
            }
        schema = parse_schema_tree(tree, predeclared=placeholders)
        return self.create_form_from_schema(schema, dependency_fqns=dependency_fqns)

    def create_form_from_schema(
        self, schema: Schema, *, dependency_fqns: Iterable[Fqn] | None = None
    ) -> FieldType | None:
        """Build the form tree of ``schema``; dependency types become named references."""
        emitted = EmittedTypeNames(dependency_fqns or ())
        form = convert_schema_to_form(
            schema,
            catalog=self._catalog,
            ctl_enabled=self._ctl_enabled,
            hooks=self._hooks,
            emitted=emitted,
        )
        _LOGGER.debug("Built form tree with %d named types", len(emitted))
        return form

    def create_schema_from_form(self, form: FieldType | None) -> Schema:
        """Normalize field order in place, then build the schema of ``form``."""
        normalize_field_order(form)
        registry = NamedSchemaRegistry()
        if self._ctl_enabled and isinstance(form, RecordFieldType) and form.dependencies:
            registry = NamedSchemaRegistry.with_placeholders(
                dependency.fqn for dependency in form.dependencies
            )
        return convert_form_to_schema(
            form, ctl_enabled=self._ctl_enabled, hooks=self._hooks, registry=registry
        )

    def create_schema_text(self, form: FieldType | None, *, pretty: bool = False) -> str:
        """Build the schema of ``form`` and serialize it."""
        return write_schema_text(self.create_schema_from_form(form), pretty=pretty)
