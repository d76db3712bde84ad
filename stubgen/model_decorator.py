"""Decorate models and their properties with generation metadata.

Runs after schema_parser has built a Model. Adds the import symbols the
model template needs (validation annotations, Jackson, XML binding,
commons-lang builders), equality/hash-code seeds, per-property constant
names and cloneability, and links composed models to their parents.
"""

from __future__ import annotations

import logging

from .codegen_model import Model, Property
from .config import GeneratorConfig
from .errors import ConfigurationError
from .extensions import X_USE_OFFSET_DATE_TIME, is_wrapper, is_x_enumeration
from .naming import constant_name, java_string_hash
from .schema_parser import JAVA_PRIMITIVES

logger = logging.getLogger(__name__)

# Literals this long overflow int parsing in generated annotations
LONG_LITERAL_LENGTH = 10

_BUILDER_IMPORTS = (
    "HashCodeBuilder",
    "EqualsBuilder",
    "ToStringBuilder",
    "Collectors",
    "Optional",
    "ArrayList",
)

_XML_IMPORTS = (
    "XmlRootElement",
    "XmlAccessorType",
    "XmlAccessType",
    "JacksonXmlProperty",
    "XmlElement",
    "XmlEnumValue",
    "XmlJavaTypeAdapter",
    "OffsetDateTimeXmlAdapter",
    "XmlAttribute",
    "JacksonXmlElementWrapper",
    "XmlElementWrapper",
)


def long_literal(value: str | None) -> str | None:
    """Append the Java long suffix to long integer literals."""
    if value is None or "." in value or value.endswith("L"):
        return value
    if len(value) >= LONG_LITERAL_LENGTH:
        return value + "L"
    return value


def post_process_model_property(model: Model, prop: Property, config: GeneratorConfig) -> None:
    """Add the imports one property needs to its model."""
    if prop.is_date or prop.is_date_time:
        if config.generate_json_annotations:
            model.imports.add("JsonFormat")
        if config.date_library == "java8-localdatetime":
            prop.vendor_extensions["noTimeZone"] = True

    if prop.pattern is not None:
        model.imports.add("Pattern")

    is_int = prop.is_integer or prop.is_long
    if prop.minimum is not None:
        model.imports.add("Min" if is_int else "DecimalMin")
        prop.minimum = long_literal(prop.minimum)
    if prop.maximum is not None:
        model.imports.add("Max" if is_int else "DecimalMax")
        prop.maximum = long_literal(prop.maximum)

    if prop.required:
        model.imports.add("NotNull")

    if any(v is not None for v in (prop.min_length, prop.max_length, prop.min_items, prop.max_items)):
        model.imports.add("Size")

    if not (prop.is_primitive_type or prop.is_float or prop.is_date or prop.is_date_time):
        model.imports.add("Valid")

    if X_USE_OFFSET_DATE_TIME in prop.vendor_extensions:
        logger.debug("%s.%s uses OffsetDateTime", model.name, prop.name)
        model.imports.add("OffsetDateTime")
        prop.data_type = prop.datatype_with_enum = prop.base_type = "OffsetDateTime"


def cloneable(prop: Property, config: GeneratorConfig) -> bool:
    """Whether generated copy code must clone the value instead of sharing it."""
    return not (prop.is_enum or prop.is_primitive_type or prop.data_type in config.import_mapping)


def hash_code_seeds(model: Model) -> tuple[int, int]:
    """Odd seeds for the generated hashCode(), derived from name and file name."""
    initial = (abs(java_string_hash(model.name)) % 57) * 2 + 1
    multiplier = (abs(java_string_hash(model.class_filename)) % 61) * 2 + 1
    return initial, multiplier


def _wrapper_value_property(model: Model) -> Property:
    data_type = model.data_type or "Object"
    return Property(
        name="value",
        base_name="value",
        data_type=data_type,
        datatype_with_enum=data_type,
        base_type=data_type,
        required=True,
        is_primitive_type=data_type in JAVA_PRIMITIVES,
        is_string=data_type == "String",
        is_integer=data_type == "Integer",
        is_long=data_type == "Long",
        getter="getValue",
        setter="setValue",
    )


def post_process_model(model: Model, config: GeneratorConfig) -> Model:
    """Run the property pass, then add model-level metadata."""
    for prop in model.vars:
        post_process_model_property(model, prop, config)

    json_annotations = config.generate_json_annotations

    if model.data_type is not None and is_x_enumeration(model):
        if json_annotations:
            model.imports.update(("JsonCreator", "JsonValue"))
        model.imports.add("Locale")
        # Plain string definitions are aliases and would not be generated
        model.is_alias = False
    elif is_wrapper(model):
        model.is_alias = False
        model.imports.update(_BUILDER_IMPORTS)
        if not model.vars:
            value = _wrapper_value_property(model)
            model.vars.append(value)
            post_process_model_property(model, value, config)
        if json_annotations:
            model.imports.update(("JsonCreator", "JsonValue"))
    elif not model.is_enum:
        if json_annotations:
            model.imports.update(("JsonProperty", "JsonInclude", "JsonInclude.Include"))

        initial, multiplier = hash_code_seeds(model)
        model.vendor_extensions["hashCodeInitial"] = initial
        model.vendor_extensions["hashCodeMultiplier"] = multiplier
        model.imports.update(_BUILDER_IMPORTS)

        for var in model.vars:
            var.vendor_extensions["constantName"] = "PN_" + constant_name(var.name)
            var.vendor_extensions["cloneable"] = cloneable(var, config)
            if var.is_list_container and var.items is not None:
                var.items.vendor_extensions["cloneable"] = cloneable(var.items, config)

        model.vendor_extensions["simple"] = len(model.vars) == 1
    elif json_annotations:
        model.imports.add("JsonValue")

    if json_annotations and any(var.is_enum for var in model.vars):
        model.imports.add("JsonValue")

    if config.serializable_model:
        model.imports.add("Serializable")

    if config.generate_xml_annotations:
        model.imports.update(_XML_IMPORTS)

    return model


def _find_parent(model: Model, models_by_name: dict[str, Model]) -> Model:
    parent = models_by_name.get(model.parent_name or "")
    if parent is None:
        raise ConfigurationError(f"parent '{model.parent_name}' of '{model.name}' is not a model")

    ancestor: Model | None = parent
    visited = {model.name}
    while ancestor is not None:
        if ancestor.name in visited:
            raise ConfigurationError(f"inheritance cycle through '{ancestor.name}'")
        visited.add(ancestor.name)
        ancestor = models_by_name.get(ancestor.parent_name or "")
    return parent


def post_process_all_models(models: dict[str, Model]) -> dict[str, Model]:
    """Link composed models to their parent models.

    A broken inheritance graph is logged and left unlinked; generation
    continues with the model treated as a root type.
    """
    models_by_name = {model.name: model for model in models.values()}
    for model in models_by_name.values():
        if not model.parent_name:
            continue
        try:
            parent = _find_parent(model, models_by_name)
        except ConfigurationError as e:
            logger.warning("Skipping inheritance for model %s: %s", model.name, e)
            model.parent_name = None
            continue
        model.parent = parent
        parent.children.append(model)
    return models
