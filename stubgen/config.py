"""Generator options.

GeneratorConfig is built once at the start of a run and threaded through
every pipeline step. Its additional_properties mapping is the shared
option bag that templates also see; the short-name step writes
shortAppName/serviceEndpointName into it and nothing writes to it after.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError

# Option names inside additional_properties
SERVICE_NAME = "serviceName"
OPERATION_NAMING = "operationNaming"
GENERATE_JSON_ANNOTATIONS = "generateJsonAnnotations"
GENERATE_XML_ANNOTATIONS = "generateXMLAnnotations"
GROUPING = "grouping"
SHORT_APP_NAME = "shortAppName"
SERVICE_ENDPOINT_NAME = "serviceEndpointName"

JAX_RS = "jax-rs"
SPRING = "spring"
SUPPORTED_LIBRARIES = {
    JAX_RS: "Java EE JAX-RS server stub",
    SPRING: "Spring server stub",
}

SERVER = "server"
CLIENT = "client"

# Symbol -> fully qualified class used by generated code.
DEFAULT_IMPORT_MAPPING: dict[str, str] = {
    "BigDecimal": "java.math.BigDecimal",
    "LocalDate": "java.time.LocalDate",
    "OffsetDateTime": "java.time.OffsetDateTime",
    "List": "java.util.List",
    "Map": "java.util.Map",
    "Locale": "java.util.Locale",
    "Optional": "java.util.Optional",
    "Collectors": "java.util.stream.Collectors",
    "ArrayList": "java.util.ArrayList",
    "Serializable": "java.io.Serializable",
    "DecimalMax": "javax.validation.constraints.DecimalMax",
    "DecimalMin": "javax.validation.constraints.DecimalMin",
    "Pattern": "javax.validation.constraints.Pattern",
    "NotNull": "javax.validation.constraints.NotNull",
    "Max": "javax.validation.constraints.Max",
    "Min": "javax.validation.constraints.Min",
    "Size": "javax.validation.constraints.Size",
    "Valid": "javax.validation.Valid",
    "JsonInclude": "com.fasterxml.jackson.annotation.JsonInclude",
    "JsonInclude.Include": "com.fasterxml.jackson.annotation.JsonInclude.Include",
    "JsonFormat": "com.fasterxml.jackson.annotation.JsonFormat",
    "JsonValue": "com.fasterxml.jackson.annotation.JsonValue",
    "JsonCreator": "com.fasterxml.jackson.annotation.JsonCreator",
    "JsonProperty": "com.fasterxml.jackson.annotation.JsonProperty",
    "EqualsBuilder": "org.apache.commons.lang3.builder.EqualsBuilder",
    "ToStringBuilder": "org.apache.commons.lang3.builder.ToStringBuilder",
    "HashCodeBuilder": "org.apache.commons.lang3.builder.HashCodeBuilder",
    "PathSegment": "javax.ws.rs.core.PathSegment",
    "GET": "javax.ws.rs.GET",
    "POST": "javax.ws.rs.POST",
    "PUT": "javax.ws.rs.PUT",
    "DELETE": "javax.ws.rs.DELETE",
    "PATCH": "javax.ws.rs.PATCH",
    "HEAD": "javax.ws.rs.HEAD",
    "OPTIONS": "javax.ws.rs.OPTIONS",
    # XML
    "XmlRootElement": "javax.xml.bind.annotation.XmlRootElement",
    "XmlAccessorType": "javax.xml.bind.annotation.XmlAccessorType",
    "XmlAccessType": "javax.xml.bind.annotation.XmlAccessType",
    "JacksonXmlProperty": "com.fasterxml.jackson.dataformat.xml.annotation.JacksonXmlProperty",
    "XmlElement": "javax.xml.bind.annotation.XmlElement",
    "XmlEnum": "javax.xml.bind.annotation.XmlEnum",
    "XmlEnumValue": "javax.xml.bind.annotation.XmlEnumValue",
    "XmlJavaTypeAdapter": "javax.xml.bind.annotation.adapters.XmlJavaTypeAdapter",
    "XmlAttribute": "javax.xml.bind.annotation.XmlAttribute",
    "OffsetDateTimeXmlAdapter": "com.migesok.jaxb.adapter.javatime.OffsetDateTimeXmlAdapter",
    "JacksonXmlElementWrapper": "com.fasterxml.jackson.dataformat.xml.annotation.JacksonXmlElementWrapper",
    "XmlElementWrapper": "javax.xml.bind.annotation.XmlElementWrapper",
}


class NamingStrategy(Enum):
    """How operation ids are chosen."""

    AUTO = "AUTO"  # declared operationId, generated from the path otherwise
    PATH = "PATH"  # always generated from the path

    @classmethod
    def from_value(cls, value: Any) -> NamingStrategy:
        """Case-insensitive lookup; unknown or missing values mean AUTO."""
        if value is None:
            return cls.AUTO
        for strategy in cls:
            if strategy.name.lower() == str(value).lower():
                return strategy
        return cls.AUTO


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "yes", "1", "on")


@dataclass
class GeneratorConfig:
    """Options for one generation run."""

    flavor: str = SERVER
    library: str = JAX_RS
    api_package: str = "com.example.api"
    model_package: str = "com.example.model"
    output_dir: Path = Path("generated-code") / "java"
    template_dir: Path | None = None
    source_folder: str = "src/main/java"
    date_library: str = "java8"
    serializable_model: bool = False
    import_mapping: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_IMPORT_MAPPING)
    )
    additional_properties: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.flavor not in (SERVER, CLIENT):
            raise ConfigurationError(
                f"Unknown flavor '{self.flavor}', expected '{SERVER}' or '{CLIENT}'"
            )
        if self.library not in SUPPORTED_LIBRARIES:
            raise ConfigurationError(
                f"Unknown library '{self.library}', expected one of "
                f"{', '.join(sorted(SUPPORTED_LIBRARIES))}"
            )
        # The client proxy is always rendered with JAX-RS annotations
        if self.flavor == CLIENT:
            self.library = JAX_RS
        self.output_dir = Path(self.output_dir)
        if self.template_dir is not None:
            self.template_dir = Path(self.template_dir)

    @property
    def is_client(self) -> bool:
        return self.flavor == CLIENT

    @property
    def is_jax_rs(self) -> bool:
        return self.library == JAX_RS

    @property
    def operation_naming(self) -> NamingStrategy:
        return NamingStrategy.from_value(self.additional_properties.get(OPERATION_NAMING))

    @property
    def generate_json_annotations(self) -> bool:
        return _as_bool(self.additional_properties.get(GENERATE_JSON_ANNOTATIONS), True)

    @property
    def generate_xml_annotations(self) -> bool:
        return _as_bool(self.additional_properties.get(GENERATE_XML_ANNOTATIONS), True)

    @property
    def grouping(self) -> str | None:
        return self.additional_properties.get(GROUPING)


def load_config(path: Path | str) -> GeneratorConfig:
    """Read generator options from a JSON or YAML file.

    Keys matching GeneratorConfig fields configure those fields; any other
    key lands in additional_properties.
    """
    config_file = Path(path)
    if not config_file.exists():
        raise ConfigurationError(f"Configuration file not found: {config_file}")

    try:
        with open(config_file) as f:
            if config_file.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid configuration file {config_file}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping: {config_file}"
        )

    return config_from_mapping(data)


def config_from_mapping(data: dict[str, Any]) -> GeneratorConfig:
    """Split a flat option mapping into config fields and additional properties."""
    known = {f.name for f in fields(GeneratorConfig)} - {"additional_properties"}
    kwargs: dict[str, Any] = {}
    additional: dict[str, Any] = dict(data.get("additional_properties") or {})

    for key, value in data.items():
        if key == "additional_properties":
            continue
        if key in known:
            kwargs[key] = value
        else:
            additional[key] = value

    if "import_mapping" in kwargs:
        mapping = dict(DEFAULT_IMPORT_MAPPING)
        mapping.update(kwargs["import_mapping"] or {})
        kwargs["import_mapping"] = mapping

    return GeneratorConfig(additional_properties=additional, **kwargs)
