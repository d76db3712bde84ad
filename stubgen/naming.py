"""Derive Java identifiers from raw document strings.

camelize_spaced_string and constant_name are the two transforms the
templates depend on directly:

  "Some Sample REST Application" -> "someSampleRestApplication"
  "partnerId"                    -> "PARTNER_ID"

The rest turns schema, property, group and path strings into class,
field and method names, with accented characters transliterated first:

  GET  /employees           -> employeesGet
  GET  /employees/{id}      -> employeesIdGet
  model "Büro-Adresse"      -> BueroAdresse
"""

from __future__ import annotations

import re
import unicodedata

ACCENT_REPLACEMENTS: dict[str, str] = {
    "ä": "ae",
    "ö": "oe",
    "ü": "ue",
    "Ä": "Ae",
    "Ö": "Oe",
    "Ü": "Ue",
}

JAVA_RESERVED_WORDS: set[str] = {
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "null", "true", "false",
}

_WORD_SEPARATORS = re.compile(r"[\s_\-./]+")


def camelize_spaced_string(value: str) -> str:
    """Lowercase, drop everything but letters and spaces, camel-case on spaces."""
    stripped = re.sub(r"[^a-zA-Z ]", "", value.lower())
    camelized = re.sub(r"\s+(\w)", lambda m: m.group(1).upper(), stripped)
    return re.sub(r"\s+", "", camelized)


def constant_name(value: str) -> str:
    """Underscore before every capital letter, then uppercase everything."""
    return re.sub(r"[A-Z]", lambda m: "_" + m.group(0), value).upper()


def capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def camelize(value: str, lower_first: bool = False) -> str:
    """Join separator-delimited words, capitalizing each one."""
    words = [w for w in _WORD_SEPARATORS.split(value) if w]
    result = "".join(capitalize(w) for w in words)
    if lower_first and result:
        result = result[0].lower() + result[1:]
    return result


def strip_accents(value: str) -> str:
    """Transliterate German umlauts, then drop any remaining diacritics."""
    for accented, replacement in ACCENT_REPLACEMENTS.items():
        value = value.replace(accented, replacement)
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def sanitize_name(name: str) -> str:
    """Make a raw string safe to build identifiers from."""
    if not name:
        return ""
    cleaned = strip_accents(name)
    cleaned = cleaned.replace("[]", "").replace("[", "_").replace("]", "")
    cleaned = re.sub(r"[\-\s.]", "_", cleaned)
    cleaned = re.sub(r"[^\w]", "", cleaned, flags=re.ASCII)
    return cleaned


def _escape_reserved(name: str) -> str:
    if name.lower() in JAVA_RESERVED_WORDS or (name and name[0].isdigit()):
        return "_" + name
    return name


def to_var_name(name: str) -> str:
    """Java field name for a property or parameter."""
    sanitized = sanitize_name(name)
    if not sanitized:
        return "value"
    if re.fullmatch(r"[A-Z_0-9]+", sanitized):
        return _escape_reserved(sanitized)
    return _escape_reserved(camelize(sanitized, lower_first=True))


def to_model_name(name: str) -> str:
    """Java class name for a schema."""
    camelized = camelize(sanitize_name(name))
    if not camelized:
        return "Model"
    if camelized.lower() in JAVA_RESERVED_WORDS or camelized[0].isdigit():
        return "Model" + camelized
    return camelized


def to_enum_name(name: str) -> str:
    """Name of the inner enum type generated for an inline enum property."""
    return capitalize(to_var_name(name).lstrip("_")) + "Enum"


def to_enum_constant(value: object) -> str:
    """Java constant for an enum value, e.g. 'in-progress' -> IN_PROGRESS."""
    text = sanitize_name(str(value))
    if not text:
        return "EMPTY"
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", text).upper()
    text = re.sub(r"_+", "_", text)
    if text[0].isdigit():
        text = "_" + text
    return text


def to_api_name(name: str, short_app_name: str | None = None, client: bool = False) -> str:
    """Java type name for an operation group.

    Server groups are named after the group key with no ``Api`` suffix;
    the client proxy is always ``<ShortAppName>Client``.
    """
    if client and short_app_name:
        return short_app_name + "Client"
    api_name = camelize(sanitize_name(name)) or "Default"
    if api_name.endswith("Api"):
        api_name = api_name[: api_name.rindex("Api")]
    return api_name or "Default"


def getter_and_setter_capitalize(name: str) -> str:
    """Suffix for getXxx/setXxx accessors of a var."""
    name = "".join(c for c in to_var_name(name) if c.isalnum())
    if len(name) > 1 and name[1].isupper():
        return name
    return camelize(name)


def generate_operation_id(method: str, path: str) -> str:
    """Build an operation id from the path and HTTP method."""
    tmp_path = path.replace("{", "").replace("}", "")
    parts = (tmp_path + "/" + method).split("/")
    builder = "root" if tmp_path == "/" else ""
    for part in parts:
        if part:
            builder += capitalize(part)
    return camelize(sanitize_name(builder), lower_first=True)


def java_string_hash(value: str) -> int:
    """Hash with java.lang.String#hashCode semantics (signed 32 bit)."""
    h = 0
    encoded = value.encode("utf-16-be")
    for i in range(0, len(encoded), 2):
        h = (31 * h + int.from_bytes(encoded[i:i + 2], "big")) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h
