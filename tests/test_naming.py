"""Tests for the naming module."""

import re

from stubgen.naming import (
    camelize,
    camelize_spaced_string,
    constant_name,
    generate_operation_id,
    getter_and_setter_capitalize,
    java_string_hash,
    sanitize_name,
    strip_accents,
    to_api_name,
    to_enum_constant,
    to_model_name,
    to_var_name,
)


class TestCamelizeSpacedString:
    """Test the application title -> endpoint name transform."""

    def test_title(self):
        assert camelize_spaced_string("Some Sample REST Application") == "someSampleRestApplication"

    def test_single_word(self):
        assert camelize_spaced_string("Employees") == "employees"

    def test_non_letters_removed_before_casing(self):
        assert camelize_spaced_string("hello-world 2 go") == "helloworldGo"

    def test_multiple_spaces(self):
        assert camelize_spaced_string("foo    bar") == "fooBar"

    def test_result_is_letters_only(self):
        """No whitespace and nothing but ASCII letters survives."""
        samples = [
            "Some Sample REST Application",
            "  padded   title  ",
            "tabs\tand\nnewlines",
            "v2.1 (beta) API!",
            "Büro Verwaltung",
            "",
        ]
        for sample in samples:
            assert re.fullmatch(r"[a-zA-Z]*", camelize_spaced_string(sample)), sample


class TestConstantName:
    """Test the property name -> constant name transform."""

    def test_camel_case(self):
        assert constant_name("partnerId") == "PARTNER_ID"

    def test_lowercase(self):
        assert constant_name("name") == "NAME"

    def test_leading_capital(self):
        assert constant_name("Name") == "_NAME"

    def test_consecutive_capitals_not_collapsed(self):
        assert constant_name("postalXMLCode") == "POSTAL_X_M_L_CODE"

    def test_not_reentrant(self):
        """Applying it to its own output inserts more underscores."""
        once = constant_name("partnerId")
        assert constant_name(once) != once


class TestCamelize:

    def test_separators(self):
        assert camelize("first_name") == "FirstName"
        assert camelize("first-name") == "FirstName"
        assert camelize("first name") == "FirstName"

    def test_lower_first(self):
        assert camelize("first_name", lower_first=True) == "firstName"

    def test_keeps_inner_capitals(self):
        assert camelize("listEmployees", lower_first=True) == "listEmployees"


class TestAccentNormalization:
    """Known umlauts are transliterated, other diacritics dropped."""

    def test_umlauts(self):
        assert strip_accents("Bürogebäude") == "Buerogebaeude"

    def test_uppercase_umlauts(self):
        assert strip_accents("Ärger Öl Übung") == "Aerger Oel Uebung"

    def test_other_diacritics(self):
        assert strip_accents("café crème") == "cafe creme"

    def test_sanitize_transliterates_first(self):
        assert sanitize_name("Büro-Adresse") == "Buero_Adresse"

    def test_model_name(self):
        assert to_model_name("Büro-Adresse") == "BueroAdresse"


class TestIdentifiers:

    def test_var_name(self):
        assert to_var_name("first_name") == "firstName"
        assert to_var_name("X-Request-Id") == "xRequestId"

    def test_reserved_var_name(self):
        assert to_var_name("class") == "_class"

    def test_constant_like_var_name_kept(self):
        assert to_var_name("MAX_SIZE") == "MAX_SIZE"

    def test_reserved_model_name(self):
        assert to_model_name("default") == "ModelDefault"

    def test_enum_constant(self):
        assert to_enum_constant("in-progress") == "IN_PROGRESS"
        assert to_enum_constant("inProgress") == "IN_PROGRESS"
        assert to_enum_constant("1st") == "_1ST"
        assert to_enum_constant("") == "EMPTY"

    def test_getter_suffix(self):
        assert getter_and_setter_capitalize("firstName") == "FirstName"

    def test_getter_suffix_second_letter_upper(self):
        """A lowercase first letter followed by a capital is kept as-is."""
        assert getter_and_setter_capitalize("eMail") == "eMail"


class TestApiName:

    def test_group_name(self):
        assert to_api_name("employees") == "Employees"

    def test_api_suffix_removed(self):
        assert to_api_name("EmployeesApi") == "Employees"

    def test_empty_group(self):
        assert to_api_name("") == "Default"

    def test_client_uses_short_app_name(self):
        assert to_api_name("global", "SomeSampleRestApplication", client=True) == "SomeSampleRestApplicationClient"


class TestGenerateOperationId:
    """Test operation ids built from method + path."""

    def test_collection(self):
        assert generate_operation_id("get", "/employees") == "employeesGet"

    def test_item(self):
        assert generate_operation_id("get", "/employees/{id}") == "employeesIdGet"

    def test_nested(self):
        assert generate_operation_id("delete", "/offices/{officeId}/rooms") == "officesOfficeIdRoomsDelete"

    def test_root(self):
        assert generate_operation_id("get", "/") == "rootGet"

    def test_dashes(self):
        assert generate_operation_id("post", "/time-sheets") == "timeSheetsPost"


class TestJavaStringHash:
    """Hashes must match java.lang.String#hashCode for stable seeds."""

    def test_empty(self):
        assert java_string_hash("") == 0

    def test_single_char(self):
        assert java_string_hash("A") == 65

    def test_known_value(self):
        assert java_string_hash("hello") == 99162322

    def test_wraps_to_signed_int(self):
        assert java_string_hash("polygenelubricants") == -2147483648
