"""
Unit tests for column name normalization and field resolution
"""

import pytest

from db.lib.naming import (
    INITIALISMS,
    camel_names,
    resolve_field,
    to_camel_name,
    to_initialism_name,
)
from tests.fixtures.mock_data import MOCK_IDENTIFIERS


@pytest.mark.unit
class TestCamelNames:
    """Test snake_case -> camel-case candidate generation"""

    @pytest.mark.parametrize("identifier,expected", sorted(MOCK_IDENTIFIERS.items()))
    def test_known_identifiers(self, identifier, expected):
        assert camel_names(identifier) == expected

    def test_user_id(self):
        """Final segment in the table is upper-cased only in the initialism form"""
        assert camel_names("user_id") == ("UserId", "UserID")

    def test_http_url_replaces_every_segment(self):
        plain, special = camel_names("http_url")
        assert plain == "HttpUrl"
        assert special == "HTTPURL"

    @pytest.mark.parametrize("identifier", ["name", "NAME", "nAmE"])
    def test_no_underscore_is_title_cased(self, identifier):
        assert camel_names(identifier) == ("Name", "Name")

    def test_whole_word_initialism(self):
        assert camel_names("json") == ("Json", "JSON")

    def test_initialism_inside_longer_segment_is_not_replaced(self):
        """Only exact segment matches count"""
        assert camel_names("identity_card") == ("IdentityCard", "IdentityCard")
        assert camel_names("ids") == ("Ids", "Ids")

    @pytest.mark.parametrize("identifier", ["", "_", "___", "user__id", "_user", "user_", "__id__"])
    def test_empty_segments_do_not_fail(self, identifier):
        plain, special = camel_names(identifier)
        assert "_" not in plain
        assert len(plain) == len(special) == len(identifier.replace("_", ""))

    def test_empty_identifier(self):
        assert camel_names("") == ("", "")
        assert camel_names("___") == ("", "")

    def test_leading_and_doubled_underscores(self):
        assert camel_names("__id__") == ("Id", "ID")
        assert camel_names("order__item_id") == ("OrderItemId", "OrderItemID")

    def test_digits_pass_through(self):
        assert camel_names("address_2") == ("Address2", "Address2")
        assert camel_names("utf8") == ("Utf8", "UTF8")
        assert camel_names("2fa_code") == ("2faCode", "2faCode")

    def test_non_ascii_letters_are_not_recased(self):
        assert camel_names("ülke_kodu") == ("ülkeKodu", "ülkeKodu")

    def test_deterministic(self):
        assert camel_names("remote_ip_addr") == camel_names("remote_ip_addr")
        assert camel_names("remote_ip_addr") == ("RemoteIpAddr", "RemoteIPAddr")

    def test_wrappers(self):
        assert to_camel_name("home_url") == "HomeUrl"
        assert to_initialism_name("home_url") == "HomeURL"


@pytest.mark.unit
class TestInitialisms:
    """Test the initialism table"""

    def test_is_read_only(self):
        with pytest.raises(TypeError):
            INITIALISMS["Foo"] = "FOO"

    def test_keys_sorted(self):
        assert list(INITIALISMS) == sorted(INITIALISMS)

    def test_values_are_upper_case_keys(self):
        for key, value in INITIALISMS.items():
            assert value == key.upper()
            assert key == key[0] + key[1:].lower()

    def test_size(self):
        assert len(INITIALISMS) == 38
        assert INITIALISMS["Id"] == "ID"
        assert INITIALISMS["Https"] == "HTTPS"


@pytest.mark.unit
class TestResolveField:
    """Test picking the field a column maps to"""

    def test_plain_form_match(self):
        fields = {"UserId": "plain", "Name": "name"}
        assert resolve_field(fields, "user_id") == ("UserId", "plain")

    def test_initialism_form_match(self):
        fields = {"UserID": "special"}
        assert resolve_field(fields, "user_id") == ("UserID", "special")

    def test_prefers_plain_form(self):
        fields = {"UserID": "special", "UserId": "plain"}
        assert resolve_field(fields, "user_id") == ("UserId", "plain")

    def test_not_found(self):
        assert resolve_field({"Name": 1}, "user_id") == ("", None)
        assert resolve_field({}, "") == ("", None)

    def test_case_sensitive(self):
        assert resolve_field({"userid": 1, "USERID": 2}, "user_id") == ("", None)

    def test_no_partial_match(self):
        assert resolve_field({"User": 1, "UserIdentifier": 2}, "user_id") == ("", None)
