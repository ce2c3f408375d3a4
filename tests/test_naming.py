import pytest

from api_spec_kit.sdk.naming import (
    derive_operation_name,
    parameter_name,
    singularize,
    split_words,
    to_camel,
    to_snake,
)


class TestCasing:
    def test_split_words(self):
        assert split_words("openAccount") == ["open", "Account"]
        assert split_words("HTTPServer_v2") == ["HTTP", "Server", "v", "2"]
        assert split_words("") == []

    def test_camel_and_snake(self):
        assert to_camel("open_account") == "openAccount"
        assert to_snake("openAccount") == "open_account"
        assert to_camel("") == ""


class TestSingularize:
    @pytest.mark.parametrize("noun,expected", [
        ("users", "user"),
        ("categories", "category"),
        ("address", "address"),
        ("status", "status"),
        ("data", "data"),
    ])
    def test_singularize(self, noun, expected):
        assert singularize(noun) == expected


class TestDeriveOperationName:
    def test_get_by_id(self):
        assert derive_operation_name("GET", "/users/{id}") == "getUserById"

    def test_snake_casing(self):
        assert derive_operation_name("GET", "/users/{id}", casing="snake") == "get_user_by_id"

    def test_collection_keeps_plural(self):
        assert derive_operation_name("GET", "/users") == "getUsers"
        assert derive_operation_name("POST", "/users") == "createUsers"

    def test_method_verbs(self):
        assert derive_operation_name("put", "/users/{id}") == "updateUserById"
        assert derive_operation_name("DELETE", "/users/{id}") == "deleteUserById"
        assert derive_operation_name("PATCH", "/users/{id}") == "patchUserById"

    def test_unknown_verb_used_as_is(self):
        assert derive_operation_name("OPTIONS", "/users") == "optionsUsers"

    def test_multiple_params(self):
        name = derive_operation_name("GET", "/accounts/{accountId}/cards/{cardId}")
        assert name == "getCardByAccountIdAndCardId"

    def test_query_string_ignored(self):
        assert derive_operation_name("GET", "/users?active=true") == "getUsers"

    def test_root_fallback(self):
        assert derive_operation_name("GET", "/") == "getRoot"
        assert derive_operation_name("GET", "") == "getRoot"
        assert derive_operation_name("GET", "/{id}") == "getRootById"

    def test_operation_id_wins(self):
        assert derive_operation_name("POST", "/accounts", "openAccount") == "openAccount"
        assert derive_operation_name("POST", "/accounts", "openAccount", casing="snake") == "open_account"

    def test_blank_operation_id_ignored(self):
        assert derive_operation_name("GET", "/users", "  ") == "getUsers"

    def test_pure(self):
        assert derive_operation_name("GET", "/users/{id}") == derive_operation_name("GET", "/users/{id}")


class TestIdentifiers:
    def test_reserved_words(self):
        assert derive_operation_name("GET", "/x", "delete") == "delete_"
        assert derive_operation_name("GET", "/x", "import", casing="snake") == "import_"
        assert parameter_name("class", "snake") == "class_"
        assert parameter_name("default") == "default_"

    def test_leading_digit(self):
        assert derive_operation_name("GET", "/x", "2fa") == "op2Fa"
        assert parameter_name("1st", "snake") == "op_1_st"

    def test_parameter_casing(self):
        assert parameter_name("account-id") == "accountId"
        assert parameter_name("accountId", "snake") == "account_id"
