"""
Unit tests for CredentialBundle and the debug identity.
"""

import logging
from pathlib import Path

import pytest

from signing_resolver.credentials import (
    CREDENTIAL_FIELDS,
    DEBUG_IDENTITY,
    CredentialBundle,
)
from signing_resolver.exceptions import IncompleteCredentialsError


def _values(**overrides):
    values = {
        "keystore_path": "/keys/rel.jks",
        "store_password": "secret1",
        "key_alias": "relkey",
        "key_password": "secret2",
    }
    values.update(overrides)
    return values


@pytest.mark.unit
class TestCredentialBundle:
    def test_from_mapping(self):
        bundle = CredentialBundle.from_mapping(_values())
        assert bundle.keystore_path == Path("/keys/rel.jks")
        assert bundle.store_password == "secret1"
        assert bundle.key_alias == "relkey"
        assert bundle.key_password == "secret2"
        assert bundle.is_debug_fallback is False

    def test_str_path_coerced(self):
        bundle = CredentialBundle("/keys/rel.jks", "a", "b", "c")
        assert isinstance(bundle.keystore_path, Path)

    @pytest.mark.parametrize("field", CREDENTIAL_FIELDS)
    def test_blank_field_rejected(self, field):
        with pytest.raises(IncompleteCredentialsError) as exc_info:
            CredentialBundle.from_mapping(_values(**{field: "  "}))
        assert exc_info.value.missing == [field]

    def test_missing_fields_use_labels_and_source(self):
        with pytest.raises(IncompleteCredentialsError) as exc_info:
            CredentialBundle.from_mapping(
                _values(key_alias=None, key_password=None),
                source="local.properties",
                labels={"key_alias": "keystore.key_alias"},
            )
        err = exc_info.value
        assert err.missing == ["keystore.key_alias", "key_password"]
        assert err.source == "local.properties"
        assert "local.properties" in str(err)

    def test_direct_construction_enforces_completeness(self):
        with pytest.raises(IncompleteCredentialsError):
            CredentialBundle(keystore_path="/k.jks", store_password="", key_alias="a", key_password="b")

    def test_repr_hides_passwords(self):
        bundle = CredentialBundle.from_mapping(_values())
        text = repr(bundle)
        assert "relkey" in text
        assert "secret1" not in text
        assert "secret2" not in text

    def test_to_dict_masks_by_default(self):
        bundle = CredentialBundle.from_mapping(_values())
        data = bundle.to_dict()
        assert data["store_password"] == "****"
        assert data["key_password"] == "****"
        assert data["keystore_path"] == "/keys/rel.jks"
        assert bundle.to_dict(include_secrets=True)["store_password"] == "secret1"

    def test_frozen(self):
        bundle = CredentialBundle.from_mapping(_values())
        with pytest.raises(AttributeError):
            bundle.key_alias = "other"


@pytest.mark.unit
class TestDebugIdentity:
    def test_constants(self):
        assert DEBUG_IDENTITY.store_password == "android"
        assert DEBUG_IDENTITY.key_alias == "androiddebugkey"
        assert DEBUG_IDENTITY.key_password == "android"

    def test_bundle_under_home(self, tmp_path):
        bundle = DEBUG_IDENTITY.bundle(tmp_path)
        assert bundle.keystore_path == tmp_path / ".android" / "debug.keystore"
        assert bundle.is_debug_fallback is True

    def test_defaults_to_user_home(self):
        assert DEBUG_IDENTITY.keystore_path() == Path.home() / ".android" / "debug.keystore"

    def test_unknown_home_falls_back_to_relative_path(self, homeless, caplog):
        caplog.set_level(logging.WARNING)
        assert DEBUG_IDENTITY.keystore_path() == Path(".android") / "debug.keystore"
        assert "Cannot determine home directory" in caplog.text

    def test_bundle_without_home_is_complete(self, homeless):
        bundle = DEBUG_IDENTITY.bundle()
        assert bundle.keystore_path == Path(".android") / "debug.keystore"
        assert bundle.is_debug_fallback is True
