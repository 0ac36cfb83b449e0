"""
Shared fixtures for all tests.
"""

import textwrap

import pytest

from signing_resolver.sources import ENV_VARS

SIGNING_SETTINGS_VARS = (
    "SIGNING_PROPERTIES_FILE",
    "SIGNING_PROJECT_DIR",
    "SIGNING_USER_HOME",
    "SIGNING_MINIFY_ENABLED",
    "SIGNING_SHRINK_RESOURCES",
    "LOG_LEVEL",
)

RELEASE_VALUES = {
    "RELEASE_STORE_FILE": "/ci/keys/upload.jks",
    "RELEASE_STORE_PASSWORD": "env-store-pass",
    "RELEASE_KEY_ALIAS": "upload",
    "RELEASE_KEY_PASSWORD": "env-key-pass",
}


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clean_signing_env(monkeypatch):
    """Strip signing variables inherited from the host environment."""
    for name in (*ENV_VARS.values(), *SIGNING_SETTINGS_VARS):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def release_env(monkeypatch):
    """All four RELEASE_* variables set."""
    for name, value in RELEASE_VALUES.items():
        monkeypatch.setenv(name, value)
    return dict(RELEASE_VALUES)


@pytest.fixture
def fake_home(tmp_path):
    """A home directory that holds .android/debug.keystore."""
    home = tmp_path / "home"
    (home / ".android").mkdir(parents=True)
    (home / ".android" / "debug.keystore").write_bytes(b"")
    return home


# ---------------------------------------------------------------------------
# Properties file factories
# ---------------------------------------------------------------------------

@pytest.fixture
def write_properties(tmp_path):
    """Factory that writes a .properties file and returns its path."""

    def _write(content: str, name: str = "local.properties"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="iso-8859-1")
        return path

    return _write


@pytest.fixture
def release_properties(write_properties):
    """A complete local.properties with release credentials."""
    return write_properties(
        """
        sdk.dir=/opt/android-sdk
        keystore.path=/keys/rel.jks
        keystore.password=secret1
        keystore.key_alias=relkey
        keystore.key_password=secret2
        """
    )


@pytest.fixture
def homeless(monkeypatch):
    """No HOME and no passwd entry for the current uid, as in some CI containers."""
    pwd = pytest.importorskip("pwd")

    def _no_entry(uid):
        raise KeyError(f"getpwuid(): uid not found: {uid}")

    monkeypatch.delenv("HOME", raising=False)
    monkeypatch.setattr(pwd, "getpwuid", _no_entry)
