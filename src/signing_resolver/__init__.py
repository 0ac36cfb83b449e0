"""
signing-resolver - Release signing credentials for Android builds.

Finds the keystore, passwords and key alias for a release build from a
prioritized chain of sources and falls back to the Android debug identity,
with a warning, when none is configured.

Sources, highest priority first:
- ``local.properties`` (``keystore.path``, ``keystore.password``,
  ``keystore.key_alias``, ``keystore.key_password``)
- ``RELEASE_STORE_FILE``, ``RELEASE_STORE_PASSWORD``, ``RELEASE_KEY_ALIAS``,
  ``RELEASE_KEY_PASSWORD``
- ``~/.android/debug.keystore``

Example:
    from signing_resolver import SigningSettings, plan_signing, gradle_arguments

    settings = SigningSettings.from_env()
    settings.configure_logging()

    plan = plan_signing(settings)
    if plan.release_is_debug_signed:
        print("release is debug-signed; do not publish")
    args = gradle_arguments(plan.release.signing)
"""

__version__ = "0.1.0"

from signing_resolver.build import (
    BuildFlags,
    BuildType,
    SigningPlan,
    gradle_arguments,
    injected_signing_properties,
    plan_signing,
)
from signing_resolver.config import SigningSettings, load_settings_from_env
from signing_resolver.credentials import DEBUG_IDENTITY, CredentialBundle, DebugIdentity
from signing_resolver.exceptions import (
    AllSourcesExhausted,
    ConfigError,
    IncompleteCredentialsError,
    PropertiesSyntaxError,
    SigningError,
    SourceError,
    SourceMalformed,
    SourceUnavailable,
)
from signing_resolver.properties import load_properties, parse_properties
from signing_resolver.resolver import (
    Resolution,
    SourceFailure,
    default_sources,
    resolve,
    resolve_detailed,
)
from signing_resolver.sources import (
    CredentialSource,
    DebugDefaultSource,
    EnvironmentSource,
    PropertiesFileSource,
)

__all__ = [
    # Resolution
    "resolve",
    "resolve_detailed",
    "default_sources",
    "Resolution",
    "SourceFailure",
    # Sources
    "CredentialSource",
    "PropertiesFileSource",
    "EnvironmentSource",
    "DebugDefaultSource",
    # Values
    "CredentialBundle",
    "DebugIdentity",
    "DEBUG_IDENTITY",
    # Build wiring
    "BuildFlags",
    "BuildType",
    "SigningPlan",
    "plan_signing",
    "injected_signing_properties",
    "gradle_arguments",
    # Config
    "SigningSettings",
    "load_settings_from_env",
    # Properties format
    "load_properties",
    "parse_properties",
    # Errors
    "SigningError",
    "SourceError",
    "SourceUnavailable",
    "SourceMalformed",
    "IncompleteCredentialsError",
    "AllSourcesExhausted",
    "ConfigError",
    "PropertiesSyntaxError",
]
