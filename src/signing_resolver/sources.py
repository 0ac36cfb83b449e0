"""
Credential sources.

A ``CredentialSource`` turns one place where signing secrets may live (a
properties file, the process environment, the built-in debug identity) into
a ``CredentialBundle``. Sources are cheap, stateless, and built fresh for
every resolution.

``resolve()`` returns ``None`` when the source simply has nothing to offer.
Sources that exist but hold unusable content raise ``SourceMalformed``;
the resolver logs those and moves on.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping

from signing_resolver.credentials import (
    DEBUG_IDENTITY,
    CredentialBundle,
    DebugIdentity,
    _is_blank,
)
from signing_resolver.exceptions import PropertiesSyntaxError, SourceMalformed
from signing_resolver.properties import load_properties

logger = logging.getLogger(__name__)

# Recognized keys in the properties file, mapped onto bundle fields.
PROPERTY_KEYS = {
    "keystore_path": "keystore.path",
    "store_password": "keystore.password",
    "key_alias": "keystore.key_alias",
    "key_password": "keystore.key_password",
}

# Release signing variables, mapped onto bundle fields.
ENV_VARS = {
    "keystore_path": "RELEASE_STORE_FILE",
    "store_password": "RELEASE_STORE_PASSWORD",
    "key_alias": "RELEASE_KEY_ALIAS",
    "key_password": "RELEASE_KEY_PASSWORD",
}


def _resolve_keystore_path(raw: str, base_dir: str | os.PathLike | None) -> str:
    """Expand ``~`` and ``$VAR`` and anchor relative paths at ``base_dir``."""
    path = Path(os.path.expanduser(os.path.expandvars(raw)))
    if base_dir is not None and not path.is_absolute():
        path = Path(base_dir) / path
    return str(path)


class CredentialSource(ABC):
    """
    Abstract base class for a place signing credentials can come from.

    Subclasses set ``name`` (used in diagnostics) and implement ``resolve``.
    """

    name: str = "source"

    @abstractmethod
    def resolve(self) -> CredentialBundle | None:
        """
        Produce a complete bundle from this source.

        Returns:
            The bundle, or None if the source is absent.

        Raises:
            SourceMalformed: If the source exists but cannot be used,
                including when only some fields are present.
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class PropertiesFileSource(CredentialSource):
    """
    Read credentials from a Java ``.properties`` file (``local.properties``).

    All four ``keystore.*`` keys must be present and non-blank; a file that
    has some of them is rejected as a whole.
    """

    def __init__(
        self,
        path: str | os.PathLike | None,
        base_dir: str | os.PathLike | None = None,
    ) -> None:
        """
        Args:
            path: Location of the properties file, or None for no file.
            base_dir: Directory relative keystore paths are resolved against.
                When omitted, relative paths are returned as written.
        """
        self.path = Path(path) if path is not None else None
        self.base_dir = base_dir
        self.name = f"properties file {self.path}" if self.path else "properties file"

    def resolve(self) -> CredentialBundle | None:
        if self.path is None:
            logger.debug("No properties file configured")
            return None
        if not self.path.is_file():
            logger.info("Signing properties file not found: %s", self.path)
            return None

        try:
            properties = load_properties(self.path)
        except PropertiesSyntaxError as e:
            raise SourceMalformed(f"Cannot parse {self.path}: {e}", source=self.name) from e

        values = {field: properties.get(key) for field, key in PROPERTY_KEYS.items()}
        if values["keystore_path"] and values["keystore_path"].strip():
            values["keystore_path"] = _resolve_keystore_path(values["keystore_path"], self.base_dir)
        return CredentialBundle.from_mapping(values, source=self.name, labels=PROPERTY_KEYS)


class EnvironmentSource(CredentialSource):
    """
    Read credentials from the ``RELEASE_*`` environment variables.

    If none of the four variables is set, or all of them are blank, the
    source is absent. If only some are set the source is rejected rather
    than mixed with another source.
    """

    name = "environment"

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        base_dir: str | os.PathLike | None = None,
    ) -> None:
        """
        Args:
            environ: Mapping to read from. Defaults to ``os.environ`` as it
                is at ``resolve()`` time.
            base_dir: Directory relative keystore paths are resolved against.
        """
        self.environ = environ
        self.base_dir = base_dir

    def resolve(self) -> CredentialBundle | None:
        environ = os.environ if self.environ is None else self.environ
        values = {field: environ.get(var) for field, var in ENV_VARS.items()}
        if all(_is_blank(value) for value in values.values()):
            logger.debug("No %s variables set", "/".join(ENV_VARS.values()))
            return None

        if values["keystore_path"] and values["keystore_path"].strip():
            values["keystore_path"] = _resolve_keystore_path(values["keystore_path"], self.base_dir)
        return CredentialBundle.from_mapping(values, source=self.name, labels=ENV_VARS)


class DebugDefaultSource(CredentialSource):
    """The Android debug identity. Always resolves; reads nothing external."""

    name = "debug keystore"

    def __init__(
        self,
        home: str | os.PathLike | None = None,
        identity: DebugIdentity = DEBUG_IDENTITY,
    ) -> None:
        """
        Args:
            home: User home holding ``.android/debug.keystore``. Defaults to
                the current user's home directory.
            identity: The debug identity constant.
        """
        self.home = home
        self.identity = identity

    def resolve(self) -> CredentialBundle:
        return self.identity.bundle(self.home)


__all__ = [
    "ENV_VARS",
    "PROPERTY_KEYS",
    "CredentialSource",
    "PropertiesFileSource",
    "EnvironmentSource",
    "DebugDefaultSource",
]
