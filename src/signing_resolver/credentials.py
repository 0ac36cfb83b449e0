"""
Signing credential value types.

A ``CredentialBundle`` is the only thing the rest of the build ever sees: the
four values needed to sign a package plus a flag saying whether they are the
well-known debug identity. Bundles are immutable and always complete.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Mapping

from signing_resolver.exceptions import IncompleteCredentialsError

logger = logging.getLogger(__name__)

CREDENTIAL_FIELDS = ("keystore_path", "store_password", "key_alias", "key_password")


def _is_blank(value) -> bool:
    return value is None or str(value).strip() == ""


@dataclass(frozen=True)
class CredentialBundle:
    """
    Fully populated signing credentials.

    Attributes:
        keystore_path: Path to the keystore file.
        store_password: Password of the keystore.
        key_alias: Alias of the key entry inside the keystore.
        key_password: Password of the key entry.
        is_debug_fallback: True when the debug identity was used.

    Passwords are left out of ``repr()`` so bundles are safe to log.
    """
    keystore_path: Path
    store_password: str = field(repr=False)
    key_alias: str
    key_password: str = field(repr=False)
    is_debug_fallback: bool = False

    def __post_init__(self):
        # Path("") collapses to ".", so check the raw value before converting.
        missing = [name for name in CREDENTIAL_FIELDS if _is_blank(getattr(self, name))]
        if missing:
            raise IncompleteCredentialsError(missing)
        if not isinstance(self.keystore_path, Path):
            object.__setattr__(self, "keystore_path", Path(self.keystore_path))

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, str | None],
        *,
        source: str = "",
        labels: Mapping[str, str] | None = None,
        is_debug_fallback: bool = False,
    ) -> "CredentialBundle":
        """
        Build a bundle from a mapping keyed by ``CREDENTIAL_FIELDS``.

        Args:
            values: Field name to raw value.
            source: Source name reported in errors.
            labels: Field name to the name the user knows it by (a property
                key or variable name), used when reporting missing fields.
            is_debug_fallback: Flag carried onto the bundle.

        Raises:
            IncompleteCredentialsError: If any field is absent or blank.
        """
        labels = labels or {}
        missing = [
            labels.get(name, name) for name in CREDENTIAL_FIELDS if _is_blank(values.get(name))
        ]
        if missing:
            raise IncompleteCredentialsError(missing, source=source)
        return cls(
            keystore_path=Path(values["keystore_path"]),
            store_password=values["store_password"],
            key_alias=values["key_alias"],
            key_password=values["key_password"],
            is_debug_fallback=is_debug_fallback,
        )

    def to_dict(self, include_secrets: bool = False) -> dict:
        """Serialize to a plain dict, masking passwords unless asked not to."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in ("store_password", "key_password") and not include_secrets:
                value = "****"
            elif isinstance(value, Path):
                value = str(value)
            data[f.name] = value
        return data


@dataclass(frozen=True)
class DebugIdentity:
    """The Android SDK's well-known debug signing identity."""
    keystore_relpath: str = os.path.join(".android", "debug.keystore")
    store_password: str = "android"
    key_alias: str = "androiddebugkey"
    key_password: str = "android"

    def keystore_path(self, home: str | os.PathLike | None = None) -> Path:
        if home is not None:
            return Path(home) / self.keystore_relpath
        try:
            return Path.home() / self.keystore_relpath
        except (RuntimeError, KeyError) as e:
            # No HOME and no passwd entry for the uid.
            logger.warning(
                "Cannot determine home directory (%s); using relative debug keystore path %s",
                e,
                self.keystore_relpath,
            )
            return Path(self.keystore_relpath)

    def bundle(self, home: str | os.PathLike | None = None) -> CredentialBundle:
        return CredentialBundle(
            keystore_path=self.keystore_path(home),
            store_password=self.store_password,
            key_alias=self.key_alias,
            key_password=self.key_password,
            is_debug_fallback=True,
        )


DEBUG_IDENTITY = DebugIdentity()
