"""
Prioritized signing credential resolution.

``resolve()`` walks an ordered list of ``CredentialSource`` objects and
returns the first complete bundle. It never raises: unusable sources are
logged and skipped, and when nothing works the debug identity is used and a
warning says so. A build can always proceed, at the risk of producing a
debug-signed release, which is why that case is logged at warning level and
recorded on the ``Resolution``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from signing_resolver.credentials import CredentialBundle
from signing_resolver.exceptions import (
    AllSourcesExhausted,
    IncompleteCredentialsError,
    SourceMalformed,
    SourceUnavailable,
)
from signing_resolver.sources import (
    CredentialSource,
    DebugDefaultSource,
    EnvironmentSource,
    PropertiesFileSource,
)

if TYPE_CHECKING:
    from signing_resolver.config import SigningSettings

logger = logging.getLogger(__name__)


@dataclass
class SourceFailure:
    """Why one source was rejected."""
    source: str
    reason: str
    missing: list[str] = field(default_factory=list)


@dataclass
class Resolution:
    """
    Outcome of a resolution, with the trace that led to it.

    Attributes:
        bundle: The resolved credentials. Always complete.
        source: Name of the source that produced ``bundle``.
        failures: Sources that existed but were rejected, in order.
        fallback_reason: Set when the built-in debug fallback was used.
    """
    bundle: CredentialBundle
    source: str
    failures: list[SourceFailure] = field(default_factory=list)
    fallback_reason: AllSourcesExhausted | None = None

    @property
    def is_debug_fallback(self) -> bool:
        return self.bundle.is_debug_fallback


def _attempt(source: CredentialSource, failures: list[SourceFailure]) -> CredentialBundle | None:
    """Run one source, converting every failure into a log line and a record."""
    try:
        bundle = source.resolve()
    except SourceUnavailable as e:
        logger.debug("Signing source %s unavailable: %s", source.name, e)
        return None
    except IncompleteCredentialsError as e:
        logger.warning("Ignoring %s: missing %s", source.name, ", ".join(e.missing))
        failures.append(SourceFailure(source.name, str(e), missing=e.missing))
        return None
    except SourceMalformed as e:
        logger.warning("Ignoring %s: %s", source.name, e)
        failures.append(SourceFailure(source.name, str(e)))
        return None
    except OSError as e:
        logger.warning("Ignoring %s: cannot read: %s", source.name, e)
        failures.append(SourceFailure(source.name, f"cannot read: {e}"))
        return None
    except Exception as e:
        logger.warning("Ignoring %s: unexpected error: %s", source.name, e, exc_info=True)
        failures.append(SourceFailure(source.name, f"unexpected error: {e}"))
        return None

    if bundle is None:
        return None
    if not isinstance(bundle, CredentialBundle):
        logger.warning("Ignoring %s: returned %s, not a CredentialBundle", source.name, type(bundle).__name__)
        failures.append(SourceFailure(source.name, f"returned {type(bundle).__name__}"))
        return None
    return bundle


def resolve_detailed(
    sources: Iterable[CredentialSource],
    *,
    fallback: DebugDefaultSource | None = None,
) -> Resolution:
    """
    Resolve signing credentials and report how.

    Args:
        sources: Sources in priority order, highest first.
        fallback: Source used when every candidate fails. Defaults to the
            debug identity in the current user's home.

    Returns:
        A Resolution. Its bundle is always complete.
    """
    failures: list[SourceFailure] = []
    for source in sources:
        bundle = _attempt(source, failures)
        if bundle is None:
            continue
        if bundle.is_debug_fallback:
            return _debug_resolution(bundle, source.name, failures)
        logger.info("Signing credentials resolved from %s (alias %s)", source.name, bundle.key_alias)
        return Resolution(bundle=bundle, source=source.name, failures=failures)

    fallback = fallback or DebugDefaultSource()
    return _debug_resolution(fallback.resolve(), fallback.name, failures)


def _debug_resolution(
    bundle: CredentialBundle,
    source_name: str,
    failures: list[SourceFailure],
) -> Resolution:
    reason = AllSourcesExhausted([f"{f.source}: {f.reason}" for f in failures])
    logger.warning(
        "%s. Using %s; create a release keystore before publishing.",
        reason,
        bundle.keystore_path,
    )
    return Resolution(bundle=bundle, source=source_name, failures=failures, fallback_reason=reason)


def resolve(
    sources: Iterable[CredentialSource],
    *,
    fallback: DebugDefaultSource | None = None,
) -> CredentialBundle:
    """Resolve signing credentials from ``sources``; never raises."""
    return resolve_detailed(sources, fallback=fallback).bundle


def default_sources(settings: "SigningSettings | None" = None) -> list[CredentialSource]:
    """
    Build the standard chain: properties file, environment, debug identity.

    Args:
        settings: Settings to build from. Loaded from the environment when
            omitted.
    """
    if settings is None:
        from signing_resolver.config import SigningSettings

        settings = SigningSettings.from_env()
    return [
        PropertiesFileSource(settings.properties_path, base_dir=settings.project_dir),
        EnvironmentSource(base_dir=settings.project_dir),
        DebugDefaultSource(home=settings.user_home),
    ]


__all__ = [
    "Resolution",
    "SourceFailure",
    "default_sources",
    "resolve",
    "resolve_detailed",
]
