"""
Wiring resolved credentials into build types.

The build tool asks for two things: which signing identity each build type
uses, and the release flags. ``plan_signing`` answers both. The ``release``
build type is signed with whatever the resolver produced, so a release only
carries the debug identity when no production credentials exist, and the
plan says so via ``release_is_debug_signed``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from signing_resolver.credentials import DEBUG_IDENTITY, CredentialBundle
from signing_resolver.exceptions import ConfigError
from signing_resolver.resolver import Resolution, default_sources, resolve_detailed
from signing_resolver.sources import DebugDefaultSource

if TYPE_CHECKING:
    from signing_resolver.config import SigningSettings

logger = logging.getLogger(__name__)

# Android Gradle Plugin properties that override a module's signing config.
INJECTED_SIGNING_PROPERTIES = {
    "keystore_path": "android.injected.signing.store.file",
    "store_password": "android.injected.signing.store.password",
    "key_alias": "android.injected.signing.key.alias",
    "key_password": "android.injected.signing.key.password",
}


@dataclass(frozen=True)
class BuildFlags:
    """Release build flags. Declared, never computed."""
    minify_enabled: bool = False
    shrink_resources: bool = False

    def __post_init__(self):
        if self.shrink_resources and not self.minify_enabled:
            raise ConfigError("shrink_resources requires minify_enabled")


@dataclass
class BuildType:
    """A build type and the signing identity it uses."""
    name: str
    signing: CredentialBundle
    flags: BuildFlags = field(default_factory=BuildFlags)

    @property
    def is_debug_signed(self) -> bool:
        return self.signing.is_debug_fallback


@dataclass
class SigningPlan:
    """
    Signing configs and build types for one build pass.

    Attributes:
        signing_configs: ``"debug"`` and ``"release"`` bundles.
        build_types: ``"debug"`` and ``"release"`` build types.
        resolution: Trace of how the release bundle was found.
    """
    signing_configs: dict[str, CredentialBundle]
    build_types: dict[str, BuildType]
    resolution: Resolution

    @property
    def release(self) -> BuildType:
        return self.build_types["release"]

    @property
    def release_is_debug_signed(self) -> bool:
        return self.release.is_debug_signed


def plan_signing(settings: "SigningSettings | None" = None) -> SigningPlan:
    """
    Resolve release credentials and attach them to the build types.

    Args:
        settings: Settings to use. Loaded from the environment when omitted.
    """
    if settings is None:
        from signing_resolver.config import SigningSettings

        settings = SigningSettings.from_env()

    flags = BuildFlags(
        minify_enabled=settings.minify_enabled,
        shrink_resources=settings.shrink_resources,
    )
    debug_bundle = DEBUG_IDENTITY.bundle(settings.user_home)
    resolution = resolve_detailed(
        default_sources(settings),
        fallback=DebugDefaultSource(home=settings.user_home),
    )

    plan = SigningPlan(
        signing_configs={"debug": debug_bundle, "release": resolution.bundle},
        build_types={
            "debug": BuildType("debug", debug_bundle),
            "release": BuildType("release", resolution.bundle, flags),
        },
        resolution=resolution,
    )
    logger.info(
        "Release build signed via %s | minify=%s shrink_resources=%s",
        resolution.source,
        flags.minify_enabled,
        flags.shrink_resources,
    )
    return plan


def injected_signing_properties(bundle: CredentialBundle) -> dict[str, str]:
    """Render a bundle as ``android.injected.signing.*`` properties."""
    return {
        prop: str(getattr(bundle, attr))
        for attr, prop in INJECTED_SIGNING_PROPERTIES.items()
    }


def gradle_arguments(bundle: CredentialBundle) -> list[str]:
    """Render a bundle as Gradle ``-P`` arguments."""
    return [f"-P{key}={value}" for key, value in injected_signing_properties(bundle).items()]
