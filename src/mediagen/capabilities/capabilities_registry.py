"""Capability and platform registries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable

from ..exceptions import NotFoundError, ensure_found
from .capabilities_base import NULL_CONTEXT, BoundCapability, Capability, ParameterContext
from .capabilities_fal import FAL_CAPABILITIES
from .capabilities_genbo import GENBO_CAPABILITIES
from .capabilities_replicate import REPLICATE_CAPABILITIES


@dataclass(slots=True)
class CapabilityRegistry:
    """Map of capability id to definition for one provider."""

    platform_label: str
    capabilities: Dict[str, Capability] = field(default_factory=dict)
    display_names: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_capabilities(cls, platform_label: str, capabilities: Iterable[Capability]) -> "CapabilityRegistry":
        registry = cls(platform_label=platform_label)
        for capability in capabilities:
            registry.register(capability)
        return registry

    def register(self, capability: Capability, display_name: str | None = None) -> None:
        self.capabilities[capability.id] = capability
        if display_name:
            self.display_names[capability.id] = display_name

    def ids(self) -> list[str]:
        return list(self.capabilities)

    def get(self, capability_id: str) -> Capability:
        if capability_id not in self.capabilities:
            raise NotFoundError(f"{self.platform_label} Model {capability_id} not found")
        return self.capabilities[capability_id]

    def create(self, capability_id: str, context: ParameterContext) -> BoundCapability:
        return BoundCapability(capability=self.get(capability_id), context=context)

    def display_name(self, capability_id: str) -> str:
        curated = self.display_names.get(capability_id)
        if curated:
            return curated
        capability = self.capabilities.get(capability_id)
        if capability is not None and capability.descriptor.display_name:
            return capability.descriptor.display_name
        return capability_id

    def list_display_options(self) -> list[dict[str, str]]:
        return [
            {"name": self.display_name(capability_id), "value": capability_id}
            for capability_id in self.capabilities
        ]

    def aggregate_input_schemas(self, discriminator: str = "model") -> list[dict[str, Any]]:
        """Return every capability's fields, each shown only for its own id.

        ``show`` conditions already declared on a field are kept and the
        discriminator condition is added next to them; ``hide`` is untouched.
        """

        schemas: list[dict[str, Any]] = []
        for capability_id in self.capabilities:
            bound = self.create(capability_id, NULL_CONTEXT)
            for schema in bound.input_schema():
                display_options = dict(schema.get("displayOptions") or {})
                show = dict(display_options.get("show") or {})
                show[discriminator] = [capability_id]
                display_options["show"] = show
                schema["displayOptions"] = display_options
                schemas.append(schema)
        return schemas


@dataclass(frozen=True, slots=True)
class Platform:
    """Provider family as offered to callers."""

    key: str
    display_name: str
    credential_name: str
    capabilities: CapabilityRegistry


@dataclass(slots=True)
class PlatformRegistry:
    """Registry of supported provider families."""

    platforms: Dict[str, Platform] = field(default_factory=dict)

    @classmethod
    def build_default(cls) -> "PlatformRegistry":
        registry = cls()
        registry.register(
            Platform(
                key="fal",
                display_name="FAL",
                credential_name="falApi",
                capabilities=CapabilityRegistry.from_capabilities("FAL", FAL_CAPABILITIES),
            )
        )
        registry.register(
            Platform(
                key="genbo",
                display_name="Genbo",
                credential_name="genboApi",
                capabilities=CapabilityRegistry.from_capabilities("Genbo", GENBO_CAPABILITIES),
            )
        )
        registry.register(
            Platform(
                key="replicate",
                display_name="Replicate",
                credential_name="replicateApi",
                capabilities=CapabilityRegistry.from_capabilities("Replicate", REPLICATE_CAPABILITIES),
            )
        )
        return registry

    def register(self, platform: Platform) -> None:
        self.platforms[platform.key] = platform

    def get(self, key: str) -> Platform:
        return ensure_found(self.platforms.get(key), entity="Platform", identifier=key)

    def list_platform_options(self) -> list[dict[str, str]]:
        return [
            {"name": platform.display_name, "value": platform.key}
            for platform in self.platforms.values()
        ]


__all__ = ["CapabilityRegistry", "Platform", "PlatformRegistry"]
