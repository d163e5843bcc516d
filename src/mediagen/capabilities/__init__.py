"""Declarative capability catalogue and registries."""

from .capabilities_base import BoundCapability, Capability, InputField, MappingParameterContext
from .capabilities_registry import CapabilityRegistry, Platform, PlatformRegistry

__all__ = [
    "BoundCapability",
    "Capability",
    "InputField",
    "MappingParameterContext",
    "CapabilityRegistry",
    "Platform",
    "PlatformRegistry",
]
