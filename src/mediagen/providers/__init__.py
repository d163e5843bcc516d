"""Provider adapters for FAL, Genbo and Replicate."""

from .providers_base import ProviderAdapter
from .providers_fal import FalAdapter
from .providers_genbo import GenboAdapter
from .providers_replicate import ReplicateAdapter

__all__ = [
    "ProviderAdapter",
    "FalAdapter",
    "GenboAdapter",
    "ReplicateAdapter",
]
