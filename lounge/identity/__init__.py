"""Reverse address resolution and session origin enrichment."""

from .enricher import NetworkIdentityEnricher
from .resolver import ReverseResolver, reverse_lookup

__all__ = ["NetworkIdentityEnricher", "ReverseResolver", "reverse_lookup"]
