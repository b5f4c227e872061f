"""
Annotation providers

This package turns external annotation sources into FeatureSets:
- features: Local JSON feature files
- uniprot: UniProt flat text entries and gene symbol lookup
- interpro: InterPro domain matches and sequence features
- providers: fetch_features() combining the services for one accession
"""

from .features import load_features
from .providers import FEATURE_SOURCES, fetch_features
from .uniprot import lookup_accession

__all__ = [
    "FEATURE_SOURCES",
    "fetch_features",
    "load_features",
    "lookup_accession",
]
