"""
Assemble a FeatureSet for one protein from the annotation services
"""

from ..logging_config import get_logger
from ..models import FeatureSet
from .interpro import DOMAIN_SOURCES, fetch_protein_matches, fetch_sequence_features
from .uniprot import fetch_protein_info, fetch_uniprot_features

logger = get_logger(__name__)

FEATURE_SOURCES = DOMAIN_SOURCES + ("uniprot",)


def fetch_features(accession: str, source: str = "pfam") -> FeatureSet:
    """
    Fetch the annotations for a UniProt accession

    Args:
        accession: UniProt accession (e.g. "P04637")
        source: "pfam" or "interpro" for InterPro domains plus InterPro
            sequence features, "uniprot" for the UniProt entry's own features

    Returns:
        Validated FeatureSet

    Raises:
        ValueError: If source is not recognized
        DataError: If a service returns unusable data
        requests.RequestException: On network or HTTP failures
    """
    if source not in FEATURE_SOURCES:
        raise ValueError(
            f"Unknown feature source: {source}. Valid sources: {', '.join(FEATURE_SOURCES)}"
        )

    if source == "uniprot":
        features = fetch_uniprot_features(accession)
    else:
        length, gene, name = fetch_protein_info(accession)
        features = FeatureSet(
            length=length,
            description=name,
            identifier=gene or accession,
            motifs=tuple(fetch_sequence_features(accession)),
            regions=tuple(fetch_protein_matches(accession, source)),
        )

    features.validate()
    logger.info(
        f"{accession}: {features.length}aa, {len(features.regions)} regions, "
        f"{len(features.motifs)} motifs"
    )
    return features
