"""
InterPro annotations

Domain matches become regions and sequence features (disorder consensus,
signal peptides, coiled coils, transmembrane helices) become motifs.
"""

from ..logging_config import get_logger
from ..models import Feature
from .http import get_json

logger = get_logger(__name__)

INTERPRO_MATCHES_URL = (
    "https://www.ebi.ac.uk/interpro/api/entry/{database}/protein/uniprot/{accession}/"
)
INTERPRO_LINK = "https://www.ebi.ac.uk/interpro/entry/{database}/{accession}"
SEQUENCE_FEATURES_URL = "https://www.ebi.ac.uk/interpro/api/protein/UniProt/{accession}/"

DOMAIN_PALETTE = (
    "#2DCF00", "#FF5353", "#5B5BFF", "#EBD61D", "#BA21E0", "#FF9C42", "#FF7DFF",
    "#B9264F", "#BABA21", "#C48484", "#1F88A7", "#CAFEB8", "#4A9586", "#CEB86C",
)

MOTIF_COLOR = "#CCCCCC"
DISORDER_DATABASE = "mobidblt"
DISORDER_CONSENSUS = "Consensus Disorder Prediction"

# Source database -> motif type
SEQUENCE_FEATURE_TYPES = {
    "signalp_e": "sig_p",
    "signalp_g+": "sig_p",
    "signalp_g-": "sig_p",
    "coils": "coiled_coil",
    "tmhmm": "transmembrane",
}

DOMAIN_SOURCES = ("pfam", "interpro")


def _fragments(locations):
    for location in locations or ():
        for fragment in location.get("fragments") or ():
            yield location, fragment


def parse_protein_matches(results: list[dict], representative_only: bool = False) -> list[Feature]:
    """
    Convert InterPro entry results into colored region features

    Regions are sorted by (start, end) and colored by cycling through
    ``DOMAIN_PALETTE``.

    Args:
        results: The "results" list of one or more API pages
        representative_only: Keep only representative locations (used when
            matches come from every member database)
    """
    regions = []
    for entry in results:
        metadata = entry.get("metadata") or {}
        extra = entry.get("extra_fields") or {}
        accession = metadata.get("accession", "")
        link = INTERPRO_LINK.format(
            database=metadata.get("source_database", ""), accession=accession
        )
        for protein in entry.get("proteins") or ():
            for location, fragment in _fragments(protein.get("entry_protein_locations")):
                representative = location.get("representative", fragment.get("representative"))
                if representative_only and not representative:
                    continue
                regions.append(
                    dict(
                        start=int(fragment["start"]),
                        end=int(fragment["end"]),
                        text=extra.get("short_name") or accession,
                        type=metadata.get("type", ""),
                        link=link,
                        description=metadata.get("name") or "",
                        identifier=accession,
                    )
                )

    regions.sort(key=lambda r: (r["start"], r["end"]))
    return [
        Feature(color=DOMAIN_PALETTE[i % len(DOMAIN_PALETTE)], **region)
        for i, region in enumerate(regions)
    ]


def fetch_protein_matches(accession: str, database: str = "pfam") -> list[Feature]:
    """
    Domain regions for a UniProt accession

    Args:
        accession: UniProt accession
        database: "pfam" for Pfam families, "interpro" for representative
            matches across all member databases

    Raises:
        ValueError: If database is not recognized
    """
    if database not in DOMAIN_SOURCES:
        raise ValueError(
            f"Unknown domain source: {database}. Valid sources: {', '.join(DOMAIN_SOURCES)}"
        )
    source = "all" if database == "interpro" else "pfam"

    url = INTERPRO_MATCHES_URL.format(database=source, accession=accession)
    params = {"extra_fields": "short_name", "page_size": 100}
    results = []
    while url:
        page = get_json(url, params)
        if not page:
            break
        results.extend(page.get("results") or ())
        # The "next" link already carries the query string
        url, params = page.get("next"), None

    return parse_protein_matches(results, representative_only=database == "interpro")


def parse_sequence_features(payload: dict) -> list[Feature]:
    """Convert the InterPro "extra_features" mapping into motif features"""
    motifs = []
    for feature in payload.values():
        database = feature.get("source_database", "")
        if database == DISORDER_DATABASE:
            motif_type = "disorder"
        else:
            motif_type = SEQUENCE_FEATURE_TYPES.get(database)
            if motif_type is None:
                continue

        for _, fragment in _fragments(feature.get("locations")):
            if database == DISORDER_DATABASE and fragment.get("seq_feature") != DISORDER_CONSENSUS:
                continue
            motifs.append(
                Feature(
                    start=int(fragment["start"]),
                    end=int(fragment["end"]),
                    color=MOTIF_COLOR,
                    type=motif_type,
                )
            )
    return motifs


def fetch_sequence_features(accession: str) -> list[Feature]:
    """Motif features for a UniProt accession"""
    url = SEQUENCE_FEATURES_URL.format(accession=accession)
    payload = get_json(url, {"extra_features": "true"})
    return parse_sequence_features(payload or {})
