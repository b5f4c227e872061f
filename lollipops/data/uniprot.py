"""
UniProtKB annotations

Parses the UniProt flat text format into a FeatureSet and resolves gene
symbols to reviewed human accessions through the UniProt search service.

Flat text lines used::

    GN   Name=TP53; Synonyms=P53;
    DE   RecName: Full=Cellular tumor antigen p53;
    FT   DNA_BIND        102..292
    FT                   /note="..."
    SQ   SEQUENCE   393 AA;  43653 MW;  AD5C149FD8106131 CRC64;
"""

import re

from ..errors import DataError
from ..logging_config import get_logger
from ..models import Feature, FeatureSet
from .http import get_json, get_text

logger = get_logger(__name__)

UNIPROT_TEXT_URL = "https://rest.uniprot.org/uniprotkb/{accession}.txt"
UNIPROT_JSON_URL = "https://rest.uniprot.org/uniprotkb/{accession}.json"
UNIPROT_SEARCH_URL = "https://rest.uniprot.org/uniprotkb/search"
HUMAN_TAXON = 9606

# Feature key -> (kind, type tag, color)
UNIPROT_FEATURES = {
    "COILED": ("motif", "coiled_coil", "#9cff00"),
    "SIGNAL": ("motif", "sig_p", "#ff9c00"),
    "TRANSMEM": ("motif", "transmembrane", "#ff0000"),
    "COMPBIAS": ("motif", "low_complexity", "#00ffff"),
    "DNA_BIND": ("region", "dna_bind", "#ff5353"),
    "ZN_FING": ("region", "zn_fing", "#2dcf00"),
    "CA_BIND": ("region", "ca_bind", "#86bcff"),
    "MOTIF": ("region", "motif", "#1fc01f"),
    "REPEAT": ("region", "repeat", "#1fc01f"),
    "DOMAIN": ("region", "domain", "#9999ff"),
}

FEATURE_PATTERN = re.compile(
    r'^FT   ([A-Z_]+)\s+[<>?]?(\d+)\.\.[<>?]?(\d+)\n((?:FT {10,}.*\n?)*)', re.MULTILINE
)
NOTE_PATTERN = re.compile(r'/note="([^"]*)"')
EVIDENCE_TAGS = re.compile(r"\{[^}]*\}")
SHORT_NAME_SPLIT = re.compile(r"[;.]")
CONTINUATION = re.compile(r"\s*\nFT\s+")


def value_for_key(line: str, key: str) -> str:
    """
    Value of ``key=value`` in a semicolon separated line

    Examples:
        >>> value_for_key("Name=CTNNB1; Synonyms=CTNNB;", "Name")
        'CTNNB1'
    """
    for part in line.split(";"):
        name, sep, value = part.strip().partition("=")
        if sep and name == key:
            return value.strip()
    return ""


def short_description(note: str) -> str:
    """Note text without evidence tags, cut at the first ';' or '.'"""
    text = EVIDENCE_TAGS.sub("", note).strip()
    text = SHORT_NAME_SPLIT.split(text, maxsplit=1)[0]
    return text.strip(". ")


def parse_uniprot_text(text: str) -> FeatureSet:
    """
    Build a FeatureSet from a UniProt flat text entry

    Only the feature keys in ``UNIPROT_FEATURES`` with a position range and a
    /note qualifier are kept; the note becomes the feature name.

    Raises:
        DataError: If the entry has no sequence length
    """
    identifier = ""
    description = ""
    length = None

    for line in text.splitlines():
        key, body = line[:5].strip(), line[5:]
        if key == "GN" and not identifier:
            identifier = EVIDENCE_TAGS.sub("", value_for_key(body, "Name")).strip()
        elif key == "DE" and body.startswith("RecName: ") and not description:
            description = EVIDENCE_TAGS.sub(
                "", value_for_key(body[len("RecName: ") :], "Full")
            ).strip()
        elif key == "SQ":
            for part in body.split(";"):
                part = part.strip()
                if part.startswith("SEQUENCE"):
                    length = int(part[len("SEQUENCE") :].removesuffix("AA").strip())
                    break

    if length is None:
        raise DataError("UniProt entry has no SQ line with the sequence length")

    motifs = []
    regions = []
    for match in FEATURE_PATTERN.finditer(text):
        key, start, end, qualifiers = match.groups()
        category = UNIPROT_FEATURES.get(key)
        if category is None or start == end:
            continue
        kind, tag, color = category

        note = NOTE_PATTERN.search(CONTINUATION.sub(" ", qualifiers))
        if note is None:
            continue
        name = short_description(note.group(1))
        feature = Feature(
            start=int(start),
            end=int(end),
            color=color,
            text=name,
            type=tag,
            description=name,
        )
        (regions if kind == "region" else motifs).append(feature)

    return FeatureSet(
        length=length,
        description=description,
        identifier=identifier,
        motifs=tuple(motifs),
        regions=tuple(regions),
    )


def fetch_uniprot_features(accession: str) -> FeatureSet:
    """Download and parse the flat text entry for an accession"""
    return parse_uniprot_text(get_text(UNIPROT_TEXT_URL.format(accession=accession)))


def parse_protein_info(entry: dict) -> tuple[int, str, str]:
    """
    Sequence length, gene name and protein name from a UniProt JSON entry

    Raises:
        DataError: If the entry has no sequence length
    """
    try:
        length = int(entry["sequence"]["length"])
    except (KeyError, TypeError, ValueError):
        raise DataError("UniProt entry has no sequence length") from None

    genes = entry.get("genes") or [{}]
    gene = (genes[0].get("geneName") or {}).get("value", "")
    recommended = (entry.get("proteinDescription") or {}).get("recommendedName") or {}
    name = (recommended.get("fullName") or {}).get("value", "")
    return length, gene, name


def fetch_protein_info(accession: str) -> tuple[int, str, str]:
    """Sequence length, gene name and protein name for an accession"""
    return parse_protein_info(get_json(UNIPROT_JSON_URL.format(accession=accession)))


def parse_search_results(tsv: str, symbol: str) -> str:
    """
    Pick the accession for a gene symbol from UniProt search TSV

    Expects the columns ``Entry``, ``Entry Name``, ``Gene Names``, ``Organism``
    with a header row. An exact gene name match wins immediately; otherwise
    the row mentioning the symbol most often is chosen.

    Raises:
        DataError: If no row mentions the symbol
    """
    rows = [line.split("\t") for line in tsv.splitlines()[1:] if line.strip()]

    best_hits = 0
    best = ""
    for row in rows:
        genes = row[2].split() if len(row) > 2 else []
        if symbol in genes:
            return row[0]
        hits = "\t".join(row).count(symbol)
        if hits > best_hits:
            best_hits = hits
            best = row[0]

    if not best:
        raise DataError(f"Unable to find a UniProt accession for '{symbol}'")
    if len(rows) > 1:
        logger.warning(
            f"UniProt returned {len(rows)} hits for '{symbol}', selected {best}. "
            f"Pass an accession to choose another."
        )
    return best


def lookup_accession(symbol: str, taxon: int = HUMAN_TAXON) -> str:
    """Resolve a gene symbol to a reviewed UniProt accession"""
    params = {
        "query": f"{symbol} AND reviewed:true AND organism_id:{taxon}",
        "fields": "accession,id,gene_names,organism_name",
        "format": "tsv",
    }
    accession = parse_search_results(get_text(UNIPROT_SEARCH_URL, params), symbol)
    logger.info(f"Resolved {symbol} to UniProt accession {accession}")
    return accession
