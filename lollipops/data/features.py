"""
Feature files in the Pfam "graphic" JSON shape

Example file::

    {
      "length": 393,
      "metadata": {"identifier": "TP53", "description": "Cellular tumor antigen p53"},
      "regions": [
        {"start": 102, "end": 292, "colour": "#2dcf00", "text": "P53",
         "href": "/family/PF00870", "metadata": {"description": "P53 DNA-binding domain"}}
      ],
      "motifs": [
        {"start": 1, "end": 60, "colour": "#cccccc", "type": "disorder"}
      ]
    }

Relative ``href`` values are resolved against the Pfam legacy site.
"""

import json
from pathlib import Path

from ..constants import PFAM_LEGACY_URL
from ..errors import DataError
from ..models import Feature, FeatureSet


def _as_int(value, what: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DataError(f"{what} must be an integer, got {value!r}") from None


def absolute_link(link: str | None, base: str = PFAM_LEGACY_URL) -> str | None:
    """Prefix host-relative links with ``base``"""
    if link and "://" not in link:
        return base + link
    return link or None


def feature_from_dict(entry: dict) -> Feature:
    """Build a Feature from one "regions"/"motifs" entry"""
    metadata = entry.get("metadata") or {}
    return Feature(
        start=_as_int(entry.get("start"), "Feature start"),
        end=_as_int(entry.get("end"), "Feature end"),
        color=entry.get("colour") or entry.get("color") or "#cccccc",
        text=entry.get("text", ""),
        type=entry.get("type", ""),
        link=absolute_link(entry.get("href")),
        description=metadata.get("description", ""),
        identifier=metadata.get("identifier", ""),
    )


def feature_set_from_dict(data: dict | list) -> FeatureSet:
    """
    Build a FeatureSet from decoded JSON

    A single-element list (the historical Pfam API envelope) is unwrapped.

    Raises:
        DataError: If the document is not a feature object or is invalid
    """
    if isinstance(data, list):
        if len(data) != 1:
            raise DataError(f"Expected one protein in feature data, found {len(data)}")
        data = data[0]
    if not isinstance(data, dict):
        raise DataError("Feature data must be a JSON object")

    metadata = data.get("metadata") or {}
    features = FeatureSet(
        length=_as_int(data.get("length"), "Sequence length"),
        description=metadata.get("description", ""),
        identifier=metadata.get("identifier", ""),
        motifs=tuple(feature_from_dict(m) for m in data.get("motifs") or ()),
        regions=tuple(feature_from_dict(r) for r in data.get("regions") or ()),
    )
    features.validate()
    return features


def load_features(path: str | Path) -> FeatureSet:
    """
    Read a feature file

    Raises:
        FileNotFoundError: If the file does not exist
        DataError: If the file is not valid feature JSON
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DataError(f"{path} is not valid JSON: {e}") from e
    return feature_set_from_dict(data)
