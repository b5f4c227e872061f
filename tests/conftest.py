"""
Pytest configuration and shared fixtures for lollipops tests
"""

import pytest
from PIL import ImageFont

from lollipops.fonts import HeuristicMeasurer
from lollipops.models import Feature, FeatureSet
from lollipops.settings import Settings


class FixedWidthMeasurer:
    """Every character is ``char_width`` pixels wide, regardless of size"""

    family = "monospace"

    def __init__(self, char_width: int = 6):
        self.char_width = char_width

    def measure(self, text: str, size: float) -> int:
        return len(text) * self.char_width

    def font(self, size: float):
        return ImageFont.load_default(size=size)


@pytest.fixture
def measurer():
    """Deterministic measurer, 6px per character"""
    return FixedWidthMeasurer()


@pytest.fixture
def make_measurer():
    """Factory for measurers with a chosen character width"""
    return FixedWidthMeasurer


@pytest.fixture
def heuristic_measurer():
    """The fallback measurer used when no font file is available"""
    return HeuristicMeasurer()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def tp53():
    """TP53 with its three Pfam domains and a couple of motifs"""
    return FeatureSet(
        length=393,
        identifier="TP53",
        description="Cellular tumor antigen p53",
        motifs=(
            Feature(1, 60, "#cccccc", type="disorder"),
            Feature(320, 356, "#9cff00", type="coiled_coil"),
            Feature(361, 393, "#cccccc", type="disorder"),
        ),
        regions=(
            Feature(
                6,
                29,
                "#ff5353",
                "P53_TAD",
                type="Pfam-A",
                link="https://www.ebi.ac.uk/interpro/entry/pfam/PF08563",
                description="P53 transactivation motif",
                identifier="PF08563",
            ),
            Feature(
                95,
                288,
                "#2dcf00",
                "P53",
                type="Pfam-A",
                link="https://www.ebi.ac.uk/interpro/entry/pfam/PF00870",
                description="P53 DNA-binding domain",
                identifier="PF00870",
            ),
            Feature(
                318,
                358,
                "#5b5bff",
                "P53_tetramer",
                type="Pfam-A",
                link="https://www.ebi.ac.uk/interpro/entry/pfam/PF07710",
                description="P53 tetramerisation motif",
                identifier="PF07710",
            ),
        ),
    )


@pytest.fixture
def tp53_json():
    """The same protein in the Pfam graphic JSON shape"""
    return {
        "length": "393",
        "metadata": {"identifier": "TP53", "description": "Cellular tumor antigen p53"},
        "regions": [
            {
                "start": 95,
                "end": 288,
                "colour": "#2dcf00",
                "text": "P53",
                "href": "/family/PF00870",
                "metadata": {"description": "P53 DNA-binding domain", "identifier": "PF00870"},
            }
        ],
        "motifs": [{"start": 1, "end": 60, "colour": "#cccccc", "type": "disorder"}],
    }
