"""
lollipops: Lollipop diagrams of protein point mutations

Draws a protein backbone with its domains and motifs, and a "lollipop" marker
for every mutated codon, as SVG or PNG.

Example usage:
    >>> from lollipops import Feature, FeatureSet, Settings, draw_to_file
    >>> tp53 = FeatureSet(
    ...     length=393,
    ...     identifier="TP53",
    ...     regions=(
    ...         Feature(6, 29, "#ff5353", "P53_TAD"),
    ...         Feature(95, 288, "#2dcf00", "P53"),
    ...         Feature(318, 358, "#5b5bff", "P53_tetramer"),
    ...     ),
    ... )
    >>> draw_to_file(tp53, ["R248Q@3", "R273C", "R175H#00ff00"], "TP53.png", dpi=300)

Example with annotation services:
    >>> from lollipops.data import fetch_features, lookup_accession
    >>> features = fetch_features(lookup_accession("TP53"))
"""

__version__ = "1.0.0"

from .api import draw, draw_to_file, render
from .constants import DomainLabelStyle, OutputFormat
from .errors import DataError, FontUnavailable, LollipopsError, ParseError, RenderError
from .fonts import FontMeasurer, HeuristicMeasurer, create_measurer
from .layout import compute_layout
from .models import Feature, FeatureSet, Layout, MutationToken, Tick
from .mutations import parse_changelist, parse_token
from .render_factory import create_renderer, format_from_path
from .settings import Settings

__all__ = [
    # Version
    "__version__",
    # Pipeline
    "draw",
    "draw_to_file",
    "render",
    "compute_layout",
    "create_renderer",
    "format_from_path",
    # Data model
    "Feature",
    "FeatureSet",
    "Layout",
    "MutationToken",
    "Tick",
    "Settings",
    "DomainLabelStyle",
    "OutputFormat",
    # Parsing
    "parse_changelist",
    "parse_token",
    # Text measurement
    "FontMeasurer",
    "HeuristicMeasurer",
    "create_measurer",
    # Errors
    "LollipopsError",
    "ParseError",
    "DataError",
    "RenderError",
    "FontUnavailable",
]
