"""
Data model for lollipop diagrams

Feature data arrives from an annotation provider as a :class:`FeatureSet`
and is never modified afterwards. The layout engine turns it, together with
the parsed mutations, into a :class:`Layout` that both renderers consume
without further geometry work.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from .constants import DISORDER_TYPE
from .errors import DataError


@dataclass(frozen=True)
class Feature:
    """A motif or region annotation on the protein sequence

    Attributes:
        start: First amino acid position covered
        end: Last amino acid position covered
        color: Display color as #RRGGBB
        text: Short label (e.g. Pfam family name)
        type: Category tag (e.g. "disorder", "sig_p", "Pfam-A")
        link: Optional URL for the feature
        description: Long-form name, preferred as label when it fits
        identifier: Database accession of the feature
    """

    start: int
    end: int
    color: str = "#cccccc"
    text: str = ""
    type: str = ""
    link: str | None = None
    description: str = ""
    identifier: str = ""

    @property
    def span(self) -> int:
        """Number of positions between start and end"""
        return self.end - self.start

    @property
    def is_point(self) -> bool:
        """Zero-width features are not drawn"""
        return self.start == self.end

    @property
    def is_disorder(self) -> bool:
        return self.type == DISORDER_TYPE


@dataclass(frozen=True)
class FeatureSet:
    """All annotations for one protein

    Attributes:
        length: Sequence length in amino acids
        description: Protein name
        identifier: Gene symbol or accession shown in the backbone tooltip
        motifs: Short sequence features drawn on the backbone
        regions: Curated domains drawn as labelled blocks
    """

    length: int
    description: str = ""
    identifier: str = ""
    motifs: tuple[Feature, ...] = ()
    regions: tuple[Feature, ...] = ()

    def validate(self) -> None:
        """Check the invariants the layout engine relies on

        Raises:
            DataError: If the length is not positive or a feature is inverted
        """
        if not isinstance(self.length, int) or self.length <= 0:
            raise DataError(f"Sequence length must be positive, got {self.length!r}")

        for kind, features in (("motif", self.motifs), ("region", self.regions)):
            for feature in features:
                if feature.start > feature.end:
                    raise DataError(
                        f"{kind} '{feature.text or feature.type}' starts after it ends "
                        f"({feature.start} > {feature.end})"
                    )


@dataclass(frozen=True)
class MutationToken:
    """One parsed entry of the changelist

    Attributes:
        position: Codon position (1-based)
        count: Number of observations, scales the marker
        color_override: Explicit #rrggbb color, if given
        is_synonymous: True unless a distinct alternate residue is present
        raw_label: Change text without color and count suffixes
    """

    position: int
    count: int = 1
    color_override: str | None = None
    is_synonymous: bool = True
    raw_label: str = ""


@dataclass(frozen=True)
class Tick:
    """A positional event used for placement and axis labelling

    Lollipop ticks carry their final pixel geometry in x, y and radius.
    """

    position: int
    priority: int
    count: int = 1
    color: str = ""
    is_lollipop: bool = False
    label: str = ""
    x: float = 0.0
    y: float = 0.0
    radius: float = 0.0


@dataclass(frozen=True)
class Block:
    """Pixel geometry for one drawn motif or region"""

    feature: Feature
    x: float
    y: float
    width: float
    height: float
    fill: str


@dataclass(frozen=True)
class Layout:
    """
    Resolved geometry for one render call

    Attributes:
        ticks: All positional events sorted by (position asc, priority desc)
        domain_labels: Label text per entry of ``regions`` ("" = no label)
        canvas_width: Image width in pixels
        canvas_height: Image height in pixels
        content_start_y: Top edge of the domain blocks
        scale: Pixels per amino acid
        padding: Left/right margin, x of position 0
        backbone_y: Top edge of the backbone bar
        stem_bottom: Y where lollipop stems end
        axis_y: Y of the axis baseline
        legend_y: Y of the legend header row
        motifs: Visible motif blocks in input order
        regions: Region blocks in input order
        legend: Read-only legend label to swatch color, None when disabled
        length: Sequence length
        title: Backbone tooltip text
    """

    ticks: tuple[Tick, ...]
    domain_labels: tuple[str, ...]
    canvas_width: float
    canvas_height: float
    content_start_y: float
    scale: float
    padding: float
    backbone_y: float
    stem_bottom: float
    axis_y: float
    legend_y: float
    motifs: tuple[Block, ...] = ()
    regions: tuple[Block, ...] = ()
    legend: Mapping[str, str] | None = None
    length: int = 0
    title: str = ""
    lollipops: tuple[Tick, ...] = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self, "lollipops", tuple(t for t in self.ticks if t.is_lollipop)
        )

    def x_for(self, position: float) -> float:
        """Pixel x coordinate of a sequence position"""
        return self.padding + position * self.scale
