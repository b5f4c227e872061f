"""
Pipeline entry points

Runs parse, layout and render for one diagram::

    FeatureSet + changelist + Settings
        -> parse_changelist -> compute_layout -> renderer -> bytes

Parsing and layout finish before anything is written, so a bad mutation or
bad feature data never leaves a partial file behind.

Example usage:
    >>> from lollipops import FeatureSet, Feature, Settings, draw_to_file
    >>> tp53 = FeatureSet(
    ...     length=393,
    ...     identifier="TP53",
    ...     regions=(Feature(102, 292, "#2dcf00", "P53"),),
    ... )
    >>> draw_to_file(tp53, ["R273C", "R248Q@3"], "TP53.svg", Settings(show_labels=True))
"""

from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from .constants import OutputFormat
from .errors import RenderError
from .fonts import TextMeasurer
from .layout import compute_layout
from .logging_config import get_logger
from .models import FeatureSet, Layout
from .mutations import parse_changelist
from .render_factory import create_renderer, format_from_path
from .rendering.base import DiagramRenderer
from .settings import Settings

logger = get_logger(__name__)


def render(
    features: FeatureSet,
    changelist: Iterable[str],
    output_format: OutputFormat = OutputFormat.SVG,
    settings: Settings | None = None,
    dpi: float | None = None,
    measurer: TextMeasurer | None = None,
) -> bytes:
    """
    Build a diagram in memory

    Args:
        features: Protein annotations
        changelist: Mutation tokens such as "R273C" or "R248Q#00ff00@3"
        output_format: SVG or PNG
        settings: Diagram options (default: ``Settings()``)
        dpi: Raster resolution; ignored for SVG
        measurer: Text measurement capability (default: best available font)

    Returns:
        Encoded SVG document or PNG image

    Raises:
        ParseError: If a mutation token is malformed
        DataError: If the feature data cannot be laid out
    """
    renderer = create_renderer(output_format, measurer)
    resolved, layout = prepare(features, changelist, settings, dpi, renderer)
    return renderer.render(layout, resolved)


def prepare(
    features: FeatureSet,
    changelist: Iterable[str],
    settings: Settings | None,
    dpi: float | None,
    renderer: DiagramRenderer,
) -> tuple[Settings, Layout]:
    """Resolve settings for the renderer and compute the layout"""
    settings = settings if settings is not None else Settings()
    resolved = renderer.resolve_settings(settings, dpi)

    features.validate()
    ticks = parse_changelist(
        changelist,
        synonymous_color=resolved.synonymous_color,
        mutation_color=resolved.mutation_color,
        length=features.length,
    )
    layout = compute_layout(features, ticks, resolved, renderer.measurer)
    logger.info(
        f"Laid out {len(layout.lollipops)} mutations on {features.identifier or 'protein'} "
        f"({features.length}aa) at {layout.canvas_width:.0f}x{layout.canvas_height:.0f}"
    )
    return resolved, layout


def draw(
    features: FeatureSet,
    changelist: Iterable[str],
    stream: BinaryIO,
    output_format: OutputFormat = OutputFormat.SVG,
    settings: Settings | None = None,
    dpi: float | None = None,
    measurer: TextMeasurer | None = None,
) -> None:
    """
    Render a diagram and write it to a binary stream

    The full output is built before the first write.

    Raises:
        ParseError: If a mutation token is malformed (nothing is written)
        DataError: If the feature data cannot be laid out (nothing is written)
        RenderError: If writing to the stream fails
    """
    data = render(features, changelist, output_format, settings, dpi, measurer)
    try:
        stream.write(data)
        stream.flush()
    except OSError as e:
        raise RenderError(f"Unable to write diagram: {e}") from e


def draw_to_file(
    features: FeatureSet,
    changelist: Iterable[str],
    path: str | Path,
    settings: Settings | None = None,
    dpi: float | None = None,
    measurer: TextMeasurer | None = None,
) -> Path:
    """
    Render a diagram to a file, choosing the format from its extension

    The file is only created once rendering has succeeded.

    Returns:
        Path of the written file

    Raises:
        ParseError: If a mutation token is malformed (no file is created)
        DataError: If the feature data cannot be laid out (no file is created)
        RenderError: If the file cannot be written
    """
    path = Path(path)
    data = render(features, changelist, format_from_path(path), settings, dpi, measurer)
    try:
        path.write_bytes(data)
    except OSError as e:
        raise RenderError(f"Unable to write {path}: {e}") from e
    logger.info(f"Wrote {path}")
    return path
