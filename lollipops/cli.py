"""Command-line interface for drawing lollipop diagrams"""

import argparse
import sys
from pathlib import Path

import requests
from rich.console import Console

from .api import draw_to_file
from .constants import APP_DESCRIPTION, APP_NAME, APP_VERSION, DomainLabelStyle
from .data import FEATURE_SOURCES, fetch_features, load_features, lookup_accession
from .errors import LollipopsError
from .fonts import create_measurer
from .logging_config import parse_level, set_log_level
from .mutations import HEX_COLOR
from .settings import Settings, parse_label_style

# Create Rich console for styled output
console = Console(stderr=True)


def hex_color(value: str) -> str:
    """argparse type for #RRGGBB colors"""
    if not value.startswith("#") or not HEX_COLOR.fullmatch(value[1:]):
        raise argparse.ArgumentTypeError(f"'{value}' is not a #RRGGBB color")
    return value.lower()


def log_level(value: str) -> str:
    """argparse type for logging level names"""
    try:
        parse_level(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    return value.upper()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=f"{APP_NAME} - {APP_DESCRIPTION}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Mutations are written as <AMINO><CODON><AMINO><#COLOR><@COUNT>, only CODON
is required:
  R273C            non-synonymous mutation at codon 273
  T125@5           synonymous mutation at codon 125 seen 5 times
  R248Q#00ff00     green marker at codon 248

Examples:
  lollipops TP53 R248Q R273C                    Look up TP53, write TP53.svg
  lollipops -U P04637 R273C@12 -o tp53.png      Use an accession, write a PNG
  lollipops --features tp53.json R175H          Use a local feature file
  lollipops --legend --labels TP53 R248Q#00ff00@131 R273C

Version: {APP_VERSION}
        """,
    )

    parser.add_argument(
        "args",
        nargs="*",
        metavar="GENE_SYMBOL [CHANGES ...]",
        help="Gene symbol to look up (omitted with -U/--features), then mutations",
    )

    # Protein selection
    input_group = parser.add_argument_group("Input Options")
    input_group.add_argument(
        "-U",
        "--uniprot",
        type=str,
        metavar="ACCESSION",
        help="UniProt accession instead of GENE_SYMBOL",
    )
    input_group.add_argument(
        "--features",
        type=str,
        metavar="FILE",
        help="Read features from a JSON file instead of the annotation services",
    )
    input_group.add_argument(
        "--domain-source",
        type=str,
        choices=FEATURE_SOURCES,
        default="pfam",
        help="Where domains come from (default: pfam)",
    )

    # Output
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "-o",
        "--output",
        type=str,
        metavar="FILE",
        help="Output SVG/PNG file, format from extension (default: GENE_SYMBOL.svg)",
    )
    output_group.add_argument(
        "-w",
        "--width",
        type=int,
        default=0,
        metavar="PX",
        help="Output width in pixels (default: automatic, fits labels)",
    )
    output_group.add_argument(
        "--dpi",
        type=float,
        default=72.0,
        help="Output DPI for PNG rasterization (default: 72)",
    )
    output_group.add_argument(
        "-f",
        "--font",
        type=str,
        metavar="TTF",
        help="TrueType font used for text measurement and drawing (default: Arial)",
    )

    # Diagram content
    viz_group = parser.add_argument_group("Visualization Options")
    viz_group.add_argument(
        "--legend", action="store_true", help="Draw a legend for colored regions"
    )
    viz_group.add_argument(
        "--labels", action="store_true", help="Draw mutation labels above lollipops"
    )
    viz_group.add_argument(
        "--show-disordered",
        action="store_true",
        help="Draw disordered regions on the backbone",
    )
    viz_group.add_argument(
        "--show-motifs", action="store_true", help="Draw simple motif regions"
    )
    viz_group.add_argument(
        "--hide-axis", action="store_true", help="Do not draw the amino acid position axis"
    )
    viz_group.add_argument(
        "--no-patterns",
        action="store_true",
        help="Use solid fill instead of patterns for SVG output",
    )
    viz_group.add_argument(
        "--domain-labels",
        type=parse_label_style,
        default=DomainLabelStyle.TRUNCATE,
        metavar="{off,fit,truncate}",
        help="How to label domains that do not fit (default: truncate)",
    )
    viz_group.add_argument(
        "--syn-color",
        type=hex_color,
        default="#0000ff",
        help="Color for synonymous lollipops (default: #0000ff)",
    )
    viz_group.add_argument(
        "--mut-color",
        type=hex_color,
        default="#ff0000",
        help="Color for non-synonymous lollipops (default: #ff0000)",
    )

    parser.add_argument(
        "--log-level",
        type=log_level,
        default=None,
        metavar="LEVEL",
        help="Logging verbosity: DEBUG, INFO, WARNING, ERROR or CRITICAL "
        "(default: $LOLLIPOPS_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--version", "-v", action="version", version=f"{APP_NAME} {APP_VERSION}"
    )
    return parser


def settings_from_args(args) -> Settings:
    """Build the per-invocation Settings from parsed arguments"""
    return Settings(
        show_labels=args.labels,
        show_legend=args.legend,
        hide_disordered=not args.show_disordered,
        hide_motifs=not args.show_motifs,
        hide_axis=args.hide_axis,
        solid_fill_only=args.no_patterns,
        domain_label_style=args.domain_labels,
        synonymous_color=args.syn_color,
        mutation_color=args.mut_color,
        canvas_width=args.width,
    )


def export_diagram(args) -> int:
    """Fetch or load features, draw the diagram and write it

    Args:
        args: Parsed command-line arguments from argparse

    Returns:
        Exit code: 0 for success, 1 for error
    """
    positional = list(args.args)
    try:
        if args.features:
            features = load_features(args.features)
            name = Path(args.features).stem
        else:
            accession = args.uniprot
            name = accession
            if not accession:
                name = positional.pop(0)
                console.print(f"[cyan]HGNC symbol:[/cyan] {name}")
                accession = lookup_accession(name)
                console.print(f"[cyan]UniProt accession:[/cyan] {accession}")
            features = fetch_features(accession, args.domain_source)

        output = Path(args.output or f"{name}.svg")
        path = draw_to_file(
            features,
            positional,
            output,
            settings=settings_from_args(args),
            dpi=args.dpi,
            measurer=create_measurer(args.font),
        )
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] File does not exist: {e.filename}")
        return 1
    except (LollipopsError, requests.RequestException) as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    console.print(f"[green]✓[/green] Drawing saved to: {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the lollipops command"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.args and not args.uniprot and not args.features:
        parser.error("a GENE_SYMBOL, -U ACCESSION or --features FILE is required")
    if args.uniprot and args.features:
        parser.error("-U and --features cannot be used together")
    if args.dpi <= 0:
        parser.error("--dpi must be positive")
    if args.width < 0:
        parser.error("--width must not be negative")
    if args.log_level:
        set_log_level(args.log_level)

    return export_diagram(args)


if __name__ == "__main__":
    sys.exit(main())
