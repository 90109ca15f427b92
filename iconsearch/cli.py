# cli.py

import argparse
import dataclasses
import json
import logging
import sys
from typing import List, Optional

from iconsearch.components.icon_library import IconLibrary
from iconsearch.config import SystemConfig
from iconsearch.core.clustering import style_labels
from iconsearch.core.exceptions import IconSearchError, UnknownFilterError
from iconsearch.core.models import IconCluster, ScoredEntry, SearchFilters
from iconsearch.utils.file_utils import copy_svg, prepare_destination, sanitize_filename
from iconsearch.utils.image_utils import png_bytes, svg_view_box
from iconsearch.utils.logging_config import setup_logging
from iconsearch.utils.preview import svg_to_ascii, svg_to_braille

logger = logging.getLogger(__name__)

MAX_TAGS_SHOWN = 6


def _open_library(args) -> IconLibrary:
    return IconLibrary(args.config)


def _not_found(name: str, out=None):
    out = out or sys.stdout
    print(f'Icon "{name}" not found.', file=out)
    print("\nTry searching first:", file=out)
    print(f'  iconsearch search "{name}"', file=out)


def _short_tags(tags: str) -> str:
    tag_list = [t.strip() for t in tags.split(',') if t.strip()]
    shown = ', '.join(tag_list[:MAX_TAGS_SHOWN])
    return shown + (', ...' if len(tag_list) > MAX_TAGS_SHOWN else '')


def _style_summary(cluster: IconCluster) -> str:
    groups = []
    for style in cluster.styles:
        if style.group_title not in groups:
            groups.append(style.group_title)
    return ', '.join(groups)


def _flat_rows(library: IconLibrary, results: List[ScoredEntry]) -> List[dict]:
    return [
        {
            "id": r.entry.id,
            "name": r.entry.name,
            "score": r.score,
            "set_id": r.entry.set_id,
            "set_title": r.entry.set_title,
            "group_title": r.entry.group_title,
            "tags": r.entry.tags,
            "path": str(library.resolve_asset_path(r.entry)),
        }
        for r in results
    ]


def _cluster_rows(clusters: List[IconCluster]) -> List[dict]:
    rows = []
    for cluster in clusters:
        row = dataclasses.asdict(cluster)
        for style in row["styles"]:
            style["asset_path"] = str(style["asset_path"])
        rows.append(row)
    return rows


def _write_json(rows: List[dict], output: str):
    with open(output, 'w') as f:
        json.dump(rows, f, indent=2)
    print(f"\nResults saved to: {output}")


def search_command(args) -> int:
    """Search icons by name or tags"""
    with _open_library(args) as library:
        filters = SearchFilters(set_name=args.set)

        if args.group:
            try:
                filters = dataclasses.replace(library.resolve_group_filter(args.group),
                                              set_name=args.set)
            except UnknownFilterError as e:
                print(str(e))
                print(e.alternatives())
                return 1

        if args.expand:
            results = library.search(args.query, filters, args.limit)
            if not results:
                print(f'No icons found matching "{args.query}"')
                return 0

            print(f"Found {len(results)} icon(s):\n")
            for result in results:
                icon = result.entry
                set_label = style_labels(icon)[1]
                print(icon.name)
                print(f"  ID: {icon.id}")
                print(f"  Style: {icon.group_title or 'Other'} / {set_label}")
                if icon.tags:
                    print(f"  Tags: {icon.tags}")
                print(f"  Path: {library.resolve_asset_path(icon)}")
                print("")

            if args.output:
                _write_json(_flat_rows(library, results), args.output)
        else:
            clusters = library.search_clustered(args.query, filters, args.limit)
            if not clusters:
                print(f'No icons found matching "{args.query}"')
                return 0

            print(f"Found {len(clusters)} unique icon(s):\n")
            for cluster in clusters:
                print(cluster.name)
                print(f"  Styles: {_style_summary(cluster)}")
                if cluster.tags:
                    print(f"  Tags: {_short_tags(cluster.tags)}")
                print("")

            print("Use --expand (-e) to see all style variants with paths")
            if args.output:
                _write_json(_cluster_rows(clusters), args.output)

    return 0


def sets_command(args) -> int:
    """List icon sets, or style families and specialty collections"""
    with _open_library(args) as library:
        if args.groups:
            print("\n── Style Families ──\n")
            print('Filter with: iconsearch search "" --group "<name>"\n')
            for group in library.groups():
                print(group.title)
                print(f"  Icons: {group.icons_count:,}")
                print(f"  Sizes: {group.sizes}")
                print("")

            print("── Specialty Collections ──\n")
            for icon_set in library.specialty_sets():
                print(icon_set.title)
                print(f"  Icons: {icon_set.icons_count}")
                print("")
            return 0

        stats = library.stats()
        print(f"\nTotal: {stats.total_sets} sets, {stats.total_icons} icons\n")
        for icon_set in library.sets():
            print(icon_set.title)
            print(f"  ID: {icon_set.id}")
            print(f"  Icons: {icon_set.icons_count}")
            if args.verbose:
                print(f"  Local: {'yes' if icon_set.local else 'no'}")
                print(f"  Demo: {'yes' if icon_set.demo else 'no'}")
            print("")

    return 0


def copy_command(args) -> int:
    """Copy an icon SVG, or export it as PNG"""
    errors = sys.stderr if args.stdout else sys.stdout
    size = args.size or args.config.export.png_size

    with _open_library(args) as library:
        icon = library.get_icon(args.name)
        if icon is None:
            _not_found(args.name, errors)
            return 1

        source = library.existing_asset_path(icon)
        set_label = style_labels(icon)[1]

        if args.png:
            data = png_bytes(source, size)
            if args.stdout:
                sys.stdout.buffer.write(data)
                sys.stdout.flush()
                return 0

            dest_dir, created = prepare_destination(args.destination)
            if created:
                print(f"Created directory: {dest_dir}")
            dest_path = dest_dir / sanitize_filename(args.output or f"{icon.name}.png")
            dest_path.write_bytes(data)

            print("Icon exported as PNG successfully!\n")
            print(f"  {icon.name}")
            print(f"  From: {set_label}")
            print(f"  To: {dest_path}")
            print(f"  Size: {size}x{size} pixels")
            return 0

        svg_text = source.read_text(encoding='utf-8')
        if args.stdout:
            sys.stdout.write(svg_text)
            return 0

        dest_dir, created = prepare_destination(args.destination)
        if created:
            print(f"Created directory: {dest_dir}")
        dest_path = copy_svg(source, dest_dir, args.output or f"{icon.name}.svg")

        print("Icon copied successfully!\n")
        print(f"  {icon.name}")
        print(f"  From: {set_label}")
        print(f"  To: {dest_path}")
        view_box = svg_view_box(svg_text)
        if view_box:
            print(f"  ViewBox: {view_box}")

    return 0


def preview_command(args) -> int:
    """Preview an icon in the terminal"""
    width = args.width or args.config.export.preview_width

    with _open_library(args) as library:
        icon = library.get_icon(args.name)
        if icon is None:
            _not_found(args.name)
            return 1

        path = library.existing_asset_path(icon)

        print("")
        print(f"━━━ {icon.name} ━━━")
        print(f"Set: {style_labels(icon)[1]}")
        if icon.tags:
            print(f"Tags: {icon.tags}")
        print(f"Path: {path}")
        print("")

        if args.ascii:
            print(svg_to_ascii(path, width))
            print("\n(ASCII block rendering)")
        else:
            print(svg_to_braille(path, width))
            print("\n(Braille rendering)")
        print("")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iconsearch",
        description="Search, preview and export icons from the local Nucleo library"
    )
    parser.add_argument('--config', default="config.yaml",
                        help='YAML configuration file (defaults apply when missing)')
    parser.add_argument('--log-level', default=None,
                        help='Override the configured log level (DEBUG, INFO, ...)')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Search command
    search_parser = subparsers.add_parser(
        'search', help='Search for icons by name or tags. Use -term to exclude matches.')
    search_parser.add_argument('query', help='Search query (use -term to exclude, e.g. "arrow -circle")')
    search_parser.add_argument('-s', '--set', help='Filter by icon set name')
    search_parser.add_argument('-g', '--group', help='Filter by style group (UI, Core, Micro) or collection')
    search_parser.add_argument('-l', '--limit', type=int, default=None,
                               help='Maximum number of results')
    search_parser.add_argument('-e', '--expand', action='store_true',
                               help='Show all style variants with full details')
    search_parser.add_argument('-o', '--output', help='Output JSON file for results')
    search_parser.set_defaults(func=search_command)

    # Sets command
    sets_parser = subparsers.add_parser('sets', help='List all icon sets')
    sets_parser.add_argument('-v', '--verbose', action='store_true',
                             help='Show detailed information')
    sets_parser.add_argument('-g', '--groups', action='store_true',
                             help='List style groups and specialty collections')
    sets_parser.set_defaults(func=sets_command)

    # Copy command
    copy_parser = subparsers.add_parser('copy', help='Copy an icon SVG file to a target directory')
    copy_parser.add_argument('name', help='Icon name')
    copy_parser.add_argument('destination', nargs='?', default=None,
                             help='Destination directory')
    copy_parser.add_argument('-o', '--output', help='Output filename (default: uses icon name)')
    copy_parser.add_argument('--stdout', action='store_true',
                             help='Write file content to stdout instead of copying')
    copy_parser.add_argument('--png', action='store_true', help='Export as PNG instead of SVG')
    copy_parser.add_argument('--size', type=int, default=None, help='PNG size in pixels')
    copy_parser.set_defaults(func=copy_command)

    # Preview command
    preview_parser = subparsers.add_parser('preview', help='Preview an icon in the terminal')
    preview_parser.add_argument('name', help='Icon name')
    preview_parser.add_argument('-a', '--ascii', action='store_true',
                                help='Use block characters instead of braille')
    preview_parser.add_argument('-w', '--width', type=int, default=None,
                                help='Preview width in characters')
    preview_parser.set_defaults(func=preview_command)

    return parser


def main_cli(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    config = SystemConfig.load(args.config)
    setup_logging(args.log_level or config.log_level, config.log_dir)
    args.config = config
    if getattr(args, 'destination', None) is None and args.command == 'copy':
        args.destination = config.export.default_destination

    # Execute command
    try:
        return args.func(args)
    except (IconSearchError, OSError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main_cli())
