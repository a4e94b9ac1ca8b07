#!/usr/bin/env python3
"""
Album Curation from Analyzed Photos
===================================

Groups analyzed photos into albums and orders each album.

Algorithms:
  best-shots     Highest overall analysis score first
  chronological  Capture time order (name order when times are missing)
  color-story    Clusters by dominant color, one album per coherent palette
  artistic-flow  Balanced narrative albums: intro -> transition -> climax -> closing

Input is a JSON file holding a list of photos, or an object with a "photos"
(or "images") list. Each photo has "id", "name", "url" and an analysis
payload under "metadata" (or "data") with dominant_colors, scene,
people_count and description.

Usage:
    python curate_photos.py <photos.json> [options]

Examples:
    python curate_photos.py photos.json --algorithm color-story --max-photos 30
    python curate_photos.py photos.json -a artistic-flow -o albums.json
"""

import argparse
import json
import os
import sys

from photo_curator.config import DEFAULT_COLOR_THRESHOLD, DEFAULT_MAX_PHOTOS
from photo_curator.models import CurationAlgorithm, PhotoRecord
from photo_curator.sequencing import COLOR_ORDERS


def load_photos(path: str):
    """Load photo records from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('photos') or data.get('images') or []

    if not isinstance(data, list):
        raise ValueError("Expected a list of photos")

    return [PhotoRecord.from_dict(item) for item in data if isinstance(item, dict)]


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Curate analyzed photos into ordered albums",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Tips:
  - Lower --threshold for tighter color albums (80 is a good start)
  - Use --order color_family to group hues inside a color album
  - Small collections with a large --max-photos may produce a single album
        """
    )

    parser.add_argument(
        "photos",
        help="Path to JSON file with analyzed photos"
    )

    parser.add_argument(
        "--algorithm", "-a",
        choices=[a.value for a in CurationAlgorithm],
        default=CurationAlgorithm.BEST_SHOTS.value,
        help="Curation algorithm (default: best-shots)"
    )

    parser.add_argument(
        "--max-photos", "-m",
        type=int,
        default=DEFAULT_MAX_PHOTOS,
        help=f"Maximum photos per album (default: {DEFAULT_MAX_PHOTOS})"
    )

    parser.add_argument(
        "--threshold", "-t",
        type=float,
        default=DEFAULT_COLOR_THRESHOLD,
        help=f"Color distance threshold for color-story (default: {DEFAULT_COLOR_THRESHOLD:g})"
    )

    parser.add_argument(
        "--order",
        choices=COLOR_ORDERS,
        default="cluster",
        help="Photo order inside color-story albums (default: cluster)"
    )

    parser.add_argument(
        "--output", "-o",
        help="Write albums as JSON to this file"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print the summary"
    )

    args = parser.parse_args(argv)

    if not os.path.isfile(args.photos):
        print(f"Error: File not found: {args.photos}")
        return 1

    try:
        from photo_curator.curator import AlbumCurator

        photos = load_photos(args.photos)
        curator = AlbumCurator(
            color_threshold=args.threshold,
            color_order=args.order,
            verbose=not args.quiet
        )
        albums = curator.curate(photos, args.algorithm, args.max_photos)

        print("\n" + "="*60)
        print("SUMMARY")
        print("="*60)
        print(f"Photos loaded: {len(photos)}")
        print(f"Algorithm: {args.algorithm}")
        print(f"Albums: {len(albums)}")
        for album in albums:
            print(f"  {album.name}: {len(album.photos)} photos")

        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                json.dump({'albums': [a.to_dict() for a in albums]}, f, indent=2, default=str)
            print(f"\nAlbums saved to: {args.output}")

        return 0

    except (OSError, ValueError) as e:
        print(f"\nError: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
