"""Command-line entrypoint for extracting cat photos."""

import argparse
import asyncio
import sys
from collections.abc import Callable, Sequence

from pydantic import ValidationError

from cat_gallery.app_logging import configure_logging
from cat_gallery.config import Settings
from cat_gallery.containers import AppContainer, build_container
from cat_gallery.domain.places import PlaceQuery
from cat_gallery.services.decision import OutputMode
from cat_gallery.services.locator import NoPhotosFoundError
from cat_gallery.services.pipeline import ExtractionSummary

EXIT_OK = 0
EXIT_NO_PHOTOS = 1
EXIT_CONFIG_ERROR = 2


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cat-extract",
        description="Download photos from Google Maps and keep the cats",
    )
    parser.add_argument(
        "--place-id",
        default=None,
        help="Google Maps place id (omit to search a random cat place)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of photos to process (default: 50)",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in OutputMode],
        default=None,
        help="crop each cat or keep whole photos containing cats",
    )
    return parser.parse_args(argv)


def main(
    argv: Sequence[str] | None = None,
    container_factory: Callable[[Settings], AppContainer] = build_container,
) -> int:
    """Run one extraction and return the process exit code."""
    args = parse_args(argv)
    configure_logging()
    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    if args.mode:
        settings = settings.model_copy(update={"output_mode": OutputMode(args.mode)})
    limit = args.limit if args.limit is not None else settings.default_limit

    if args.place_id:
        print(f"Searching for cat photos at place_id: {args.place_id}")
        query = PlaceQuery.explicit(args.place_id)
    else:
        print(
            "No place_id provided. "
            "Searching for random cat photos around the world..."
        )
        query = PlaceQuery.random()

    container = container_factory(settings)
    try:
        summary = asyncio.run(_run(container, query, limit))
    except NoPhotosFoundError as exc:
        print(f"No photos found. ({exc})", file=sys.stderr)
        return EXIT_NO_PHOTOS

    for path in summary.saved_paths:
        print(f"Saved: {path}")
    print(
        f"Finished! Processed {summary.processed} photo(s) from "
        f"{summary.place_name or summary.place_id}, saved {summary.saved}."
    )
    return EXIT_OK


async def _run(
    container: AppContainer, query: PlaceQuery, limit: int
) -> ExtractionSummary:
    try:
        return await container.pipeline.run(query, limit=limit)
    finally:
        await container.close_resources()


if __name__ == "__main__":
    sys.exit(main())
