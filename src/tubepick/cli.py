#!/usr/bin/env python3
"""
tubepick CLI - resolve a YouTube video into downloadable stream URLs.

Usage:
    tubepick "https://youtube.com/watch?v=VIDEO_ID"
    tubepick VIDEO_ID --quality 1080p --codec av1
    tubepick VIDEO_ID --audio-only --dub es
    tubepick --show-config
"""

import argparse
import json
import sys

from tubepick.config.defaults import DEFAULT_CODEC, DEFAULT_QUALITY
from tubepick.exceptions import ConfigError, ResolutionError, ToolNotFoundError
from tubepick.models.request import SelectionRequest
from tubepick.utils.logging import configure_logging


def _print_json(data: dict) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _cmd_resolve(args) -> int:
    """Handle the default resolve command."""
    from pydantic import ValidationError

    from tubepick.config.loader import get_config
    from tubepick.resolver import Resolver
    from tubepick.tools.yt_dlp import YtDlpCatalogueProvider

    try:
        request = SelectionRequest(
            quality=args.quality,
            codec=args.codec,
            audio_only=args.audio_only,
            dub_language=args.dub,
        )
    except ValidationError as e:
        _print_json({"success": False, "error": str(e), "category": "invalid_request"})
        return 2

    try:
        config = get_config()
        provider = YtDlpCatalogueProvider(timeout=config.metadata_timeout)
        resolver = Resolver(provider, config=config)
        media = resolver.resolve(args.url, request)
    except ResolutionError as e:
        _print_json({"success": False, "error": e.message, **e.to_dict()})
        return 1
    except (ToolNotFoundError, ConfigError) as e:
        _print_json({"success": False, "error": str(e), "type": e.__class__.__name__})
        return 1

    _print_json(media.to_dict())
    return 0


def _cmd_show_config(args) -> int:
    """Handle --show-config."""
    from tubepick.config.loader import get_config

    try:
        config = get_config()
    except ConfigError as e:
        print(f"Config is invalid: {e}", file=sys.stderr)
        return 1

    print(f"Source: {config.source.value}")
    print(f"Root dir: {config.root_dir}")
    print(f"Primary client: {config.primary_client}")
    print(f"Alternate client: {config.alternate_client}")
    print(f"Muxed clients: {', '.join(config.muxed_clients)}")
    print(f"Session refresh: {config.session_refresh_minutes} min")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Resolve YouTube videos into downloadable stream URLs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s "https://youtube.com/watch?v=VIDEO_ID"
    %(prog)s VIDEO_ID --quality 1080p --codec vp9
    %(prog)s VIDEO_ID --audio-only
    %(prog)s --show-config
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--show-config", action="store_true", help="Show the resolved configuration and exit"
    )

    parser.add_argument("url", nargs="?", help="YouTube URL or video ID")
    parser.add_argument(
        "-q", "--quality", default=str(DEFAULT_QUALITY),
        help="Target quality: 144..4320, optional 'p' suffix, or 'max' (default: 720)",
    )
    parser.add_argument(
        "-c", "--codec", default=DEFAULT_CODEC, choices=["h264", "vp9", "av1"],
        help="Preferred codec family (default: h264)",
    )
    parser.add_argument("--audio-only", action="store_true", help="Resolve audio only")
    parser.add_argument("--dub", default=None, help="Dubbed audio language code (e.g. es)")

    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.show_config:
        return _cmd_show_config(args)
    if args.url:
        return _cmd_resolve(args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
