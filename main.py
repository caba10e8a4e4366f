"""Command line tool for inspecting RobTop-format data and querying the Boomlings servers."""

from __future__ import annotations
import argparse
import sys
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from robtop import DeserializeError, ProcessError, decode_map
from boomlings import (
    ApiError,
    BoomlingsAPI,
    LevelRequestType,
    LevelsRequest,
    ResponseError,
    SortMode,
)

log = logging.getLogger(__name__)

LOG_DIR = Path("logs")
LOG_FILE = "dash_codec.log"


def setup_logging(verbose: bool = False) -> None:
    """Log to a rotating file in ``logs/`` and to stderr."""
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Cannot create {LOG_DIR}: {e}", file=sys.stderr)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if LOG_DIR.is_dir():
        handlers.insert(0, RotatingFileHandler(
            str(LOG_DIR / LOG_FILE), maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8"
        ))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s",
        handlers=handlers,
    )


def cmd_inspect(args: argparse.Namespace) -> int:
    """Dump the key/value pairs of map-like data."""
    text = sys.stdin.read() if args.data == "-" else args.data
    values = decode_map(text.strip(), args.delimiter)
    width = max((len(key) for key in values), default=0)
    for key, value in values.items():
        print(f"{key:>{width}}  {value}")
    return 0


def cmd_song(args: argparse.Namespace) -> int:
    api = BoomlingsAPI()
    song = api.get_song(args.song_id)
    print(f"{song.song_id}: {song.name} by {song.artist} ({song.filesize} MB)")
    print(f"  {song.link.process()}")
    return 0


def cmd_levels(args: argparse.Namespace) -> int:
    api = BoomlingsAPI()
    request = LevelsRequest(
        request_type=LevelRequestType[args.type.upper()],
        search_string=args.search,
        page=args.page,
    )
    listings, page = api.get_levels(request)
    for listing in listings:
        level = listing.level
        creator = listing.creator.name if listing.creator else "-"
        print(f"{level.level_id:>10}  {level.name} by {creator} ({level.stars} stars, {level.downloads} downloads)")
    if page is not None:
        print(f"page {args.page}: {page.offset + len(listings)}/{page.total}")
    return 0


def cmd_download(args: argparse.Namespace) -> int:
    api = BoomlingsAPI()
    level = api.download_level(args.level_id)
    description = level.description.process() if level.description is not None else ""
    password = level.password.process() if level.password is not None else None
    print(f"{level.level_id}: {level.name} (version {level.version})")
    print(f"  {description}")
    print(f"  password: {password if password is not None else 'unknown'}")
    print(f"  level data: {len(level.level_data or '')} bytes")
    return 0


def cmd_user(args: argparse.Namespace) -> int:
    api = BoomlingsAPI()
    account_id = args.account if args.account.isdigit() else api.search_user(args.account).account_id
    profile = api.get_user(account_id)
    rank = f"#{profile.global_rank}" if profile.global_rank is not None else "unranked"
    print(f"{profile.name} (account {profile.account_id}, {rank})")
    print(f"  {profile.stars} stars, {profile.diamonds} diamonds, {profile.demons} demons, "
          f"{profile.creator_points} creator points")
    for url in (profile.youtube_url, profile.twitter_url, profile.twitch_url):
        if url:
            print(f"  {url}")
    return 0


def cmd_comments(args: argparse.Namespace) -> int:
    api = BoomlingsAPI()
    for comment in api.get_level_comments(args.level_id, page=args.page, sort_mode=SortMode[args.sort.upper()]):
        author = comment.user.name if comment.user else "-"
        content = comment.content.process() if comment.content is not None else ""
        print(f"{comment.likes:>6}  {author}: {content} ({comment.time_since_post} ago)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dash-codec", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("inspect", help="dump map-like RobTop data")
    p.add_argument("data", help="the data, or - to read stdin")
    p.add_argument("-d", "--delimiter", default=":", help="field delimiter (default ':')")
    p.set_defaults(func=cmd_inspect)

    p = sub.add_parser("song", help="look up a Newgrounds song")
    p.add_argument("song_id", type=int)
    p.set_defaults(func=cmd_song)

    p = sub.add_parser("levels", help="list a page of levels")
    p.add_argument("-t", "--type", default="featured",
                   choices=[t.name.lower() for t in LevelRequestType])
    p.add_argument("-s", "--search", default="")
    p.add_argument("-p", "--page", type=int, default=0)
    p.set_defaults(func=cmd_levels)

    p = sub.add_parser("download", help="download a level")
    p.add_argument("level_id", type=int)
    p.set_defaults(func=cmd_download)

    p = sub.add_parser("user", help="show a player's profile")
    p.add_argument("account", help="account id or exact player name")
    p.set_defaults(func=cmd_user)

    p = sub.add_parser("comments", help="list a page of comments on a level")
    p.add_argument("level_id", type=int)
    p.add_argument("-p", "--page", type=int, default=0)
    p.add_argument("-s", "--sort", default="recent", choices=[m.name.lower() for m in SortMode])
    p.set_defaults(func=cmd_comments)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        return args.func(args)
    except ResponseError as e:
        log.error(f"Unexpected response: {e}")
    except ApiError as e:
        log.error(f"Request failed: {e}")
    except (DeserializeError, ProcessError) as e:
        log.error(f"Malformed data: {e}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
