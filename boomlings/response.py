"""Parsing of complete server responses.

A response is made up of ``#`` separated sections; list sections hold ``|``
separated records (songs use ``~:~``). The literal response ``-1`` is the
servers' way of saying "not found".
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Type, TypeVar

from robtop.de import from_robtop_str
from robtop.errors import DeserializeError

from .constants import (
    COMMENT_USER_SEPARATOR,
    EMPTY_COMMENT_USER,
    NOT_FOUND,
    RECORD_SEPARATOR,
    SECTION_SEPARATOR,
    SONG_SEPARATOR,
)
from .models import (
    CommentUser,
    Creator,
    Level,
    LevelComment,
    NewgroundsSong,
    Page,
    Profile,
    ProfileComment,
    SearchedUser,
)

log = logging.getLogger(__name__)

T = TypeVar("T")


class ResponseError(Exception):
    """Response could not be interpreted."""
    pass


class NotFound(ResponseError):
    """The servers answered ``-1``."""

    def __init__(self, message: str = "not found"):
        super().__init__(message)


class UnexpectedFormat(ResponseError):
    """The response is not shaped as expected (too few sections, ...)."""

    def __init__(self, message: str = "unexpected format"):
        super().__init__(message)


@dataclass
class LevelListing:
    """Level from a levels response together with its creator and custom song.

    Creator and song are ``None`` if the response does not contain them.
    """
    level: Level
    creator: Optional[Creator] = None
    song: Optional[NewgroundsSong] = None


def check_found(response: str) -> str:
    """Return ``response`` unchanged unless it is the not-found marker.

    Raises:
        NotFound: If the response is ``-1``
    """
    if response.strip() == NOT_FOUND:
        raise NotFound()
    return response


def split_sections(response: str, minimum: int = 1) -> List[str]:
    """Split a response into its ``#`` separated sections.

    Raises:
        NotFound: If the response is ``-1``
        UnexpectedFormat: If fewer than ``minimum`` sections are present
    """
    sections = check_found(response).split(SECTION_SEPARATOR)
    if len(sections) < minimum:
        raise UnexpectedFormat(f"expected at least {minimum} sections, got {len(sections)}")
    return sections


def parse_records(text: str, cls: Type[T], separator: str = RECORD_SEPARATOR, strict: bool = True) -> List[T]:
    """Decode every non-empty record of a list section.

    Args:
        text: The section
        cls: Schema class of the records
        separator: Record separator
        strict: If false, records that fail to decode are logged and skipped
            instead of aborting the whole section

    Raises:
        DeserializeError: If ``strict`` and some record does not decode
    """
    records: List[T] = []
    for ordinal, fragment in enumerate(text.split(separator), start=1):
        # Sections can be completely empty
        if not fragment:
            continue
        try:
            records.append(from_robtop_str(cls, fragment))
        except DeserializeError as e:
            if strict:
                raise
            log.warning(f"Skipping {cls.__name__} record {ordinal}: {e}")
            log.debug(f"   Record data: {fragment}")
    return records


def parse_levels_response(response: str, strict: bool = True) -> Tuple[List[LevelListing], Optional[Page]]:
    """Parse a ``getGJLevels`` response.

    Returns:
        The listed levels, joined with their creators and custom songs, and
        the pagination info if the response carries it
    """
    sections = split_sections(response, minimum=3)
    creators = parse_records(sections[1], Creator, strict=strict)
    songs = parse_records(sections[2], NewgroundsSong, SONG_SEPARATOR, strict=strict)
    page = from_robtop_str(Page, sections[3]) if len(sections) > 3 and sections[3] else None

    creators_by_id = {creator.user_id: creator for creator in creators}
    songs_by_id = {song.song_id: song for song in songs}

    listings = []
    for level in parse_records(sections[0], Level, strict=strict):
        creator = creators_by_id.get(level.creator)
        if creator is None:
            log.debug(f"Level {level.level_id}: creator {level.creator} not in response")
        song = songs_by_id.get(level.custom_song) if level.custom_song is not None else None
        listings.append(LevelListing(level, creator, song))
    log.debug(f"Parsed {len(listings)} levels, {len(creators)} creators, {len(songs)} songs")
    return listings, page


def parse_download_level_response(response: str) -> Level:
    """Parse a ``downloadGJLevel`` response (the level is its first section)."""
    return from_robtop_str(Level, split_sections(response)[0])


def parse_song_info_response(response: str) -> NewgroundsSong:
    """Parse a ``getGJSongInfo`` response."""
    return from_robtop_str(NewgroundsSong, check_found(response))


def parse_user_info_response(response: str) -> Profile:
    """Parse a ``getGJUserInfo`` response."""
    return from_robtop_str(Profile, check_found(response))


def parse_users_response(response: str) -> SearchedUser:
    """Parse a ``getGJUsers`` response.

    The servers only return exact name matches, so there is a single user in
    the first section; the second is pagination info.
    """
    return from_robtop_str(SearchedUser, split_sections(response)[0])


def parse_level_comments_response(response: str) -> List[LevelComment]:
    """Parse a ``getGJComments`` response.

    Every record is ``comment:user``; the user is attached to its comment,
    or left ``None`` if the servers sent the empty placeholder.

    Raises:
        UnexpectedFormat: If a record has no user part
    """
    comments = []
    for fragment in split_sections(response)[0].split(RECORD_SEPARATOR):
        if not fragment:
            continue
        parts = fragment.split(COMMENT_USER_SEPARATOR)
        if len(parts) < 2:
            raise UnexpectedFormat(f"comment without user data: {fragment!r}")
        comment = from_robtop_str(LevelComment, parts[0])
        if parts[1] != EMPTY_COMMENT_USER:
            comment.user = from_robtop_str(CommentUser, parts[1])
        comments.append(comment)
    log.debug(f"Parsed {len(comments)} level comments")
    return comments


def parse_profile_comments_response(response: str) -> List[ProfileComment]:
    """Parse a ``getGJAccountComments`` response."""
    return parse_records(split_sections(response)[0], ProfileComment)
