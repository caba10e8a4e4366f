"""Request structs for the Boomlings endpoints.

Each struct is encoded with :func:`robtop.form.to_form_string` into the form
body the servers expect. Nested structs (``base``, ``filters``, ...) are
inlined into their parent's pairs.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

from robtop.form import to_form_string
from robtop.kinds import BOOL, I32, STR, U8, U32, U64, EnumOf, Option, Seq, Struct
from robtop.schema import robtop_field

from .constants import (
    BINARY_VERSION,
    DOWNLOAD_LEVEL_PATH,
    GAME_VERSION,
    GET_ACCOUNT_COMMENTS_PATH,
    GET_COMMENTS_PATH,
    GET_LEVELS_PATH,
    GET_SONG_INFO_PATH,
    GET_USER_INFO_PATH,
    GET_USERS_PATH,
    SECRET,
)
from .models import LevelLength


def _is_none(value) -> bool:
    return value is None


def _is_false(value) -> bool:
    return not value


class Request:
    """Common behaviour of request structs."""

    endpoint: ClassVar[str] = ""

    def to_form(self) -> str:
        """Form body of this request."""
        return to_form_string(self)


@dataclass
class BaseRequest:
    """Fields every request carries: client versions and the shared secret."""
    game_version: int = robtop_field("gameVersion", U8, default=GAME_VERSION)
    binary_version: int = robtop_field("binaryVersion", U8, default=BINARY_VERSION)
    secret: str = robtop_field("secret", STR, default=SECRET)


def _base_field():
    return robtop_field("base", Struct(BaseRequest), default_factory=BaseRequest)


@dataclass
class LevelRequest(Request):
    """Download a single level.

    Attributes:
        level_id: ID of the level
        inc: Whether the download counter should be incremented
        extra: Unknown; the game sets it for some downloads
    """
    endpoint: ClassVar[str] = DOWNLOAD_LEVEL_PATH

    base: BaseRequest = _base_field()
    level_id: int = robtop_field("levelID", U64, default=0)
    inc: bool = robtop_field("inc", BOOL, default=False)
    extra: bool = robtop_field("extra", BOOL, default=False)


@dataclass
class CompletionFilter:
    """Restricts a search by the levels the player has (not) completed."""
    completed_levels: Optional[List[int]] = robtop_field(
        "completedLevels", Option(Seq(U64)), default=None, omit_if=_is_none
    )
    only_completed: bool = robtop_field("onlyCompleted", BOOL, default=False)
    uncompleted: bool = robtop_field("uncompleted", BOOL, default=False)

    @classmethod
    def limit_search(cls, ids: List[int]) -> "CompletionFilter":
        """Only search the given levels."""
        return cls(completed_levels=list(ids), only_completed=True)

    @classmethod
    def exclude(cls, ids: List[int]) -> "CompletionFilter":
        """Exclude the given levels from the search."""
        return cls(completed_levels=list(ids), uncompleted=True)


@dataclass
class SongFilter:
    """Only list levels using a specific main song or custom song."""
    song_id: int = robtop_field("song", U64, default=0)
    is_custom: bool = robtop_field("customSong", BOOL, default=False, omit_if=_is_false)

    @classmethod
    def main_song(cls, song_id: int) -> "SongFilter":
        return cls(song_id=song_id)

    @classmethod
    def custom_song(cls, song_id: int) -> "SongFilter":
        return cls(song_id=song_id, is_custom=True)


@dataclass
class SearchFilters:
    """Flags of the in-game search screen."""
    completion: CompletionFilter = robtop_field("completion", Struct(CompletionFilter), default_factory=CompletionFilter)
    featured: bool = robtop_field("featured", BOOL, default=False)
    original: bool = robtop_field("original", BOOL, default=False)
    two_player: bool = robtop_field("twoPlayer", BOOL, default=False)
    coins: bool = robtop_field("coins", BOOL, default=False)
    epic: bool = robtop_field("epic", BOOL, default=False)
    rated: bool = robtop_field("star", BOOL, default=False)
    song: Optional[SongFilter] = robtop_field("song", Option(Struct(SongFilter)), default=None, omit_if=_is_none)


class LevelRequestType(enum.IntEnum):
    SEARCH = 0
    MOST_DOWNLOADED = 1
    MOST_LIKED = 2
    TRENDING = 3
    RECENT = 4
    USER = 5
    FEATURED = 6
    MAGIC = 7
    MAP_PACK = 10
    AWARDED = 11
    FOLLOWED = 12
    FRIENDS = 13
    HALL_OF_FAME = 16


@dataclass
class LevelsRequest(Request):
    """Search or list levels, one page at a time.

    ``lengths`` and ``ratings`` restrict the result; empty means no
    restriction (``-`` on the wire).
    """
    endpoint: ClassVar[str] = GET_LEVELS_PATH

    base: BaseRequest = _base_field()
    request_type: LevelRequestType = robtop_field("type", EnumOf(LevelRequestType), default=LevelRequestType.SEARCH)
    search_string: str = robtop_field("str", STR, default="")
    lengths: List[LevelLength] = robtop_field("len", Seq(EnumOf(LevelLength)), default_factory=list)
    ratings: List[int] = robtop_field("diff", Seq(I32), default_factory=list)
    demon_rating: Optional[int] = robtop_field("demonFilter", Option(I32), default=None, omit_if=_is_none)
    total: int = robtop_field("total", I32, default=0)
    page: int = robtop_field("page", U32, default=0)
    filters: SearchFilters = robtop_field("filters", Struct(SearchFilters), default_factory=SearchFilters)


@dataclass
class SongRequest(Request):
    """Look up a Newgrounds song by id."""
    endpoint: ClassVar[str] = GET_SONG_INFO_PATH

    song_id: int = robtop_field("songID", U64, default=0)
    secret: str = robtop_field("secret", STR, default=SECRET)


@dataclass
class UserRequest(Request):
    """Retrieve the profile of an account."""
    endpoint: ClassVar[str] = GET_USER_INFO_PATH

    base: BaseRequest = _base_field()
    account_id: int = robtop_field("targetAccountID", U64, default=0)


@dataclass
class UserSearchRequest(Request):
    """Search a player by name. The servers only return exact matches."""
    endpoint: ClassVar[str] = GET_USERS_PATH

    base: BaseRequest = _base_field()
    total: int = robtop_field("total", U32, default=0)
    page: int = robtop_field("page", U32, default=0)
    search_string: str = robtop_field("str", STR, default="")


class SortMode(enum.IntEnum):
    RECENT = 0
    LIKED = 1


@dataclass
class LevelCommentsRequest(Request):
    """Retrieve a page of the comments on a level."""
    endpoint: ClassVar[str] = GET_COMMENTS_PATH

    base: BaseRequest = _base_field()
    total: int = robtop_field("total", U32, default=0)
    page: int = robtop_field("page", U32, default=0)
    sort_mode: SortMode = robtop_field("mode", EnumOf(SortMode, U8), default=SortMode.RECENT)
    level_id: int = robtop_field("levelID", U64, default=0)
    limit: int = robtop_field("count", U32, default=20)


@dataclass
class ProfileCommentsRequest(Request):
    """Retrieve a page of the posts on a player's profile (ten per page)."""
    endpoint: ClassVar[str] = GET_ACCOUNT_COMMENTS_PATH

    base: BaseRequest = _base_field()
    total: int = robtop_field("total", U32, default=0)
    page: int = robtop_field("page", U32, default=0)
    account_id: int = robtop_field("accountID", U64, default=0)
