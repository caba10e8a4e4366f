"""Data models for objects returned by the Boomlings servers."""

from __future__ import annotations
import base64
import binascii
import enum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from robtop.errors import ProcessError
from robtop.kinds import (
    BOOL,
    F64,
    I32,
    IGNORE,
    STR,
    TWO_BOOL,
    U8,
    U16,
    U32,
    U64,
    DefaultToNone,
    EnumOf,
    Option,
    ThunkField,
)
from robtop.schema import robtop_field, robtop_format
from robtop.thunk import Base64Decoder, PercentDecoder, Thunk, ThunkProcessor
from robtop.util import cyclic_xor

from .constants import (
    COMMENT_DELIMITER,
    CREATOR_DELIMITER,
    LEVEL_DELIMITER,
    LEVEL_PASSWORD_XOR_KEY,
    PAGE_DELIMITER,
    PASSWORD_FREE_COPY,
    PASSWORD_NO_COPY,
    SONG_DELIMITER,
    TWITCH_URL,
    TWITTER_URL,
    USER_DELIMITER,
    YOUTUBE_URL,
)


@robtop_format(CREATOR_DELIMITER, map_like=False)
@dataclass
class Creator:
    """Creator of a level, as listed in the second section of a levels response.

    Unregistered players have account id ``0`` on the wire, modelled as ``None``.
    """
    user_id: int = robtop_field(kind=U64)
    name: str = robtop_field(kind=STR)
    account_id: Optional[int] = robtop_field(kind=DefaultToNone(U64))


@robtop_format(SONG_DELIMITER)
@dataclass
class NewgroundsSong:
    """Custom song hosted on Newgrounds.

    The download link is percent encoded on the wire and kept lazily; index
    ``9`` is not used by the servers.
    """
    song_id: int = robtop_field("1", U64)
    name: str = robtop_field("2", STR)
    index_3: int = robtop_field("3", U64)
    artist: str = robtop_field("4", STR)
    filesize: float = robtop_field("5", F64)
    index_6: Optional[str] = robtop_field("6", Option(STR))
    index_7: Optional[str] = robtop_field("7", Option(STR))
    index_8: str = robtop_field("8", STR)
    link: Thunk[str] = robtop_field("10", ThunkField(PercentDecoder))


@dataclass(frozen=True)
class Password:
    """Copy protection of a level.

    Attributes:
        copyable: Whether the level can be copied in-game at all
        code: Numeric password, ``None`` for free copies
    """
    copyable: bool
    code: Optional[int] = None

    @property
    def is_free(self) -> bool:
        return self.copyable and self.code is None

    def __str__(self) -> str:
        if not self.copyable:
            return "No Copy"
        if self.code is None:
            return "Free Copy"
        return f"{self.code:06d}"


NO_COPY = Password(False)
FREE_COPY = Password(True)


class PasswordProcessor(ThunkProcessor):
    """RobTop's level password encoding.

    ``"0"`` means the level cannot be copied, ``"Aw=="`` that it is free to
    copy. Anything else is the password with a ``1`` prepended, zero padded
    to six digits, XORed with ``"26364"`` and URL-safe base64 encoded.
    """

    @staticmethod
    def from_unprocessed(unprocessed: str) -> Password:
        if unprocessed == PASSWORD_NO_COPY:
            return NO_COPY
        if unprocessed == PASSWORD_FREE_COPY:
            return FREE_COPY
        try:
            decoded = base64.b64decode(unprocessed, altchars=b"-_", validate=True)
        except (binascii.Error, ValueError) as e:
            raise ProcessError(ProcessError.BASE64, str(e)) from e
        # The leading '1' only marks the start of the password
        digits = cyclic_xor(decoded, LEVEL_PASSWORD_XOR_KEY)[1:]
        if not digits or not digits.isdigit():
            raise ProcessError(ProcessError.INT, f"invalid password digits {digits!r}")
        return Password(True, int(digits))

    @staticmethod
    def as_unprocessed(processed: Password) -> str:
        if not processed.copyable:
            return PASSWORD_NO_COPY
        if processed.code is None:
            return PASSWORD_FREE_COPY
        if not 0 <= processed.code <= 999999:
            raise ProcessError(ProcessError.INT, f"password {processed.code} has more than six digits")
        plain = f"1{processed.code:06d}".encode("ascii")
        return base64.urlsafe_b64encode(cyclic_xor(plain, LEVEL_PASSWORD_XOR_KEY)).decode("ascii")


class LevelLength(enum.IntEnum):
    TINY = 0
    SHORT = 1
    MEDIUM = 2
    LONG = 3
    EXTRA_LONG = 4
    PLATFORMER = 5


@robtop_format(LEVEL_DELIMITER)
@dataclass
class Level:
    """Level as returned by the levels and download endpoints.

    Only the commonly used indices are modelled; the difficulty denominator
    (``8``) and indices ``46``/``47`` are recognized but not kept. Level data
    and password are only sent by the download endpoint. Fields are declared
    required first, so re-encoded levels do not follow the servers' key order.
    """
    level_id: int = robtop_field("1", U64)
    name: str = robtop_field("2", STR)
    version: int = robtop_field("5", U32)
    creator: int = robtop_field("6", U64)
    rating: int = robtop_field("9", I32)
    downloads: int = robtop_field("10", U32)
    main_song: int = robtop_field("12", U8)
    gd_version: int = robtop_field("13", U8)
    likes: int = robtop_field("14", I32)
    length: LevelLength = robtop_field("15", EnumOf(LevelLength))
    stars: int = robtop_field("18", U8)
    featured: int = robtop_field("19", I32)
    copy_of: Optional[int] = robtop_field("30", DefaultToNone(U64))
    custom_song: Optional[int] = robtop_field("35", DefaultToNone(U64))
    stars_requested: Optional[int] = robtop_field("39", DefaultToNone(U8))
    object_amount: Optional[int] = robtop_field("45", DefaultToNone(U32))

    # Absent from some responses
    description: Optional[Thunk[str]] = robtop_field("3", Option(ThunkField(Base64Decoder)), default=None)
    level_data: Optional[str] = robtop_field("4", Option(STR), default=None)
    index_8: None = robtop_field("8", IGNORE, default=None)
    is_demon: bool = robtop_field("17", BOOL, default=False)
    is_auto: bool = robtop_field("25", BOOL, default=False)
    password: Optional[Thunk[Password]] = robtop_field("27", Option(ThunkField(PasswordProcessor)), default=None)
    two_player: bool = robtop_field("31", BOOL, default=False)
    coin_amount: int = robtop_field("37", U8, default=0)
    coins_verified: bool = robtop_field("38", BOOL, default=False)
    is_epic: bool = robtop_field("42", BOOL, default=False)
    demon_rating: int = robtop_field("43", I32, default=0)
    index_46: None = robtop_field("46", IGNORE, default=None)
    index_47: None = robtop_field("47", IGNORE, default=None)


@robtop_format(PAGE_DELIMITER, map_like=False)
@dataclass
class Page:
    """Pagination trailer of list responses (``total:offset:page_size``)."""
    total: int = robtop_field(kind=U32)
    offset: int = robtop_field(kind=U32)
    page_size: int = robtop_field(kind=U32)


# In-game icon colors by the servers' color id, in the order of the color picker
ICON_COLORS: Dict[int, Tuple[int, int, int]] = {
    0: (125, 255, 0), 1: (0, 255, 0), 2: (0, 255, 125), 3: (0, 255, 255),
    16: (0, 200, 255), 4: (0, 125, 255), 5: (0, 0, 255), 6: (125, 0, 255),
    13: (185, 0, 255), 7: (255, 0, 255), 8: (255, 0, 125), 9: (255, 0, 0),
    29: (255, 75, 0), 10: (255, 125, 0), 14: (255, 185, 0), 11: (255, 255, 0),
    12: (255, 255, 255), 17: (175, 175, 175), 18: (80, 80, 80), 15: (0, 0, 0),
    27: (125, 125, 0), 32: (100, 150, 0), 28: (75, 175, 0), 38: (0, 150, 0),
    20: (0, 175, 75), 33: (0, 150, 100), 21: (0, 125, 125), 34: (0, 100, 150),
    22: (0, 75, 175), 39: (0, 0, 150), 23: (75, 0, 175), 35: (100, 0, 150),
    24: (125, 0, 125), 36: (150, 0, 100), 25: (175, 0, 75), 37: (150, 0, 0),
    30: (150, 50, 0), 26: (175, 75, 0), 31: (150, 100, 0), 19: (255, 255, 125),
    40: (125, 255, 175), 41: (125, 125, 255),
}


def icon_color(color_id: int) -> Optional[Tuple[int, int, int]]:
    """RGB value of an icon color id, ``None`` for ids added after this table."""
    return ICON_COLORS.get(color_id)


class ModLevel(enum.IntEnum):
    NONE = 0
    NORMAL = 1
    ELDER = 2


class IconType(enum.IntEnum):
    CUBE = 0
    SHIP = 1
    BALL = 2
    UFO = 3
    WAVE = 4
    ROBOT = 5
    SPIDER = 6


class IconColors:
    """RGB lookups for objects carrying ``primary_color``/``secondary_color`` ids."""

    @property
    def primary_rgb(self) -> Optional[Tuple[int, int, int]]:
        return icon_color(self.primary_color)

    @property
    def secondary_rgb(self) -> Optional[Tuple[int, int, int]]:
        return icon_color(self.secondary_color)


@robtop_format(USER_DELIMITER)
@dataclass
class Profile(IconColors):
    """A player's profile, as shown after clicking their name in-game.

    Mod level and icon type are kept as the raw ids so values newer than
    :class:`ModLevel`/:class:`IconType` still decode; both enums compare equal
    to them. Social links are only the name or channel id; see
    :attr:`youtube_url` and friends for full URLs.

    Attributes:
        global_rank: ``None`` for unranked or banned players (``0`` on the wire)
        index_18: Meaning unknown, as are the other ``index_*`` fields
    """
    name: str = robtop_field("1", STR)
    user_id: int = robtop_field("2", U64)
    stars: int = robtop_field("3", U32)
    demons: int = robtop_field("4", U16)
    creator_points: int = robtop_field("8", U16)
    primary_color: int = robtop_field("10", U8)
    secondary_color: int = robtop_field("11", U8)
    secret_coins: int = robtop_field("13", U8)
    account_id: int = robtop_field("16", U64)
    user_coins: int = robtop_field("17", U16)
    youtube: Optional[str] = robtop_field("20", Option(STR))
    cube_index: int = robtop_field("21", U16)
    ship_index: int = robtop_field("22", U8)
    ball_index: int = robtop_field("23", U8)
    ufo_index: int = robtop_field("24", U8)
    wave_index: int = robtop_field("25", U8)
    robot_index: int = robtop_field("26", U8)
    has_glow: bool = robtop_field("28", BOOL)
    global_rank: Optional[int] = robtop_field("30", DefaultToNone(U32))
    spider_index: int = robtop_field("43", U8)
    twitter: Optional[str] = robtop_field("44", Option(STR))
    twitch: Optional[str] = robtop_field("45", Option(STR))
    diamonds: int = robtop_field("46", U16)
    death_effect_index: int = robtop_field("48", U8)
    mod_level: int = robtop_field("49", U8)

    # Only sent for some accounts
    index_18: Optional[str] = robtop_field("18", Option(STR), default=None)
    index_19: Optional[str] = robtop_field("19", Option(STR), default=None)
    index_29: Optional[str] = robtop_field("29", Option(STR), default=None)
    index_31: Optional[str] = robtop_field("31", Option(STR), default=None)
    index_38: Optional[str] = robtop_field("38", Option(STR), default=None)
    index_39: Optional[str] = robtop_field("39", Option(STR), default=None)
    index_40: Optional[str] = robtop_field("40", Option(STR), default=None)
    index_50: Optional[str] = robtop_field("50", Option(STR), default=None)

    @property
    def youtube_url(self) -> Optional[str]:
        return YOUTUBE_URL.format(self.youtube) if self.youtube else None

    @property
    def twitter_url(self) -> Optional[str]:
        return TWITTER_URL.format(self.twitter) if self.twitter else None

    @property
    def twitch_url(self) -> Optional[str]:
        return TWITCH_URL.format(self.twitch) if self.twitch else None


@robtop_format(USER_DELIMITER)
@dataclass
class SearchedUser(IconColors):
    """Partial user data returned by a player search.

    There are no diamonds here; the servers never send them for searches.
    """
    name: str = robtop_field("1", STR)
    user_id: int = robtop_field("2", U64)
    stars: int = robtop_field("3", U32)
    demons: int = robtop_field("4", U16)
    index_6: Optional[str] = robtop_field("6", Option(STR))
    creator_points: int = robtop_field("8", U16)
    icon_index: int = robtop_field("9", U16)
    primary_color: int = robtop_field("10", U8)
    secondary_color: int = robtop_field("11", U8)
    secret_coins: int = robtop_field("13", U8)
    icon_type: int = robtop_field("14", U8)
    has_glow: bool = robtop_field("15", TWO_BOOL)
    account_id: int = robtop_field("16", U64)
    user_coins: int = robtop_field("17", U16)


class RgbColorProcessor(ThunkProcessor):
    """``"r,g,b"`` colors of highlighted comments."""

    @staticmethod
    def from_unprocessed(unprocessed: str) -> Tuple[int, int, int]:
        parts = unprocessed.split(",")
        if len(parts) != 3 or not all(part.isdigit() for part in parts):
            raise ProcessError(ProcessError.INT, f"malformed color {unprocessed!r}")
        r, g, b = (int(part) for part in parts)
        if max(r, g, b) > 255:
            raise ProcessError(ProcessError.INT, f"color component out of range in {unprocessed!r}")
        return r, g, b

    @staticmethod
    def as_unprocessed(processed: Tuple[int, int, int]) -> str:
        if len(processed) != 3 or not all(0 <= c <= 255 for c in processed):
            raise ProcessError(ProcessError.INT, f"invalid color {processed!r}")
        return ",".join(str(c) for c in processed)


@robtop_format(COMMENT_DELIMITER)
@dataclass
class CommentUser(IconColors):
    """Author of a level comment, as sent next to the comment."""
    name: str = robtop_field("1", STR)
    icon_index: int = robtop_field("9", U16)
    primary_color: int = robtop_field("10", U8)
    secondary_color: int = robtop_field("11", U8)
    icon_type: int = robtop_field("14", U8)
    has_glow: bool = robtop_field("15", TWO_BOOL)
    account_id: Optional[int] = robtop_field("16", Option(U64))


@robtop_format(COMMENT_DELIMITER)
@dataclass
class LevelComment:
    """Comment on a level.

    Attributes:
        content: Base64 encoded text, kept lazily
        time_since_post: Human readable age, e.g. ``"3 years"``
        progress: Percentage the author reached, if they chose to show it
        special_color: Text color of comments by RobTop and elder mods; the
            yellow of the level's creator is not reported
        user: Author, attached by the response parser; not part of the
            comment's own data
    """
    content: Optional[Thunk[str]] = robtop_field("2", Option(ThunkField(Base64Decoder)))
    user_id: int = robtop_field("3", U64)
    likes: int = robtop_field("4", I32)
    comment_id: int = robtop_field("6", U64)
    time_since_post: str = robtop_field("9", STR)
    progress: Optional[int] = robtop_field("10", Option(U8))

    # Only sent for some comments
    is_flagged_spam: bool = robtop_field("7", BOOL, default=False)
    is_elder_mod: bool = robtop_field("11", TWO_BOOL, default=False)
    special_color: Optional[Thunk[Tuple[int, int, int]]] = robtop_field(
        "12", Option(ThunkField(RgbColorProcessor)), default=None
    )
    user: Optional[CommentUser] = None


@robtop_format(COMMENT_DELIMITER)
@dataclass
class ProfileComment:
    """Post on a player's profile."""
    content: Optional[Thunk[str]] = robtop_field("2", Option(ThunkField(Base64Decoder)))
    likes: int = robtop_field("4", I32)
    comment_id: int = robtop_field("6", U64)
    time_since_post: str = robtop_field("9", STR)
