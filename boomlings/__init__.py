"""Schemas, requests and HTTP transport for the Geometry Dash (Boomlings) servers."""

# Public API exports
from .api import BoomlingsAPI, ApiError
from .models import (
    Creator,
    NewgroundsSong,
    Level,
    LevelLength,
    Page,
    Password,
    PasswordProcessor,
    NO_COPY,
    FREE_COPY,
    Profile,
    SearchedUser,
    CommentUser,
    LevelComment,
    ProfileComment,
    ModLevel,
    IconType,
    RgbColorProcessor,
    icon_color,
)
from .request import (
    BaseRequest,
    LevelRequest,
    LevelsRequest,
    LevelRequestType,
    CompletionFilter,
    SearchFilters,
    SongFilter,
    SongRequest,
    UserRequest,
    UserSearchRequest,
    LevelCommentsRequest,
    ProfileCommentsRequest,
    SortMode,
)
from .response import (
    ResponseError,
    NotFound,
    UnexpectedFormat,
    LevelListing,
    split_sections,
    parse_records,
    parse_levels_response,
    parse_download_level_response,
    parse_song_info_response,
    parse_user_info_response,
    parse_users_response,
    parse_level_comments_response,
    parse_profile_comments_response,
)

__all__ = [
    # API
    "BoomlingsAPI",
    "ApiError",

    # Models
    "Creator",
    "NewgroundsSong",
    "Level",
    "LevelLength",
    "Page",
    "Password",
    "PasswordProcessor",
    "NO_COPY",
    "FREE_COPY",
    "Profile",
    "SearchedUser",
    "CommentUser",
    "LevelComment",
    "ProfileComment",
    "ModLevel",
    "IconType",
    "RgbColorProcessor",
    "icon_color",

    # Requests
    "BaseRequest",
    "LevelRequest",
    "LevelsRequest",
    "LevelRequestType",
    "CompletionFilter",
    "SearchFilters",
    "SongFilter",
    "SongRequest",
    "UserRequest",
    "UserSearchRequest",
    "LevelCommentsRequest",
    "ProfileCommentsRequest",
    "SortMode",

    # Responses
    "ResponseError",
    "NotFound",
    "UnexpectedFormat",
    "LevelListing",
    "split_sections",
    "parse_records",
    "parse_levels_response",
    "parse_download_level_response",
    "parse_song_info_response",
    "parse_user_info_response",
    "parse_users_response",
    "parse_level_comments_response",
    "parse_profile_comments_response",
]
