"""Decoding support for string-table payloads."""

from demoreel.decoding.userinfo import (
    MAX_USER_ID,
    PLAYER_INFO,
    PLAYER_INFO_SIZE,
    UserInfo,
    decode_player_info,
    decode_user_info,
    encode_player_info,
)

__all__ = [
    "MAX_USER_ID",
    "PLAYER_INFO",
    "PLAYER_INFO_SIZE",
    "UserInfo",
    "decode_player_info",
    "decode_user_info",
    "encode_player_info",
]
