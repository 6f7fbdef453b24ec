"""Behavioral flags attached to configuration variables."""

from __future__ import annotations

import enum


class ConfigFlags(enum.IntFlag):
    """Bitset of variable categories; combine with ``|``, test with ``&``."""

    NONE = 0x0
    SAVE = 0x1
    CHEAT = 0x2
    SERVER_INFO = 0x4
    CLIENT_INFO = 0x8
    USER = 0x10


def has_flag(flags: ConfigFlags | int, flag: ConfigFlags | int) -> bool:
    return (int(flags) & int(flag)) == int(flag)
