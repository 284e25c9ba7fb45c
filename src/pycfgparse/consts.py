# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/10 01:15:56
# @Author : Kariko Lin

from enum import Enum

# interpolation passes before giving up on `%(key)s` references.
MAX_DEPTH = 10

SUPPORTED_TYPES = ('.ini', '.cfg')


class Delimiter(str, Enum):
    EQUAL = '='
    COLON = ':'

    @classmethod
    def from_suffix(cls, suffix: str) -> 'Delimiter':
        match suffix.lower():
            case '.ini':
                return cls.EQUAL
            case _:  # `.cfg` and anything else
                return cls.COLON
