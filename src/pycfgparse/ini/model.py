# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Plain section/pair store, plus the byte offsets the patcher relies on.

Every section remembers where its body begins in the backing file,
i.e. the first byte right after its `[name]` header line.
Those offsets are only kept in sync by `OffsetPatcher`.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from re import compile as regex
from typing import Iterator

from ..consts import MAX_DEPTH
from ..errors import DuplicateSectionError, UnknownKeyError, UnknownSectionError

logger = logging.getLogger(__name__)

INTERPOLATE_REF = regex(r'%\(([^)]*)\)s')


@dataclass(kw_only=True)
class CfgSection:
    name: str
    file_position: int = 0
    items: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.file_position < 0:
            raise ValueError(
                f'[{self.name}] got negative file position {self.file_position}')

    def __str__(self) -> str:
        return f'[{self.name}]'


class CfgStore(Mapping[str, CfgSection]):
    """Read-only view for users, section name -> `CfgSection`.

    Sections could only be added (`register()`), never removed.
    """
    def __init__(self) -> None:
        self.__raw: dict[str, CfgSection] = {}

    def __getitem__(self, key: str) -> CfgSection:
        return self.__raw[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __repr__(self) -> str:
        return 'CfgStore { .sections = %d }' % len(self.__raw)

    def register(self, section: CfgSection) -> CfgSection:
        if section.name in self.__raw:
            raise DuplicateSectionError(section.name)
        self.__raw[section.name] = section
        return section

    def sections(self) -> list[str]:
        return list(self.__raw)

    def section(self, name: str) -> CfgSection:
        try:
            return self.__raw[name]
        except KeyError:
            raise UnknownSectionError(name) from None

    def lookup(self, section: str, key: str) -> str:
        """Raw stored value, no interpolation."""
        items = self.section(section).items
        if key not in items:
            raise UnknownKeyError(section, key)
        return items[key]

    def resolve(self, section: str, key: str) -> str:
        """Stored value with `%(ref)s` references expanded.

        Each pass rewrites every reference found in the current value,
        at most `MAX_DEPTH` passes. Whatever is left after that
        (e.g. `a = %(a)s`) gets returned unexpanded.
        References resolve against raw stored values, one level per pass,
        so the limit also caps an acyclic chain at `MAX_DEPTH` levels.
        """
        value = self.lookup(section, key)
        for _ in range(MAX_DEPTH):
            if '%(' not in value:
                break
            value = INTERPOLATE_REF.sub(
                lambda m: self.lookup(section, m.group(1)), value)
        return value

    def positions(self) -> dict[str, int]:
        return {k: v.file_position for k, v in self.__raw.items()}

    def reindex(self, offset: int, delta: int) -> None:
        """Shift every section whose body starts after `offset`."""
        if delta == 0:
            return
        for sect in self.__raw.values():
            if sect.file_position > offset:
                logger.debug('reindex %s: %d -> %d', sect,
                             sect.file_position, sect.file_position + delta)
                sect.file_position += delta
