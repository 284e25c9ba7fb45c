# -*- encoding: utf-8 -*-
# @File   : patcher.py
# @Time   : 2024/10/12 22:41:07
# @Author : Kariko Lin

"""In-place file patching by section offsets.

We never rewrite the whole file here. Instead:
- a new section gets appended at EOF;
- a new pair gets inserted right after its section header,
  and every section behind the insert point gets shifted.

The store is only touched after the bytes hit the file,
so a failed patch leaves both values and offsets as they were.
"""

import logging
from io import SEEK_END
from threading import RLock
from warnings import warn

from ..consts import Delimiter
from ..errors import CfgIOError, DuplicateSectionError
from .model import CfgSection, CfgStore

logger = logging.getLogger(__name__)


class OffsetPatcher:
    def __init__(
        self, filename: str, store: CfgStore, lock: RLock,
        codec: str = 'utf-8', delimiter: Delimiter = Delimiter.COLON
    ) -> None:
        self._fn = filename
        self._store = store
        self._lock = lock
        self._codec = codec
        self._delim = Delimiter(delimiter).value

    def __require_file(self, op: str) -> None:
        if not self._fn:
            raise CfgIOError(op, self._fn, 'no backing file, use read_file()')

    def __check_pair(self, key: str, value: str) -> None:
        if not key.strip():
            raise ValueError('key cannot be empty')
        # would read back as another key, a comment or a header.
        if key != key.strip() or key.startswith(('#', '[')):
            raise ValueError(f'invalid key {key!r}')
        if self._delim in key:
            raise ValueError(f'key "{key}" contains delimiter "{self._delim}"')
        if '\n' in key or '\n' in value:
            raise ValueError(f'pair "{key}" cannot span multiple lines')
        # parsing strips values and cuts them at inline comments.
        if value != value.strip() or ' ;' in value:
            raise ValueError(f'value {value!r} of "{key}" would not read back')

    def add_section(self, name: str) -> CfgSection:
        """Append `[name]` to the file, then register it.

        The new section's body begins at EOF, right after the header.
        """
        if not name or '\n' in name:
            raise ValueError(f'invalid section name {name!r}')
        with self._lock:
            if name in self._store:
                raise DuplicateSectionError(name)
            self.__require_file('add_section')
            header = f'[{name}]\n'.encode(self._codec)
            try:
                with open(self._fn, 'r+b') as fp:
                    size = fp.seek(0, SEEK_END)
                    if size > 0:
                        fp.seek(size - 1)
                        # keep one blank line between sections.
                        header = (
                            b'\n' if fp.read(1) == b'\n' else b'\n\n'
                        ) + header
                        fp.seek(size)
                    fp.write(header)
                    fp.flush()
            except OSError as e:
                logger.warning('unable to append [%s] to %s: %s',
                               name, self._fn, e)
                raise CfgIOError('add_section', self._fn, str(e)) from e

            ret = self._store.register(
                CfgSection(name=name, file_position=size + len(header)))
            logger.info('%s: appended [%s] at %d',
                        self._fn, name, ret.file_position)
            return ret

    def set(self, section: str, key: str, value: str) -> None:
        """Insert `key<delimiter>value` as the first line of `section`.

        A missing section is appended first. An older line of the same key
        stays in the file below the new one, so re-reading the file brings
        the old value back. `CfgParser.write()` drops such stale lines.
        """
        self.__check_pair(key, value)
        with self._lock:
            if section not in self._store:
                self.add_section(section)
            self.__require_file('set')
            sect = self._store[section]
            offset = sect.file_position
            line = f'{key}{self._delim}{value}\n'.encode(self._codec)
            lead = 0
            try:
                with open(self._fn, 'r+b') as fp:
                    size = fp.seek(0, SEEK_END)
                    if offset > size:
                        raise CfgIOError(
                            'set', self._fn,
                            f'{sect} points at {offset}, beyond EOF {size}')
                    if offset > 0:
                        fp.seek(offset - 1)
                        # header written without trailing newline.
                        if fp.read(1) != b'\n':
                            line, lead = b'\n' + line, 1
                    fp.seek(offset)
                    suffix = fp.read()
                    fp.seek(offset)
                    written = fp.write(line + suffix)
                    fp.flush()
            except OSError as e:
                logger.warning('unable to patch %s in %s: %s',
                               sect, self._fn, e)
                raise CfgIOError('set', self._fn, str(e)) from e

            if key in sect.items:
                warn(f'{sect} "{key}" already exists in {self._fn}, '
                     'the previous line is kept below the new one.')
            sect.items[key] = value
            self._store.reindex(offset, written - len(suffix))
            sect.file_position += lead
            logger.info('%s: %s %s inserted at %d (+%d bytes)',
                        self._fn, sect, key, offset, written - len(suffix))
