# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""Note: offsets recorded here are **bytes of the file's own encoding**,
not characters. The parser measures every physical line it consumes
(blank lines and comments included), so `file_position` always equals
the real offset right after a section header.

Supported lines:

    ```ini
    # comment
    [section]
    key = value ; inline comment, only with a space before `;`
    path = %(root)s/bin
    ```

The delimiter is `=` for `.ini` and `:` for `.cfg` (or anything else),
unless given explicitly.
"""

import logging
from io import BytesIO
from re import compile as regex
from threading import RLock
from typing import BinaryIO
from warnings import warn

import chardet

from ..abstract import FileHandler
from ..consts import SUPPORTED_TYPES, Delimiter
from ..errors import (
    CfgIOError,
    ConversionError,
    DuplicateSectionError,
    MalformedLineError,
)
from .model import CfgSection, CfgStore
from .patcher import OffsetPatcher

logger = logging.getLogger(__name__)

SECTION_LINE = regex(r'^\[(.+)\]$')
PAIR_LINE = regex(r'([^:=\s][^:=]*)\s*([:=])\s*(.*)$')

BOOL_STATES = {
    '1': True, 't': True, 'true': True, 'yes': True, 'on': True,
    '0': False, 'f': False, 'false': False, 'no': False, 'off': False,
}


class CfgParser(FileHandler[CfgStore]):
    suffixes = SUPPORTED_TYPES

    def __init__(
        self, filename: str = '', encoding: str | None = None, *,
        delimiter: Delimiter | str | None = None
    ) -> None:
        super().__init__(filename)
        self._encoding = encoding
        self._codec = encoding or 'utf-8'
        self._delimiter = None if delimiter is None else Delimiter(delimiter)
        # guards the store and its offsets, for readers as well.
        self._lock = RLock()
        self._store = CfgStore()
        self._patcher = OffsetPatcher(
            self._fn, self._store, self._lock, self._codec, self.delimiter)

    @property
    def delimiter(self) -> Delimiter:
        if self._delimiter is not None:
            return self._delimiter
        return Delimiter.from_suffix(self.suffix)

    @property
    def store(self) -> CfgStore:
        return self._store

    @staticmethod
    def _split_pair(line: str, delimiter: str, lineno: int) -> tuple[str, str]:
        parts = line.split(delimiter, 1)
        if len(parts) < 2:
            raise MalformedLineError(lineno, line)
        key, val = parts
        # inline comments need a space before `;`.
        if (pos := val.find(' ;')) > -1:
            val = val[:pos]
        return key.strip(), val.strip()

    @staticmethod
    def readstream(
        buf: BinaryIO, codec: str = 'utf-8',
        delimiter: Delimiter | str = Delimiter.COLON
    ) -> CfgStore:
        """Read a binary stream into a brand new `CfgStore`.

        Raises on duplicate sections and malformed pairs,
        in which case no store is returned at all.
        """
        delimiter = Delimiter(delimiter).value
        ret = CfgStore()
        this_sect: CfgSection | None = None
        cursor, lineno = 0, 0
        while raw := buf.readline():
            lineno += 1
            cursor += len(raw)
            line = raw.decode(codec).strip()
            if lineno == 1:
                line = line.lstrip('\ufeff')
            if not line or line.startswith('#'):
                continue
            if m := SECTION_LINE.match(line):
                if m.group(1) in ret:
                    raise DuplicateSectionError(m.group(1), lineno)
                this_sect = ret.register(
                    CfgSection(name=m.group(1), file_position=cursor))
            elif PAIR_LINE.search(line):
                key, val = CfgParser._split_pair(line, delimiter, lineno)
                if this_sect is None:
                    warn(f'line {lineno}: "{key}" appears before any section, '
                         'skipped.')
                    continue
                this_sect.items[key] = val
            else:
                logger.debug('line %d ignored: %r', lineno, line)
        return ret

    @staticmethod
    def _guess_codec(raw: bytes) -> str:
        try:
            raw.decode('utf-8')
            return 'utf-8'
        except UnicodeDecodeError:
            pass

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            return 'gbk'
        # fallbacks
        try:
            raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            return 'gbk'
        return codec['encoding']

    def _publish(self, store: CfgStore, codec: str) -> None:
        with self._lock:
            self._codec = codec
            self._store = store
            self._patcher = OffsetPatcher(
                self._fn, store, self._lock, codec, self.delimiter)

    def read(self) -> CfgStore:
        """Read the file given by `self.filename`.

        When no encoding was given, try UTF-8 first, then let `chardet` guess.
        """
        self._check_filename()

        try:
            with open(self._fn, 'rb') as fp:
                raw = fp.read()
        except OSError as e:
            logger.warning('unable to read %s: %s', self._fn, e)
            raise CfgIOError('read', self._fn, str(e)) from e

        codec = self._encoding or self._guess_codec(raw)
        store = self.readstream(BytesIO(raw), codec, self.delimiter)
        self._publish(store, codec)
        logger.debug('%s: %d sections (%s)', self._fn, len(store), codec)
        return store

    def read_file(self, filename: str) -> CfgStore:
        """Switch the handle to `filename`. On failure the handle keeps
        its previous file, store and patch target."""
        with self._lock:
            previous, self._fn = self._fn, filename
            try:
                return self.read()
            except Exception:
                self._fn = previous
                raise

    def parse(self, buf: BinaryIO) -> CfgStore:
        """Parse a detached stream. The handle keeps its file name (if any)
        as the target of later mutations."""
        codec = self._encoding or 'utf-8'
        store = self.readstream(buf, codec, self.delimiter)
        self._publish(store, codec)
        return store

    def __output_section(self, section: CfgSection) -> str:
        ret = f'[{section.name}]\n'
        for k, v in section.items.items():
            ret += f'{k}{self.delimiter.value}{v}\n'
        return ret

    def write(self, instance: CfgStore | None = None) -> None:
        """Rewrite the whole file from a store (default: the current one),
        then read it back so that every offset is exact again.

        Stale on-disk pairs left by `set()` are dropped by this.
        """
        with self._lock:
            if instance is None:
                instance = self._store
            if not self._fn:
                raise CfgIOError('write', self._fn, 'no backing file')
            buffers = [self.__output_section(i) for i in instance.values()]
            try:
                with open(self._fn, 'wb') as fp:
                    fp.write('\n'.join(buffers).encode(self._codec))
            except OSError as e:
                logger.warning('unable to write %s: %s', self._fn, e)
                raise CfgIOError('write', self._fn, str(e)) from e
            self.read()

    # accessors
    def get_all_sections(self) -> list[str]:
        with self._lock:
            return self._store.sections()

    def items(self, section: str) -> dict[str, str]:
        with self._lock:
            return dict(self._store.section(section).items)

    def get(self, section: str, key: str) -> str:
        with self._lock:
            return self._store.resolve(section, key)

    def positions(self) -> dict[str, int]:
        with self._lock:
            return self._store.positions()

    def getbool(self, section: str, key: str) -> bool:
        value = self.get(section, key)
        if value.lower() not in BOOL_STATES:
            raise ConversionError(bool, value)
        return BOOL_STATES[value.lower()]

    def getint(self, section: str, key: str) -> int:
        value = self.get(section, key)
        try:
            # no `1_000` style literals.
            if '_' in value:
                raise ValueError(value)
            return int(value)
        except ValueError:
            raise ConversionError(int, value) from None

    def getfloat(self, section: str, key: str) -> float:
        value = self.get(section, key)
        try:
            if '_' in value:
                raise ValueError(value)
            return float(value)
        except ValueError:
            raise ConversionError(float, value) from None

    # mutations
    def add_section(self, name: str) -> CfgSection:
        with self._lock:
            return self._patcher.add_section(name)

    def set(self, section: str, key: str, value: str) -> None:
        with self._lock:
            self._patcher.set(section, key, value)

    def __str__(self) -> str:
        return "Cfg file: " + super().__str__() + f"({self._codec})"
