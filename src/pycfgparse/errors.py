# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/10 01:16:21
# @Author : Kariko Lin

class CfgError(Exception):
    """Base of everything this package raises on purpose."""
    pass


class EmptyFileName(CfgError, ValueError):
    def __init__(self) -> None:
        super().__init__('file name cannot be empty')


class InvalidFileType(CfgError, ValueError):
    def __init__(
        self, filename: str, suffix: str, supported: tuple[str, ...] = ()
    ) -> None:
        self.filename = filename
        self.suffix = suffix
        super().__init__(
            f'file type "{suffix}" of {filename} not supported. '
            f'Supported types: {" ".join(supported)}')


class DuplicateSectionError(CfgError):
    def __init__(self, name: str, lineno: int | None = None) -> None:
        self.name = name
        self.lineno = lineno
        if lineno is None:
            super().__init__(f'section [{name}] already exists')
        else:
            super().__init__(
                f'duplicate section [{name}] occurred at line {lineno}')


class MalformedLineError(CfgError):
    """A line looks like a pair but cannot split on the delimiter."""
    def __init__(self, lineno: int, line: str = '') -> None:
        self.lineno = lineno
        self.line = line
        super().__init__(
            f'config format error at line {lineno}: {line!r}')


class UnknownSectionError(CfgError, LookupError):
    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(f'no such section [{section}]')


class UnknownKeyError(CfgError, LookupError):
    def __init__(self, section: str, key: str) -> None:
        self.section = section
        self.key = key
        super().__init__(f'no such key "{key}" in section [{section}]')


class ConversionError(CfgError, ValueError):
    def __init__(self, target: type, raw: str) -> None:
        self.target = target
        self.raw = raw
        super().__init__(
            f'cannot convert {raw!r} to type {target.__name__}')


class CfgIOError(CfgError):
    """File access failed during `op`; the operation was not applied."""
    def __init__(self, op: str, path: str, reason: str = '') -> None:
        self.op = op
        self.path = path
        msg = f'{op} failed on {path or "<no file>"}'
        super().__init__(f'{msg}: {reason}' if reason else msg)
