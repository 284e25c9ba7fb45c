# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os.path import splitext
from typing import TypeVar

from .errors import EmptyFileName, InvalidFileType

T = TypeVar('T')


class FileHandler[T](metaclass=ABCMeta):
    """A file on disk bound to one document type `T`.

    `suffixes` limits what files a handler accepts, empty for any.
    """
    suffixes: tuple[str, ...] = ()

    def __init__(self, filename: str) -> None:
        self._fn = filename

    @property
    def filename(self) -> str:
        return self._fn

    @property
    def suffix(self) -> str:
        return splitext(self._fn)[1]

    def _check_filename(self) -> None:
        if not self._fn:
            raise EmptyFileName()
        if self.suffixes and self.suffix.lower() not in self.suffixes:
            raise InvalidFileType(self._fn, self.suffix, self.suffixes)

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
