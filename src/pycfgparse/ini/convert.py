# -*- encoding: utf-8 -*-
# @File   : convert.py
# @Time   : 2024/10/13 16:02:58
# @Author : Kariko Lin

"""Dump a store as `{section: {key: value}}` for other tools.

Stores read back from here are *detached*: offsets are all 0,
so do not hand them to a patcher.
"""

import json

import yaml

from ..abstract import FileHandler
from .model import CfgSection, CfgStore


def store_to_dict(store: CfgStore) -> dict[str, dict[str, str]]:
    return {k: dict(v.items) for k, v in store.items()}


def dict_to_store(data: dict[str, dict[str, str]] | None) -> CfgStore:
    ret = CfgStore()
    for name, pairs in (data or {}).items():
        # there may be some pure digits considered as int
        ret.register(CfgSection(
            name=str(name),
            items={str(k): '' if v is None else str(v)
                   for k, v in (pairs or {}).items()}))
    return ret


class CfgJsonExporter(FileHandler[CfgStore]):
    suffixes = ('.json',)

    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> CfgStore:
        self._check_filename()
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return dict_to_store(json.load(fp))

    def write(self, instance: CfgStore, indent: int = 2) -> None:
        self._check_filename()
        with open(self._fn, 'w', encoding=self._codec) as fp:
            json.dump(store_to_dict(instance), fp,
                      ensure_ascii=False, indent=indent)


class CfgYamlExporter(FileHandler[CfgStore]):
    suffixes = ('.yaml', '.yml')

    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> CfgStore:
        self._check_filename()
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return dict_to_store(yaml.safe_load(fp))

    def write(self, instance: CfgStore) -> None:
        self._check_filename()
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(store_to_dict(instance), fp,
                           allow_unicode=True, sort_keys=False)
