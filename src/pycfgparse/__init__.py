# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:20:14
# @Author : Kariko Lin

import logging

from .consts import MAX_DEPTH, Delimiter
from .errors import (
    CfgError,
    CfgIOError,
    ConversionError,
    DuplicateSectionError,
    EmptyFileName,
    InvalidFileType,
    MalformedLineError,
    UnknownKeyError,
    UnknownSectionError,
)
from .ini import (
    CfgJsonExporter,
    CfgParser,
    CfgSection,
    CfgStore,
    CfgYamlExporter,
    OffsetPatcher,
)

__all__ = [
    'CfgParser', 'CfgSection', 'CfgStore', 'OffsetPatcher',
    'CfgJsonExporter', 'CfgYamlExporter',
    'MAX_DEPTH', 'Delimiter',
    'CfgError', 'CfgIOError', 'ConversionError', 'DuplicateSectionError',
    'EmptyFileName', 'InvalidFileType', 'MalformedLineError',
    'UnknownKeyError', 'UnknownSectionError',
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
