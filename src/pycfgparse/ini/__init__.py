# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:16:53
# @Author : Kariko Lin

from .model import CfgSection, CfgStore
from .parser import CfgParser
from .patcher import OffsetPatcher
from .convert import CfgJsonExporter, CfgYamlExporter
