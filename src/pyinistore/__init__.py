# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 14:00:18

import logging

from .errors import IniArgumentError
from .model import IniDocument, IniSection
from .parser import IniParser
from .store import IniStore

__all__ = [
    'IniArgumentError',
    'IniDocument', 'IniSection',
    'IniParser',
    'IniStore'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
