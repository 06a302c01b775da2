# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/13 01:16:53

from .comparer import (
    Comparer, CaseInsensitiveComparer, OrdinalComparer, DEFAULT_COMPARER
)
from .errors import IniError, DuplicateKeyError, SectionNotOrderedError
from .value import IniValue
from .model import IniSection, IniFile
from .parser import IniParser

__all__ = [
    'Comparer', 'CaseInsensitiveComparer', 'OrdinalComparer',
    'DEFAULT_COMPARER',
    'IniError', 'DuplicateKeyError', 'SectionNotOrderedError',
    'IniValue', 'IniSection', 'IniFile', 'IniParser'
]
