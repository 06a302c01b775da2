# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/13 20:01:52

from .ini import (
    Comparer, CaseInsensitiveComparer, OrdinalComparer, DEFAULT_COMPARER,
    IniError, DuplicateKeyError, SectionNotOrderedError,
    IniValue, IniSection, IniFile, IniParser
)

__all__ = [
    'Comparer', 'CaseInsensitiveComparer', 'OrdinalComparer',
    'DEFAULT_COMPARER',
    'IniError', 'DuplicateKeyError', 'SectionNotOrderedError',
    'IniValue', 'IniSection', 'IniFile', 'IniParser'
]
