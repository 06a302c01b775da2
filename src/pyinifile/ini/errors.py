# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 21:52:17

__all__ = ['IniError', 'DuplicateKeyError', 'SectionNotOrderedError']


class IniError(Exception):
    """Base of everything the INI model raises on its own."""
    pass


class DuplicateKeyError(IniError, KeyError):
    """A key or section name already exists under the active comparer."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f'"{self.key}" already exists.'


class SectionNotOrderedError(IniError, RuntimeError):
    """Positional operation called on a section that keeps no order."""
    pass
