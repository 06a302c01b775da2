# -*- encoding: utf-8 -*-
# @File   : comparer.py
# @Time   : 2024/10/12 21:40:03

"""Key identity strategies shared by documents and their sections."""

from abc import ABCMeta, abstractmethod
from collections.abc import Hashable

__all__ = [
    'Comparer', 'CaseInsensitiveComparer', 'OrdinalComparer',
    'DEFAULT_COMPARER'
]


class Comparer(metaclass=ABCMeta):
    """Decides when two keys are the same.

    `fold()` gives the hash identity of a key, so any two keys that
    `equals()` must fold to the same object.
    """

    @abstractmethod
    def fold(self, key: str) -> Hashable:
        raise NotImplementedError

    def equals(self, x: str, y: str) -> bool:
        return self.fold(x) == self.fold(y)

    def __repr__(self) -> str:
        return f'{type(self).__name__}()'


class CaseInsensitiveComparer(Comparer):
    def fold(self, key: str) -> Hashable:
        return key.lower()


class OrdinalComparer(Comparer):
    def fold(self, key: str) -> Hashable:
        return key


DEFAULT_COMPARER = CaseInsensitiveComparer()
