# -*- encoding: utf-8 -*-
# @File   : value.py
# @Time   : 2024/10/12 22:05:41

"""The one value type an INI entry holds.

Everything in an INI file is text. `IniValue` keeps that text untouched
and offers lenient, locale independent views on top of it::

    >>> IniValue(' TRUE ').to_bool()
    True
    >>> IniValue('"quoted" ').get_string()
    'quoted'
    >>> IniValue(1.5).value
    '1.5'
"""

import math
from re import ASCII
from re import compile as regex
from typing import Any

__all__ = ['IniValue']

_INT32_MIN, _INT32_MAX = -2 ** 31, 2 ** 31 - 1

_INT_LITERAL = regex(r'[+-]?[0-9]+', ASCII)
_FLOAT_LITERAL = regex(
    r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?', ASCII)
_FLOAT_NAMES = {
    'nan': math.nan, '+nan': math.nan, '-nan': math.nan,
    'infinity': math.inf, '+infinity': math.inf, '-infinity': -math.inf,
    'inf': math.inf, '+inf': math.inf, '-inf': -math.inf,
}


def _format(value: Any) -> str | None:
    # bool goes first, as it is also an int.
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'True' if value else 'False'
    if isinstance(value, int):
        return '%d' % value
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        return repr(value)
    return str(value)


class IniValue:
    """Immutable, nullable text with typed views.

    A `None` payload is a valid state meaning "not set",
    see `IniValue.DEFAULT`.
    """
    __slots__ = ('__value',)

    DEFAULT: 'IniValue'

    def __init__(self, value: Any = None) -> None:
        self.__value: str | None = _format(value)

    @property
    def value(self) -> str | None:
        return self.__value

    def try_convert_bool(self) -> tuple[bool, bool]:
        if self.__value is None:
            return False, False
        text = self.__value.strip().lower()
        if text == 'true':
            return True, True
        if text == 'false':
            return True, False
        return False, False

    def to_bool(self, default: bool = False) -> bool:
        ok, ret = self.try_convert_bool()
        return ret if ok else default

    def try_convert_int(self) -> tuple[bool, int]:
        if self.__value is None:
            return False, 0
        text = self.__value.strip()
        if not _INT_LITERAL.fullmatch(text):
            return False, 0
        ret = int(text)
        if not _INT32_MIN <= ret <= _INT32_MAX:
            return False, 0
        return True, ret

    def to_int(self, default: int = 0) -> int:
        ok, ret = self.try_convert_int()
        return ret if ok else default

    def try_convert_double(self) -> tuple[bool, float]:
        if self.__value is None:
            return False, math.nan
        text = self.__value.strip()
        if text.lower() in _FLOAT_NAMES:
            return True, _FLOAT_NAMES[text.lower()]
        if not _FLOAT_LITERAL.fullmatch(text):
            return False, math.nan
        return True, float(text)

    def to_double(self, default: float = 0.0) -> float:
        ok, ret = self.try_convert_double()
        return ret if ok else default

    def get_string(
        self,
        allow_outer_quotes: bool = True,
        preserve_whitespace: bool = False
    ) -> str:
        """Get the payload as plain text.

        Surrounding whitespace is trimmed unless `preserve_whitespace`.
        With `allow_outer_quotes`, one pair of `"` around the trimmed text
        is stripped as well, e.g. `' " x " '` gives `'x'`
        (or `' x '` when preserving whitespace).
        """
        if self.__value is None:
            return ''
        trimmed = self.__value.strip()
        if (allow_outer_quotes and len(trimmed) >= 2
                and trimmed[0] == '"' and trimmed[-1] == '"'):
            inner = trimmed[1:-1]
            return inner if preserve_whitespace else inner.strip()
        return self.__value if preserve_whitespace else trimmed

    def to_string(self) -> str | None:
        """The raw payload, `None` included."""
        return self.__value

    def __str__(self) -> str:
        return '' if self.__value is None else self.__value

    def __repr__(self) -> str:
        return f'IniValue({self.__value!r})'

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IniValue):
            return self.__value == other.__value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.__value)


IniValue.DEFAULT = IniValue()
