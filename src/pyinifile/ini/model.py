# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/13 00:57:10

"""
Basically INI structure: a document of sections of key-value pairs.

Keys and section names are matched through a `Comparer`
(case-insensitive by default). A section may additionally keep track of
the order its keys came in, which enables position based editing.

As for reading or writing files by path, just see `ini.parser`.
"""

import logging
from collections.abc import Hashable, Iterable, Iterator, Mapping, \
    MutableMapping
from io import BufferedIOBase, BytesIO, RawIOBase, StringIO, TextIOWrapper
from typing import IO, Any
from warnings import warn

from .comparer import DEFAULT_COMPARER, Comparer
from .errors import DuplicateKeyError, SectionNotOrderedError
from .value import IniValue

__all__ = ['IniSection', 'IniFile']

_MISSING = object()


def _writes_back(key: str, value: str) -> bool:
    """Whether `key=value` loads again as the same pair."""
    return (key != '' and key == key.strip() and key[0] not in ';['
            and '=' not in key and '\n' not in key
            and '\n' not in value and not value.endswith('\r'))


def _is_binary(stream: Any) -> bool:
    if isinstance(stream, (RawIOBase, BufferedIOBase)):
        return True
    return 'b' in str(getattr(stream, 'mode', ''))


class IniSection(MutableMapping[str, IniValue]):
    """INI section dict.

    Looking up a missing key never fails, but gives `IniValue.DEFAULT`.
    Values that are not `IniValue` yet get wrapped on assignment,
    so `section['Strength'] = 5` stores `IniValue('5')`.

    When `ordered`, the section also keeps a list of its keys,
    which decides the iteration order and backs the positional methods
    (`insert()`, `remove_at()`, `section[0]`, ...).
    Those raise `SectionNotOrderedError` on an unordered section.
    """

    def __init__(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        comparer: Comparer = DEFAULT_COMPARER, *,
        ordered: bool | None = None
    ) -> None:
        self.__comparer = comparer
        # folded key -> (key as first stored, value)
        self.__data: dict[Hashable, tuple[str, IniValue]] = {}
        self.__order: list[str] | None = None
        if ordered is None:
            ordered = isinstance(values, IniSection) and values.ordered
        if ordered:
            self.__order = []
        if values is not None:
            pairs = values.items() if isinstance(values, Mapping) else values
            # re-hash under our comparer, colliding keys are not merged.
            for key, val in pairs:
                self.add(key, val)

    @property
    def comparer(self) -> Comparer:
        return self.__comparer

    @property
    def ordered(self) -> bool:
        return self.__order is not None

    @ordered.setter
    def ordered(self, value: bool) -> None:
        if value and self.__order is None:
            self.__order = [k for k, _ in self.__data.values()]
        elif not value:
            self.__order = None

    # --- mapping protocol ---

    def __getitem__(self, key: str | int) -> IniValue:
        if isinstance(key, int):
            return self.__data[self.__fold(self.__key_at(key))][1]
        entry = self.__data.get(self.__fold(key))
        return IniValue.DEFAULT if entry is None else entry[1]

    def __setitem__(self, key: str | int, value: Any) -> None:
        if isinstance(key, int):
            key = self.__key_at(key)
        value = self.__wrap(value)
        folded = self.__fold(key)
        if folded in self.__data:
            # keep both the stored spelling and the position.
            self.__data[folded] = (self.__data[folded][0], value)
            return
        self.__data[folded] = (key, value)
        if self.__order is not None:
            self.__order.append(key)

    def __delitem__(self, key: str) -> None:
        if not self.remove(key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.__fold(key) in self.__data

    def __len__(self) -> int:
        return len(self.__data)

    def __iter__(self) -> Iterator[str]:
        if self.__order is not None:
            return iter(list(self.__order))
        return iter([k for k, _ in self.__data.values()])

    def __repr__(self) -> str:
        return '{ .cnt = %d, .ordered = %s }' % (len(self), self.ordered)

    def get(self, key: str, default: Any = None) -> Any:
        entry = self.__data.get(self.__fold(key))
        return default if entry is None else entry[1]

    def pop(self, key: str, default: Any = _MISSING) -> Any:
        entry = self.__data.get(self.__fold(key))
        if entry is None:
            if default is _MISSING:
                raise KeyError(key)
            return default
        self.remove(key)
        return entry[1]

    def setdefault(self, key: str, default: Any = None) -> IniValue:
        if key not in self:
            self[key] = default
        return self[key]

    def clear(self) -> None:
        self.__data.clear()
        if self.__order is not None:
            self.__order.clear()

    def add(self, key: str, value: Any) -> None:
        if key in self:
            raise DuplicateKeyError(key)
        self[key] = value

    def remove(self, key: str) -> bool:
        """Drop `key` if present. Returns whether anything got removed."""
        entry = self.__data.pop(self.__fold(key), None)
        if entry is None:
            return False
        if self.__order is not None:
            del self.__order[self.__find(entry[0], 0, len(self.__order))]
        return True

    def contains_key(self, key: str) -> bool:
        return key in self

    def try_get_value(self, key: str) -> tuple[bool, IniValue]:
        entry = self.__data.get(self.__fold(key))
        if entry is None:
            return False, IniValue.DEFAULT
        return True, entry[1]

    # --- ordered only ---

    def index_of(
        self, key: str, start: int = 0, count: int | None = None
    ) -> int:
        """Position of `key` searching forward from `start`, or -1."""
        order = self.__ensure_ordered()
        if count is None:
            count = len(order) - start
        self.__check_range(start, count)
        return self.__find(key, start, start + count)

    def last_index_of(
        self, key: str, start: int | None = None, count: int | None = None
    ) -> int:
        """Position of `key` searching backward from `start`, or -1.

        Covers the `count` slots ending at `start`, i.e. the whole list
        with defaults.
        """
        order = self.__ensure_ordered()
        if start is None:
            start = len(order) - 1
        if count is None:
            count = start + 1
        if not order and start == -1 and count == 0:
            return -1
        self.__check_range(start - count + 1, count)
        for i in range(start, start - count, -1):
            if self.__comparer.equals(order[i], key):
                return i
        return -1

    def insert(self, index: int, key: str, value: Any) -> None:
        order = self.__ensure_ordered()
        if not 0 <= index <= len(order):
            raise IndexError(f'insert position {index} out of range.')
        if key in self:
            raise DuplicateKeyError(key)
        self.__data[self.__fold(key)] = (key, self.__wrap(value))
        order.insert(index, key)

    def insert_range(
        self, index: int,
        pairs: Mapping[str, Any] | Iterable[tuple[str, Any]]
    ) -> None:
        """Insert several pairs starting at `index`, keeping their order.

        All or nothing: if any key already exists (or repeats within
        `pairs`), `DuplicateKeyError` is raised before anything changes.
        """
        order = self.__ensure_ordered()
        if not 0 <= index <= len(order):
            raise IndexError(f'insert position {index} out of range.')
        items = list(pairs.items() if isinstance(pairs, Mapping) else pairs)
        seen: set[Hashable] = set()
        for key, _ in items:
            folded = self.__fold(key)
            if folded in self.__data or folded in seen:
                raise DuplicateKeyError(key)
            seen.add(folded)
        for offset, (key, value) in enumerate(items):
            self.insert(index + offset, key, value)

    def remove_at(self, index: int) -> None:
        key = self.__key_at(index)
        del self.__data[self.__fold(key)]
        del self.__order[index]  # type: ignore[index]

    def remove_range(self, index: int, count: int) -> None:
        order = self.__ensure_ordered()
        self.__check_range(index, count)
        for key in order[index:index + count]:
            del self.__data[self.__fold(key)]
        del order[index:index + count]

    def reverse(self, index: int = 0, count: int | None = None) -> None:
        """Reverse (part of) the key order. Values stay where they are."""
        order = self.__ensure_ordered()
        if count is None:
            count = len(order) - index
        self.__check_range(index, count)
        order[index:index + count] = order[index:index + count][::-1]

    def get_ordered_values(self) -> list[IniValue]:
        order = self.__ensure_ordered()
        return [self.__data[self.__fold(k)][1] for k in order]

    # --- internals ---

    def __fold(self, key: str) -> Hashable:
        return self.__comparer.fold(key)

    @staticmethod
    def __wrap(value: Any) -> IniValue:
        return value if isinstance(value, IniValue) else IniValue(value)

    def __ensure_ordered(self) -> list[str]:
        if self.__order is None:
            raise SectionNotOrderedError(
                'positional access needs an ordered section.')
        return self.__order

    def __check_range(self, index: int, count: int) -> None:
        if index < 0 or count < 0 or index + count > len(self.__order or ()):
            raise IndexError(
                f'range ({index}, {count}) out of {len(self)} keys.')

    def __key_at(self, index: int) -> str:
        order = self.__ensure_ordered()
        if not 0 <= index < len(order):
            raise IndexError(f'position {index} out of range.')
        return order[index]

    def __find(self, key: str, begin: int, end: int) -> int:
        for i in range(begin, end):
            if self.__comparer.equals(self.__order[i], key):  # type: ignore
                return i
        return -1


class IniFile(MutableMapping[str, IniSection]):
    """INI document, a dict of `IniSection` named case-insensitively
    (or as the given `comparer` says).

    Looking up a missing section *creates* it::

        doc = IniFile()
        doc['General']['Name'] = 'Tanya'  # no KeyError here.

    Use `contains_section()`, `try_get_section()` or `get()` to peek
    without that side effect.

    Options:
        comparer: key identity for section names and all keys inside.
        keep_empty_sections: still write headers of sections with no keys.
        ordered_sections: make sections created by the document ordered.
    """

    def __init__(
        self, comparer: Comparer = DEFAULT_COMPARER, *,
        keep_empty_sections: bool = False,
        ordered_sections: bool = False
    ) -> None:
        self.__comparer = comparer
        self.__raw: dict[Hashable, tuple[str, IniSection]] = {}
        self.keep_empty_sections = keep_empty_sections
        self.ordered_sections = ordered_sections

    @property
    def comparer(self) -> Comparer:
        return self.__comparer

    def __getitem__(self, key: str) -> IniSection:
        entry = self.__raw.get(self.__comparer.fold(key))
        if entry is not None:
            return entry[1]
        section = self.__new_section()
        self.__raw[self.__comparer.fold(key)] = (key, section)
        return section

    def __setitem__(
        self, key: str, value: IniSection | Mapping[str, Any]
    ) -> None:
        section = self.__adopt(value)
        folded = self.__comparer.fold(key)
        if folded in self.__raw:
            key = self.__raw[folded][0]
        self.__raw[folded] = (key, section)

    def __delitem__(self, key: str) -> None:
        del self.__raw[self.__comparer.fold(key)]

    def __contains__(self, key: object) -> bool:
        return (isinstance(key, str)
                and self.__comparer.fold(key) in self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter([k for k, _ in self.__raw.values()])

    def __repr__(self) -> str:
        return '<IniFile { .sections = %d }>' % len(self)

    def get(self, key: str, default: Any = None) -> Any:
        entry = self.__raw.get(self.__comparer.fold(key))
        return default if entry is None else entry[1]

    def pop(self, key: str, default: Any = _MISSING) -> Any:
        entry = self.__raw.pop(self.__comparer.fold(key), None)
        if entry is None:
            if default is _MISSING:
                raise KeyError(key)
            return default
        return entry[1]

    def setdefault(
        self, key: str, default: IniSection | Mapping[str, Any] | None = None
    ) -> IniSection:
        if key not in self:
            self[key] = self.__new_section() if default is None else default
        return self[key]

    def clear(self) -> None:
        self.__raw.clear()

    def add(
        self, name: str,
        section: IniSection | Mapping[str, Any] | None = None, *,
        ordered: bool | None = None
    ) -> IniSection:
        """Add a section, or an empty one if not given, and return it.

        Raises `DuplicateKeyError` if `name` is already taken,
        unlike `self[name] = section`, which replaces.
        """
        if name in self:
            raise DuplicateKeyError(name)
        if section is None:
            section = self.__new_section(ordered)
        self[name] = section
        return self[name]

    def remove(self, name: str) -> bool:
        return self.__raw.pop(self.__comparer.fold(name), None) is not None

    def contains_section(self, name: str) -> bool:
        return name in self

    def try_get_section(self, name: str) -> tuple[bool, IniSection | None]:
        entry = self.__raw.get(self.__comparer.fold(name))
        return (False, None) if entry is None else (True, entry[1])

    # --- text IO ---

    @classmethod
    def loads(cls, text: str, **options: Any) -> 'IniFile':
        """Build a document out of INI text.
        `options` are passed to `IniFile()`."""
        ret = cls(**options)
        ret.load(StringIO(text))
        return ret

    def load(self, stream: IO[str] | IO[bytes]) -> None:
        """Read sections from a text stream (or UTF-8 bytes stream)
        into this document.

        Parsing never fails on a malformed line: headers without `]`,
        lines without `=` (or starting with it) and anything before the
        first header are skipped. A header met again starts that section
        over, empty. Lines end at `\\n` or `\\r\\n` only.
        """
        if not _is_binary(stream):
            self.__read_lines(stream)  # type: ignore[arg-type]
            return
        buf = TextIOWrapper(  # type: ignore
            stream, encoding='utf-8-sig', newline='\n')
        try:
            self.__read_lines(buf)
        finally:
            buf.detach()

    def __read_lines(self, buf: IO[str]) -> None:
        section: IniSection | None = None
        for lineno, line in enumerate(buf, 1):
            if line.endswith('\n'):
                line = line[:-1]
            if line.endswith('\r'):
                line = line[:-1]
            text = line.lstrip()
            if not text:
                continue
            if text[0] == '[':
                end = text.find(']')
                if end < 0:
                    logging.debug(f'line {lineno}: unclosed header, skipped.')
                    continue
                section = self.__new_section()
                self[text[1:end].strip()] = section
            elif text[0] == ';':
                continue
            elif section is None:
                logging.debug(f'line {lineno}: no section yet, skipped.')
            elif text.find('=') > 0:
                key, val = text.split('=', 1)
                section[key.strip()] = IniValue(val)
            else:
                logging.debug(f'line {lineno}: not an assignment, skipped.')

    def save(self, stream: IO[str] | IO[bytes]) -> None:
        """Write the document to a text stream (or as UTF-8 bytes).

        Comments and blank lines from loading are not kept.
        Sections without any key are left out,
        unless `keep_empty_sections`.

        A `UserWarning` is issued for a name or pair that would load back
        differently: names with `]` or line breaks; keys that are empty,
        padded with whitespace, start with `;` or `[`, or hold `=`;
        keys or values holding a line feed, values ending in a carriage
        return.
        """
        if not _is_binary(stream):
            self.__write_lines(stream)  # type: ignore[arg-type]
            return
        buf = TextIOWrapper(stream, encoding='utf-8', newline='\n')  # type: ignore
        try:
            self.__write_lines(buf)
            buf.flush()
        finally:
            buf.detach()

    def __write_lines(self, buf: IO[str]) -> None:
        for name, section in self.items():
            if not section and not self.keep_empty_sections:
                continue
            name = name.strip()
            if any(c in name for c in ']\r\n'):
                warn(f'Section name "{name}" would not read back the same.')
            buf.write(f'[{name}]\n')
            for key, val in section.items():
                if not _writes_back(key, str(val)):
                    warn(f'[{name}] "{key}" would not read back the same.')
                buf.write(f'{key}={val}\n')
            buf.write('\n')

    def get_contents(self) -> str:
        buf = BytesIO()
        self.save(buf)
        return buf.getvalue().decode('utf-8')

    # --- internals ---

    def __new_section(self, ordered: bool | None = None) -> IniSection:
        if ordered is None:
            ordered = self.ordered_sections
        return IniSection(comparer=self.__comparer, ordered=ordered)

    def __adopt(self, value: IniSection | Mapping[str, Any]) -> IniSection:
        """Sections under another comparer get copied and re-keyed."""
        if isinstance(value, IniSection):
            if value.comparer is self.__comparer:
                return value
            return IniSection(value, self.__comparer)
        return IniSection(value, self.__comparer,
                          ordered=self.ordered_sections)
