# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/13 01:04:45

"""Reading and writing INI files by path.

The parsing itself lives in `IniFile.load()` and `IniFile.save()`,
which only know about streams. `IniParser` opens the file for them and
takes care of the encoding: when the file is not what `encoding` says,
its bytes are guessed with `chardet` instead.
"""

import logging
from io import StringIO
from typing import Any

import chardet

from .model import IniFile
from ..abstract import FileHandler

__all__ = ['IniParser']


class IniParser(FileHandler[IniFile]):
    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8', 'confidence': 0.0}
        logging.warning(
            f'{filename}: '
            f'decoding as {codec["encoding"]!r} '
            f'(confidence {codec["confidence"]:.2f}).')
        return StringIO(raw.decode(codec['encoding']).removeprefix('\ufeff'))

    def read(self, instance: IniFile | None = None, **options: Any) -> IniFile:
        """Load the file into `instance`, or a new `IniFile(**options)`.

        I/O errors are not caught. A `UnicodeDecodeError` is, once:
        the file gets decoded again with the codec `chardet` reports.
        """
        if instance is None:
            instance = IniFile(**options)
        try:
            # only \n and \r\n end a line, a lone \r stays in the value.
            with open(self._fn, 'r', encoding=self._codec, newline='\n') as fp:
                # decode everything first, so a bad byte leaves no half load.
                buf = StringIO(fp.read().removeprefix('\ufeff'))
        except UnicodeDecodeError:
            buf = self._decode_file(self._fn)
        instance.load(buf)
        return instance

    def write(self, instance: IniFile) -> None:
        """Save to the file, replacing it. Not atomic."""
        with open(self._fn, 'w', encoding=self._codec, newline='\n') as fp:
            instance.save(fp)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f" ({self._codec})"
