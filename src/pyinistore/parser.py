# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 14:31:06

"""Flat INI text <-> `IniDocument`.

We parse based on the following consumption:
1. Only `[Section]` headers and `Key=Value` pairs matter.
No interpolation, no multi-line values, no nested sections.
2. Whole-line comments start with the comment marker (`#` by default).
A marker in the middle of a line cuts the rest of that line off,
but whatever stays before it is kept *as is*, spaces included.
3. Parsing never fails. Lines that make no sense are dropped.
"""

import codecs
import logging
from io import StringIO, TextIOBase

import chardet

from .abstract import FileHandler
from .model import IniDocument, IniSection

logger = logging.getLogger(__name__)

DEFAULT_COMMENT = '#'
DEFAULT_ENCODING = 'utf-8'


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self, filename: str,
        encoding: str = DEFAULT_ENCODING,
        comment: str = DEFAULT_COMMENT
    ) -> None:
        super().__init__(filename)
        self._codec = codecs.lookup(encoding).name
        self._comment = comment

    @property
    def encoding(self) -> str:
        return self._codec

    @property
    def comment(self) -> str:
        return self._comment

    @staticmethod
    def readstream(
        buf: TextIOBase,
        ins: IniDocument | None = None,
        comment: str = DEFAULT_COMMENT
    ) -> IniDocument:
        """读取解码好的字符串流。

        如没有特殊需求，直接调用`self.read()`或`IniParser.parse()`便是。
        传入`ins`时，读到的小节与键值对会合并进去（后者优先）。
        """
        if ins is None:
            ins = IniDocument()
        this_sect: IniSection | None = None
        lineno = 0
        while i := buf.readline():
            lineno += 1
            i = i.rstrip('\r\n')
            if lineno == 1:
                i = i.removeprefix('\ufeff')
            if i.lstrip().startswith(comment):
                continue
            if comment in i:
                i = i[:i.find(comment)]
            decl = i.strip()
            if not decl:
                continue

            if decl[0] == '[' and decl[-1] == ']':
                if not (label := decl[1:-1].strip()):
                    logger.debug('line %d: empty section header dropped.',
                                 lineno)
                    this_sect = None
                    continue
                this_sect = ins.setdefault(label)
            elif '=' in i:
                key, val = i.split('=', 1)
                key = key.strip()
                if this_sect is None or not key:
                    logger.debug('line %d: orphan pair "%s" dropped.',
                                 lineno, decl)
                    continue
                this_sect[key] = val
            else:
                logger.debug('line %d: malformed "%s" dropped.', lineno, decl)
        return ins

    @classmethod
    def parse(cls, text: str, comment: str = DEFAULT_COMMENT) -> IniDocument:
        return cls.readstream(StringIO(text), comment=comment)

    @staticmethod
    def _output_section(section: IniSection, delimiter: str = '=') -> str:
        ret = f'[{section.name}]\n'
        for k, v in section.items():
            ret += f'{k}{delimiter}{v}\n'
        return ret

    @classmethod
    def dumps(
        cls, instance: IniDocument, *,
        blank_lines: int = 1,
        delimiter: str = '='
    ) -> str:
        """Serialize a whole document.

        Sections come in document order, pairs in section order,
        with `blank_lines` empty lines between two sections.
        The same document always gives the same text.
        """
        return ('\n' * blank_lines).join(
            cls._output_section(i, delimiter) for i in instance.values())

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': DEFAULT_ENCODING}
        logger.warning('"%s" guessed as %s.', filename, codec['encoding'])
        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode(DEFAULT_ENCODING, errors='replace')
        return StringIO(buf)

    def read(self) -> IniDocument:
        """读取`IniParser`实例指定的文件。

        May raise `OSError`.
        """
        try:
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.readstream(fp, comment=self._comment)
        except UnicodeDecodeError:
            logger.warning('"%s" is not valid %s.', self._fn, self._codec)
            return self.readstream(
                self._decode_file(self._fn), comment=self._comment)

    def write(
        self, instance: IniDocument, *,
        blank_lines: int = 1,
        delimiter: str = '='
    ) -> None:
        """保存到 INI 文件，整个覆写。

        注：并非原子操作，写到一半出错的话文件可能只剩一半。
        """
        text = self.dumps(
            instance, blank_lines=blank_lines, delimiter=delimiter)
        with open(self._fn, 'w', encoding=self._codec) as fp:
            fp.write(text)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
