# -*- encoding: utf-8 -*-
# @File   : store.py
# @Time   : 2026/10/19 15:20:44

"""Key/value configuration store over a single INI file.

Every mutation rewrites the whole file before returning.
Reads are served from memory, unless the file got changed on disk since
this store last read or wrote it, which makes the store parse it again.

Note: this is NOT a lock. Two live stores writing the same path
may still lose each other's changes. Assume one writer.
"""

import logging
import os
from os.path import exists
from warnings import warn

from .errors import IniArgumentError, require_name, require_value
from .model import IniDocument
from .parser import DEFAULT_COMMENT, DEFAULT_ENCODING, IniParser

logger = logging.getLogger(__name__)

_RESERVED_MARKERS = ('[', ']', '=')


def _fingerprint(path: str) -> tuple[int, int] | None:
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return None
    return st.st_mtime_ns, st.st_size


class IniStore:
    def __init__(
        self, path: str | os.PathLike[str],
        comment: str = DEFAULT_COMMENT,
        encoding: str = DEFAULT_ENCODING, *,
        blank_lines: int = 1
    ) -> None:
        if (not isinstance(comment, str) or len(comment) != 1
                or comment.isspace() or comment in _RESERVED_MARKERS):
            raise IniArgumentError(
                f'Comment marker must be a single character, got {comment!r}.')
        self._path = os.fspath(path)
        self._blank_lines = blank_lines
        self._parser = IniParser(self._path, encoding, comment)
        self._doc = IniDocument()
        self._stamp: tuple[int, int] | None = None

        if not exists(self._path):
            # 'x' so that a racing creator doesn't get truncated.
            try:
                with open(self._path, 'x', encoding=self._parser.encoding):
                    pass
                logger.info('Created empty INI file "%s".', self._path)
            except FileExistsError:
                pass
        self.reload()

    @property
    def path(self) -> str:
        return self._path

    @property
    def encoding(self) -> str:
        """Normalized name of the codec used to read and write the file."""
        return self._parser.encoding

    file_encoding = encoding

    @property
    def comment(self) -> str:
        return self._parser.comment

    @property
    def document(self) -> IniDocument:
        """A copy of the current document. Editing it changes nothing."""
        self._sync()
        return self._doc.copy()

    def __repr__(self) -> str:
        return (f'IniStore({self._path!r}, comment={self.comment!r}, '
                f'encoding={self.encoding!r})')

    def reload(self) -> None:
        """Parse the backing file again, dropping the in-memory document."""
        self._doc = self._parser.read()
        self._stamp = _fingerprint(self._path)

    def _sync(self) -> None:
        stamp = _fingerprint(self._path)
        # a vanished file keeps the cache, next mutation recreates it.
        if stamp is None or stamp == self._stamp:
            return
        logger.debug('"%s" changed on disk, reloading.', self._path)
        self.reload()

    def _persist(self) -> None:
        try:
            self._parser.write(self._doc, blank_lines=self._blank_lines)
        except OSError:
            logger.error(
                'Failed to save "%s", memory and disk now differ.',
                self._path)
            raise
        self._stamp = _fingerprint(self._path)

    def _check_storable(self, section: str, key: str, value: str) -> None:
        marker = self.comment
        for what, text in (('Section', section), ('Key', key),
                           ('Value', value)):
            if '\n' in text or '\r' in text:
                warn(f'{what} {text!r} contains a line break '
                     'and will not survive reloading the file.')
        if marker in value or marker in key or marker in section:
            warn(f'[{section}] {key} contains comment marker "{marker}", '
                 'text after it will be lost when the file is read again.')
        if '=' in key:
            warn(f'Key {key!r} contains "=", '
                 'it will be split at the first "=" when read again.')
        if key.startswith('['):
            warn(f'Key {key!r} starts with "[", '
                 'the line may be read back as a section header.')

    def get_value(
        self, section: str, key: str, default: str | None = None
    ) -> str | None:
        """Look up a value, case-insensitively.

        Without `default`, absent keys give `None`.
        With `default`, an absent key is *created* with it and saved to disk,
        then `default` is returned.
        """
        section = require_name('Section', section)
        key = require_name('Key', key)
        self._sync()
        if section in self._doc and key in self._doc[section]:
            return self._doc[section][key]
        if default is None:
            return None

        require_value('Default', default)
        self._doc.setdefault(section)[key] = default
        self._persist()
        return default

    def set_value(self, section: str, key: str, value: str) -> bool:
        section = require_name('Section', section)
        key = require_name('Key', key)
        require_value('Value', value)
        self._check_storable(section, key, value)
        self._sync()
        self._doc.setdefault(section)[key] = value
        self._persist()
        return True

    def delete_key(self, section: str, key: str) -> bool:
        section = require_name('Section', section)
        key = require_name('Key', key)
        self._sync()
        if section not in self._doc or key not in self._doc[section]:
            return False
        del self._doc[section][key]
        self._persist()
        return True

    def delete_section(self, section: str) -> bool:
        section = require_name('Section', section)
        self._sync()
        if section not in self._doc:
            return False
        del self._doc[section]
        self._persist()
        return True

    def rename_section(self, old: str, new: str) -> bool:
        """Rename a section in place. `False` if `old` is missing
        or `new` is taken by another section."""
        old = require_name('Section', old)
        new = require_name('Section', new)
        self._sync()
        if not self._doc.rename(old, new):
            return False
        self._persist()
        return True

    def get_sections(self) -> list[str]:
        self._sync()
        return list(self._doc)

    def get_keys(self, section: str) -> list[str]:
        section = require_name('Section', section)
        self._sync()
        if section not in self._doc:
            return []
        return list(self._doc[section])

    def has_section(self, section: str) -> bool:
        section = require_name('Section', section)
        self._sync()
        return section in self._doc

    def has_key(self, section: str, key: str) -> bool:
        section = require_name('Section', section)
        key = require_name('Key', key)
        self._sync()
        return section in self._doc and key in self._doc[section]
