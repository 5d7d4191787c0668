# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/19 14:05:37


class IniArgumentError(ValueError):
    """Raised when a section, key or value passed to the store is unusable,
    e.g. `None` or an empty string.

    Always raised before any file IO happens.
    """
    pass


def require_name(what: str, name: object) -> str:
    """Check a section or key name and strip it.

    Surrounding whitespace never survives the file, so it is dropped here.
    """
    if not isinstance(name, str) or not name.strip():
        raise IniArgumentError(f'{what} must be a non-empty string, got {name!r}.')
    return name.strip()


def require_value(what: str, value: object) -> str:
    # empty string is a valid value, absence is modeled by no entry.
    if not isinstance(value, str):
        raise IniArgumentError(f'{what} must be a string, got {value!r}.')
    return value
