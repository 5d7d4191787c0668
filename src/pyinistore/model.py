# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 14:10:52

"""
Basically flat INI Structure: document -> section -> key -> value.

Both section and key lookups are case-insensitive,
while the casing which first got written is kept for output.
"""

from collections.abc import Mapping, MutableMapping
from typing import Callable, Iterator, Sequence

from .errors import require_value


def _fold(name: object) -> str:
    # str.upper(), so "ß" and "SS" are the same name.
    if not isinstance(name, str):
        raise KeyError(name)
    return name.upper()


class IniSection(MutableMapping[str, str]):
    """INI 小节字典。

    维护小节内有序的键值对。键名不区分大小写，
    但会保留*第一次*写入时的写法，用于保存文件。

    所有值均必须是`str`（允许空串）。不存在的键就是不存在，
    不会用`None`占位。
    """

    def __init__(
        self, section_name: str, /,
        pairs_to_import: Mapping[str, str] | None = None
    ) -> None:
        self._name = section_name
        # folded key -> value, and folded key -> original label.
        self.__data: dict[str, str] = {}
        self.__keyproxy: dict[str, str] = {}
        if pairs_to_import:
            self.update(pairs_to_import)

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        try:
            return self.__data[_fold(key)]
        except KeyError:
            raise KeyError(key) from None

    # update in place keeps both position and the first label.
    def __setitem__(self, key: str, value: str) -> None:
        folded = _fold(key)
        require_value(f'Value of "{key}"', value)
        self.__keyproxy.setdefault(folded, key)
        self.__data[folded] = value

    def __delitem__(self, key: str) -> None:
        folded = _fold(key)
        if folded not in self.__data:
            raise KeyError(key)
        del self.__data[folded]
        del self.__keyproxy[folded]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.upper() in self.__data

    def __len__(self) -> int:
        return len(self.__data)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__keyproxy.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniSection):
            return NotImplemented
        return (self._name == other._name
                and list(self.items()) == list(other.items()))

    def __str__(self) -> str:
        return f"[{self._name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self.__data))

    def label(self, key: str) -> str | None:
        """Key name as it was first written, or `None` if absent."""
        return self.__keyproxy.get(_fold(key))

    def get(self, key, default=None, converter: Callable[[str], object] = str):
        if converter is list:
            return self.getlist(key)
        elif converter is bool:
            return self.getbool(key)
        elif key not in self:
            return default
        else:
            return converter(self[key])

    # lazy to implement auto converter. just manual.
    def getbool(self, key: str) -> bool | None:
        if key not in self:
            return None
        val = self[key].strip()
        return bool(val) and val[0].lower() in ('1', 'y', 't')

    def getlist(self, key: str) -> Sequence[str]:
        if key not in self:
            return ()
        return [i.strip() for i in self[key].split(',')]

    def to_dict(self) -> dict[str, str]:
        """label -> value 的有序副本。"""
        return dict(self.items())

    def copy(self) -> 'IniSection':
        return IniSection(self._name, self)


class IniDocument(MutableMapping[str, IniSection]):
    """INI 文件表示。只支持最简单的两层结构（不含注释）：

        ```ini
        [Application]
        Name=MyApp
        Version=1.0

        [Database]
        Host=localhost
        ```

    不在任何小节下的游离键值对*不会*被保留。
    """

    def __init__(self) -> None:
        # folded section name -> section, section keeps its own label.
        self.__raw: dict[str, IniSection] = {}

    def __getitem__(self, key: str) -> IniSection:
        try:
            return self.__raw[_fold(key)]
        except KeyError:
            raise KeyError(key) from None

    def __setitem__(
        self,
        key: str,
        value: IniSection | Mapping[str, str]
    ) -> None:
        folded = _fold(key)
        # shouldn't keep ptr to external dict in key setting operation.
        label = self.__raw[folded].name if folded in self.__raw else key
        self.__raw[folded] = IniSection(label, value)

    def __delitem__(self, key: str) -> None:
        folded = _fold(key)
        if folded not in self.__raw:
            raise KeyError(key)
        del self.__raw[folded]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.upper() in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter([i.name for i in self.__raw.values()])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniDocument):
            return NotImplemented
        return list(self.values()) == list(other.values())

    def __repr__(self) -> str:
        return 'IniDocument { .sections = %d }' % len(self.__raw)

    def setdefault(self, key: str, default=None) -> IniSection:
        """If `key` not in self, then add an empty section.

        `default` pairs are only imported when the section is new.
        """
        folded = _fold(key)
        if folded not in self.__raw:
            self.__raw[folded] = IniSection(key, default)
        return self.__raw[folded]

    def rename(self, old: str, new: str) -> bool:
        """Rename a section, keeping its position.

        Returns:
            `True` if succeed, otherwise `False`.
            May not success if `old` is not found or `new` already exists
            (unless `new` only differs from `old` in casing).
        """
        fold_old, fold_new = _fold(old), _fold(new)
        if fold_old not in self.__raw:
            return False
        if fold_new in self.__raw and fold_new != fold_old:
            return False

        section = self.__raw[fold_old]
        section._name = new
        self.__raw = {
            (fold_new if k == fold_old else k): v
            for k, v in self.__raw.items()
        }
        return True

    def copy(self) -> 'IniDocument':
        ret = IniDocument()
        for i in self.values():
            ret[i.name] = i
        return ret

    def clear(self) -> None:
        self.__raw.clear()
