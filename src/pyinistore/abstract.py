# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/19 14:02:11

from abc import ABCMeta, abstractmethod
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @property
    def filename(self) -> str:
        return self._fn

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
