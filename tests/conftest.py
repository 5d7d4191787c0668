import pytest

from pyinistore import IniStore


@pytest.fixture
def ini_path(tmp_path):
    return tmp_path / 'test.ini'


@pytest.fixture
def store(ini_path):
    return IniStore(ini_path)
