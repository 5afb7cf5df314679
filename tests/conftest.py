"""Pytest configuration and fixtures for pathlocker tests"""
import pytest

from pathlocker import Locker, MemoryFilesystem

LOCK_PATH = "/lock"


@pytest.fixture
def unlocked_fs():
    """An empty in-memory filesystem"""
    return MemoryFilesystem()


@pytest.fixture
def locked_fs():
    """An in-memory filesystem whose /lock marker already holds 1"""
    fs = MemoryFilesystem()
    fs.write_bytes(LOCK_PATH, b"1")
    return fs


@pytest.fixture
def unlocked_locker(unlocked_fs):
    return Locker(LOCK_PATH, 1, fs=unlocked_fs)


@pytest.fixture
def locked_locker(locked_fs):
    return Locker(LOCK_PATH, 1, fs=locked_fs)


@pytest.fixture
def tmp_lock_path(tmp_path):
    """A marker path on the real filesystem that does not exist yet"""
    return tmp_path / "app.lock"
