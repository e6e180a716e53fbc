"""
文件存储管理器单元测试
覆盖：文件名生成、路径安全检查、文件读写、访问地址
"""

import re
from pathlib import Path

import pytest

from utils.storage import StorageManager, get_storage_manager


@pytest.fixture
def manager(tmp_path) -> StorageManager:
    return StorageManager(upload_dir=str(tmp_path / "up"), public_base_url="http://files.test/")


class TestStorageManagerInit:
    """存储管理器初始化测试"""

    def test_singleton_pattern(self):
        """测试单例模式"""
        assert get_storage_manager() is get_storage_manager()

    def test_directory_created(self, tmp_path):
        mgr = StorageManager(upload_dir=str(tmp_path / "a" / "b"))
        assert mgr.upload_dir.is_dir()
        assert mgr.upload_dir.is_absolute()

    def test_base_url_trailing_slash_trimmed(self, manager):
        assert manager.public_base_url == "http://files.test"


class TestGenerateFilename:
    """文件名生成测试"""

    def test_keeps_stem_and_extension(self, manager):
        filename, full_path = manager.generate_filename("photo.png")
        assert re.fullmatch(r"photo-\d+\.png", filename)
        assert Path(full_path) == manager.upload_dir / filename

    def test_without_extension(self, manager):
        filename, _ = manager.generate_filename("README")
        assert re.fullmatch(r"README-\d+", filename)

    def test_multiple_dots(self, manager):
        filename, _ = manager.generate_filename("archive.tar.gz")
        assert re.fullmatch(r"archive\.tar-\d+\.gz", filename)

    def test_strips_directories(self, manager):
        filename, _ = manager.generate_filename("../../etc/passwd")
        assert re.fullmatch(r"passwd-\d+", filename)
        filename, _ = manager.generate_filename("C:\\Users\\me\\cat.jpg")
        assert re.fullmatch(r"cat-\d+\.jpg", filename)


class TestFileOperations:
    """文件读写测试"""

    def test_save_writes_into_upload_dir(self, manager):
        filename = manager.save("notes.txt", b"hello")
        assert (manager.upload_dir / filename).read_bytes() == b"hello"
        assert [p.name for p in manager.upload_dir.iterdir()] == [filename]

    def test_build_url(self, manager):
        assert manager.build_url("x-1.png") == "http://files.test/uploads/x-1.png"
