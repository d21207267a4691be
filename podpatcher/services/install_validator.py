"""
安装目录校验

递归扫描目录，确认其中包含全部标志文件。
"""

import os
from typing import Iterable, List, Set

from loguru import logger

from podpatcher.exceptions import FilesystemError, ValidationError
from podpatcher.models import MARKER_FILES


def _raise_walk_error(error: OSError):
    raise FilesystemError(
        f"无法遍历目录: {error.filename}: {error.strerror}",
        context={"path": error.filename, "error": str(error)},
    ) from error


class InstallValidator:
    """安装目录校验器"""

    def __init__(self, marker_files: Iterable[str] = MARKER_FILES):
        self.marker_files = tuple(marker_files)

    def find_missing(self, root: str) -> List[str]:
        """
        扫描目录并返回缺失的标志文件

        全部找到后立即停止遍历。

        Returns:
            缺失的文件名（按标志文件顺序）
        """
        required = set(self.marker_files)
        found: Set[str] = set()

        for _dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
            for filename in filenames:
                if filename in required:
                    found.add(filename)
            if found == required:
                break

        return [name for name in self.marker_files if name not in found]

    def validate(self, root: str):
        """
        校验安装目录

        Raises:
            ValidationError: 路径不存在或缺少标志文件
            FilesystemError: 遍历目录失败
        """
        if not os.path.isdir(root):
            raise ValidationError(
                f"路径不存在: {root}", context={"path": root}
            )

        missing = self.find_missing(root)
        if missing:
            raise ValidationError(
                f"不是有效的 PoD 目录，缺少文件: {', '.join(missing)}",
                context={"path": root, "missing": missing},
            )
        logger.debug(f"[校验] 安装目录有效: {root}")
