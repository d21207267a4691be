"""
工具函数

安装目录内的路径拼接与临时目录管理。
"""

import os
import shutil

from loguru import logger

from podpatcher.exceptions import FilesystemError, UnsafePathError


def resolve_local_path(root: str, name: str) -> str:
    """将清单中的相对路径拼接到 root 下，拒绝越出 root 的路径"""
    root_abs = os.path.abspath(root)
    path = os.path.abspath(os.path.join(root_abs, name))
    if path == root_abs or os.path.commonpath([root_abs, path]) != root_abs:
        raise UnsafePathError(
            f"路径越出安装目录: {name}", context={"root": root, "name": name}
        )
    return path


def ensure_dir(path: str):
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise FilesystemError(
            f"无法创建目录: {path}", context={"dir": path, "error": str(e)}
        ) from e


def remove_dir(path: str):
    """递归删除目录，删除失败只记录警告"""
    if not os.path.isdir(path):
        return
    try:
        shutil.rmtree(path)
    except OSError as e:
        logger.warning(f"[清理] 无法删除 {path}: {e}")
