"""
PodPatcher 数据模型包

包含运行配置模型和清单模型定义。
"""

from podpatcher.models.config import MANIFEST_URL, MARKER_FILES, PatcherConfig
from podpatcher.models.manifest import SECURE_SCHEME, FileRecord, Manifest

__all__ = [
    # 配置模型
    "MANIFEST_URL",
    "MARKER_FILES",
    "PatcherConfig",
    # 清单模型
    "SECURE_SCHEME",
    "FileRecord",
    "Manifest",
]
