"""
PodPatcher 下载层

包含下载替换、文件校验等功能。
"""

from podpatcher.download.manager import DownloadManager, DownloadStats
from podpatcher.download.verifier import FileVerifier

__all__ = [
    "DownloadManager",
    "DownloadStats",
    "FileVerifier",
]
