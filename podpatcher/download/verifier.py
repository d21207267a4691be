"""
文件校验器

实现 CRC32 校验、文件存在性检查。清单中的 crc 为不补零的大写十六进制。
"""

import os
import zlib
from typing import Optional

import aiofiles

from podpatcher.exceptions import FilesystemError


def format_crc(value: int) -> str:
    """将 CRC32 数值格式化为大写十六进制"""
    return f"{value & 0xFFFFFFFF:X}"


def normalize_checksum(value: str) -> str:
    return value.strip().upper().lstrip("0") or "0"


class FileVerifier:
    """文件校验器"""

    @staticmethod
    def checksum(content: bytes) -> str:
        """
        计算内容的 CRC32

        Args:
            content: 文件二进制内容

        Returns:
            大写十六进制字符串
        """
        return format_crc(zlib.crc32(content))

    @staticmethod
    async def calc_crc(file_path: str, chunk_size: int = 4096) -> Optional[str]:
        """
        计算文件的 CRC32 值

        Args:
            file_path: 文件路径
            chunk_size: 读取块大小

        Returns:
            CRC32 值或 None（如果文件不存在）

        Raises:
            FilesystemError: 路径存在但不是文件，或无法读取
        """
        if not os.path.exists(file_path):
            return None
        if not os.path.isfile(file_path):
            raise FilesystemError(
                f"不是普通文件: {file_path}", context={"file": file_path}
            )

        crc = 0
        try:
            async with aiofiles.open(file_path, "rb") as f:
                while True:
                    data = await f.read(chunk_size)
                    if not data:
                        break
                    crc = zlib.crc32(data, crc)
        except OSError as e:
            raise FilesystemError(
                f"无法读取文件: {file_path}",
                context={"file": file_path, "error": str(e)},
            ) from e
        return format_crc(crc)

    @staticmethod
    def checksums_match(expected: str, actual: str) -> bool:
        """比较两个 CRC 字符串（忽略大小写和前导零）"""
        return normalize_checksum(expected) == normalize_checksum(actual)
