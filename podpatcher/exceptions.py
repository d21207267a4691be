"""
PodPatcher 统一异常体系

提供分层的异常结构，支持错误代码、上下文信息、退出码和 JSON 序列化。
"""

from typing import Any, Dict, Optional

import aiohttp


class PodPatcherError(Exception):
    """PodPatcher 基础异常类"""

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}

    def _get_default_code(self) -> str:
        """获取默认错误代码"""
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(PodPatcherError):
    """安装目录验证错误"""

    exit_code = 2

    def _get_default_code(self) -> str:
        return "E100"


class UnsafePathError(ValidationError):
    """清单中的路径越出安装目录"""

    def _get_default_code(self) -> str:
        return "E101"


class NetworkError(PodPatcherError):
    """清单或文件下载的网络错误"""

    exit_code = 3

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        response: Optional[aiohttp.ClientResponse] = None,
    ):
        super().__init__(message, code, context)
        self.response = response
        if response is not None:
            self.context["status_code"] = response.status
            self.context["url"] = str(response.url)

    def _get_default_code(self) -> str:
        return "E200"


class ParseError(PodPatcherError):
    """清单解析错误"""

    exit_code = 4

    def _get_default_code(self) -> str:
        return "E300"


class FilesystemError(PodPatcherError):
    """文件读写、删除、重命名错误"""

    exit_code = 5

    def _get_default_code(self) -> str:
        return "E400"


class ChecksumMismatchError(PodPatcherError):
    """下载文件的 CRC 与清单不一致"""

    exit_code = 6

    def __init__(self, file: str, expected: str, actual: str):
        super().__init__(
            f"校验失败: {file}, 期望 {expected}, 实际 {actual}",
            context={"file": file, "expected": expected, "actual": actual},
        )
        self.file = file
        self.expected = expected
        self.actual = actual

    def _get_default_code(self) -> str:
        return "E500"


__all__ = [
    "PodPatcherError",
    "ValidationError",
    "UnsafePathError",
    "NetworkError",
    "ParseError",
    "FilesystemError",
    "ChecksumMismatchError",
]
