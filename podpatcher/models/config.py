"""
运行配置模型
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

MANIFEST_URL = (
    "https://raw.githubusercontent.com/GreenDude120/PoD-Launcher/master/files.xml"
)

# 安装目录中必须存在的文件
MARKER_FILES: Tuple[str, ...] = (
    "Path of Diablo Launcher.exe",
    "Diablo II.exe",
    "Game.exe",
)


@dataclass
class PatcherConfig:
    """一次更新运行的上下文，显式传递给各组件"""

    pod_dir: str
    force: bool = False
    dry_run: bool = False
    manifest_url: str = MANIFEST_URL
    marker_files: Tuple[str, ...] = MARKER_FILES
    temp_dir_name: str = "temp"
    max_concurrent: Optional[int] = None  # None 表示不限制并发
    timeout: Optional[float] = None  # 请求超时时间，单位秒，None 表示不超时
    chunk_size: int = 8192

    @property
    def temp_dir(self) -> str:
        """临时下载目录"""
        return os.path.join(self.pod_dir, self.temp_dir_name)
