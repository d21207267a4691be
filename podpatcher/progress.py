"""
下载进度显示

在下载过程中渲染文本进度条。
"""

from typing import Optional

import click


class ProgressReporter:
    """
    下载进度显示

    每完成一个文件计数加一并重绘进度条。所有下载任务运行在同一个事件循环中，
    计数更新不会并发发生。
    """

    def __init__(self, label: str = "Downloading", file=None):
        self.label = label
        self.file = file
        self.total = 0
        self.completed = 0
        self._bar = None

    def start(self, total: int):
        """开始显示进度"""
        self.total = total
        self.completed = 0
        self._bar = click.progressbar(length=total, label=self.label, file=self.file)
        self._bar.__enter__()

    def advance(self, name: Optional[str] = None):
        """一个文件下载完成"""
        self.completed += 1
        if self._bar is not None:
            self._bar.update(1, name)

    def finish(self):
        """结束显示进度"""
        if self._bar is not None:
            self._bar.__exit__(None, None, None)
            self._bar = None
