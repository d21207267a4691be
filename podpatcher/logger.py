"""
日志模块

使用 loguru 输出到 stderr，stdout 留给命令行的状态输出。
"""

import os
import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"


def debug_enabled(debug: bool = False) -> bool:
    """--debug 或 PODPATCHER_DEBUG=1 时启用调试日志"""
    return debug or os.environ.get("PODPATCHER_DEBUG", "0") == "1"


def setup_logger(debug: bool = False, sink=None, colorize: bool = True) -> None:
    """
    设置日志记录器

    Args:
        debug: 命令行 --debug 开关
        sink: 输出目标，默认为当前的 sys.stderr
        colorize: 是否启用颜色
    """
    debug = debug_enabled(debug)

    logger.remove()
    logger.add(
        sink=sink if sink is not None else sys.stderr,
        format=LOG_FORMAT,
        level="DEBUG" if debug else "INFO",
        colorize=colorize,
        backtrace=debug,
        diagnose=debug,
    )

    logger.debug("[日志] 调试模式已启用")


__all__ = ["logger", "setup_logger", "debug_enabled"]
