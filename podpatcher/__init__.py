"""
PodPatcher

根据远程文件清单同步 Path of Diablo 安装目录。
"""

__version__ = "0.1.0"
