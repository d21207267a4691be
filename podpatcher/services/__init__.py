"""
PodPatcher 服务层

包含清单获取、安装目录校验、更新计划等服务。
"""

from podpatcher.services.install_validator import InstallValidator
from podpatcher.services.manifest_client import ManifestClient
from podpatcher.services.update_planner import UpdatePlanner

__all__ = [
    "InstallValidator",
    "ManifestClient",
    "UpdatePlanner",
]
