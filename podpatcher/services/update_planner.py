"""
更新计划

对比本地文件与清单中的 CRC，找出需要更新的文件。
"""

from typing import List

from loguru import logger

from podpatcher.download.verifier import FileVerifier
from podpatcher.models import FileRecord, Manifest
from podpatcher.utils import resolve_local_path


class UpdatePlanner:
    """更新计划器"""

    def __init__(self, pod_dir: str, force: bool = False):
        self.pod_dir = pod_dir
        self.force = force
        self.verifier = FileVerifier()

    async def is_outdated(self, record: FileRecord) -> bool:
        """
        判断单个条目是否需要更新

        本地文件不存在时不更新（只更新已有文件，不安装新文件）。
        """
        path = resolve_local_path(self.pod_dir, record.name)
        local_crc = await self.verifier.calc_crc(path)
        if local_crc is None:
            logger.debug(f"[跳过] '{record.name}' 本地不存在")
            return False

        if self.force:
            return True
        if not record.crc:
            return False
        return not self.verifier.checksums_match(record.crc, local_crc)

    async def plan(self, manifest: Manifest) -> List[FileRecord]:
        """按清单顺序返回过期文件列表"""
        outdated = []
        for record in manifest:
            if await self.is_outdated(record):
                logger.debug(f"[过期] '{record.name}'")
                outdated.append(record)
        return outdated
