"""
主协调器

整合所有服务层组件，实现更新流程编排：
校验目录 -> 获取清单 -> 对比本地文件 -> 并发下载替换 -> 清理临时目录。
"""

from dataclasses import dataclass, field
from typing import List, Optional

import aiohttp
import click
from loguru import logger

from podpatcher.download import DownloadManager
from podpatcher.models import FileRecord, PatcherConfig
from podpatcher.progress import ProgressReporter
from podpatcher.services import InstallValidator, ManifestClient, UpdatePlanner
from podpatcher.utils import ensure_dir, remove_dir


@dataclass
class PatchResult:
    """一次更新运行的结果"""

    checked: int = 0
    outdated: List[str] = field(default_factory=list)
    downloaded: int = 0
    skipped: int = 0
    restart_required: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def up_to_date(self) -> bool:
        return not self.outdated


class PatchOrchestrator:
    """PodPatcher 主协调器"""

    def __init__(
        self,
        config: PatcherConfig,
        session: Optional[aiohttp.ClientSession] = None,
        reporter: Optional[ProgressReporter] = None,
    ):
        self.config = config
        self.reporter = reporter
        self.validator = InstallValidator(config.marker_files)
        self.planner = UpdatePlanner(config.pod_dir, config.force)
        self._session = session

    def _on_file_done(self, record: FileRecord):
        """单个文件替换完成回调"""
        if record.wants_dialog:
            logger.info(f"[提示] '{record.name}' 已更新")
        if self.reporter:
            self.reporter.advance(record.name)

    async def run(self) -> PatchResult:
        """运行完整的更新流程"""
        self.validator.validate(self.config.pod_dir)

        if self._session is not None:
            return await self._run(self._session)

        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            return await self._run(session)

    async def _run(self, session: aiohttp.ClientSession) -> PatchResult:
        client = ManifestClient(session, url=self.config.manifest_url)
        manifest = await client.get_manifest()

        outdated = await self.planner.plan(manifest)
        result = PatchResult(
            checked=len(manifest),
            outdated=[record.name for record in outdated],
            dry_run=self.config.dry_run,
        )

        if not outdated:
            click.echo("All files are up to date")
            return result

        if self.config.dry_run:
            click.echo(f"{len(outdated)} outdated files:")
            for record in outdated:
                click.echo(f"  {record.name}")
            return result

        await self._download(outdated, session, result)

        click.echo(f"Downloaded {result.downloaded} files successfully")
        if result.restart_required:
            click.echo(
                "Restart required after updating: "
                + ", ".join(result.restart_required)
            )
        return result

    async def _download(
        self,
        outdated: List[FileRecord],
        session: aiohttp.ClientSession,
        result: PatchResult,
    ):
        """下载并替换过期文件，结束后删除临时目录"""
        temp_dir = self.config.temp_dir
        ensure_dir(temp_dir)
        click.echo(f"Will download {len(outdated)} outdated files")

        manager = DownloadManager(
            pod_dir=self.config.pod_dir,
            temp_dir=temp_dir,
            max_concurrent=self.config.max_concurrent,
            chunk_size=self.config.chunk_size,
            session=session,
            progress_callback=self._on_file_done,
        )

        try:
            if self.reporter:
                self.reporter.start(
                    sum(1 for record in outdated if record.secure_link)
                )
            try:
                stats = await manager.run(outdated)
            finally:
                if self.reporter:
                    self.reporter.finish()
        finally:
            remove_dir(temp_dir)
            logger.debug(f"[清理] 已删除临时目录: {temp_dir}")

        result.downloaded = stats.completed
        result.skipped = stats.skipped
        result.restart_required = list(stats.restart_required)
        logger.success(
            f"[完成] {stats.completed} 个文件已更新, {stats.skipped} 个跳过, "
            f"共 {stats.bytes_downloaded / (1024 * 1024):.2f} MB"
        )
