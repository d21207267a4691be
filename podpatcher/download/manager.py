"""
下载管理器

为每个过期文件启动一个独立的下载任务：下载到临时目录、校验 CRC、
删除旧文件、移动到安装目录。任一任务失败即取消其余任务并抛出异常。
"""

import asyncio
import os
import zlib
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

import aiofiles
import aiohttp
from loguru import logger

from podpatcher.download.verifier import FileVerifier, format_crc
from podpatcher.exceptions import (
    ChecksumMismatchError,
    FilesystemError,
    NetworkError,
)
from podpatcher.models import FileRecord
from podpatcher.utils import resolve_local_path


@dataclass
class DownloadStats:
    """下载统计"""

    total: int = 0
    completed: int = 0
    skipped: int = 0
    bytes_downloaded: int = 0
    restart_required: List[str] = field(default_factory=list)


class DownloadManager:
    """下载管理器"""

    def __init__(
        self,
        pod_dir: str,
        temp_dir: str,
        session: aiohttp.ClientSession,
        max_concurrent: Optional[int] = None,
        chunk_size: int = 8192,
        progress_callback: Optional[Callable[[FileRecord], None]] = None,
    ):
        self.pod_dir = pod_dir
        self.temp_dir = temp_dir
        self.chunk_size = chunk_size
        self.verifier = FileVerifier()
        self.stats = DownloadStats()
        self.session = session
        self._progress_callback = progress_callback
        self._semaphore = (
            asyncio.Semaphore(max_concurrent) if max_concurrent else None
        )

    async def download_file(self, url: str, file_path: str) -> str:
        """
        下载单个文件到指定路径

        Returns:
            下载内容的 CRC32
        """
        try:
            os.makedirs(os.path.dirname(file_path), exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                f"无法创建下载目录: {os.path.dirname(file_path)}",
                context={"file": file_path, "error": str(e)},
            ) from e

        crc = 0
        try:
            async with self.session.get(url) as response:
                if response.status != 200:
                    raise NetworkError(
                        f"下载失败 HTTP {response.status}: {url}",
                        context={"url": url, "status": response.status},
                    )

                async with aiofiles.open(file_path, "wb") as f:
                    async for chunk in response.content.iter_chunked(self.chunk_size):
                        await f.write(chunk)
                        crc = zlib.crc32(chunk, crc)
                        self.stats.bytes_downloaded += len(chunk)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(
                f"下载失败: {url}: {e}", context={"url": url, "error": str(e)}
            ) from e
        except OSError as e:
            raise FilesystemError(
                f"无法写入文件: {file_path}",
                context={"file": file_path, "error": str(e)},
            ) from e

        return format_crc(crc)

    @staticmethod
    def replace_file(src_path: str, dest_path: str):
        """删除目标文件后将下载的文件移动到目标位置"""
        if os.path.exists(dest_path):
            try:
                os.remove(dest_path)
            except OSError as e:
                raise FilesystemError(
                    f"无法删除文件: {dest_path}",
                    context={"file": dest_path, "error": str(e)},
                ) from e

        try:
            os.rename(src_path, dest_path)
        except OSError as e:
            raise FilesystemError(
                f"无法移动 {src_path} 到 {dest_path}",
                context={"src": src_path, "dest": dest_path, "error": str(e)},
            ) from e

    async def download_and_replace(self, record: FileRecord, url: str):
        """下载、校验并替换单个文件"""
        temp_path = resolve_local_path(self.temp_dir, record.name)
        dest_path = resolve_local_path(self.pod_dir, record.name)

        logger.debug(f"[下载] {record.name} <- {url}")
        crc = await self.download_file(url, temp_path)

        if record.crc and not self.verifier.checksums_match(record.crc, crc):
            raise ChecksumMismatchError(record.name, record.crc, crc)

        self.replace_file(temp_path, dest_path)

        self.stats.completed += 1
        if record.requires_restart:
            self.stats.restart_required.append(record.name)
        logger.info(f"[完成] '{record.name}' 已更新 (CRC {crc})")

        if self._progress_callback:
            self._progress_callback(record)

    async def _worker(self, record: FileRecord, url: str):
        if self._semaphore is None:
            await self.download_and_replace(record, url)
            return
        async with self._semaphore:
            await self.download_and_replace(record, url)

    async def run(self, records: Iterable[FileRecord]) -> DownloadStats:
        """
        并发下载所有过期文件并等待全部完成

        没有 https 链接的条目会被跳过。任一任务失败时取消其余任务并抛出该异常。
        """
        tasks: list[asyncio.Task] = []
        for record in records:
            url = record.secure_link
            if url is None:
                self.stats.skipped += 1
                logger.warning(f"[跳过] '{record.name}' 没有 https 下载链接")
                continue
            tasks.append(
                asyncio.create_task(
                    self._worker(record, url), name=f"download-{record.name}"
                )
            )

        self.stats.total = len(tasks)
        logger.debug(f"[启动] {len(tasks)} 个下载任务")

        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return self.stats
