"""
清单客户端

获取远程文件清单 (files.xml)。
"""

import asyncio

import aiohttp
from loguru import logger

from podpatcher.exceptions import NetworkError
from podpatcher.models import MANIFEST_URL, Manifest


class ManifestClient:
    """清单客户端"""

    def __init__(self, session: aiohttp.ClientSession, url: str = MANIFEST_URL):
        self.session = session
        self.url = url

    async def fetch(self) -> bytes:
        """
        获取清单原始内容

        返回未解码的字节，由 XML 解析器按文档声明的编码解码。
        """
        logger.info(f"[清单] 获取文件列表: {self.url}")
        try:
            async with self.session.get(self.url) as response:
                if response.status != 200:
                    raise NetworkError(
                        f"获取文件列表失败 (状态码: {response.status})",
                        response=response,
                    )
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(
                f"获取文件列表失败: {e}",
                context={"url": self.url, "error": str(e)},
            ) from e

    async def get_manifest(self) -> Manifest:
        """获取并解析清单"""
        manifest = Manifest.from_xml(await self.fetch())
        logger.info(f"[清单] 共 {len(manifest)} 个文件")
        return manifest
