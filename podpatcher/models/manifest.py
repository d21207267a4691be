"""
清单数据模型

定义远程文件清单 (files.xml) 的数据类及其 XML 解码。
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union

from podpatcher.exceptions import ParseError

SECURE_SCHEME = "https://"


def _is_true(flag: str) -> bool:
    return flag.strip().lower() == "true"


@dataclass
class FileRecord:
    """
    清单中的单个文件条目。

    name 为相对安装目录的路径；crc 为空表示不校验。
    """

    name: str
    crc: str = ""
    links: List[str] = field(default_factory=list)
    show_dialog: str = ""
    restart_required: str = ""

    @property
    def secure_link(self) -> Optional[str]:
        """第一个 https 下载链接"""
        for link in self.links:
            if link.startswith(SECURE_SCHEME):
                return link
        return None

    @property
    def requires_restart(self) -> bool:
        return _is_true(self.restart_required)

    @property
    def wants_dialog(self) -> bool:
        return _is_true(self.show_dialog)

    @classmethod
    def from_element(cls, element: ET.Element) -> "FileRecord":
        """
        将 <file> 元素转换为 FileRecord 对象。
        """
        name = element.get("name")
        if not name:
            raise ParseError(
                "清单条目缺少 name 属性",
                context={"attributes": dict(element.attrib)},
            )

        links = []
        for link in element.findall("link"):
            url = (link.text or "").strip()
            if url:
                links.append(url)

        return cls(
            name=name,
            crc=element.get("crc", "").strip(),
            links=links,
            show_dialog=element.get("showDialog", ""),
            restart_required=element.get("restartRequired", ""),
        )


@dataclass
class Manifest:
    """远程文件清单，保持文档顺序"""

    files: List[FileRecord] = field(default_factory=list)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    @classmethod
    def from_xml(cls, content: Union[str, bytes]) -> "Manifest":
        """
        解析清单文档

        Args:
            content: files.xml 原始内容

        Returns:
            Manifest 对象

        Raises:
            ParseError: 文档格式错误或缺少必需属性
        """
        if isinstance(content, str):
            content = content.lstrip("\ufeff")

        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ParseError(
                f"清单不是合法的 XML: {e}", context={"error": str(e)}
            ) from e

        if root.tag != "filelist":
            raise ParseError(
                f"清单根元素应为 <filelist>，实际为 <{root.tag}>",
                context={"root": root.tag},
            )

        return cls(files=[FileRecord.from_element(el) for el in root.findall("file")])
