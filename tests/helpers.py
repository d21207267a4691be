import zlib
from typing import Any, Dict, List, Optional


def crc_of(data: bytes) -> str:
    return f"{zlib.crc32(data):X}"


class FakeContent:
    def __init__(self, body: bytes):
        self._body = body

    async def iter_chunked(self, n: int):
        for i in range(0, len(self._body), n):
            yield self._body[i : i + n]


class FakeResponse:
    def __init__(
        self,
        url: str,
        body: bytes = b"",
        status: int = 200,
        error: Optional[BaseException] = None,
    ):
        self.url = url
        self.status = status
        self.content = FakeContent(body)
        self._body = body
        self._error = error

    async def read(self) -> bytes:
        return self._body

    async def __aenter__(self) -> "FakeResponse":
        if self._error is not None:
            raise self._error
        return self

    async def __aexit__(self, *exc: Any) -> bool:
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession; routes map url -> bytes, status code or exception."""

    def __init__(self, routes: Dict[str, Any]):
        self.routes = routes
        self.requested: List[str] = []
        self.closed = False

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.requested.append(url)
        value = self.routes.get(url, 404)
        if isinstance(value, BaseException):
            return FakeResponse(url, error=value)
        if isinstance(value, int):
            return FakeResponse(url, status=value)
        if isinstance(value, str):
            value = value.encode("utf-8")
        return FakeResponse(url, body=value)

    async def close(self) -> None:
        self.closed = True

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc: Any) -> bool:
        await self.close()
        return False


def build_manifest(*files: Dict[str, Any]) -> str:
    """Render a files.xml document from dicts with name/crc/links/showDialog/restartRequired."""
    parts = ['<?xml version="1.0" encoding="UTF-8"?>', "<filelist>"]
    for f in files:
        attrs = f'name="{f["name"]}"'
        if "crc" in f:
            attrs += f' crc="{f["crc"]}"'
        attrs += f' showDialog="{f.get("showDialog", "false")}"'
        attrs += f' restartRequired="{f.get("restartRequired", "false")}"'
        links = "".join(f"<link>{link}</link>" for link in f.get("links", []))
        parts.append(f"<file {attrs}>{links}</file>")
    parts.append("</filelist>")
    return "\n".join(parts)
