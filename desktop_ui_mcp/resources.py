"""
리소스

- file://{path}        파일 내용 또는 디렉터리 목록
- screenshot://{window} 화면(또는 지정한 창) 스크린샷 PNG

리소스 핸들러의 오류는 ResourceError 로 올려 보내고 MCP 프레임워크가
프로토콜 오류로 변환한다.
"""

import asyncio
import logging
import re
from pathlib import Path
from typing import List, Optional
from urllib.parse import unquote

from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import ResourceTemplate

FILE_SCHEME = "file://"
SCREENSHOT_SCHEME = "screenshot://"
ACTIVATE_DELAY = 0.5

TEXT_EXTENSIONS = {
    ".txt", ".md", ".js", ".ts", ".html", ".css", ".json", ".xml",
    ".csv", ".log", ".ini", ".cfg", ".conf", ".py", ".c", ".cpp",
    ".h", ".java", ".sh", ".bat", ".ps1",
}

MIME_TYPES = {
    ".txt": "text/plain",
    ".html": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".ts": "application/typescript",
    ".json": "application/json",
    ".xml": "application/xml",
    ".md": "text/markdown",
    ".csv": "text/csv",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".ppt": "application/vnd.ms-powerpoint",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ".zip": "application/zip",
    ".rar": "application/x-rar-compressed",
    ".7z": "application/x-7z-compressed",
    ".tar": "application/x-tar",
    ".gz": "application/gzip",
}

_DRIVE_RE = re.compile(r"^/[A-Za-z]:")


class ResourceError(Exception):
    pass


def get_mime_type(extension: str) -> str:
    return MIME_TYPES.get(extension.lower(), "application/octet-stream")


def file_path_from_uri(uri: str) -> str:
    path = unquote(uri[len(FILE_SCHEME):])
    # file:///C:/x → C:/x
    if _DRIVE_RE.match(path):
        path = path[1:]
    return path


def window_from_uri(uri: str) -> Optional[str]:
    window = unquote(uri[len(SCREENSHOT_SCHEME):]).strip("/")
    return window or None


class ResourceProvider:

    def __init__(self, automation, logger: Optional[logging.Logger] = None):
        self.automation = automation
        self.log = logger or logging.getLogger(__name__)

    def templates(self) -> List[ResourceTemplate]:
        return [
            ResourceTemplate(
                uriTemplate="file://{path}",
                name="file",
                description="파일 내용 또는 디렉터리 목록",
            ),
            ResourceTemplate(
                uriTemplate="screenshot://{window}",
                name="screenshot",
                description="전체 화면 또는 지정한 창의 스크린샷",
                mimeType="image/png",
            ),
        ]

    async def read(self, uri) -> List[ReadResourceContents]:
        uri = str(uri)
        if uri.startswith(FILE_SCHEME):
            return await self.read_file(file_path_from_uri(uri))
        if uri.startswith(SCREENSHOT_SCHEME):
            return await self.take_screenshot(window_from_uri(uri))
        raise ResourceError(f"Unknown resource: {uri}")

    async def read_file(self, file_path: str) -> List[ReadResourceContents]:
        """파일 읽기 / 디렉터리 목록"""
        self.log.debug(f"Reading file resource {file_path}")
        path = Path(file_path)
        try:
            if path.is_dir():
                names = sorted(p.name for p in path.iterdir())
                listing = "\n".join(names)
                return [ReadResourceContents(content=f"Directory: {file_path}\n{listing}", mime_type="text/plain")]

            data = path.read_bytes()
        except OSError as e:
            self.log.error(f"Error reading file resource: {e}")
            raise ResourceError(f"Failed to read file: {e}") from e

        extension = path.suffix.lower()
        mime_type = get_mime_type(extension)
        if extension in TEXT_EXTENSIONS:
            return [ReadResourceContents(content=data.decode("utf-8", errors="replace"), mime_type=mime_type)]
        # bytes 는 프레임워크가 base64 blob 으로 보낸다
        return [ReadResourceContents(content=data, mime_type=mime_type)]

    async def take_screenshot(self, window: Optional[str] = None) -> List[ReadResourceContents]:
        """스크린샷 찍기 (창을 지정하면 활성화 후 해당 영역만)"""
        self.log.debug(f"Taking screenshot of {window or 'full screen'}")
        try:
            await self.automation.initialize()
            region = None
            if window:
                if await self.automation.win_exists(window) != 1:
                    raise ResourceError(f'Window "{window}" not found')
                await self.automation.win_activate(window)
                # 창이 앞으로 올 때까지 잠깐 대기
                await asyncio.sleep(ACTIVATE_DELAY)
                region = await self.automation.win_get_pos(window)
            png = await self.automation.capture_screen(region)
        except Exception as e:
            self.log.error(f"Error taking screenshot: {e}")
            raise ResourceError(f"Failed to take screenshot: {e}") from e
        return [ReadResourceContents(content=png, mime_type="image/png")]
