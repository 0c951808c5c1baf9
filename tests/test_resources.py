import pytest

from desktop_ui_mcp import resources
from desktop_ui_mcp.automation import Rect
from desktop_ui_mcp.resources import (
    ResourceError,
    ResourceProvider,
    file_path_from_uri,
    get_mime_type,
    window_from_uri,
)

from .conftest import FakeAutomation


@pytest.fixture(autouse=True)
def no_activate_delay(monkeypatch):
    monkeypatch.setattr(resources, "ACTIVATE_DELAY", 0)


def test_mime_types():
    assert get_mime_type(".json") == "application/json"
    assert get_mime_type(".PNG") == "image/png"
    assert get_mime_type(".unknown") == "application/octet-stream"


def test_uri_parsing():
    assert file_path_from_uri("file:///C:/Users/me/a%20b.txt") == "C:/Users/me/a b.txt"
    assert file_path_from_uri("file:///tmp/x.txt") == "/tmp/x.txt"
    assert window_from_uri("screenshot://Untitled%20-%20Notepad") == "Untitled - Notepad"
    assert window_from_uri("screenshot://") is None


def test_templates(automation):
    templates = ResourceProvider(automation).templates()

    assert [t.uriTemplate for t in templates] == ["file://{path}", "screenshot://{window}"]


class TestFileResource:

    @pytest.mark.asyncio
    async def test_text_file(self, tmp_path, automation):
        path = tmp_path / "notes.txt"
        path.write_text("안녕하세요", encoding="utf-8")

        contents = await ResourceProvider(automation).read(f"file://{path}")

        assert contents[0].content == "안녕하세요"
        assert contents[0].mime_type == "text/plain"

    @pytest.mark.asyncio
    async def test_binary_file(self, tmp_path, automation):
        path = tmp_path / "image.png"
        path.write_bytes(b"\x89PNG\x00\x01")

        contents = await ResourceProvider(automation).read(f"file://{path}")

        assert contents[0].content == b"\x89PNG\x00\x01"
        assert contents[0].mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_directory_listing(self, tmp_path, automation):
        (tmp_path / "b.txt").write_text("b")
        (tmp_path / "a.txt").write_text("a")

        contents = await ResourceProvider(automation).read(f"file://{tmp_path}")

        assert contents[0].content == f"Directory: {tmp_path}\na.txt\nb.txt"
        assert contents[0].mime_type == "text/plain"

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path, automation):
        with pytest.raises(ResourceError, match="Failed to read file"):
            await ResourceProvider(automation).read(f"file://{tmp_path / 'missing.txt'}")

    @pytest.mark.asyncio
    async def test_unknown_scheme(self, automation):
        with pytest.raises(ResourceError, match="Unknown resource"):
            await ResourceProvider(automation).read("ftp://example")


class TestScreenshotResource:

    @pytest.mark.asyncio
    async def test_full_screen(self, automation):
        contents = await ResourceProvider(automation).read("screenshot://")

        assert contents[0].mime_type == "image/png"
        assert contents[0].content.startswith(b"\x89PNG")
        assert automation.last_call("capture_screen") == (None,)
        assert automation.initialized == 1

    @pytest.mark.asyncio
    async def test_window_region(self, automation):
        await ResourceProvider(automation).read("screenshot://Calculator")

        called = [name for name, _ in automation.calls]
        assert called == ["win_exists", "win_activate", "win_get_pos", "capture_screen"]
        assert automation.last_call("capture_screen") == (Rect(10, 20, 810, 620),)

    @pytest.mark.asyncio
    async def test_window_not_found(self):
        automation = FakeAutomation(results={"win_exists": 0})

        with pytest.raises(ResourceError, match='Window "Ghost" not found'):
            await ResourceProvider(automation).read("screenshot://Ghost")

        assert "capture_screen" not in [name for name, _ in automation.calls]

    @pytest.mark.asyncio
    async def test_capture_failure(self):
        automation = FakeAutomation(errors={"capture_screen": OSError("no display")})

        with pytest.raises(ResourceError, match="Failed to take screenshot: no display"):
            await ResourceProvider(automation).read("screenshot://")
