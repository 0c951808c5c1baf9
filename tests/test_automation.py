import gc
import weakref

import pytest

from desktop_ui_mcp.automation import Automation, Rect


@pytest.fixture
def desktop():
    # pyautogui 는 디스플레이 없이 import 되지 않는다
    try:
        from desktop_ui_mcp.automation import desktop
    except Exception as e:
        pytest.skip(f"desktop backend unavailable: {e}")
    return desktop


class FakePopen:
    """subprocess.Popen 대역 (즉시 종료된 프로세스)"""

    instances = []

    def __init__(self, args, cwd=None, startupinfo=None):
        self.args = args
        self.pid = 4321
        self.returncode = 0
        FakePopen.instances.append(weakref.ref(self))

    def poll(self):
        return self.returncode


def test_rect_size():
    rect = Rect(10, 20, 810, 620)

    assert (rect.width, rect.height) == (800, 600)


def test_incomplete_backend_cannot_be_created():
    class MouseOnly(Automation):
        async def initialize(self):
            pass

        async def mouse_move(self, x, y, speed=10):
            return 1

    with pytest.raises(TypeError, match="abstract"):
        MouseOnly()


def test_desktop_backend_implements_every_primitive(desktop):
    automation = desktop.DesktopAutomation()

    assert isinstance(automation, Automation)


class TestSpawn:

    @pytest.fixture(autouse=True)
    def fake_popen(self, desktop, monkeypatch):
        FakePopen.instances = []
        monkeypatch.setattr(desktop.subprocess, "Popen", FakePopen)

    @pytest.mark.asyncio
    async def test_run_keeps_no_process_reference(self, desktop):
        automation = desktop.DesktopAutomation()

        pid = await automation.run("notepad.exe")

        assert pid == 4321
        gc.collect()
        assert [ref() for ref in FakePopen.instances] == [None]

    @pytest.mark.asyncio
    async def test_run_wait_returns_exit_code(self, desktop):
        automation = desktop.DesktopAutomation()

        exit_code = await automation.run_wait("notepad.exe")

        assert exit_code == 0
        gc.collect()
        assert [ref() for ref in FakePopen.instances] == [None]
