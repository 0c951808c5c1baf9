import pytest

from desktop_ui_mcp.automation import Point, Rect
from desktop_ui_mcp.registry import build_registry

from .conftest import FakeAutomation


async def call(name, arguments, results=None, errors=None):
    automation = FakeAutomation(results=results, errors=errors)
    result = await build_registry(automation).call(name, arguments)
    return result, automation


class TestMouse:

    @pytest.mark.asyncio
    async def test_get_pos(self):
        result, _ = await call("mouseGetPos", {}, results={"mouse_get_pos": Point(100, 200)})

        assert result.content[0].text == "Mouse position: (100, 200)"

    @pytest.mark.asyncio
    async def test_click_drag(self):
        result, automation = await call("mouseClickDrag", {"x1": 0, "y1": 1, "x2": 10, "y2": 11})

        assert result.content[0].text == "Mouse dragged from (0, 1) to (10, 11) with result: 1"
        assert automation.last_call("mouse_click_drag") == ("left", 0, 1, 10, 11, 10)

    @pytest.mark.asyncio
    async def test_wheel(self):
        result, _ = await call("mouseWheel", {"direction": "down", "clicks": 3})

        assert result.content[0].text == "Mouse wheel scrolled down 3 click(s)"

    @pytest.mark.asyncio
    async def test_down_up_default_button(self):
        down, _ = await call("mouseDown", {})
        up, _ = await call("mouseUp", {"button": "right"})

        assert down.content[0].text == "Mouse left button pressed down"
        assert up.content[0].text == "Mouse right button released"


class TestKeyboard:

    @pytest.mark.asyncio
    async def test_send_default_mode(self):
        result, automation = await call("send", {"text": "^c"})

        assert result.content[0].text == 'Sent keystrokes: "^c" with mode 0'
        assert automation.last_call("send") == ("^c", 0)

    @pytest.mark.asyncio
    async def test_clip_round(self):
        put, _ = await call("clipPut", {"text": "hello"})
        get, _ = await call("clipGet", {}, results={"clip_get": "hello"})

        assert put.content[0].text == 'Text set to clipboard: "hello"'
        assert get.content[0].text == 'Clipboard content: "hello"'

    @pytest.mark.asyncio
    async def test_opt_alias(self):
        result, automation = await call("opt", {"option": "WinTitleMatchMode", "value": 2}, results={"opt": 1})

        assert result.content[0].text == 'AutoIt option "WinTitleMatchMode" set to 2 with result: 1'
        assert automation.last_call("opt") == ("WinTitleMatchMode", 2)

    @pytest.mark.asyncio
    async def test_tool_tip_position(self):
        with_pos, _ = await call("toolTip", {"text": "hi", "x": 5, "y": 6})
        without_pos, _ = await call("toolTip", {"text": "hi"})

        assert with_pos.content[0].text == 'Tooltip displayed: "hi" at position (5, 6)'
        assert without_pos.content[0].text == 'Tooltip displayed: "hi"'


class TestWindow:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "value, text",
        [(1, 'Window "Calc" exists'), (0, 'Window "Calc" does not exist')],
    )
    async def test_exists(self, value, text):
        result, _ = await call("winExists", {"title": "Calc"}, results={"win_exists": value})

        assert result.isError is False
        assert result.content[0].text == text

    @pytest.mark.asyncio
    async def test_active_without_text(self):
        result, automation = await call("winActive", {"title": "Calc"}, results={"win_active": 0})

        assert result.content[0].text == 'Window "Calc" is not active'
        assert automation.last_call("win_active") == ("Calc", None)

    @pytest.mark.asyncio
    async def test_get_pos(self):
        result, _ = await call("winGetPos", {"title": "Calc"}, results={"win_get_pos": Rect(10, 20, 810, 620)})

        assert result.content[0].text == 'Window "Calc" position: Left=10, Top=20, Width=800, Height=600'

    @pytest.mark.asyncio
    async def test_get_pos_missing_window_is_fault(self):
        result, _ = await call(
            "winGetPos", {"title": "Nope"}, errors={"win_get_pos": LookupError('Window "Nope" not found')}
        )

        assert result.isError is True
        assert result.content[0].text == 'Error: Window "Nope" not found'

    @pytest.mark.asyncio
    async def test_move_with_size(self):
        result, _ = await call("winMove", {"title": "Calc", "x": 1, "y": 2, "width": 300, "height": 200})

        assert result.content[0].text == 'Window "Calc" moved to (1, 2) and resized to 300x200 with result: 1'

    @pytest.mark.asyncio
    async def test_wait_timeout(self):
        result, automation = await call(
            "winWaitClose", {"title": "Setup", "timeout": 5}, results={"win_wait_close": 0}
        )

        assert result.content[0].text == 'Window "Setup" did not close within the timeout'
        assert automation.last_call("win_wait_close") == ("Setup", None, 5)


class TestControl:

    @pytest.mark.asyncio
    async def test_click_defaults(self):
        result, automation = await call("controlClick", {"title": "Calc", "control": "Button1"})

        assert result.content[0].text == 'Clicked on control "Button1" in window "Calc"'
        assert automation.last_call("control_click") == ("Calc", None, "Button1", "left", 1, None, None)

    @pytest.mark.asyncio
    async def test_set_text_failed(self):
        result, _ = await call(
            "controlSetText",
            {"title": "Calc", "control": "Edit1", "controlText": "42"},
            results={"control_set_text": 0},
        )

        assert result.isError is False
        assert result.content[0].text == 'Failed to set text in control "Edit1"'

    @pytest.mark.asyncio
    async def test_get_text(self):
        result, _ = await call(
            "controlGetText", {"title": "Calc", "control": "Edit1"}, results={"control_get_text": "42"}
        )

        assert result.content[0].text == 'Text from control "Edit1": "42"'

    @pytest.mark.asyncio
    async def test_command_unsupported_is_fault(self):
        result, _ = await call(
            "controlCommand",
            {"title": "Calc", "control": "Edit1", "command": "Dance"},
            errors={"control_command": ValueError("Unsupported command: Dance")},
        )

        assert result.isError is True
        assert "Unsupported command: Dance" in result.content[0].text

    @pytest.mark.asyncio
    async def test_get_handle(self):
        result, _ = await call(
            "controlGetHandle", {"windowHandle": 100, "control": "Edit1"}, results={"control_get_handle": 200}
        )

        assert result.content[0].text == 'Control "Edit1" handle: 200'


class TestProcess:

    @pytest.mark.asyncio
    async def test_run(self):
        result, automation = await call("run", {"program": "notepad.exe"}, results={"run": 4321})

        assert result.content[0].text == 'Program "notepad.exe" started with process ID: 4321'
        assert automation.last_call("run") == ("notepad.exe", None, None)

    @pytest.mark.asyncio
    async def test_exists_pid_is_success(self):
        result, _ = await call("processExists", {"process": "notepad.exe"}, results={"process_exists": 4321})

        assert result.content[0].text == 'Process "notepad.exe" exists with PID: 4321'

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "pid, text",
        [
            (777, 'Process "setup.exe" exists with PID: 777'),
            (0, 'Timed out waiting for process "setup.exe"'),
        ],
    )
    async def test_wait_returns_pid(self, pid, text):
        result, _ = await call("processWait", {"process": "setup.exe", "timeout": 3}, results={"process_wait": pid})

        assert result.content[0].text == text

    @pytest.mark.asyncio
    async def test_close_failed(self):
        result, _ = await call("processClose", {"process": "ghost.exe"}, results={"process_close": 0})

        assert result.content[0].text == 'Failed to close process "ghost.exe"'

    @pytest.mark.asyncio
    async def test_spawn_error_is_fault(self):
        result, _ = await call(
            "runWait", {"program": "missing.exe"}, errors={"run_wait": FileNotFoundError("missing.exe")}
        )

        assert result.isError is True
        assert result.content[0].text == "Error: missing.exe"
