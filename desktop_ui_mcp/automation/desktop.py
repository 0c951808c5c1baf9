"""
DesktopAutomation - Automation 인터페이스의 Windows 구현

- 마우스/키보드/스크린샷: pyautogui, PIL
- 창/컨트롤: pywinauto (win32 백엔드), win32gui
- 프로세스: psutil, subprocess, win32process
- 클립보드: pyperclip

pywinauto / pywin32 는 Windows 전용이므로 사용하는 시점에 import 한다.
"""

import asyncio
import io
import logging
import os
import re
import shlex
import subprocess
import time
from typing import Dict, List, Optional

import psutil
import pyautogui
import pyperclip
from PIL import Image

from . import Automation, Point, Rect
from .syntax import control_criteria, parse_advanced, parse_handle, title_matches, to_send_keys

log = logging.getLogger(__name__)

WINDOW_BACKEND = "win32"
MAX_CAPTURE_SIZE = 1920

SW_HIDE = 0
SW_SHOW = 5

# AutoItSetOption 기본값 (여기서 실제로 쓰는 것은 일부)
DEFAULT_OPTIONS = {
    "WinTitleMatchMode": 1,
    "WinWaitDelay": 250,
    "SendKeyDelay": 5,
    "MouseClickDelay": 10,
    "MouseCoordMode": 1,
    "CaretCoordMode": 1,
    "PixelCoordMode": 1,
    "WinDetectHiddenText": 0,
    "WinSearchChildren": 0,
    "WinTextMatchMode": 1,
    "SendCapslockMode": 1,
}

# ProcessSetPriority 0~5
PRIORITY_CLASSES = [
    ("IDLE_PRIORITY_CLASS", 19),
    ("BELOW_NORMAL_PRIORITY_CLASS", 10),
    ("NORMAL_PRIORITY_CLASS", 0),
    ("ABOVE_NORMAL_PRIORITY_CLASS", -5),
    ("HIGH_PRIORITY_CLASS", -10),
    ("REALTIME_PRIORITY_CLASS", -20),
]

# MouseGetCursor 반환값 순서
CURSOR_IDS = [
    ("IDC_APPSTARTING", 1), ("IDC_ARROW", 2), ("IDC_CROSS", 3), ("IDC_HELP", 4),
    ("IDC_IBEAM", 5), ("IDC_ICON", 6), ("IDC_NO", 7), ("IDC_SIZE", 8),
    ("IDC_SIZEALL", 9), ("IDC_SIZENESW", 10), ("IDC_SIZENS", 11), ("IDC_SIZENWSE", 12),
    ("IDC_SIZEWE", 13), ("IDC_UPARROW", 14), ("IDC_WAIT", 15), ("IDC_HAND", 16),
]

# Shutdown 플래그
SD_LOGOFF = 0
SD_SHUTDOWN = 1
SD_REBOOT = 2
SD_FORCE = 4
SD_POWERDOWN = 8
SD_FORCEHUNG = 16
SD_STANDBY = 32
SD_HIBERNATE = 64


def _rect(r) -> Rect:
    return Rect(int(r.left), int(r.top), int(r.right), int(r.bottom))


def _truncate(value: str, buf_size: Optional[int]) -> str:
    return value[:buf_size] if buf_size else value


class DesktopAutomation(Automation):

    def __init__(self):
        self.options: Dict[str, int] = dict(DEFAULT_OPTIONS)
        self._initialized = False
        self._tooltip = None

    async def initialize(self) -> None:
        if self._initialized:
            return
        # pyautogui 안전 설정
        pyautogui.FAILSAFE = True
        pyautogui.PAUSE = 0.1
        self._initialized = True
        log.debug("Desktop automation initialized")

    # ═══════════════════════════════════════════════════════════════
    # 내부 헬퍼
    # ═══════════════════════════════════════════════════════════════

    def _desktop(self):
        from pywinauto import Desktop
        return Desktop(backend=WINDOW_BACKEND)

    @property
    def _poll_interval(self) -> float:
        return max(self.options.get("WinWaitDelay", 250), 10) / 1000.0

    @staticmethod
    def _duration(speed: Optional[int]) -> float:
        # AutoIt 속도 0(즉시)~100(가장 느림)
        return max(speed or 0, 0) * 0.01

    def _window_has_text(self, win, text: str) -> bool:
        if text in win.window_text():
            return True
        for child in win.descendants():
            try:
                if text in child.window_text():
                    return True
            except Exception:  # 자식 창이 사라진 경우
                continue
        return False

    def _find_windows(self, title: str, text: Optional[str] = None) -> List:
        props = parse_advanced(title)
        desktop = self._desktop()

        if props is not None and "HANDLE" in props:
            win = self._window_by_handle(parse_handle(props["HANDLE"]))
            candidates = [win] if win is not None else []
        else:
            candidates = desktop.windows()

        mode = self.options.get("WinTitleMatchMode", 1)
        found = []
        for win in candidates:
            try:
                win_title = win.window_text()
                if props is None:
                    if not title_matches(win_title, title, mode):
                        continue
                else:
                    if "ACTIVE" in props and not win.is_active():
                        continue
                    if "TITLE" in props and win_title != props["TITLE"]:
                        continue
                    if "REGEXPTITLE" in props and not re.search(props["REGEXPTITLE"], win_title):
                        continue
                    if "CLASS" in props and win.class_name() != props["CLASS"]:
                        continue
                if text and not self._window_has_text(win, text):
                    continue
                found.append(win)
            except Exception as e:  # 조회 도중 닫힌 창
                log.debug(f"Skipping window during lookup: {e}")
        return found

    def _find_window(self, title: str, text: Optional[str] = None):
        found = self._find_windows(title, text)
        return found[0] if found else None

    def _window_by_handle(self, handle: int):
        from pywinauto.findwindows import ElementNotFoundError
        try:
            return self._desktop().window(handle=int(handle)).wrapper_object()
        except ElementNotFoundError:
            return None

    def _control_in(self, win, control: str):
        from pywinauto.findwindows import ElementAmbiguousError, ElementNotFoundError
        spec = self._desktop().window(handle=win.handle)
        try:
            return spec.child_window(**control_criteria(control)).wrapper_object()
        except (ElementNotFoundError, ElementAmbiguousError):
            return None

    def _find_control(self, title: str, text: Optional[str], control: str):
        win = self._find_window(title, text)
        if win is None:
            return None, None
        return win, self._control_in(win, control)

    def _require_window(self, title: str, text: Optional[str]):
        win = self._find_window(title, text)
        if win is None:
            raise LookupError(f'Window "{title}" not found')
        return win

    def _require_control(self, title: str, text: Optional[str], control: str):
        win, ctrl = self._find_control(title, text, control)
        if win is None:
            raise LookupError(f'Window "{title}" not found')
        if ctrl is None:
            raise LookupError(f'Control "{control}" not found in window "{title}"')
        return win, ctrl

    async def _wait_until(self, predicate, timeout: Optional[float]):
        """predicate() 가 참값을 반환할 때까지 폴링. timeout 0/None 은 무한 대기."""
        deadline = time.monotonic() + timeout if timeout else None
        while True:
            result = predicate()
            if result:
                return result
            if deadline is not None and time.monotonic() >= deadline:
                return 0
            await asyncio.sleep(self._poll_interval)

    @staticmethod
    def _startupinfo(show_flag: Optional[int]):
        if show_flag is None or os.name != "nt":
            return None
        si = subprocess.STARTUPINFO()
        si.dwFlags |= subprocess.STARTF_USESHOWWINDOW
        si.wShowWindow = show_flag
        return si

    def _spawn(self, program: str, working_dir: Optional[str], show_flag: Optional[int]) -> subprocess.Popen:
        args = program if os.name == "nt" else shlex.split(program)
        proc = subprocess.Popen(args, cwd=working_dir or None, startupinfo=self._startupinfo(show_flag))
        log.debug(f"Spawned {program!r} pid={proc.pid}")
        return proc

    def _spawn_as(self, user, domain, password, logon_flag, program, working_dir, show_flag):
        import win32con
        import win32process

        si = win32process.STARTUPINFO()
        if show_flag is not None:
            si.dwFlags = win32con.STARTF_USESHOWWINDOW
            si.wShowWindow = show_flag
        # logon_flag: 0 프로필 없음, 1 프로필 로드(LOGON_WITH_PROFILE), 2 네트워크 자격증명만
        h_process, h_thread, pid, _ = win32process.CreateProcessWithLogonW(
            user, domain, password, logon_flag, None, program, 0, None, working_dir or None, si
        )
        h_thread.Close()
        return h_process, pid

    @staticmethod
    def _find_process(process: str):
        process = str(process).strip()
        if process.isdigit():
            pid = int(process)
            return psutil.Process(pid) if psutil.pid_exists(pid) else None
        name = process.lower()
        for p in psutil.process_iter(["name"]):
            if (p.info.get("name") or "").lower() == name:
                return p
        return None

    def _process_pid(self, process: str) -> int:
        p = self._find_process(process)
        return p.pid if p is not None else 0

    # ═══════════════════════════════════════════════════════════════
    # 마우스
    # ═══════════════════════════════════════════════════════════════

    async def mouse_move(self, x, y, speed=10):
        pyautogui.moveTo(x, y, duration=self._duration(speed))
        return 1

    async def mouse_click(self, button="left", x=None, y=None, clicks=1, speed=10):
        if x is not None and y is not None:
            pyautogui.moveTo(x, y, duration=self._duration(speed))
        interval = self.options.get("MouseClickDelay", 10) / 1000.0
        pyautogui.click(clicks=clicks, interval=interval, button=button)
        return 1

    async def mouse_click_drag(self, button, x1, y1, x2, y2, speed=10):
        pyautogui.moveTo(x1, y1)
        pyautogui.dragTo(x2, y2, duration=self._duration(speed), button=button)
        return 1

    async def mouse_down(self, button="left"):
        pyautogui.mouseDown(button=button)

    async def mouse_up(self, button="left"):
        pyautogui.mouseUp(button=button)

    async def mouse_get_pos(self):
        pos = pyautogui.position()
        return Point(int(pos.x), int(pos.y))

    async def mouse_get_cursor(self):
        import win32con
        import win32gui

        _, cursor, _ = win32gui.GetCursorInfo()
        for name, cursor_id in CURSOR_IDS:
            if cursor == win32gui.LoadCursor(0, getattr(win32con, name)):
                return cursor_id
        return 0

    async def mouse_wheel(self, direction, clicks):
        pyautogui.scroll(clicks if direction == "up" else -clicks)

    # ═══════════════════════════════════════════════════════════════
    # 키보드 / 클립보드 / 옵션
    # ═══════════════════════════════════════════════════════════════

    async def send(self, text, mode=0):
        delay = self.options.get("SendKeyDelay", 5) / 1000.0
        if mode == 1:
            pyautogui.write(text, interval=delay)
            return
        from pywinauto import keyboard
        keyboard.send_keys(to_send_keys(text), pause=delay,
                           with_spaces=True, with_tabs=True, with_newlines=True)

    async def clip_get(self, buf_size=None):
        return _truncate(pyperclip.paste() or "", buf_size)

    async def clip_put(self, text):
        pyperclip.copy(text)
        return 1

    async def auto_it_set_option(self, option, value):
        previous = self.options.get(option, 0)
        self.options[option] = value
        return previous

    async def tool_tip(self, text, x=None, y=None):
        import win32con
        import win32gui

        if self._tooltip is not None:
            win32gui.DestroyWindow(self._tooltip)
            self._tooltip = None
        if not text:
            return
        if x is None or y is None:
            pos = pyautogui.position()
            x, y = pos.x + 16, pos.y + 16
        lines = text.splitlines() or [text]
        width = 8 * max(len(line) for line in lines) + 12
        height = 16 * len(lines) + 6
        self._tooltip = win32gui.CreateWindowEx(
            win32con.WS_EX_TOPMOST | win32con.WS_EX_TOOLWINDOW,
            "STATIC", text,
            win32con.WS_POPUP | win32con.WS_BORDER | win32con.WS_VISIBLE,
            x, y, width, height, 0, 0, 0, None,
        )

    # ═══════════════════════════════════════════════════════════════
    # 창
    # ═══════════════════════════════════════════════════════════════

    async def win_activate(self, title, text=None):
        win = self._find_window(title, text)
        if win is None:
            return 0
        if win.is_minimized():
            win.restore()
        win.set_focus()
        return 1

    async def win_activate_by_handle(self, handle):
        win = self._window_by_handle(handle)
        if win is None:
            return 0
        if win.is_minimized():
            win.restore()
        win.set_focus()
        return 1

    async def win_active(self, title, text=None):
        return 1 if any(w.is_active() for w in self._find_windows(title, text)) else 0

    async def win_close(self, title, text=None):
        win = self._find_window(title, text)
        if win is None:
            return 0
        win.close()
        return 1

    async def win_exists(self, title, text=None):
        return 1 if self._find_window(title, text) is not None else 0

    async def win_get_handle(self, title, text=None):
        win = self._find_window(title, text)
        return int(win.handle) if win is not None else 0

    async def win_get_pos(self, title, text=None):
        return _rect(self._require_window(title, text).rectangle())

    async def win_get_text(self, title, text=None, buf_size=None):
        win = self._require_window(title, text)
        parts = [c.window_text() for c in win.descendants() if c.window_text()]
        return _truncate("\n".join(parts), buf_size)

    async def win_get_title(self, title, text=None, buf_size=None):
        return _truncate(self._require_window(title, text).window_text(), buf_size)

    async def win_move(self, title, text, x, y, width=None, height=None):
        import win32gui

        win = self._find_window(title, text)
        if win is None:
            return 0
        rect = win.rectangle()
        win32gui.MoveWindow(win.handle, x, y, width or rect.width(), height or rect.height(), True)
        return 1

    async def win_set_state(self, title, text, flags):
        import win32gui

        win = self._find_window(title, text)
        if win is None:
            return 0
        win32gui.ShowWindow(win.handle, flags)
        return 1

    async def win_wait(self, title, text=None, timeout=None):
        return await self._wait_until(
            lambda: 1 if self._find_window(title, text) is not None else 0, timeout)

    async def win_wait_active(self, title, text=None, timeout=None):
        return await self._wait_until(
            lambda: 1 if any(w.is_active() for w in self._find_windows(title, text)) else 0, timeout)

    async def win_wait_close(self, title, text=None, timeout=None):
        return await self._wait_until(
            lambda: 1 if self._find_window(title, text) is None else 0, timeout)

    # ═══════════════════════════════════════════════════════════════
    # 컨트롤
    # ═══════════════════════════════════════════════════════════════

    @staticmethod
    def _click_control(ctrl, button, clicks, x, y):
        kwargs = {"button": button}
        if x is not None and y is not None:
            kwargs["coords"] = (x, y)
        for _ in range(max(clicks, 1)):
            ctrl.click(**kwargs)

    async def control_click(self, title, text, control, button="left", clicks=1, x=None, y=None):
        _, ctrl = self._find_control(title, text, control)
        if ctrl is None:
            return 0
        self._click_control(ctrl, button, clicks, x, y)
        return 1

    async def control_click_by_handle(self, window_handle, control_handle, button="left",
                                      clicks=1, x=None, y=None):
        if self._window_by_handle(window_handle) is None:
            return 0
        ctrl = self._window_by_handle(control_handle)
        if ctrl is None:
            return 0
        self._click_control(ctrl, button, clicks, x, y)
        return 1

    async def control_command(self, title, text, control, command, extra=None, buf_size=None):
        import win32gui

        _, ctrl = self._require_control(title, text, control)
        cmd = command.strip().lower()
        if cmd == "isvisible":
            result = int(ctrl.is_visible())
        elif cmd == "isenabled":
            result = int(ctrl.is_enabled())
        elif cmd == "ischecked":
            result = int(ctrl.get_check_state() == 1)
        elif cmd == "check":
            ctrl.check()
            result = 1
        elif cmd == "uncheck":
            ctrl.uncheck()
            result = 1
        elif cmd == "showdropdown":
            win32gui.SendMessage(ctrl.handle, 0x014F, 1, 0)  # CB_SHOWDROPDOWN
            result = 1
        elif cmd == "hidedropdown":
            win32gui.SendMessage(ctrl.handle, 0x014F, 0, 0)
            result = 1
        elif cmd == "getlinecount":
            result = ctrl.line_count()
        elif cmd == "getline":
            result = ctrl.get_line(int(extra) - 1)
        elif cmd == "getselected":
            start, end = ctrl.selection_indices()
            result = ctrl.text_block()[start:end]
        elif cmd == "editpaste":
            start, end = ctrl.selection_indices()
            ctrl.set_edit_text(extra or "", start, end)
            result = 1
        elif cmd in ("selectstring", "setcurrentselection"):
            ctrl.select(int(extra) if cmd == "setcurrentselection" else extra)
            result = 1
        elif cmd == "getcurrentselection":
            result = ctrl.selected_text()
        elif cmd == "findstring":
            texts = ctrl.item_texts()
            result = texts.index(extra) if extra in texts else -1
        else:
            raise ValueError(f"Unsupported control command: {command}")
        return _truncate(str(result), buf_size)

    async def control_get_text(self, title, text, control, buf_size=None):
        _, ctrl = self._require_control(title, text, control)
        return _truncate(ctrl.window_text(), buf_size)

    async def control_set_text(self, title, text, control, control_text):
        _, ctrl = self._find_control(title, text, control)
        if ctrl is None:
            return 0
        ctrl.set_window_text(control_text)
        return 1

    async def control_send(self, title, text, control, send_text, mode=0):
        _, ctrl = self._find_control(title, text, control)
        if ctrl is None:
            return 0
        if mode == 1:
            ctrl.send_chars(send_text)
        else:
            ctrl.send_keystrokes(to_send_keys(send_text), with_spaces=True, with_tabs=True)
        return 1

    async def control_focus(self, title, text, control):
        _, ctrl = self._find_control(title, text, control)
        if ctrl is None:
            return 0
        ctrl.set_focus()
        return 1

    async def control_get_handle(self, window_handle, control):
        win = self._window_by_handle(window_handle)
        if win is None:
            return 0
        ctrl = self._control_in(win, control)
        return int(ctrl.handle) if ctrl is not None else 0

    async def control_get_pos(self, title, text, control):
        win, ctrl = self._require_control(title, text, control)
        # 창 기준 좌표
        w, c = win.rectangle(), ctrl.rectangle()
        return Rect(c.left - w.left, c.top - w.top, c.right - w.left, c.bottom - w.top)

    async def control_move(self, title, text, control, x, y, width=None, height=None):
        import win32gui

        _, ctrl = self._find_control(title, text, control)
        if ctrl is None:
            return 0
        rect = ctrl.rectangle()
        win32gui.MoveWindow(ctrl.handle, x, y, width or rect.width(), height or rect.height(), True)
        return 1

    async def _show_control(self, title, text, control, flag):
        import win32gui

        _, ctrl = self._find_control(title, text, control)
        if ctrl is None:
            return 0
        win32gui.ShowWindow(ctrl.handle, flag)
        return 1

    async def control_show(self, title, text, control):
        return await self._show_control(title, text, control, SW_SHOW)

    async def control_hide(self, title, text, control):
        return await self._show_control(title, text, control, SW_HIDE)

    # ═══════════════════════════════════════════════════════════════
    # 프로세스 / 시스템
    # ═══════════════════════════════════════════════════════════════

    async def run(self, program, working_dir=None, show_flag=None):
        return self._spawn(program, working_dir, show_flag).pid

    async def run_wait(self, program, working_dir=None, show_flag=None):
        proc = self._spawn(program, working_dir, show_flag)
        while proc.poll() is None:
            await asyncio.sleep(self._poll_interval)
        return proc.returncode

    async def run_as(self, user, domain, password, logon_flag, program, working_dir=None, show_flag=None):
        h_process, pid = self._spawn_as(user, domain, password, logon_flag, program, working_dir, show_flag)
        h_process.Close()
        return pid

    async def run_as_wait(self, user, domain, password, logon_flag, program, working_dir=None, show_flag=None):
        import win32event
        import win32process

        h_process, _ = self._spawn_as(user, domain, password, logon_flag, program, working_dir, show_flag)
        try:
            while win32event.WaitForSingleObject(h_process, 0) != win32event.WAIT_OBJECT_0:
                await asyncio.sleep(self._poll_interval)
            return win32process.GetExitCodeProcess(h_process)
        finally:
            h_process.Close()

    async def process_exists(self, process):
        return self._process_pid(process)

    async def process_close(self, process):
        p = self._find_process(process)
        if p is None:
            return 0
        try:
            p.terminate()
        except psutil.Error as e:
            log.warning(f"Failed to terminate {process}: {e}")
            return 0
        return 1

    async def process_set_priority(self, process, priority):
        if not 0 <= priority < len(PRIORITY_CLASSES):
            return 0
        p = self._find_process(process)
        if p is None:
            return 0
        name, niceness = PRIORITY_CLASSES[priority]
        try:
            p.nice(getattr(psutil, name, niceness))
        except psutil.Error as e:
            log.warning(f"Failed to set priority of {process}: {e}")
            return 0
        return 1

    async def process_wait(self, process, timeout=None):
        return await self._wait_until(lambda: self._process_pid(process), timeout)

    async def process_wait_close(self, process, timeout=None):
        return await self._wait_until(lambda: 1 if self._process_pid(process) == 0 else 0, timeout)

    async def shutdown(self, flags):
        if flags & SD_HIBERNATE:
            args = ["shutdown", "/h"]
        elif flags & SD_STANDBY:
            args = ["rundll32.exe", "powrprof.dll,SetSuspendState", "0,1,0"]
        else:
            if flags & SD_POWERDOWN:
                args = ["shutdown", "/p"]
            elif flags & SD_REBOOT:
                args = ["shutdown", "/r", "/t", "0"]
            elif flags & SD_SHUTDOWN:
                args = ["shutdown", "/s", "/t", "0"]
            else:
                args = ["shutdown", "/l"]
            if flags & (SD_FORCE | SD_FORCEHUNG):
                args.append("/f")
        completed = subprocess.run(args, capture_output=True)
        return 1 if completed.returncode == 0 else 0

    # ═══════════════════════════════════════════════════════════════
    # 화면
    # ═══════════════════════════════════════════════════════════════

    async def capture_screen(self, region=None):
        if region:
            img = pyautogui.screenshot(region=(region.left, region.top, region.width, region.height))
        else:
            img = pyautogui.screenshot()

        # 이미지 크기 조절 (너무 크면 축소)
        if img.width > MAX_CAPTURE_SIZE or img.height > MAX_CAPTURE_SIZE:
            ratio = min(MAX_CAPTURE_SIZE / img.width, MAX_CAPTURE_SIZE / img.height)
            new_size = (int(img.width * ratio), int(img.height * ratio))
            img = img.resize(new_size, Image.LANCZOS)

        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()
