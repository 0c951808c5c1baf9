"""
데스크톱 자동화 기능 인터페이스

도구 핸들러는 이 인터페이스만 호출한다. 실제 구현은 DesktopAutomation
(pyautogui / pywinauto / psutil / pyperclip, automation/desktop.py).

반환 규약은 AutoIt 과 같다:
  - 성공/실패 플래그는 1 / 0
  - 프로세스 조회/대기는 PID (없으면 0)
  - 핸들 조회는 핸들 (없으면 0)
  - 위치 조회는 Rect(left, top, right, bottom)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Rect:
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top


class Automation(ABC):
    """
    자동화 기능 (외부 협력자).

    initialize() 는 멱등이며 모든 기능 호출 전에 불러도 된다.
    각 기능은 await 로 호출하며 네이티브 호출이 실패하면 예외를 던진다.
    """

    @abstractmethod
    async def initialize(self) -> None:
        raise NotImplementedError

    # ── 마우스 ──
    @abstractmethod
    async def mouse_move(self, x: int, y: int, speed: int = 10) -> int:
        raise NotImplementedError

    @abstractmethod
    async def mouse_click(self, button: str = "left", x: Optional[int] = None,
                          y: Optional[int] = None, clicks: int = 1, speed: int = 10) -> int:
        raise NotImplementedError

    @abstractmethod
    async def mouse_click_drag(self, button: str, x1: int, y1: int, x2: int, y2: int,
                               speed: int = 10) -> int:
        raise NotImplementedError

    @abstractmethod
    async def mouse_down(self, button: str = "left") -> None:
        raise NotImplementedError

    @abstractmethod
    async def mouse_up(self, button: str = "left") -> None:
        raise NotImplementedError

    @abstractmethod
    async def mouse_get_pos(self) -> Point:
        raise NotImplementedError

    @abstractmethod
    async def mouse_get_cursor(self) -> int:
        raise NotImplementedError

    @abstractmethod
    async def mouse_wheel(self, direction: str, clicks: int) -> None:
        raise NotImplementedError

    # ── 키보드 / 클립보드 ──
    @abstractmethod
    async def send(self, text: str, mode: int = 0) -> None:
        raise NotImplementedError

    @abstractmethod
    async def clip_get(self, buf_size: Optional[int] = None) -> str:
        raise NotImplementedError

    @abstractmethod
    async def clip_put(self, text: str) -> int:
        raise NotImplementedError

    @abstractmethod
    async def auto_it_set_option(self, option: str, value: int) -> int:
        raise NotImplementedError

    async def opt(self, option: str, value: int) -> int:
        return await self.auto_it_set_option(option, value)

    @abstractmethod
    async def tool_tip(self, text: str, x: Optional[int] = None, y: Optional[int] = None) -> None:
        raise NotImplementedError

    # ── 창 ──
    @abstractmethod
    async def win_activate(self, title: str, text: Optional[str] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def win_activate_by_handle(self, handle: int) -> int:
        raise NotImplementedError

    @abstractmethod
    async def win_active(self, title: str, text: Optional[str] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def win_close(self, title: str, text: Optional[str] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def win_exists(self, title: str, text: Optional[str] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def win_get_handle(self, title: str, text: Optional[str] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def win_get_pos(self, title: str, text: Optional[str] = None) -> Rect:
        raise NotImplementedError

    @abstractmethod
    async def win_get_text(self, title: str, text: Optional[str] = None,
                           buf_size: Optional[int] = None) -> str:
        raise NotImplementedError

    @abstractmethod
    async def win_get_title(self, title: str, text: Optional[str] = None,
                            buf_size: Optional[int] = None) -> str:
        raise NotImplementedError

    @abstractmethod
    async def win_move(self, title: str, text: Optional[str], x: int, y: int,
                       width: Optional[int] = None, height: Optional[int] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def win_set_state(self, title: str, text: Optional[str], flags: int) -> int:
        raise NotImplementedError

    @abstractmethod
    async def win_wait(self, title: str, text: Optional[str] = None,
                       timeout: Optional[float] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def win_wait_active(self, title: str, text: Optional[str] = None,
                              timeout: Optional[float] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def win_wait_close(self, title: str, text: Optional[str] = None,
                             timeout: Optional[float] = None) -> int:
        raise NotImplementedError

    # ── 컨트롤 ──
    @abstractmethod
    async def control_click(self, title: str, text: Optional[str], control: str,
                            button: str = "left", clicks: int = 1,
                            x: Optional[int] = None, y: Optional[int] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def control_click_by_handle(self, window_handle: int, control_handle: int,
                                      button: str = "left", clicks: int = 1,
                                      x: Optional[int] = None, y: Optional[int] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def control_command(self, title: str, text: Optional[str], control: str,
                              command: str, extra: Optional[str] = None,
                              buf_size: Optional[int] = None) -> str:
        raise NotImplementedError

    @abstractmethod
    async def control_get_text(self, title: str, text: Optional[str], control: str,
                               buf_size: Optional[int] = None) -> str:
        raise NotImplementedError

    @abstractmethod
    async def control_set_text(self, title: str, text: Optional[str], control: str,
                               control_text: str) -> int:
        raise NotImplementedError

    @abstractmethod
    async def control_send(self, title: str, text: Optional[str], control: str,
                           send_text: str, mode: int = 0) -> int:
        raise NotImplementedError

    @abstractmethod
    async def control_focus(self, title: str, text: Optional[str], control: str) -> int:
        raise NotImplementedError

    @abstractmethod
    async def control_get_handle(self, window_handle: int, control: str) -> int:
        raise NotImplementedError

    @abstractmethod
    async def control_get_pos(self, title: str, text: Optional[str], control: str) -> Rect:
        raise NotImplementedError

    @abstractmethod
    async def control_move(self, title: str, text: Optional[str], control: str, x: int, y: int,
                           width: Optional[int] = None, height: Optional[int] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def control_show(self, title: str, text: Optional[str], control: str) -> int:
        raise NotImplementedError

    @abstractmethod
    async def control_hide(self, title: str, text: Optional[str], control: str) -> int:
        raise NotImplementedError

    # ── 프로세스 / 시스템 ──
    @abstractmethod
    async def run(self, program: str, working_dir: Optional[str] = None,
                  show_flag: Optional[int] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def run_wait(self, program: str, working_dir: Optional[str] = None,
                       show_flag: Optional[int] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def run_as(self, user: str, domain: str, password: str, logon_flag: int,
                     program: str, working_dir: Optional[str] = None,
                     show_flag: Optional[int] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def run_as_wait(self, user: str, domain: str, password: str, logon_flag: int,
                          program: str, working_dir: Optional[str] = None,
                          show_flag: Optional[int] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def process_exists(self, process: str) -> int:
        raise NotImplementedError

    @abstractmethod
    async def process_close(self, process: str) -> int:
        raise NotImplementedError

    @abstractmethod
    async def process_set_priority(self, process: str, priority: int) -> int:
        raise NotImplementedError

    @abstractmethod
    async def process_wait(self, process: str, timeout: Optional[float] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def process_wait_close(self, process: str, timeout: Optional[float] = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def shutdown(self, flags: int) -> int:
        raise NotImplementedError

    # ── 화면 ──
    @abstractmethod
    async def capture_screen(self, region: Optional[Rect] = None) -> bytes:
        """PNG 바이트"""
        raise NotImplementedError
