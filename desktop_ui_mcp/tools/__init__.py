"""자동화 도구 테이블 (마우스, 키보드, 창, 프로세스, 컨트롤)"""

from . import control, keyboard, mouse, process, window

ALL_OPERATIONS = (
    *mouse.OPERATIONS,
    *keyboard.OPERATIONS,
    *window.OPERATIONS,
    *process.OPERATIONS,
    *control.OPERATIONS,
)

__all__ = ["ALL_OPERATIONS"]
