"""마우스 도구"""

from ..envelope import Outcome
from ..registry import Operation
from .schemas import MOUSE_BUTTON, MOUSE_CLICKS, MOUSE_SPEED, MOUSE_X, MOUSE_Y, describe, obj


async def mouse_move(auto, args: dict):
    """마우스 이동"""
    x, y = args["x"], args["y"]
    result = await auto.mouse_move(x, y, args["speed"])
    return Outcome.ok(f"Mouse moved to ({x}, {y}) with result: {result}")


async def mouse_click(auto, args: dict):
    """마우스 클릭"""
    button, clicks = args["button"], args["clicks"]
    result = await auto.mouse_click(button, args.get("x"), args.get("y"), clicks, args["speed"])
    return Outcome.ok(f"Mouse clicked {button} button {clicks} time(s) with result: {result}")


async def mouse_click_drag(auto, args: dict):
    """드래그"""
    x1, y1, x2, y2 = args["x1"], args["y1"], args["x2"], args["y2"]
    result = await auto.mouse_click_drag(args["button"], x1, y1, x2, y2, args["speed"])
    return Outcome.ok(f"Mouse dragged from ({x1}, {y1}) to ({x2}, {y2}) with result: {result}")


async def mouse_down(auto, args: dict):
    await auto.mouse_down(args["button"])
    return Outcome.ok(f"Mouse {args['button']} button pressed down")


async def mouse_up(auto, args: dict):
    await auto.mouse_up(args["button"])
    return Outcome.ok(f"Mouse {args['button']} button released")


async def mouse_get_pos(auto, args: dict):
    pos = await auto.mouse_get_pos()
    return Outcome.ok(f"Mouse position: ({pos.x}, {pos.y})")


async def mouse_get_cursor(auto, args: dict):
    cursor = await auto.mouse_get_cursor()
    return Outcome.ok(f"Mouse cursor type: {cursor}")


async def mouse_wheel(auto, args: dict):
    """휠 스크롤"""
    direction, clicks = args["direction"], args["clicks"]
    await auto.mouse_wheel(direction, clicks)
    return Outcome.ok(f"Mouse wheel scrolled {direction} {clicks} click(s)")


OPERATIONS = [
    Operation(
        "mouseMove",
        "마우스 커서를 지정한 좌표로 이동합니다.",
        obj({"x": MOUSE_X, "y": MOUSE_Y, "speed": MOUSE_SPEED}, ["x", "y"]),
        mouse_move,
    ),
    Operation(
        "mouseClick",
        "현재 위치 또는 지정한 좌표에서 마우스를 클릭합니다.",
        obj({"button": MOUSE_BUTTON, "x": MOUSE_X, "y": MOUSE_Y, "clicks": MOUSE_CLICKS, "speed": MOUSE_SPEED}),
        mouse_click,
    ),
    Operation(
        "mouseClickDrag",
        "한 위치에서 다른 위치로 마우스를 드래그합니다.",
        obj(
            {
                "button": MOUSE_BUTTON,
                "x1": describe(MOUSE_X, "시작 X 좌표"),
                "y1": describe(MOUSE_Y, "시작 Y 좌표"),
                "x2": describe(MOUSE_X, "끝 X 좌표"),
                "y2": describe(MOUSE_Y, "끝 Y 좌표"),
                "speed": MOUSE_SPEED,
            },
            ["x1", "y1", "x2", "y2"],
        ),
        mouse_click_drag,
    ),
    Operation("mouseDown", "마우스 버튼을 누른 상태로 유지합니다.", obj({"button": MOUSE_BUTTON}), mouse_down),
    Operation("mouseUp", "눌린 마우스 버튼을 놓습니다.", obj({"button": MOUSE_BUTTON}), mouse_up),
    Operation("mouseGetPos", "현재 마우스 위치를 반환합니다.", obj(), mouse_get_pos),
    Operation("mouseGetCursor", "현재 마우스 커서 종류를 반환합니다.", obj(), mouse_get_cursor),
    Operation(
        "mouseWheel",
        "마우스 휠 스크롤을 수행합니다.",
        obj(
            {
                "direction": {"type": "string", "enum": ["up", "down"], "description": "스크롤 방향"},
                "clicks": {"type": "integer", "minimum": 1, "description": "스크롤 횟수"},
            },
            ["direction", "clicks"],
        ),
        mouse_wheel,
    ),
]
