"""컨트롤 도구"""

from ..envelope import Outcome
from ..registry import Operation
from .schemas import (
    BUFFER_SIZE,
    CONTROL_NAME,
    CONTROL_TEXT,
    HANDLE,
    MOUSE_BUTTON,
    MOUSE_CLICKS,
    control_target,
    describe,
    obj,
)

CONTROL_X = {"type": "integer", "description": "컨트롤 내부 X 좌표"}
CONTROL_Y = {"type": "integer", "description": "컨트롤 내부 Y 좌표"}


async def control_click(auto, args: dict):
    """컨트롤 클릭"""
    title, control = args["title"], args["control"]
    result = await auto.control_click(
        title, args.get("text"), control, args["button"], args["clicks"], args.get("x"), args.get("y")
    )
    return Outcome.check(
        result == 1,
        f'Clicked on control "{control}" in window "{title}"',
        f'Failed to click on control "{control}" in window "{title}"',
    )


async def control_click_by_handle(auto, args: dict):
    window_handle, control_handle = args["windowHandle"], args["controlHandle"]
    result = await auto.control_click_by_handle(
        window_handle, control_handle, args["button"], args["clicks"], args.get("x"), args.get("y")
    )
    return Outcome.check(
        result == 1,
        f"Clicked on control handle {control_handle} in window handle {window_handle}",
        f"Failed to click on control handle {control_handle} in window handle {window_handle}",
    )


async def control_command(auto, args: dict):
    control, command = args["control"], args["command"]
    result = await auto.control_command(
        args["title"], args.get("text"), control, command, args.get("extra"), args.get("bufSize")
    )
    return Outcome.ok(f'Command "{command}" sent to control "{control}" with result: {result}')


async def control_get_text(auto, args: dict):
    control = args["control"]
    control_text = await auto.control_get_text(args["title"], args.get("text"), control, args.get("bufSize"))
    return Outcome.ok(f'Text from control "{control}": "{control_text}"')


async def control_set_text(auto, args: dict):
    control, control_text = args["control"], args["controlText"]
    result = await auto.control_set_text(args["title"], args.get("text"), control, control_text)
    return Outcome.check(
        result == 1,
        f'Text set in control "{control}" to "{control_text}"',
        f'Failed to set text in control "{control}"',
    )


async def control_send(auto, args: dict):
    control, send_text = args["control"], args["sendText"]
    result = await auto.control_send(args["title"], args.get("text"), control, send_text, args["mode"])
    return Outcome.check(
        result == 1,
        f'Keystrokes "{send_text}" sent to control "{control}"',
        f'Failed to send keystrokes to control "{control}"',
    )


async def control_focus(auto, args: dict):
    control = args["control"]
    result = await auto.control_focus(args["title"], args.get("text"), control)
    return Outcome.check(
        result == 1,
        f'Focus set to control "{control}"',
        f'Failed to set focus to control "{control}"',
    )


async def control_get_handle(auto, args: dict):
    control = args["control"]
    handle = await auto.control_get_handle(args["windowHandle"], control)
    return Outcome.ok(f'Control "{control}" handle: {handle}')


async def control_get_pos(auto, args: dict):
    control = args["control"]
    rect = await auto.control_get_pos(args["title"], args.get("text"), control)
    return Outcome.ok(
        f'Control "{control}" position: Left={rect.left}, Top={rect.top}, '
        f"Width={rect.width}, Height={rect.height}"
    )


async def control_move(auto, args: dict):
    control, x, y = args["control"], args["x"], args["y"]
    width, height = args.get("width"), args.get("height")
    result = await auto.control_move(args["title"], args.get("text"), control, x, y, width, height)
    size_info = f" and resized to {width}x{height}" if width and height else ""
    return Outcome.check(
        result == 1,
        f'Control "{control}" moved to ({x}, {y}){size_info}',
        f'Failed to move control "{control}"',
    )


async def control_show(auto, args: dict):
    control = args["control"]
    result = await auto.control_show(args["title"], args.get("text"), control)
    return Outcome.check(result == 1, f'Control "{control}" shown', f'Failed to show control "{control}"')


async def control_hide(auto, args: dict):
    control = args["control"]
    result = await auto.control_hide(args["title"], args.get("text"), control)
    return Outcome.check(result == 1, f'Control "{control}" hidden', f'Failed to hide control "{control}"')


OPERATIONS = [
    Operation(
        "controlClick",
        "창 안의 컨트롤을 클릭합니다.",
        control_target(button=MOUSE_BUTTON, clicks=MOUSE_CLICKS, x=CONTROL_X, y=CONTROL_Y),
        control_click,
    ),
    Operation(
        "controlClickByHandle",
        "핸들로 컨트롤을 클릭합니다.",
        obj(
            {
                "windowHandle": describe(HANDLE, "창 핸들"),
                "controlHandle": describe(HANDLE, "컨트롤 핸들"),
                "button": MOUSE_BUTTON,
                "clicks": MOUSE_CLICKS,
                "x": CONTROL_X,
                "y": CONTROL_Y,
            },
            ["windowHandle", "controlHandle"],
        ),
        control_click_by_handle,
    ),
    Operation(
        "controlCommand",
        "컨트롤에 명령을 보냅니다 (IsVisible, IsEnabled, Check, UnCheck, GetLine, SelectString ...).",
        control_target(
            ["command"],
            command={"type": "string", "description": "보낼 명령"},
            extra={"type": "string", "description": "명령의 추가 인자"},
            bufSize=BUFFER_SIZE,
        ),
        control_command,
    ),
    Operation("controlGetText", "컨트롤의 텍스트를 가져옵니다.", control_target(bufSize=BUFFER_SIZE), control_get_text),
    Operation(
        "controlSetText",
        "컨트롤의 텍스트를 설정합니다.",
        control_target(["controlText"], controlText=CONTROL_TEXT),
        control_set_text,
    ),
    Operation(
        "controlSend",
        "컨트롤에 키 입력을 보냅니다 (창이 비활성이어도 동작).",
        control_target(
            ["sendText"],
            sendText=CONTROL_TEXT,
            mode={"type": "integer", "default": 0, "description": "0=특수키 해석, 1=원문 그대로"},
        ),
        control_send,
    ),
    Operation("controlFocus", "컨트롤에 포커스를 줍니다.", control_target(), control_focus),
    Operation(
        "controlGetHandle",
        "컨트롤 핸들을 가져옵니다.",
        obj({"windowHandle": describe(HANDLE, "창 핸들"), "control": CONTROL_NAME}, ["windowHandle", "control"]),
        control_get_handle,
    ),
    Operation("controlGetPos", "컨트롤 위치와 크기를 가져옵니다 (창 기준).", control_target(), control_get_pos),
    Operation(
        "controlMove",
        "컨트롤을 이동하고 크기를 변경합니다.",
        control_target(
            ["x", "y"],
            x={"type": "integer", "description": "X 좌표"},
            y={"type": "integer", "description": "Y 좌표"},
            width={"type": "integer", "description": "컨트롤 너비"},
            height={"type": "integer", "description": "컨트롤 높이"},
        ),
        control_move,
    ),
    Operation("controlShow", "컨트롤을 표시합니다.", control_target(), control_show),
    Operation("controlHide", "컨트롤을 숨깁니다.", control_target(), control_hide),
]
