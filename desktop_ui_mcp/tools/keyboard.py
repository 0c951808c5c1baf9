"""키보드 / 클립보드 / 옵션 도구"""

from ..envelope import Outcome
from ..registry import Operation
from .schemas import BUFFER_SIZE, obj


async def send(auto, args: dict):
    """키 입력 (활성 창)"""
    text, mode = args["text"], args["mode"]
    await auto.send(text, mode)
    return Outcome.ok(f'Sent keystrokes: "{text}" with mode {mode}')


async def clip_get(auto, args: dict):
    content = await auto.clip_get(args.get("bufSize"))
    return Outcome.ok(f'Clipboard content: "{content}"')


async def clip_put(auto, args: dict):
    await auto.clip_put(args["text"])
    return Outcome.ok(f'Text set to clipboard: "{args["text"]}"')


async def auto_it_set_option(auto, args: dict):
    option, value = args["option"], args["value"]
    result = await auto.auto_it_set_option(option, value)
    return Outcome.ok(f'AutoIt option "{option}" set to {value} with result: {result}')


async def opt(auto, args: dict):
    option, value = args["option"], args["value"]
    result = await auto.opt(option, value)
    return Outcome.ok(f'AutoIt option "{option}" set to {value} with result: {result}')


async def tool_tip(auto, args: dict):
    """툴팁 표시 (빈 문자열이면 제거)"""
    text, x, y = args["text"], args.get("x"), args.get("y")
    await auto.tool_tip(text, x, y)
    position = f" at position ({x}, {y})" if x is not None and y is not None else ""
    return Outcome.ok(f'Tooltip displayed: "{text}"{position}')


OPTION_SCHEMA = obj(
    {
        "option": {"type": "string", "description": "옵션 이름 (예: WinTitleMatchMode)"},
        "value": {"type": "integer", "description": "옵션 값"},
    },
    ["option", "value"],
)

OPERATIONS = [
    Operation(
        "send",
        "활성 창에 키 입력을 보냅니다. AutoIt 문법(^c, !{F4}, {ENTER}) 사용, mode=1 이면 그대로 입력.",
        obj(
            {
                "text": {"type": "string", "description": "보낼 텍스트 또는 키"},
                "mode": {"type": "integer", "default": 0, "description": "0=특수키 해석, 1=원문 그대로"},
            },
            ["text"],
        ),
        send,
    ),
    Operation("clipGet", "클립보드의 텍스트를 가져옵니다.", obj({"bufSize": BUFFER_SIZE}), clip_get),
    Operation(
        "clipPut",
        "클립보드에 텍스트를 넣습니다.",
        obj({"text": {"type": "string", "description": "클립보드에 넣을 텍스트"}}, ["text"]),
        clip_put,
    ),
    Operation("autoItSetOption", "자동화 옵션을 설정하고 이전 값을 반환합니다.", OPTION_SCHEMA, auto_it_set_option),
    Operation("opt", "autoItSetOption 의 별칭입니다.", OPTION_SCHEMA, opt),
    Operation(
        "toolTip",
        "화면에 툴팁을 표시합니다.",
        obj(
            {
                "text": {"type": "string", "description": "툴팁 텍스트"},
                "x": {"type": "integer", "description": "X 좌표"},
                "y": {"type": "integer", "description": "Y 좌표"},
            },
            ["text"],
        ),
        tool_tip,
    ),
]
