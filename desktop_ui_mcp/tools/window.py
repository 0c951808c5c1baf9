"""창 도구"""

from ..envelope import Outcome
from ..registry import Operation
from .schemas import BUFFER_SIZE, HANDLE, WAIT_TIMEOUT, obj, window_target


async def win_activate(auto, args: dict):
    """창 활성화"""
    title = args["title"]
    result = await auto.win_activate(title, args.get("text"))
    return Outcome.ok(f'Window "{title}" activated with result: {result}')


async def win_activate_by_handle(auto, args: dict):
    handle = args["handle"]
    result = await auto.win_activate_by_handle(handle)
    return Outcome.ok(f"Window with handle {handle} activated with result: {result}")


async def win_active(auto, args: dict):
    title = args["title"]
    result = await auto.win_active(title, args.get("text"))
    return Outcome.check(
        result == 1,
        f'Window "{title}" is active',
        f'Window "{title}" is not active',
    )


async def win_close(auto, args: dict):
    title = args["title"]
    result = await auto.win_close(title, args.get("text"))
    return Outcome.ok(f'Window "{title}" closed with result: {result}')


async def win_exists(auto, args: dict):
    title = args["title"]
    result = await auto.win_exists(title, args.get("text"))
    return Outcome.check(
        result == 1,
        f'Window "{title}" exists',
        f'Window "{title}" does not exist',
    )


async def win_get_handle(auto, args: dict):
    title = args["title"]
    handle = await auto.win_get_handle(title, args.get("text"))
    return Outcome.ok(f'Window "{title}" handle: {handle}')


async def win_get_pos(auto, args: dict):
    """창 위치/크기"""
    title = args["title"]
    rect = await auto.win_get_pos(title, args.get("text"))
    return Outcome.ok(
        f'Window "{title}" position: Left={rect.left}, Top={rect.top}, '
        f"Width={rect.width}, Height={rect.height}"
    )


async def win_get_text(auto, args: dict):
    title = args["title"]
    window_text = await auto.win_get_text(title, args.get("text"), args.get("bufSize"))
    return Outcome.ok(f'Window "{title}" text: "{window_text}"')


async def win_get_title(auto, args: dict):
    title = args["title"]
    window_title = await auto.win_get_title(title, args.get("text"), args.get("bufSize"))
    return Outcome.ok(f'Window "{title}" title: "{window_title}"')


async def win_move(auto, args: dict):
    """창 이동/크기 변경"""
    title, x, y = args["title"], args["x"], args["y"]
    width, height = args.get("width"), args.get("height")
    result = await auto.win_move(title, args.get("text"), x, y, width, height)
    size_info = f" and resized to {width}x{height}" if width and height else ""
    return Outcome.ok(f'Window "{title}" moved to ({x}, {y}){size_info} with result: {result}')


async def win_set_state(auto, args: dict):
    title, flags = args["title"], args["flags"]
    result = await auto.win_set_state(title, args.get("text"), flags)
    return Outcome.ok(f'Window "{title}" state set to {flags} with result: {result}')


async def win_wait(auto, args: dict):
    title = args["title"]
    result = await auto.win_wait(title, args.get("text"), args.get("timeout"))
    return Outcome.check(
        result == 1,
        f'Window "{title}" appeared within the timeout',
        f'Window "{title}" did not appear within the timeout',
    )


async def win_wait_active(auto, args: dict):
    title = args["title"]
    result = await auto.win_wait_active(title, args.get("text"), args.get("timeout"))
    return Outcome.check(
        result == 1,
        f'Window "{title}" became active within the timeout',
        f'Window "{title}" did not become active within the timeout',
    )


async def win_wait_close(auto, args: dict):
    title = args["title"]
    result = await auto.win_wait_close(title, args.get("text"), args.get("timeout"))
    return Outcome.check(
        result == 1,
        f'Window "{title}" closed within the timeout',
        f'Window "{title}" did not close within the timeout',
    )


OPERATIONS = [
    Operation("winActivate", "창을 활성화(포커스)합니다.", window_target(), win_activate),
    Operation(
        "winActivateByHandle",
        "핸들로 창을 활성화합니다.",
        obj({"handle": HANDLE}, ["handle"]),
        win_activate_by_handle,
    ),
    Operation("winActive", "창이 활성 상태인지 확인합니다.", window_target(), win_active),
    Operation("winClose", "창을 닫습니다.", window_target(), win_close),
    Operation("winExists", "창이 존재하는지 확인합니다.", window_target(), win_exists),
    Operation("winGetHandle", "창 핸들을 가져옵니다.", window_target(), win_get_handle),
    Operation("winGetPos", "창 위치와 크기를 가져옵니다.", window_target(), win_get_pos),
    Operation("winGetText", "창 안의 텍스트를 가져옵니다.", window_target(bufSize=BUFFER_SIZE), win_get_text),
    Operation("winGetTitle", "창 전체 제목을 가져옵니다.", window_target(bufSize=BUFFER_SIZE), win_get_title),
    Operation(
        "winMove",
        "창을 이동하고 크기를 변경합니다.",
        {
            **window_target(
                x={"type": "integer", "description": "X 좌표"},
                y={"type": "integer", "description": "Y 좌표"},
                width={"type": "integer", "description": "창 너비"},
                height={"type": "integer", "description": "창 높이"},
            ),
            "required": ["title", "x", "y"],
        },
        win_move,
    ),
    Operation(
        "winSetState",
        "창 상태를 설정합니다 (@SW_HIDE=0, @SW_MAXIMIZE=3, @SW_MINIMIZE=6, @SW_RESTORE=9 ...).",
        {
            **window_target(flags={"type": "integer", "description": "상태 플래그"}),
            "required": ["title", "flags"],
        },
        win_set_state,
    ),
    Operation(
        "winWait",
        "창이 나타날 때까지 기다립니다.",
        window_target(timeout=WAIT_TIMEOUT),
        win_wait,
    ),
    Operation(
        "winWaitActive",
        "창이 활성화될 때까지 기다립니다.",
        window_target(timeout=WAIT_TIMEOUT),
        win_wait_active,
    ),
    Operation(
        "winWaitClose",
        "창이 닫힐 때까지 기다립니다.",
        window_target(timeout=WAIT_TIMEOUT),
        win_wait_close,
    ),
]
