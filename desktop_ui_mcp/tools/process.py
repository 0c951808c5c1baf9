"""프로세스 / 시스템 도구"""

from ..envelope import Outcome
from ..registry import Operation
from .schemas import CREDENTIALS, PROCESS_NAME, PROCESS_TIMEOUT, PROGRAM, SHOW_FLAG, WORKING_DIR, obj

RUN_PROPERTIES = {"program": PROGRAM, "workingDir": WORKING_DIR, "showFlag": SHOW_FLAG}


async def run(auto, args: dict):
    """프로그램 실행"""
    program = args["program"]
    pid = await auto.run(program, args.get("workingDir"), args.get("showFlag"))
    return Outcome.ok(f'Program "{program}" started with process ID: {pid}')


async def run_wait(auto, args: dict):
    """프로그램 실행 후 종료까지 대기"""
    program = args["program"]
    exit_code = await auto.run_wait(program, args.get("workingDir"), args.get("showFlag"))
    return Outcome.ok(f'Program "{program}" completed with exit code: {exit_code}')


async def run_as(auto, args: dict):
    program, user = args["program"], args["user"]
    pid = await auto.run_as(
        user, args["domain"], args["password"], args["logonFlag"],
        program, args.get("workingDir"), args.get("showFlag"),
    )
    return Outcome.ok(f'Program "{program}" started as user "{user}" with process ID: {pid}')


async def run_as_wait(auto, args: dict):
    program, user = args["program"], args["user"]
    exit_code = await auto.run_as_wait(
        user, args["domain"], args["password"], args["logonFlag"],
        program, args.get("workingDir"), args.get("showFlag"),
    )
    return Outcome.ok(f'Program "{program}" completed as user "{user}" with exit code: {exit_code}')


async def process_exists(auto, args: dict):
    # PID 반환, 없으면 0
    process = args["process"]
    pid = await auto.process_exists(process)
    return Outcome.check(
        pid != 0,
        f'Process "{process}" exists with PID: {pid}',
        f'Process "{process}" does not exist',
    )


async def process_close(auto, args: dict):
    process = args["process"]
    result = await auto.process_close(process)
    return Outcome.check(
        result == 1,
        f'Process "{process}" closed successfully',
        f'Failed to close process "{process}"',
    )


async def process_set_priority(auto, args: dict):
    process, priority = args["process"], args["priority"]
    result = await auto.process_set_priority(process, priority)
    return Outcome.check(
        result == 1,
        f'Priority for process "{process}" set to {priority}',
        f'Failed to set priority for process "{process}"',
    )


async def process_wait(auto, args: dict):
    # 성공하면 PID, 시간 초과면 0
    process = args["process"]
    pid = await auto.process_wait(process, args.get("timeout"))
    return Outcome.check(
        pid != 0,
        f'Process "{process}" exists with PID: {pid}',
        f'Timed out waiting for process "{process}"',
    )


async def process_wait_close(auto, args: dict):
    process = args["process"]
    result = await auto.process_wait_close(process, args.get("timeout"))
    return Outcome.check(
        result == 1,
        f'Process "{process}" closed within the timeout',
        f'Timed out waiting for process "{process}" to close',
    )


async def shutdown(auto, args: dict):
    flags = args["flags"]
    result = await auto.shutdown(flags)
    return Outcome.check(
        result == 1,
        f"System shutdown initiated with flags: {flags}",
        "Failed to initiate system shutdown",
    )


OPERATIONS = [
    Operation("run", "프로그램을 실행합니다.", obj(RUN_PROPERTIES, ["program"]), run),
    Operation("runWait", "프로그램을 실행하고 종료될 때까지 기다립니다.", obj(RUN_PROPERTIES, ["program"]), run_wait),
    Operation(
        "runAs",
        "다른 사용자 계정으로 프로그램을 실행합니다.",
        obj({**CREDENTIALS, **RUN_PROPERTIES}, ["user", "domain", "password", "logonFlag", "program"]),
        run_as,
    ),
    Operation(
        "runAsWait",
        "다른 사용자 계정으로 프로그램을 실행하고 종료될 때까지 기다립니다.",
        obj({**CREDENTIALS, **RUN_PROPERTIES}, ["user", "domain", "password", "logonFlag", "program"]),
        run_as_wait,
    ),
    Operation("processExists", "프로세스가 존재하는지 확인합니다.", obj({"process": PROCESS_NAME}, ["process"]), process_exists),
    Operation("processClose", "프로세스를 종료합니다.", obj({"process": PROCESS_NAME}, ["process"]), process_close),
    Operation(
        "processSetPriority",
        "프로세스 우선순위를 설정합니다 (0=유휴 ~ 5=실시간).",
        obj(
            {
                "process": PROCESS_NAME,
                "priority": {"type": "integer", "minimum": 0, "maximum": 5, "description": "우선순위 (0-5)"},
            },
            ["process", "priority"],
        ),
        process_set_priority,
    ),
    Operation(
        "processWait",
        "프로세스가 나타날 때까지 기다립니다.",
        obj({"process": PROCESS_NAME, "timeout": PROCESS_TIMEOUT}, ["process"]),
        process_wait,
    ),
    Operation(
        "processWaitClose",
        "프로세스가 종료될 때까지 기다립니다.",
        obj({"process": PROCESS_NAME, "timeout": PROCESS_TIMEOUT}, ["process"]),
        process_wait_close,
    ),
    Operation(
        "shutdown",
        "시스템을 종료/재시작/로그오프합니다 (0=로그오프, 1=종료, 2=재시작, 4=강제, 8=전원 끄기 ...).",
        obj({"flags": {"type": "integer", "description": "종료 플래그"}}, ["flags"]),
        shutdown,
    ),
]
