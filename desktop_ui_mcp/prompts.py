"""
프롬프트

창 조작, 폼 입력, 반복 작업 자동화를 위한 대화 시작 템플릿.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from mcp.types import GetPromptResult, Prompt, PromptArgument, PromptMessage, TextContent

log = logging.getLogger(__name__)

WINDOW_ACTIONS = {
    "activate": "activate (bring to front)",
    "close": "close",
    "minimize": "minimize",
    "maximize": "maximize",
}

SCREENSHOT_TARGETS = ("fullscreen", "window", "region")


@dataclass(frozen=True)
class PromptSpec:
    name: str
    description: str
    arguments: Tuple[PromptArgument, ...]
    render: Callable[[Dict[str, str]], Tuple[str, str]]  # → (description, text)


def _arg(name: str, description: str, required: bool = True) -> PromptArgument:
    return PromptArgument(name=name, description=description, required=required)


def _find_window(args):
    title, action = args["windowTitle"], args["action"]
    if action not in WINDOW_ACTIONS:
        raise ValueError(f"Invalid action: {action}")
    action_description = WINDOW_ACTIONS[action]
    return (
        f'Find a window with title "{title}" and {action_description} it',
        f'I need to find a window with the title "{title}" and {action_description} it. '
        "Can you help me with the steps to do this using AutoIt functions?",
    )


def _window_info(args):
    title = args["windowTitle"]
    return (
        f'Get information about a window with title "{title}"',
        f'I need to get information about a window with the title "{title}". '
        "Can you help me retrieve details like its position, size, state, and text content using AutoIt functions?",
    )


def _fill_form(args):
    title, fields = args["windowTitle"], args["formFields"]
    return (
        f'Fill out a form in window "{title}"',
        f'I need to fill out a form in a window with the title "{title}". '
        f"The form has the following fields that need to be filled:\n\n{fields}\n\n"
        "Can you help me automate filling out this form using AutoIt functions?",
    )


def _submit_form(args):
    title, button = args["windowTitle"], args["submitButtonText"]
    return (
        f'Submit a form in window "{title}"',
        f'I need to submit a form in a window with the title "{title}" by clicking the "{button}" button. '
        "Can you help me automate this using AutoIt functions?",
    )


def _automate_task(args):
    task, repetitions = args["taskDescription"], args["repetitions"]
    return (
        f"Automate a repetitive task: {task}",
        f"I need to automate the following repetitive task {repetitions} times:\n\n{task}\n\n"
        "Can you help me create an automation script using AutoIt functions to accomplish this?",
    )


def _monitor_window(args):
    title, condition = args["windowTitle"], args["condition"]
    return (
        f'Monitor window "{title}" for condition: {condition}',
        f'I need to monitor a window with the title "{title}" and wait until the following condition is met: '
        f"{condition}. Can you help me create an automation script using AutoIt functions to accomplish this?",
    )


def _take_screenshot(args):
    target, title = args["target"], args.get("windowTitle")
    if target not in SCREENSHOT_TARGETS:
        raise ValueError(f"Invalid target: {target}")
    if target == "fullscreen":
        prompt_text = "I need to take a screenshot of the entire screen."
    elif target == "window" and title:
        prompt_text = f'I need to take a screenshot of a window with the title "{title}".'
    elif target == "region":
        prompt_text = "I need to take a screenshot of a specific region of the screen."
    else:
        prompt_text = "I need to take a screenshot."
    subject = f'window "{title}"' if target == "window" else target
    return (
        f"Take a screenshot of {subject}",
        f"{prompt_text} Can you help me do this using AutoIt functions?",
    )


PROMPTS = (
    PromptSpec(
        "findWindow", "창을 찾아 활성화/닫기/최소화/최대화",
        (_arg("windowTitle", "찾을 창 제목 (부분 일치)"),
         _arg("action", "창에 수행할 동작: activate, close, minimize, maximize")),
        _find_window,
    ),
    PromptSpec(
        "windowInfo", "창 정보 조회",
        (_arg("windowTitle", "창 제목 (부분 일치)"),),
        _window_info,
    ),
    PromptSpec(
        "fillForm", "창 안의 폼 채우기",
        (_arg("windowTitle", "폼이 있는 창 제목"),
         _arg("formFields", "채울 필드와 값 설명")),
        _fill_form,
    ),
    PromptSpec(
        "submitForm", "폼 제출",
        (_arg("windowTitle", "폼이 있는 창 제목"),
         _arg("submitButtonText", "제출 버튼 텍스트")),
        _submit_form,
    ),
    PromptSpec(
        "automateTask", "반복 작업 자동화",
        (_arg("taskDescription", "자동화할 반복 작업 설명"),
         _arg("repetitions", "반복 횟수")),
        _automate_task,
    ),
    PromptSpec(
        "monitorWindow", "창 상태 감시",
        (_arg("windowTitle", "감시할 창 제목"),
         _arg("condition", '감시 조건 (예: "appears", "disappears", "contains text X")')),
        _monitor_window,
    ),
    PromptSpec(
        "takeScreenshot", "스크린샷 찍기",
        (_arg("target", "캡처 대상: fullscreen, window, region"),
         _arg("windowTitle", "캡처할 창 제목 (target 이 window 일 때)", required=False)),
        _take_screenshot,
    ),
)


class PromptProvider:

    def __init__(self, prompts=PROMPTS, logger: Optional[logging.Logger] = None):
        self._prompts = {p.name: p for p in prompts}
        self.log = logger or log

    def list(self) -> List[Prompt]:
        return [
            Prompt(name=p.name, description=p.description, arguments=list(p.arguments))
            for p in self._prompts.values()
        ]

    def get(self, name: str, arguments: Optional[Dict[str, str]] = None) -> GetPromptResult:
        spec = self._prompts.get(name)
        if spec is None:
            raise ValueError(f"Unknown prompt: {name}")
        args = dict(arguments or {})
        missing = [a.name for a in spec.arguments if a.required and not args.get(a.name)]
        if missing:
            raise ValueError(f"Missing required arguments for {name}: {', '.join(missing)}")

        self.log.debug(f"{name} prompt called {args}")
        description, text = spec.render(args)
        return GetPromptResult(
            description=description,
            messages=[PromptMessage(role="user", content=TextContent(type="text", text=text))],
        )
