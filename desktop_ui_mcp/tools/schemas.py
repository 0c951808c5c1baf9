"""도구 입력 스키마 공통 조각 (JSON Schema)"""

from typing import Any, Dict, List, Optional

WINDOW_TITLE = {"type": "string", "description": "창 제목"}
WINDOW_TEXT = {"type": "string", "description": "창 안의 텍스트 (선택사항)"}

MOUSE_BUTTON = {
    "type": "string",
    "enum": ["left", "right", "middle"],
    "default": "left",
    "description": "마우스 버튼",
}
MOUSE_SPEED = {
    "type": "integer",
    "minimum": 1,
    "maximum": 100,
    "default": 10,
    "description": "마우스 이동 속도 (1-100)",
}
MOUSE_X = {"type": "integer", "description": "X 좌표"}
MOUSE_Y = {"type": "integer", "description": "Y 좌표"}
MOUSE_CLICKS = {"type": "integer", "minimum": 1, "default": 1, "description": "클릭 횟수"}

CONTROL_NAME = {"type": "string", "description": "컨트롤 식별자 (예: Edit1, [CLASS:Button; INSTANCE:2])"}
CONTROL_TEXT = {"type": "string", "description": "컨트롤에 설정/전송할 텍스트"}

PROCESS_NAME = {"type": "string", "description": "프로세스 이름 또는 PID"}
PROCESS_TIMEOUT = {"type": "number", "description": "대기 시간 (초, 0 또는 미지정시 무한)"}
WAIT_TIMEOUT = {"type": "number", "description": "대기 시간 (초)"}

HANDLE = {"type": "integer", "description": "창 또는 컨트롤 핸들"}
BUFFER_SIZE = {"type": "integer", "minimum": 1, "description": "반환 문자열 최대 길이"}

PROGRAM = {"type": "string", "description": "실행할 프로그램 경로 또는 명령"}
WORKING_DIR = {"type": "string", "description": "작업 디렉터리"}
SHOW_FLAG = {"type": "integer", "description": "창 표시 플래그 (@SW_HIDE=0, @SW_SHOW=5 ...)"}

CREDENTIALS = {
    "user": {"type": "string", "description": "사용자 이름"},
    "domain": {"type": "string", "description": "도메인"},
    "password": {"type": "string", "description": "비밀번호"},
    "logonFlag": {"type": "integer", "description": "로그온 플래그 (0, 1=프로필 로드, 2=네트워크 자격증명만)"},
}


def describe(base: Dict[str, Any], description: str) -> Dict[str, Any]:
    return {**base, "description": description}


def obj(properties: Optional[Dict[str, Any]] = None, required: Optional[List[str]] = None) -> Dict[str, Any]:
    schema = {"type": "object", "properties": dict(properties or {})}
    if required:
        schema["required"] = list(required)
    return schema


def window_target(**extra) -> Dict[str, Any]:
    """title + text 를 받는 창 대상 스키마"""
    return obj({"title": WINDOW_TITLE, "text": WINDOW_TEXT, **extra}, ["title"])


def control_target(required: Optional[List[str]] = None, **extra) -> Dict[str, Any]:
    """title + text + control 을 받는 컨트롤 대상 스키마"""
    props = {"title": WINDOW_TITLE, "text": WINDOW_TEXT, "control": CONTROL_NAME, **extra}
    return obj(props, ["title", "control"] + list(required or []))
