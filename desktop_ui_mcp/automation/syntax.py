"""
AutoIt 식 식별자/키 문법 해석 (플랫폼 의존성 없음)

- 창 제목: WinTitleMatchMode (1 앞부분, 2 부분, 3 정확, 4 는 1 과 같음, 음수는 대소문자 무시)
  고급 형식 (모드와 무관) "[TITLE:메모장; CLASS:Notepad]", "[ACTIVE]", "[HANDLE:0x1234]"
- 컨트롤: "Edit1" (ClassNN), "15" (컨트롤 ID), "[CLASS:Edit; INSTANCE:2]", 텍스트
- 키 입력: "^c", "!{F4}", "#r", "{ENTER 2}" → pywinauto send_keys 형식
"""

import re
from typing import Dict, Optional

_CLASSNN_RE = re.compile(r"^([A-Za-z_][\w.]*?)(\d+)$")

# AutoIt 키 이름 → pywinauto 키 이름 (같은 이름은 그대로 통과)
KEY_ALIASES = {
    "ALT": "VK_MENU",
    "LALT": "VK_LMENU",
    "RALT": "VK_RMENU",
    "CTRL": "VK_CONTROL",
    "LCTRL": "VK_LCONTROL",
    "RCTRL": "VK_RCONTROL",
    "SHIFT": "VK_SHIFT",
    "LSHIFT": "VK_LSHIFT",
    "RSHIFT": "VK_RSHIFT",
    "LWIN": "VK_LWIN",
    "RWIN": "VK_RWIN",
    "APPSKEY": "VK_APPS",
    "PRINTSCREEN": "PRTSC",
    "SLEEP": "VK_SLEEP",
    "NUMPADENTER": "ENTER",
}

# pywinauto 에서 특별한 의미를 갖는 문자 (AutoIt 에서는 일반 문자)
_PYWINAUTO_SPECIAL = "~%()[]"
_RAW_ESCAPE = "+^%~(){}[]"


def parse_advanced(spec: str) -> Optional[Dict[str, str]]:
    """"[KEY:value; KEY2:value]" → {"KEY": "value"}; 고급 형식이 아니면 None"""
    spec = spec.strip()
    if not (spec.startswith("[") and spec.endswith("]")):
        return None
    props = {}
    for part in spec[1:-1].split(";"):
        part = part.strip()
        if not part:
            continue
        key, _, value = part.partition(":")
        props[key.strip().upper()] = value.strip()
    return props


def title_matches(actual: str, wanted: str, mode: int = 1) -> bool:
    if mode < 0:
        actual, wanted = actual.lower(), wanted.lower()
        mode = -mode
    if mode == 3:
        return actual == wanted
    if mode == 2:
        return wanted in actual
    # 1, 4(호환용)
    return actual.startswith(wanted)


def parse_handle(value) -> int:
    if isinstance(value, int):
        return value
    value = str(value).strip()
    return int(value, 16) if value.lower().startswith("0x") else int(value)


def control_criteria(control: str) -> Dict[str, object]:
    """컨트롤 식별자 → pywinauto child_window() 조건"""
    control = str(control).strip()
    props = parse_advanced(control)
    if props is not None:
        criteria = {}
        if "CLASSNN" in props:
            criteria.update(control_criteria(props["CLASSNN"]))
        if "CLASS" in props:
            criteria["class_name"] = props["CLASS"]
            criteria["found_index"] = int(props.get("INSTANCE", "1")) - 1
        if "ID" in props:
            criteria["control_id"] = int(props["ID"])
        if "TEXT" in props:
            criteria["title"] = props["TEXT"]
        if "REGEXPCLASS" in props:
            criteria["class_name_re"] = props["REGEXPCLASS"]
        if not criteria:
            raise ValueError(f"Unsupported control identifier: {control}")
        return criteria

    if control.isdigit():
        return {"control_id": int(control)}

    m = _CLASSNN_RE.match(control)
    if m:
        return {"class_name": m.group(1), "found_index": int(m.group(2)) - 1}

    return {"title": control}


def to_send_keys(text: str, raw: bool = False) -> str:
    """AutoIt Send() 문자열 → pywinauto send_keys 문자열"""
    if raw:
        return "".join("{%s}" % c if c in _RAW_ESCAPE else c for c in text)

    out = []
    win_pending = False
    i = 0
    while i < len(text):
        c = text[i]
        if c == "{":
            # "{}}" 처럼 닫는 괄호 자체를 감싼 경우도 처리
            end = text.find("}", i + 2)
            if end == -1:
                token = "{{}"
                i += 1
            else:
                name, _, rest = text[i + 1:end].partition(" ")
                name = KEY_ALIASES.get(name.upper(), name)
                token = "{%s}" % (f"{name} {rest}" if rest else name)
                i = end + 1
        elif c == "#":
            out.append("{VK_LWIN down}")
            win_pending = True
            i += 1
            continue
        elif c in "^+!":
            out.append("%" if c == "!" else c)
            i += 1
            continue
        elif c in _PYWINAUTO_SPECIAL:
            token = "{%s}" % c
            i += 1
        else:
            token = c
            i += 1

        out.append(token)
        if win_pending:
            out.append("{VK_LWIN up}")
            win_pending = False

    if win_pending:
        out.append("{VK_LWIN up}")
    return "".join(out)
