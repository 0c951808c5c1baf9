"""
도구 응답 래퍼

모든 도구 호출은 정확히 하나의 Outcome 을 만든다.
  ok     - 성공 서술
  failed - 자동화 호출은 실행됐지만 실패 결과 (프로토콜 오류 아님)
  fault  - 자동화 호출이 예외를 던짐 (isError=True)
"""

from dataclasses import dataclass

from mcp.types import CallToolResult, TextContent

OK = "ok"
FAILED = "failed"
FAULT = "fault"


@dataclass(frozen=True)
class Outcome:
    tag: str
    text: str

    @classmethod
    def ok(cls, text: str) -> "Outcome":
        return cls(OK, text)

    @classmethod
    def failed(cls, text: str) -> "Outcome":
        return cls(FAILED, text)

    @classmethod
    def fault(cls, error) -> "Outcome":
        return cls(FAULT, describe_error(error))

    @classmethod
    def check(cls, success: bool, ok_text: str, failed_text: str) -> "Outcome":
        return cls.ok(ok_text) if success else cls.failed(failed_text)

    @property
    def is_error(self) -> bool:
        return self.tag == FAULT

    def to_result(self) -> CallToolResult:
        text = f"Error: {self.text}" if self.is_error else self.text
        return CallToolResult(
            content=[TextContent(type="text", text=text)],
            isError=self.is_error,
        )


def describe_error(error) -> str:
    if isinstance(error, BaseException):
        return str(error) or error.__class__.__name__
    return str(error)
