"""
도구 레지스트리

이름 → (입력 스키마, 핸들러) 의 고정 테이블. 시작 시 한 번 만들어지고
이후 변경되지 않으므로 여러 세션이 그대로 공유한다.
"""

import copy
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from mcp.types import CallToolResult, Tool

from .envelope import Outcome

Handler = Callable[[Any, Dict[str, Any]], Awaitable[Outcome]]

# 로그에 남기지 않는 인자
SECRET_ARGUMENTS = {"password"}


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    input_schema: Dict[str, Any]
    handler: Handler

    def with_defaults(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        args = dict(arguments)
        for key, prop in self.input_schema.get("properties", {}).items():
            if "default" in prop and args.get(key) is None:
                args[key] = prop["default"]
        return args

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=copy.deepcopy(self.input_schema),
        )


def _loggable(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {k: ("***" if k in SECRET_ARGUMENTS else v) for k, v in arguments.items()}


class OperationRegistry:

    def __init__(self, operations: Iterable[Operation], automation, logger: Optional[logging.Logger] = None):
        table = {}
        for op in operations:
            if op.name in table:
                raise ValueError(f"Duplicate operation: {op.name}")
            table[op.name] = op
        self._operations = MappingProxyType(table)
        self.automation = automation
        self.log = logger or logging.getLogger(__name__)

    def __contains__(self, name: str) -> bool:
        return name in self._operations

    def __len__(self) -> int:
        return len(self._operations)

    @property
    def operations(self):
        return self._operations

    def tools(self) -> List[Tool]:
        return [op.to_tool() for op in self._operations.values()]

    async def invoke(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Outcome:
        """정확히 하나의 Outcome 을 반환한다. 예외는 밖으로 나가지 않는다."""
        op = self._operations.get(name)
        if op is None:
            return Outcome.fault(f"Unknown tool: {name}")

        args = op.with_defaults(arguments or {})
        self.log.debug(f"{name} called {_loggable(args)}")
        try:
            await self.automation.initialize()
            return await op.handler(self.automation, args)
        except Exception as e:
            self.log.error(f"{name} failed: {e}", exc_info=self.log.isEnabledFor(logging.DEBUG))
            return Outcome.fault(e)

    async def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
        outcome = await self.invoke(name, arguments)
        return outcome.to_result()


def build_registry(automation, logger: Optional[logging.Logger] = None) -> OperationRegistry:
    from .tools import ALL_OPERATIONS
    return OperationRegistry(ALL_OPERATIONS, automation, logger=logger)
