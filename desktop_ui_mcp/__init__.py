"""
Desktop UI Control MCP Server
- 마우스/키보드 제어
- 창/컨트롤/프로세스 제어
- stdio 또는 WebSocket 전송
"""

__version__ = "1.0.0"
