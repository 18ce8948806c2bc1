# 工具模块
"""通用工具函数"""

from piriscope.utils.logging import setup_logging
from piriscope.utils.process import ProcessRunner, wait_process
from piriscope.utils.tool_check import check_tool_available, detect_available_tools

__all__ = [
    "setup_logging",
    "ProcessRunner",
    "wait_process",
    "check_tool_available",
    "detect_available_tools",
]
