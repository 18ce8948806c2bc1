#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
外部工具可用性检测

启动时检查 v4l2-ctl / ffmpeg 是否在 PATH 中，仅给出提示；
真正的失败由设备配置和推流启动阶段报告
"""

import shutil
import logging
from typing import Dict, Iterable, Tuple

from piriscope.config.defaults import DEVICE_TOOL, ENCODER_TOOL

logger = logging.getLogger("ToolCheck")


def check_tool_available(tool: str) -> Tuple[bool, str]:
    """
    检测单个命令是否可执行

    Args:
        tool: 命令名称

    Returns:
        (是否可用, 可执行文件路径或错误信息)
    """
    path = shutil.which(tool)
    if path is None:
        return False, f"{tool} 未安装或不在 PATH 中"
    return True, path


def detect_available_tools(tools: Iterable[str] = (DEVICE_TOOL, ENCODER_TOOL)) -> Dict[str, bool]:
    """
    检测所需工具并记录结果

    Returns:
        工具名 -> 是否可用
    """
    status = {}
    for tool in tools:
        available, detail = check_tool_available(tool)
        status[tool] = available
        if available:
            logger.debug(f"{tool}: {detail}")
        else:
            logger.warning(detail)
    return status
