#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
启动准备模块

统一处理编码、日志初始化、信号/进程管理、外部工具可用性检测。
"""

import sys
import io
import logging
from typing import Optional

from piriscope.config.defaults import DEFAULT_LOG_LEVEL
from piriscope.utils.process import setup_signal_handlers
from piriscope.utils.logging import setup_logging
from piriscope.utils.tool_check import detect_available_tools


def enforce_utf8_windows() -> None:
    """在 Windows 强制 stdout/stderr 使用 UTF-8，避免中文乱码"""
    if sys.platform != 'win32':
        return
    if sys.stdout.encoding != 'utf-8':
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8', errors='replace')
    if sys.stderr.encoding != 'utf-8':
        sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8', errors='replace')


def prepare_environment(
    verbose: bool = False,
    log_folder: Optional[str] = None,
    plain: bool = False,
    json_console: bool = False,
    check_tools: bool = True,
) -> Optional[str]:
    """
    启动前统一准备工作：编码、日志初始化、信号处理、工具检测。

    Returns:
        日志文件路径，未写文件时为 None
    """
    enforce_utf8_windows()

    # 日志初始化
    log_file = setup_logging(
        log_folder,
        level="DEBUG" if verbose else DEFAULT_LOG_LEVEL,
        plain=plain,
        json_console=json_console,
    )

    # 信号处理需在启动子进程前注册
    setup_signal_handlers()

    if check_tools:
        detect_available_tools()

    logging.debug("启动准备完成")
    return log_file
