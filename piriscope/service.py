#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
服务层

串联设备配置与推流启动，可被 CLI 或其他调用方复用。
"""

import logging
from typing import List

from piriscope.config.models import EffectiveConfiguration
from piriscope.core import (
    build_device_commands,
    build_encoder_command,
    build_stream_url,
    configure_device,
    launch_stream,
    require_stream_key,
)
from piriscope.utils.process import ProcessRunner, exit_status, format_command, wait_process

logger = logging.getLogger(__name__)


def plan_commands(config: EffectiveConfiguration) -> List[List[str]]:
    """
    按执行顺序返回全部外部命令，不执行

    Raises:
        MissingCredentialError: 推流密钥为空
    """
    stream_key = require_stream_key(config.stream_key)
    commands = build_device_commands(config.capture)
    commands.append(build_encoder_command(build_stream_url(stream_key)))
    return commands


def start_stream(config: EffectiveConfiguration, runner=None):
    """
    配置设备并启动推流，返回推流进程句柄（不等待）

    Raises:
        MissingCredentialError: 推流密钥为空，不会执行任何外部命令
        DeviceConfigurationError: 设备配置失败，推流不会启动
        LaunchError: ffmpeg 无法启动
    """
    if runner is None:
        runner = ProcessRunner()

    # 先检查密钥，避免白白配置设备
    require_stream_key(config.stream_key)
    configure_device(config.capture, runner)
    return launch_stream(config.stream_key, runner)


def run_stream(config: EffectiveConfiguration, runner=None, wait: bool = True) -> int:
    """
    执行完整推流流程

    Args:
        config: 最终生效配置
        runner: 进程执行器，默认使用 ProcessRunner
        wait: 是否阻塞等待推流进程结束

    Returns:
        wait 为 True 时返回 ffmpeg 退出状态（被信号终止时为 128 + signum），否则返回 0
    """
    process = start_stream(config, runner)
    if not wait:
        return 0

    returncode = wait_process(process)
    if returncode == 0:
        logger.info("推流进程已退出")
    else:
        logger.warning("推流进程异常退出", extra={"returncode": returncode})
    return exit_status(returncode)


def log_plan(config: EffectiveConfiguration) -> None:
    """[DRY RUN] 记录将要执行的命令"""
    logger.info("[DRY RUN] 预览模式，不实际执行")
    for i, cmd in enumerate(plan_commands(config), 1):
        logger.info(f"  {i}. {format_command(cmd)}")
