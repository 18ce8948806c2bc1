#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
采集设备配置模块

通过两次 v4l2-ctl 调用设置视频格式和编码控制参数，
两次调用均同步执行，任何一次失败都会中止后续步骤
"""

import logging
from typing import Dict, List

from piriscope.config.defaults import DEVICE_TOOL, PIXEL_FORMAT, VIDEO_BITRATE_MODE
from piriscope.config.models import ResolvedCapture
from piriscope.errors import DeviceConfigurationError

logger = logging.getLogger(__name__)


def join_props(props: Dict[str, str], kv_separator: str = "=", field_separator: str = ",") -> str:
    """
    将字典拼接为 key=value,key=value 形式的参数串

    Args:
        props: 参数字典
        kv_separator: 键值分隔符
        field_separator: 字段分隔符
    """
    return field_separator.join(f"{key}{kv_separator}{value}" for key, value in props.items())


def _flag(value: bool) -> str:
    return "1" if value else "0"


def build_format_command(capture: ResolvedCapture) -> List[str]:
    """构建设置视频格式的 v4l2-ctl 命令"""
    video_props = {
        "width": str(capture.width),
        "height": str(capture.height),
        "pixelformat": PIXEL_FORMAT,
    }
    return [DEVICE_TOOL, f"--set-fmt-video={join_props(video_props)}"]


def build_control_command(capture: ResolvedCapture) -> List[str]:
    """构建设置编码控制参数的 v4l2-ctl 命令"""
    control_props = {
        "sharpness": str(capture.sharpness),
        "compression_quality": str(capture.quality),
        "video_bitrate_mode": VIDEO_BITRATE_MODE,
        "video_bitrate": str(capture.bitrate),
        "vertical_flip": _flag(capture.vflip),
        "horizontal_flip": _flag(capture.hflip),
    }
    return [DEVICE_TOOL, f"--set-ctrl={join_props(control_props)}"]


def build_device_commands(capture: ResolvedCapture) -> List[List[str]]:
    """按执行顺序返回两条设备配置命令"""
    return [build_format_command(capture), build_control_command(capture)]


def _run_device_command(cmd: List[str], runner) -> None:
    try:
        returncode = runner.run(cmd)
    except OSError as e:
        raise DeviceConfigurationError(cmd, f"无法启动: {e}") from e

    if returncode != 0:
        raise DeviceConfigurationError(cmd, f"退出码 {returncode}", returncode=returncode)


def configure_device(capture: ResolvedCapture, runner) -> None:
    """
    将采集参数应用到设备

    Args:
        capture: 最终生效的采集参数
        runner: 进程执行器，需提供 run(cmd) -> 退出码

    Raises:
        DeviceConfigurationError: 任一 v4l2-ctl 调用无法启动或返回非 0
    """
    logger.info(
        f"配置采集设备: {capture.width}x{capture.height}, 码率 {capture.bitrate} bps, "
        f"锐度 {capture.sharpness}, 质量 {capture.quality}"
    )
    for cmd in build_device_commands(capture):
        _run_device_command(cmd, runner)
    logger.info("采集设备配置完成")
