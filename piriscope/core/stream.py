#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
推流启动模块

构建 Periscope RTMP 地址和 ffmpeg 参数，异步启动推流进程。
是否等待进程结束由调用方决定。
"""

import logging
from typing import List, Optional

from piriscope.config.defaults import (
    ENCODER_TOOL,
    KEYFRAME_INTERVAL,
    STREAM_URL_PREFIX,
    VIDEO_DEVICE,
)
from piriscope.errors import LaunchError, MissingCredentialError

logger = logging.getLogger(__name__)


def build_stream_url(stream_key: str) -> str:
    """拼接 RTMP 推流地址，密钥原样拼接不做转义"""
    return STREAM_URL_PREFIX + stream_key


def build_encoder_command(stream_url: str) -> List[str]:
    """
    构建 ffmpeg 推流命令

    视频直接复制设备输出的 H.264，音频用静音源编码为 AAC
    （Periscope 要求必须有音轨）
    """
    return [
        ENCODER_TOOL,
        "-re",                                  # 按输入原始速率读取
        "-f", "lavfi", "-i", "anullsrc",        # 静音音频源
        "-f", "h264", "-i", VIDEO_DEVICE,       # 设备输出的 H.264 视频
        "-acodec", "aac",
        "-b:a", "0",
        "-map", "0:a",
        "-map", "1:v",
        "-f", "h264",
        "-vcodec", "copy",                      # 不重新编码
        "-g", str(KEYFRAME_INTERVAL),
        "-f", "flv",
        stream_url,
    ]


def require_stream_key(stream_key: Optional[str]) -> str:
    """
    Raises:
        MissingCredentialError: 推流密钥为空
    """
    if not stream_key:
        raise MissingCredentialError()
    return stream_key


def launch_stream(stream_key: Optional[str], runner):
    """
    启动推流进程

    Args:
        stream_key: Periscope 推流密钥
        runner: 进程执行器，需提供 start(cmd) -> 进程句柄

    Returns:
        已启动的进程句柄（未等待）

    Raises:
        MissingCredentialError: 推流密钥为空，不会启动任何进程
        LaunchError: ffmpeg 无法启动
    """
    stream_key = require_stream_key(stream_key)
    cmd = build_encoder_command(build_stream_url(stream_key))

    try:
        process = runner.start(cmd)
    except OSError as e:
        raise LaunchError(cmd, str(e)) from e

    logger.info("推流已启动", extra={"pid": getattr(process, "pid", None)})
    return process
