#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
默认配置常量

定义程序的默认配置值以及 v4l2-ctl / ffmpeg 调用所需的固定参数
"""

# ============================================================
# 采集参数默认值
# ============================================================
DEFAULT_WIDTH = 960
DEFAULT_HEIGHT = 540
DEFAULT_SHARPNESS = 30
DEFAULT_QUALITY = 80
DEFAULT_BITRATE = 800000  # 800 kbps
DEFAULT_VFLIP = False
DEFAULT_HFLIP = False

# ============================================================
# 推流密钥（无内置默认值）
# ============================================================
DEFAULT_STREAM_KEY = ""

# ============================================================
# 设备配置工具 (v4l2-ctl)
# ============================================================
DEVICE_TOOL = "v4l2-ctl"
PIXEL_FORMAT = "4"  # H.264
VIDEO_BITRATE_MODE = "1"  # 恒定码率

# ============================================================
# 编码/推流工具 (ffmpeg)
# ============================================================
ENCODER_TOOL = "ffmpeg"
VIDEO_DEVICE = "/dev/video0"
KEYFRAME_INTERVAL = 60  # 30fps 下每 2 秒一个关键帧
STREAM_URL_PREFIX = "rtmp://va.pscp.tv:80/x/"

# ============================================================
# 日志配置
# ============================================================
DEFAULT_LOG_LEVEL = "INFO"

# ============================================================
# 默认配置字典（与配置文件结构一致）
# ============================================================
DEFAULT_CONFIG = {
    "periscope": {
        "key": DEFAULT_STREAM_KEY,
    },
    "video": {
        "width": DEFAULT_WIDTH,
        "height": DEFAULT_HEIGHT,
        "sharpness": DEFAULT_SHARPNESS,
        "quality": DEFAULT_QUALITY,
        "bitrate": DEFAULT_BITRATE,
        "vflip": DEFAULT_VFLIP,
        "hflip": DEFAULT_HFLIP,
    },
}
