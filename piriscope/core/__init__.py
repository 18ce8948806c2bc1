# 核心模块
"""设备配置与推流启动"""

from piriscope.core.device import (
    build_control_command,
    build_device_commands,
    build_format_command,
    configure_device,
    join_props,
)
from piriscope.core.stream import (
    build_encoder_command,
    build_stream_url,
    launch_stream,
    require_stream_key,
)

__all__ = [
    "build_control_command",
    "build_device_commands",
    "build_format_command",
    "configure_device",
    "join_props",
    "build_encoder_command",
    "build_stream_url",
    "launch_stream",
    "require_stream_key",
]
