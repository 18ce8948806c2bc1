# piriscope - 树莓派摄像头 Periscope 推流工具
"""
piriscope 包

主要模块:
- config: 配置模型、加载与合并
- core: 设备配置与推流启动
- service: 流程编排
- utils: 日志、进程、工具检测
"""

__version__ = "0.1.0"

from piriscope.config import load_config, resolve
from piriscope.service import run_stream, start_stream

__all__ = [
    "__version__",
    "load_config",
    "resolve",
    "run_stream",
    "start_stream",
]
