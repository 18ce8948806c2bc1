#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
异常类型

所有异常均继承自 PiriscopeError，CLI 统一捕获后转换为退出码。
任何一个阶段失败都会终止本次运行，不做重试。
"""

from typing import List, Optional


class PiriscopeError(Exception):
    """所有 piriscope 错误的基类"""
    pass


class ConfigurationError(PiriscopeError):
    """配置合并后仍缺少必要字段"""
    pass


class ConfigFileError(ConfigurationError):
    """配置文件无法读取或解析"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"配置文件错误 ({path}): {reason}")


class MissingCredentialError(PiriscopeError):
    """推流密钥为空"""

    def __init__(self):
        super().__init__("缺少 Periscope 推流密钥，请使用 -k/--key 或在配置文件中设置 periscope.key")


class DeviceConfigurationError(PiriscopeError):
    """v4l2-ctl 无法启动或返回失败状态"""

    def __init__(self, cmd: List[str], reason: str, returncode: Optional[int] = None):
        self.cmd = list(cmd)
        self.reason = reason
        self.returncode = returncode
        super().__init__(f"设备配置失败 ({' '.join(self.cmd)}): {reason}")


class LaunchError(PiriscopeError):
    """编码进程无法启动"""

    def __init__(self, cmd: List[str], reason: str):
        self.cmd = list(cmd)
        self.reason = reason
        super().__init__(f"推流进程启动失败 ({self.cmd[0] if self.cmd else '?'}): {reason}")
