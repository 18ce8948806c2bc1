# 配置模块
"""配置模型、加载与合并"""

from piriscope.config.models import (
    CaptureSettings,
    ConfigLayer,
    DestinationCredential,
    EffectiveConfiguration,
    ResolvedCapture,
    merge_config,
)
from piriscope.config.loader import (
    build_cli_layer,
    default_layer,
    layer_from_dict,
    load_config,
    load_config_file,
)
from piriscope.config.resolver import resolve
from piriscope.config.defaults import DEFAULT_CONFIG

__all__ = [
    "CaptureSettings",
    "ConfigLayer",
    "DestinationCredential",
    "EffectiveConfiguration",
    "ResolvedCapture",
    "merge_config",
    "build_cli_layer",
    "default_layer",
    "layer_from_dict",
    "load_config",
    "load_config_file",
    "resolve",
    "DEFAULT_CONFIG",
]
