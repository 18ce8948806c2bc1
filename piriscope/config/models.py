#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置数据模型

默认值、配置文件、命令行三个来源各自生成一个 ConfigLayer，
按字段合并后冻结为 EffectiveConfiguration。

字段未设置统一用 None 表示，因此高优先级层可以显式把整数改回 0、
把布尔值改回 False。
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional

from piriscope.errors import ConfigurationError


@dataclass(frozen=True)
class DestinationCredential:
    """推流目的地凭据（Periscope stream key）"""

    key: Optional[str] = None


@dataclass(frozen=True)
class CaptureSettings:
    """采集设备参数，None 表示该层未设置"""

    width: Optional[int] = None
    height: Optional[int] = None
    sharpness: Optional[int] = None
    quality: Optional[int] = None
    bitrate: Optional[int] = None
    vflip: Optional[bool] = None
    hflip: Optional[bool] = None


@dataclass(frozen=True)
class ConfigLayer:
    """单个来源的配置层"""

    periscope: DestinationCredential = field(default_factory=DestinationCredential)
    video: CaptureSettings = field(default_factory=CaptureSettings)


@dataclass(frozen=True)
class ResolvedCapture:
    """合并完成后的采集参数，所有字段均有值"""

    width: int
    height: int
    sharpness: int
    quality: int
    bitrate: int
    vflip: bool
    hflip: bool


@dataclass(frozen=True)
class EffectiveConfiguration:
    """最终生效配置，只读，供设备配置和推流启动使用"""

    stream_key: str
    capture: ResolvedCapture

    @classmethod
    def from_layer(cls, layer: ConfigLayer) -> "EffectiveConfiguration":
        """
        冻结一个完整的配置层

        Raises:
            ConfigurationError: 合并后仍有字段未设置
        """
        missing = [
            f"video.{f.name}"
            for f in fields(layer.video)
            if getattr(layer.video, f.name) is None
        ]
        if layer.periscope.key is None:
            missing.insert(0, "periscope.key")
        if missing:
            raise ConfigurationError(f"合并后的配置缺少字段: {', '.join(missing)}")

        video = layer.video
        return cls(
            stream_key=layer.periscope.key,
            capture=ResolvedCapture(
                width=video.width,
                height=video.height,
                sharpness=video.sharpness,
                quality=video.quality,
                bitrate=video.bitrate,
                vflip=video.vflip,
                hflip=video.hflip,
            ),
        )


def merge_value(low: Any, high: Any) -> Any:
    """high 已设置则取 high，否则回退到 low"""
    return low if high is None else high


def merge_credential(low: DestinationCredential, high: DestinationCredential) -> DestinationCredential:
    return DestinationCredential(key=merge_value(low.key, high.key))


def merge_capture(low: CaptureSettings, high: CaptureSettings) -> CaptureSettings:
    return CaptureSettings(**{
        f.name: merge_value(getattr(low, f.name), getattr(high, f.name))
        for f in fields(CaptureSettings)
    })


def merge_config(low: ConfigLayer, high: ConfigLayer) -> ConfigLayer:
    """
    按字段合并两个配置层，high 中已设置的字段优先

    Args:
        low: 低优先级层
        high: 高优先级层

    Returns:
        新的配置层（输入不会被修改）
    """
    return ConfigLayer(
        periscope=merge_credential(low.periscope, high.periscope),
        video=merge_capture(low.video, high.video),
    )
