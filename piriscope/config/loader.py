#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置加载器

从 YAML/JSON 文件和命令行参数构建配置层，并合并为最终配置
优先级: 命令行参数 > 配置文件 > 程序默认值
"""

import logging
from typing import Any, Dict, Optional

import yaml

from piriscope.config.defaults import DEFAULT_CONFIG
from piriscope.config.models import (
    CaptureSettings,
    ConfigLayer,
    DestinationCredential,
    EffectiveConfiguration,
)
from piriscope.config.resolver import resolve
from piriscope.errors import ConfigFileError

logger = logging.getLogger(__name__)

# 各段允许的字段及其类型
STRING_FIELDS = {"periscope": ("key",)}
INT_FIELDS = {"video": ("width", "height", "sharpness", "quality", "bitrate")}
BOOL_FIELDS = {"video": ("vflip", "hflip")}


def _check_value(source: str, section: str, name: str, value: Any) -> Any:
    """校验单个字段类型，None 视为未设置"""
    if value is None:
        return None
    where = f"{section}.{name}"
    if name in STRING_FIELDS.get(section, ()):
        if not isinstance(value, str):
            raise ConfigFileError(source, f"{where} 必须是字符串，实际为 {value!r}")
    elif name in INT_FIELDS.get(section, ()):
        # bool 是 int 的子类，需要单独排除
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigFileError(source, f"{where} 必须是整数，实际为 {value!r}")
    elif name in BOOL_FIELDS.get(section, ()):
        if not isinstance(value, bool):
            raise ConfigFileError(source, f"{where} 必须是布尔值，实际为 {value!r}")
    return value


def _section_values(data: Dict[str, Any], section: str, source: str) -> Dict[str, Any]:
    raw = data.get(section)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigFileError(source, f"{section} 段必须是对象")

    known = STRING_FIELDS.get(section, ()) + INT_FIELDS.get(section, ()) + BOOL_FIELDS.get(section, ())
    values = {}
    for name, value in raw.items():
        if name not in known:
            logger.warning(f"忽略未知配置项: {section}.{name}", extra={"file": source})
            continue
        values[name] = _check_value(source, section, name, value)
    return values


def layer_from_dict(data: Optional[Dict[str, Any]], source: str = "<dict>") -> ConfigLayer:
    """
    从字典构建配置层，缺失的段和字段视为未设置

    Args:
        data: 与配置文件结构一致的字典
        source: 来源描述，用于错误信息

    Raises:
        ConfigFileError: 结构或字段类型不正确
    """
    if data is None:
        return ConfigLayer()
    if not isinstance(data, dict):
        raise ConfigFileError(source, "顶层必须是对象")

    for section in data:
        if section not in ("periscope", "video"):
            logger.warning(f"忽略未知配置段: {section}", extra={"file": source})

    return ConfigLayer(
        periscope=DestinationCredential(**_section_values(data, "periscope", source)),
        video=CaptureSettings(**_section_values(data, "video", source)),
    )


def default_layer() -> ConfigLayer:
    """程序内置默认配置层"""
    return layer_from_dict(DEFAULT_CONFIG, "<defaults>")


def load_config_file(config_path: str) -> ConfigLayer:
    """
    读取配置文件

    JSON 是 YAML 的子集，统一使用 yaml.safe_load 解析

    Args:
        config_path: 配置文件路径

    Returns:
        配置文件层

    Raises:
        ConfigFileError: 文件无法读取或内容无法解析
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigFileError(config_path, e.strerror or str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigFileError(config_path, f"无法解析: {e}") from e

    layer = layer_from_dict(data, config_path)
    logger.info("使用配置文件", extra={"file": config_path})
    return layer


def build_cli_layer(args) -> ConfigLayer:
    """
    从命令行参数构建配置层

    目前只有推流密钥可以从命令行设置
    """
    key = getattr(args, "key", None)
    return ConfigLayer(periscope=DestinationCredential(key=key))


def load_config(config_path: Optional[str], args) -> EffectiveConfiguration:
    """
    加载并合并全部配置

    Args:
        config_path: 配置文件路径，None 表示不使用配置文件
        args: 命令行参数

    Returns:
        最终生效配置
    """
    file_layer = load_config_file(config_path) if config_path else None
    return resolve(default_layer(), file_layer, build_cli_layer(args))
