#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置解析

优先级: 命令行参数 > 配置文件 > 程序默认值
先合并配置文件与命令行，再整体覆盖到默认值上。
"""

from typing import Optional

from piriscope.config.models import ConfigLayer, EffectiveConfiguration, merge_config


def resolve(
    defaults: ConfigLayer,
    file_layer: Optional[ConfigLayer] = None,
    cli_layer: Optional[ConfigLayer] = None,
) -> EffectiveConfiguration:
    """
    合并三层配置，返回最终生效配置

    Args:
        defaults: 完整的默认配置层
        file_layer: 配置文件层，未指定配置文件时为 None
        cli_layer: 命令行层

    Returns:
        EffectiveConfiguration
    """
    if file_layer is None:
        file_layer = ConfigLayer()
    if cli_layer is None:
        cli_layer = ConfigLayer()

    merged = merge_config(defaults, merge_config(file_layer, cli_layer))
    return EffectiveConfiguration.from_layer(merged)
