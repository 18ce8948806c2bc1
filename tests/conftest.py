#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
pytest 配置文件
"""

import os
import sys
import pytest

# 添加项目根目录到 Python 路径
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from piriscope.config.models import EffectiveConfiguration, ResolvedCapture


class FakeProcess:
    """模拟 subprocess.Popen 句柄"""

    def __init__(self, returncode=0, pid=4242, interrupt_on_wait=False):
        self.pid = pid
        self._returncode = returncode
        self.interrupt_on_wait = interrupt_on_wait
        self.waited = False
        self.terminated = False

    def poll(self):
        return self._returncode if (self.waited or self.terminated) else None

    def wait(self, timeout=None):
        if self.interrupt_on_wait and not self.terminated:
            raise KeyboardInterrupt()
        self.waited = True
        return self._returncode

    def terminate(self):
        self.terminated = True
        self._returncode = -15


class FakeRunner:
    """记录调用的进程执行器，不启动真实进程"""

    def __init__(self, run_returncodes=None, run_error=None, start_error=None,
                 encoder_returncode=0, interrupt_on_wait=False):
        self.calls = []
        self.run_returncodes = list(run_returncodes or [])
        self.run_error = run_error
        self.start_error = start_error
        self.encoder_returncode = encoder_returncode
        self.interrupt_on_wait = interrupt_on_wait
        self.started = []

    @property
    def run_calls(self):
        return [cmd for kind, cmd in self.calls if kind == "run"]

    @property
    def start_calls(self):
        return [cmd for kind, cmd in self.calls if kind == "start"]

    def run(self, cmd):
        self.calls.append(("run", list(cmd)))
        if self.run_error is not None:
            raise self.run_error
        if self.run_returncodes:
            return self.run_returncodes.pop(0)
        return 0

    def start(self, cmd):
        self.calls.append(("start", list(cmd)))
        if self.start_error is not None:
            raise self.start_error
        process = FakeProcess(returncode=self.encoder_returncode, interrupt_on_wait=self.interrupt_on_wait)
        self.started.append(process)
        return process


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def capture():
    """返回测试用采集参数"""
    return ResolvedCapture(
        width=1280,
        height=720,
        sharpness=40,
        quality=90,
        bitrate=1000000,
        vflip=True,
        hflip=False,
    )


@pytest.fixture
def effective_config(capture):
    return EffectiveConfiguration(stream_key="abc123", capture=capture)
