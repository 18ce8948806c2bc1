#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
流程编排测试

使用 FakeRunner 记录调用，验证执行顺序与失败传播
"""

import logging

import pytest

from conftest import FakeRunner
from piriscope.config.models import EffectiveConfiguration
from piriscope.errors import DeviceConfigurationError, LaunchError, MissingCredentialError
from piriscope.service import log_plan, plan_commands, run_stream, start_stream


def test_full_sequence(effective_config, fake_runner):
    returncode = run_stream(effective_config, runner=fake_runner)

    assert returncode == 0
    kinds = [kind for kind, _ in fake_runner.calls]
    assert kinds == ["run", "run", "start"]
    assert fake_runner.started[0].waited is True


def test_encoder_exit_code_returned(effective_config):
    runner = FakeRunner(encoder_returncode=1)
    assert run_stream(effective_config, runner=runner) == 1


def test_no_wait_leaves_process_running(effective_config, fake_runner):
    assert run_stream(effective_config, runner=fake_runner, wait=False) == 0
    assert fake_runner.started[0].waited is False


def test_start_stream_returns_handle(effective_config, fake_runner):
    process = start_stream(effective_config, runner=fake_runner)
    assert process is fake_runner.started[0]
    assert process.waited is False


def test_device_failure_prevents_launch(effective_config):
    runner = FakeRunner(run_returncodes=[1])

    with pytest.raises(DeviceConfigurationError):
        run_stream(effective_config, runner=runner)

    assert len(runner.run_calls) == 1
    assert runner.start_calls == []


def test_second_device_call_failure_prevents_launch(effective_config):
    runner = FakeRunner(run_returncodes=[0, 1])

    with pytest.raises(DeviceConfigurationError):
        run_stream(effective_config, runner=runner)

    assert len(runner.run_calls) == 2
    assert runner.start_calls == []


def test_missing_key_runs_nothing(capture, fake_runner):
    config = EffectiveConfiguration(stream_key="", capture=capture)

    with pytest.raises(MissingCredentialError):
        run_stream(config, runner=fake_runner)

    assert fake_runner.calls == []


def test_launch_failure_propagates(effective_config):
    runner = FakeRunner(start_error=OSError("exec format error"))

    with pytest.raises(LaunchError):
        run_stream(effective_config, runner=runner)

    assert len(runner.run_calls) == 2


def test_plan_commands(effective_config):
    commands = plan_commands(effective_config)

    assert [cmd[0] for cmd in commands] == ["v4l2-ctl", "v4l2-ctl", "ffmpeg"]
    assert commands[2][-1] == "rtmp://va.pscp.tv:80/x/abc123"


def test_plan_requires_key(capture):
    with pytest.raises(MissingCredentialError):
        plan_commands(EffectiveConfiguration(stream_key="", capture=capture))


def test_log_plan(effective_config, caplog):
    with caplog.at_level(logging.INFO):
        log_plan(effective_config)

    assert "DRY RUN" in caplog.text
    assert "--set-fmt-video=" in caplog.text
    assert "rtmp://va.pscp.tv:80/x/abc123" in caplog.text


def test_encoder_killed_by_signal(effective_config):
    runner = FakeRunner(encoder_returncode=-9)
    assert run_stream(effective_config, runner=runner) == 137
