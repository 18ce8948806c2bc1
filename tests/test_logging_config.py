#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""日志配置单元测试。"""

import json
import logging

import pytest

from piriscope.utils.logging import (
    ConsoleFormatter,
    FileFormatter,
    JsonFormatter,
    _resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg, **extra):
    record = logging.LogRecord("piriscope.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_resolve_level():
    assert _resolve_level("debug") == logging.DEBUG
    assert _resolve_level(logging.WARNING) == logging.WARNING
    assert _resolve_level("nonsense") == logging.INFO
    assert _resolve_level(None) == logging.INFO


def test_console_formatter_context():
    line = ConsoleFormatter().format(_record("执行命令", cmd="v4l2-ctl", cmd_args="--set-ctrl=a=1"))
    assert "执行命令" in line
    assert "(cmd=v4l2-ctl args=--set-ctrl=a=1)" in line
    assert "\033[" not in line


def test_console_formatter_color():
    line = ConsoleFormatter(enable_color=True).format(_record("hello"))
    assert line.startswith("\033[32m")
    assert line.endswith("\033[0m")


def test_file_formatter():
    line = FileFormatter().format(_record("hello", pid=42))
    assert "| INFO    | piriscope.test | hello (pid=42)" in line


def test_setup_logging_json_console(capsys):
    log_file = setup_logging(None, level="INFO", json_console=True)
    assert log_file is None

    logging.getLogger("test_logger").info("hello", extra={"file": "piriscope.yaml", "returncode": 1})

    captured = capsys.readouterr().err.strip()
    data = json.loads(captured)
    assert data["msg"] == "hello"
    assert data["file"] == "piriscope.yaml"
    assert data["returncode"] == 1


def test_setup_logging_console_level(capsys):
    setup_logging(None, level="INFO", plain=True)

    logging.getLogger("test_logger").debug("hidden")
    logging.getLogger("test_logger").info("shown")

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err


def test_setup_logging_file(tmp_path, capsys):
    log_dir = tmp_path / "logs"
    log_file = setup_logging(str(log_dir), level="WARNING", plain=True)

    assert log_dir.exists()
    assert log_file.endswith(".log")

    logging.getLogger("test_logger").debug("debug detail")
    for handler in logging.getLogger().handlers:
        handler.flush()

    with open(log_file, encoding="utf-8") as f:
        content = f.read()
    # 文件始终记录 DEBUG
    assert "debug detail" in content
    assert "debug detail" not in capsys.readouterr().err


def test_json_formatter_labels_command_args():
    data = json.loads(JsonFormatter().format(_record("执行命令", cmd="ffmpeg", cmd_args="-re -f flv")))
    assert data["cmd"] == "ffmpeg"
    assert data["args"] == "-re -f flv"
    assert "cmd_args" not in data
