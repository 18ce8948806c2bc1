#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
进程管理模块

提供外部命令的同步执行 / 异步启动，并管理已启动的子进程，
支持收到 SIGINT/SIGTERM 时清理所有子进程
"""

import signal
import logging
import subprocess
import threading
from typing import List, Set

# 全局进程集合和锁
_child_processes: Set = set()
_process_lock = threading.Lock()


def format_command(cmd: List[str]) -> str:
    """将命令列表格式化为便于阅读的字符串（含空格的参数加引号）"""
    return " ".join(f'"{arg}"' if " " in str(arg) else str(arg) for arg in cmd)


def log_command(cmd: List[str]) -> None:
    """以 DEBUG 级别记录即将执行的命令"""
    logging.debug(
        "执行命令",
        extra={"cmd": cmd[0], "cmd_args": format_command(cmd[1:])},
    )


def register_process(process) -> None:
    """
    注册一个子进程到全局集合

    Args:
        process: subprocess.Popen 对象
    """
    with _process_lock:
        _child_processes.add(process)


def unregister_process(process) -> None:
    """
    从全局集合中移除一个子进程

    Args:
        process: subprocess.Popen 对象
    """
    with _process_lock:
        _child_processes.discard(process)


def terminate_all_processes() -> None:
    """
    终止所有注册的子进程
    """
    with _process_lock:
        processes = list(_child_processes)

    if not processes:
        return

    logging.info(f"正在终止 {len(processes)} 个子进程...")

    for process in processes:
        try:
            if process.poll() is None:  # 进程仍在运行
                process.terminate()
                logging.debug(f"已发送 SIGTERM 到进程 {process.pid}")
        except OSError as e:
            logging.warning(f"终止进程时出错: {e}")

    # 等待进程退出，如果超时则强制杀死
    for process in processes:
        try:
            if process.poll() is None:
                process.wait(timeout=3)
        except subprocess.TimeoutExpired:
            try:
                process.kill()
                logging.debug(f"已发送 SIGKILL 到进程 {process.pid}")
            except OSError as e:
                logging.warning(f"强制终止进程失败: {e}")
        finally:
            unregister_process(process)

    logging.info("所有子进程已终止")


def setup_signal_handlers() -> None:
    """
    设置信号处理器，捕获 SIGINT (Ctrl+C) 和 SIGTERM
    """

    def signal_handler(signum, frame):
        sig_name = "SIGINT" if signum == signal.SIGINT else "SIGTERM"
        logging.warning(f"收到 {sig_name} 信号，正在清理...")
        terminate_all_processes()
        raise KeyboardInterrupt()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


class ProcessRunner:
    """
    外部命令执行器

    子进程的 stdout/stderr 直接继承当前进程，不做捕获。
    测试中可替换为记录调用的假实现。
    """

    def run(self, cmd: List[str]) -> int:
        """
        同步执行命令并等待退出

        Returns:
            进程退出码

        Raises:
            OSError: 命令无法启动（如可执行文件不存在）
        """
        log_command(cmd)
        process = subprocess.Popen(cmd)
        register_process(process)
        try:
            return process.wait()
        finally:
            unregister_process(process)

    def start(self, cmd: List[str]) -> subprocess.Popen:
        """
        异步启动命令，不等待退出

        返回的进程已注册，调用方等待结束后应调用 wait_process 注销。

        Raises:
            OSError: 命令无法启动
        """
        log_command(cmd)
        process = subprocess.Popen(cmd)
        register_process(process)
        logging.debug(f"子进程已启动 (PID={process.pid})", extra={"cmd": cmd[0], "pid": process.pid})
        return process


def wait_process(process) -> int:
    """
    阻塞等待子进程退出并注销

    Returns:
        进程退出码
    """
    try:
        return process.wait()
    finally:
        unregister_process(process)


def exit_status(returncode: int) -> int:
    """
    将 Popen 退出码转换为进程退出状态

    被信号终止时 Popen 返回 -signum，按 shell 约定转换为 128 + signum
    """
    if returncode < 0:
        return 128 - returncode
    return returncode
