#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
piriscope - CLI 入口

命令行参数解析、配置合并、设备配置与推流
"""

import os
import sys
import logging
import argparse
from typing import List, Optional

# 确保可以导入 piriscope 包
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from piriscope.bootstrap import prepare_environment
from piriscope.buildinfo import detect_build_info
from piriscope.config import load_config
from piriscope.errors import PiriscopeError
from piriscope.service import log_plan, run_stream
from piriscope.utils.process import terminate_all_processes


class BuildInfoVersionAction(argparse.Action):
    """仅在给出 --version 时才读取构建信息（需要调用 git）"""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        sys.stdout.write(detect_build_info().describe() + "\n")
        parser.exit()


def parse_arguments(argv: Optional[List[str]] = None):
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        prog='piriscope',
        description='piriscope - 树莓派摄像头 Periscope 推流工具 (https://github.com/schmich/piriscope)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
使用示例:
  # 基本用法
  python main.py -k <stream-key>

  # 使用配置文件
  python main.py -c ./piriscope.yaml

  # 预览将要执行的命令（不实际执行）
  python main.py -c ./piriscope.yaml --dry-run
        '''
    )

    parser.add_argument('-k', '--key', default=None,
                        help='Periscope 推流密钥')
    parser.add_argument('-c', '--conf', '--config', dest='config', default=None,
                        help='配置文件路径 (YAML 或 JSON)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='输出调试信息')

    # 日志选项
    parser.add_argument('--log-dir', default=None,
                        help='同时将日志写入该目录')
    parser.add_argument('--plain', action='store_true',
                        help='控制台禁用彩色输出')
    parser.add_argument('--json-logs', action='store_true',
                        help='控制台输出 JSON 行日志')

    parser.add_argument('--dry-run', action='store_true',
                        help='仅显示将要执行的命令，不实际执行')
    parser.add_argument('--version', action=BuildInfoVersionAction,
                        help='显示版本信息并退出')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, runner=None) -> int:
    """主函数"""
    args = parse_arguments(argv)

    try:
        prepare_environment(
            verbose=args.verbose,
            log_folder=args.log_dir,
            plain=args.plain,
            json_console=args.json_logs,
            check_tools=not args.dry_run,
        )

        config = load_config(args.config, args)

        if args.dry_run:
            log_plan(config)
            return 0

        return run_stream(config, runner=runner)

    except PiriscopeError as e:
        logging.error(str(e))
        return 1
    except KeyboardInterrupt:
        logging.warning("用户中断操作")
        terminate_all_processes()
        return 130
    except Exception as e:
        logging.critical(f"程序执行过程中发生严重错误: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
