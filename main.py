#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
piriscope - 主入口

简洁的主入口脚本
"""

import sys

from cli import main


if __name__ == "__main__":
    sys.exit(main())
