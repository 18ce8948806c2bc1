#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
构建信息

版本号取最近的 git tag，提交号取 HEAD；不在 git 仓库中时
回退到已安装包的版本和 "unknown"。程序启动时生成一次，之后只读。
"""

import subprocess
from importlib import metadata
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

UNKNOWN_COMMIT = "unknown"


@dataclass(frozen=True)
class BuildInfo:
    """版本与提交信息"""

    version: str
    commit: str

    def describe(self, program: str = "piriscope") -> str:
        return f"{program} {self.version} {self.commit}"


def _git(args, cwd: Path) -> Optional[str]:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    output = result.stdout.strip()
    return output or None


def _installed_version() -> str:
    """已安装发行包的版本号，未安装时取包内 __version__"""
    from piriscope import __version__

    try:
        return metadata.version("piriscope")
    except metadata.PackageNotFoundError:
        return __version__


def _is_repo_root(project_root: Path) -> bool:
    """project_root 必须正好是 git 仓库根目录，避免读到外层仓库的信息"""
    toplevel = _git(["rev-parse", "--show-toplevel"], project_root)
    if toplevel is None:
        return False
    return Path(toplevel).resolve() == project_root.resolve()


def detect_build_info(project_root: Optional[Path] = None) -> BuildInfo:
    """
    读取构建信息

    Args:
        project_root: git 仓库目录，默认为包所在目录的上一级
    """
    if project_root is None:
        project_root = Path(__file__).resolve().parent.parent

    if not _is_repo_root(project_root):
        return BuildInfo(version=_installed_version(), commit=UNKNOWN_COMMIT)

    version = _git(["describe", "--tags", "--abbrev=0"], project_root) or _installed_version()
    commit = _git(["rev-parse", "HEAD"], project_root) or UNKNOWN_COMMIT
    return BuildInfo(version=version, commit=commit)
