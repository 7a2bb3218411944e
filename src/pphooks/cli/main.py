"""pphooks命令行入口。

提供两个console script入口（见pyproject.toml）：
- pphooks-pre-commit：git预提交钩子本身，不接受参数
- pphooks：管理命令（run / install / categories）

所有命令共用统一的错误处理：前置条件错误和未预期的异常都返回退出码1，
以确保出错时提交被阻止。
"""

import argparse
import logging
import os
import signal
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, NoReturn, Optional, TextIO, Tuple, Union

import psutil

from ..config import HookSettings
from ..exceptions import PPHooksError, PreconditionError
from ..output_utils import EXIT_FAILURE, EXIT_INTERRUPTED, format_precondition_error
from ..services.runner import ValidationRunner
from ..services.tool_resolver import resolve_working_tree
from ..utils.formatters import ConsoleReporter
from ..utils.logging import configure_logging, log_error
from .argument_parser import parse_args
from .commands.install_hook import execute_install_hook
from .commands.list_categories import execute_list_categories

PERFORMANCE_THRESHOLD_MS = 30_000

logger = logging.getLogger(__name__)


def run_checks(args: argparse.Namespace,
               cwd: Union[str, Path, None] = None,
               file: Optional[TextIO] = None) -> int:
    """执行全部校验：定位工作树根目录，切换到该目录，然后运行ValidationRunner。"""
    root = resolve_working_tree(cwd)
    # 整个运行期间唯一一次修改进程级状态
    os.chdir(root)
    reporter = ConsoleReporter(file or sys.stdout, color=getattr(args, "color", None))
    return ValidationRunner(root, reporter=reporter).run()


# 命令映射表 - 子命令名 -> (执行函数, 描述)
COMMAND_REGISTRY: Dict[str, Tuple[Callable[[argparse.Namespace], int], str]] = {
    "run": (run_checks, "校验工作树中的Puppet代码"),
    "install": (execute_install_hook, "安装预提交钩子"),
    "categories": (execute_list_categories, "列出校验的文件类别"),
}


def _setup_signal_handlers() -> None:
    """设置信号处理器，中断时以130退出，提交同样被阻止。"""
    def signal_handler(signum: int, frame: Any) -> None:
        logger.debug(f"接收到信号: {signum}")
        print("\n\nInterrupted", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, signal_handler)
    if hasattr(signal, 'SIGTERM'):
        signal.signal(signal.SIGTERM, signal_handler)


def _measure_performance(command: str, debug: bool = False):
    """测量并记录性能数据。"""
    class PerformanceMonitor:
        def __init__(self):
            self.start_time = time.perf_counter()
            self.memory_start = None
            # 仅在调试模式下监控内存使用
            if debug:
                self.memory_start = psutil.Process().memory_info().rss / 1024 / 1024  # MB

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            elapsed_ms = (time.perf_counter() - self.start_time) * 1000

            if elapsed_ms > PERFORMANCE_THRESHOLD_MS:
                logger.warning(f"{command} took {elapsed_ms / 1000:.1f}s")
            elif debug:
                logger.debug(f"{command} 执行时间: {elapsed_ms:.2f}ms")

            if debug and self.memory_start is not None:
                memory_end = psutil.Process().memory_info().rss / 1024 / 1024  # MB
                logger.debug(
                    f"{command} 内存使用: {memory_end - self.memory_start:+.1f}MB "
                    f"(开始: {self.memory_start:.1f}MB, 结束: {memory_end:.1f}MB)"
                )

    return PerformanceMonitor()


def _execute_command_safely(command_name: str,
                            command_func: Callable[[argparse.Namespace], int],
                            args: argparse.Namespace,
                            settings: HookSettings) -> int:
    """安全执行命令，包含统一的错误处理和性能监控。"""
    try:
        with _measure_performance(command_name, debug=settings.debug):
            return command_func(args)

    except PreconditionError as e:
        logger.debug(f"{command_name} 前置条件失败: {e.get_full_details()}")
        print(format_precondition_error(e), file=sys.stderr)
        return EXIT_FAILURE
    except PPHooksError as e:
        log_error(e, f"{command_name} failed", logger=logger)
        print(e.get_user_message(), file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        logger.exception(f"{command_name} 未预期的错误")
        if settings.debug:
            print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        else:
            print("Internal error, rerun with PPHOOKS_DEBUG=true for details", file=sys.stderr)
        return EXIT_FAILURE


def _prepare(argv: Optional[list] = None) -> Tuple[argparse.Namespace, HookSettings]:
    settings = HookSettings.from_env()
    configure_logging(level=settings.level, debug=settings.debug, log_file=settings.log_file)
    args = parse_args(argv)
    # 环境变量可以关闭颜色，--no-color 同样
    if not settings.color:
        args.color = False
    return args, settings


def main(argv: Optional[list] = None) -> NoReturn:
    """主入口点 - pphooks 管理命令调度器。"""
    _setup_signal_handlers()
    args, settings = _prepare(argv)
    command_func, _description = COMMAND_REGISTRY[args.subcommand]
    sys.exit(_execute_command_safely(args.subcommand, command_func, args, settings))


def pre_commit_main() -> NoReturn:
    """git预提交钩子入口，忽略所有参数。"""
    _setup_signal_handlers()
    args, settings = _prepare(["run"])
    sys.exit(_execute_command_safely("pre-commit", run_checks, args, settings))


if __name__ == "__main__":
    main()
