"""日志系统，为pphooks提供统一的日志配置和操作计时。

日志只写到stderr（以及可选的日志文件），stdout保留给校验报告。

支持的输出格式：
- 人类友好格式（默认）
- 调试详细格式（PPHOOKS_DEBUG=true）
- JSON格式（日志文件，机器可读）
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from ..exceptions import PPHooksError

ROOT_LOGGER_NAME = "pphooks"

# LogRecord自带的属性，JSON输出时不当作额外字段
_RESERVED_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class LogFormat(Enum):
    """日志格式枚举。"""
    JSON = "json"           # JSON格式，机器可读
    HUMAN = "human"         # 人类友好格式
    DEBUG = "debug"         # 调试详细格式


class JsonFormatter(logging.Formatter):
    """JSON格式化器。"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # 添加extra传入的字段
        for key, value in vars(record).items():
            if key not in _RESERVED_RECORD_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, separators=(',', ':'), default=str)


class HumanFormatter(logging.Formatter):
    """人类友好格式化器。"""

    def __init__(self):
        super().__init__(fmt='%(levelname)s %(name)s: %(message)s')


class DebugFormatter(logging.Formatter):
    """调试详细格式化器。"""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s [%(levelname)s] %(name)s:%(module)s:%(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


def get_formatter(log_format: LogFormat) -> logging.Formatter:
    """获取指定格式的日志格式化器。"""
    if log_format == LogFormat.JSON:
        return JsonFormatter()
    elif log_format == LogFormat.DEBUG:
        return DebugFormatter()
    return HumanFormatter()


def configure_logging(level: Union[int, str] = logging.WARNING,
                      debug: bool = False,
                      log_file: Optional[Path] = None,
                      stream: Optional[TextIO] = None) -> logging.Logger:
    """配置pphooks根日志记录器。

    Args:
        level: 日志级别
        debug: 是否使用调试详细格式
        log_file: 可选的JSON日志文件路径
        stream: 控制台输出流，默认为stderr

    Returns:
        配置好的pphooks根日志记录器
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()  # 清除已有处理器，允许重复配置
    logger.propagate = False

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(get_formatter(LogFormat.DEBUG if debug else LogFormat.HUMAN))
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(get_formatter(LogFormat.JSON))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """获取pphooks命名空间下的日志记录器。"""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def log_error(error: Exception, message: Optional[str] = None,
              logger: Optional[logging.Logger] = None) -> None:
    """便捷的错误日志记录函数。"""
    logger = logger or get_logger()
    log_message = message or f"发生错误: {type(error).__name__}"
    extra = {}
    if isinstance(error, PPHooksError):
        extra = {"error_code": error.error_code, "error_context": error.context}
    logger.error(log_message, exc_info=error, extra=extra)


@contextmanager
def log_operation(operation_name: str,
                  logger: Optional[logging.Logger] = None,
                  **fields) -> Iterator[None]:
    """操作计时上下文管理器，失败时记录异常后继续抛出。"""
    logger = logger or get_logger()
    start_time = time.perf_counter()
    logger.debug("开始操作: %s", operation_name, extra={"operation": operation_name, **fields})
    try:
        yield
    except Exception:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.exception("操作失败: %s (%.2fms)", operation_name, duration_ms,
                         extra={"operation": operation_name, "duration_ms": duration_ms, **fields})
        raise
    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.debug("完成操作: %s (%.2fms)", operation_name, duration_ms,
                 extra={"operation": operation_name, "duration_ms": duration_ms, **fields})


__all__ = [
    "LogFormat",
    "JsonFormatter",
    "HumanFormatter",
    "DebugFormatter",
    "get_formatter",
    "configure_logging",
    "get_logger",
    "log_error",
    "log_operation",
]
