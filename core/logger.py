# core/logger.py
import logging
import os
import sys
from typing import Optional

# 全局logger实例
_logger: Optional[logging.Logger] = None

def get_logger() -> logging.Logger:
    """获取全局logger实例"""
    global _logger
    if _logger is None:
        _logger = setup_logger(level=_level_from_env())
    return _logger

def _level_from_env() -> int:
    # LOG_LEVEL=DEBUG / INFO / WARNING ...，无法识别时回退INFO
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO

def setup_logger(
    name: str = "ensresolve",
    level: int = logging.INFO,
    format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
) -> logging.Logger:
    """
    设置全局logger配置

    Args:
        name: logger名称
        level: 日志级别 (DEBUG=10, INFO=20, WARNING=30, ERROR=40)
        format_str: 日志格式
    """
    logger = logging.getLogger(name)

    # 如果已经有handler，先清除
    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_str))

    logger.addHandler(handler)
    logger.setLevel(level)

    # 防止日志向上传播（避免重复输出）
    logger.propagate = False

    global _logger
    _logger = logger
    return logger

def set_log_level(level: int):
    """动态修改日志级别"""
    logger = get_logger()
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)

def enable_debug():
    """启用DEBUG级别日志"""
    set_log_level(logging.DEBUG)
