"""
统一的日志管理模块
整合基础日志配置和高级日志功能
"""

import asyncio
import logging
import sys
import os
import time
import functools
import traceback
import threading
from pathlib import Path
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Optional, Dict, Any, Callable
from dataclasses import dataclass
from collections import defaultdict

from .exceptions import QuoteServiceError, ErrorCodes
from .config_manager import config_manager
from .path_utils import BASE_DIR

# 获取 logging_manager 模块的专用日志器
logger = logging.getLogger("LoggingManager")


@dataclass
class LogConfig:
    """日志配置"""
    level: str = "INFO"
    format: str = "[%(levelname)s][%(asctime)s][%(filename)s:%(lineno)d] - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_max_bytes: int = 10 * 1024 * 1024  # 10MB
    file_backup_count: int = 5
    enable_console: bool = True
    enable_file: bool = True
    log_directory: Optional[str] = None
    log_filename: str = "sys.log"
    rotation_type: str = "size"  # "size" or "time"
    enable_rotation: bool = True


class LoggingManager:
    """统一的日志管理器"""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        self._loggers: Dict[str, logging.Logger] = {}
        self._config = LogConfig()
        self._metrics = defaultdict(int)

    def configure(self, config: LogConfig = None):
        """配置日志系统"""
        if config:
            self._config = config

        if self._config.log_directory is None:
            self._config.log_directory = str(BASE_DIR / "log")

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, self._config.level.upper(), logging.INFO))

        self._clear_handlers(root_logger)

        if self._config.enable_console:
            self._add_console_handler(root_logger)

        if self._config.enable_file:
            Path(self._config.log_directory).mkdir(parents=True, exist_ok=True)
            self._add_file_handler(root_logger)

    def configure_from_config_file(self):
        """从配置文件加载日志配置"""
        try:
            logging_config = config_manager.get_logging_config()
            file_config = logging_config.file_config

            # 相对路径相对于项目根目录
            log_directory = file_config.directory
            if not os.path.isabs(log_directory):
                log_directory = str(BASE_DIR / log_directory)

            rotation_config = file_config.rotation or {}

            config = LogConfig(
                level=logging_config.level,
                format=logging_config.format,
                date_format=logging_config.date_format,
                file_max_bytes=rotation_config.get('max_bytes_mb', 10) * 1024 * 1024,
                file_backup_count=rotation_config.get('backup_count', 5),
                enable_console=logging_config.console_config.enabled,
                enable_file=file_config.enabled,
                log_directory=log_directory,
                log_filename=file_config.filename,
                rotation_type=rotation_config.get('type', 'size'),
                enable_rotation=rotation_config.get('enabled', True)
            )

            self.configure(config)
            self._configure_module_loggers(logging_config.modules)

            return logging_config

        except (OSError, ValueError, AttributeError) as e:
            raise QuoteServiceError(
                f"Failed to configure logging from config file: {str(e)}",
                ErrorCodes.CONFIG_INVALID_FORMAT
            ) from e

    def _configure_module_loggers(self, modules_config: Dict[str, Any]):
        """配置模块特定的日志器，禁用的模块提升到 CRITICAL"""
        for module_name, module_config in modules_config.items():
            module_logger = self.get_logger(module_name)
            if module_config.enabled:
                module_logger.setLevel(getattr(logging, module_config.level.upper(), logging.INFO))
            else:
                module_logger.setLevel(logging.CRITICAL)

    def _clear_handlers(self, target: logging.Logger):
        """清除现有处理器"""
        for handler in target.handlers[:]:
            handler.close()
            target.removeHandler(handler)

    def _add_console_handler(self, target: logging.Logger):
        """添加控制台处理器"""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(
            self._config.format,
            datefmt=self._config.date_format
        ))
        target.addHandler(console_handler)

    def _add_file_handler(self, target: logging.Logger):
        """添加文件处理器"""
        log_file_path = Path(self._config.log_directory) / self._config.log_filename

        if not self._config.enable_rotation:
            file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        elif self._config.rotation_type == "size":
            file_handler = RotatingFileHandler(
                filename=log_file_path,
                maxBytes=self._config.file_max_bytes,
                backupCount=self._config.file_backup_count,
                encoding="utf-8"
            )
        else:  # time rotation
            file_handler = TimedRotatingFileHandler(
                filename=log_file_path,
                when="midnight",
                interval=1,
                backupCount=self._config.file_backup_count,
                encoding="utf-8"
            )

        file_handler.setFormatter(logging.Formatter(
            self._config.format,
            datefmt=self._config.date_format
        ))
        target.addHandler(file_handler)

    def get_logger(self, name: str = None) -> logging.Logger:
        """获取日志记录器"""
        if name is None:
            name = "quoteservice"

        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)

        return self._loggers[name]

    def set_level(self, level: str, logger_name: str = None):
        """设置日志级别"""
        log_level = getattr(logging, level.upper(), logging.INFO)

        if logger_name:
            self.get_logger(logger_name).setLevel(log_level)
        else:
            logging.getLogger().setLevel(log_level)

    def get_metrics(self) -> Dict[str, int]:
        """获取日志统计指标"""
        return dict(self._metrics)

    def reset_metrics(self):
        """重置统计指标"""
        self._metrics.clear()


class LogContext:
    """日志上下文管理器"""

    def __init__(self, module: str, operation: str = None,
                 extra_context: Dict[str, Any] = None):
        self.module = module
        self.operation = operation
        self.extra_context = dict(extra_context or {})
        self.start_time = None
        self.logger = logging_manager.get_logger(module)

    def __enter__(self):
        self.start_time = time.time()
        self._log_start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.time() - self.start_time
        if exc_type is not None:
            self._log_error(exc_val, duration, exc_tb)
        else:
            self._log_success(duration)

    def _get_context_str(self) -> str:
        """获取上下文字符串"""
        parts = [self.module]

        if self.operation:
            parts.append(self.operation)

        for key, value in self.extra_context.items():
            parts.append(f"{key}:{value}")

        return ".".join(parts)

    def _metric_key(self) -> str:
        if self.operation:
            return f"{self.module}.{self.operation}"
        return self.module

    def _log_start(self):
        """记录开始日志"""
        self.logger.debug(f"[{self._get_context_str()}] Starting operation")
        logging_manager._metrics[f"{self._metric_key()}_started"] += 1

    def _log_success(self, duration: float):
        """记录成功日志"""
        self.logger.info(f"[{self._get_context_str()}] Operation completed in {duration:.3f}s")
        logging_manager._metrics[f"{self._metric_key()}_completed"] += 1

    def _log_error(self, error: Exception, duration: float, tb):
        """记录错误日志"""
        context = self._get_context_str()
        self.logger.error(f"[{context}] Operation failed in {duration:.3f}s: {str(error)}")
        self.logger.debug(f"[{context}] Traceback: {''.join(traceback.format_tb(tb))}")
        logging_manager._metrics[f"{self._metric_key()}_failed"] += 1


def log_execution(module: str, operation: str = None, extra_context: Dict[str, Any] = None):
    """日志装饰器"""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            context = dict(extra_context or {})
            context.update(_extract_context_from_args(args, kwargs))

            with LogContext(module, operation or func.__name__, context):
                return func(*args, **kwargs)

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            context = dict(extra_context or {})
            context.update(_extract_context_from_args(args, kwargs))

            with LogContext(module, operation or func.__name__, context):
                return await func(*args, **kwargs)

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def _extract_context_from_args(args: tuple, kwargs: dict) -> Dict[str, Any]:
    """从函数参数中提取上下文信息"""
    context = {}

    # 方法调用时 args[0] 为 self
    if 'quote_id' in kwargs:
        context['quote_id'] = kwargs['quote_id']
    elif len(args) > 1 and isinstance(args[1], int) and not isinstance(args[1], bool):
        context['quote_id'] = args[1]

    for key in ('page', 'per_page', 'request_id'):
        if key in kwargs:
            context[key] = kwargs[key]

    return context


# 全局日志管理器实例
logging_manager = LoggingManager()

# 兼容性：保持原有的 logger 接口
logger = logging_manager.get_logger()


class ModuleLoggers:
    """模块专用日志器集合"""

    API = logging_manager.get_logger("API")
    Store = logging_manager.get_logger("Store")
    Config = logging_manager.get_logger("Config")
    Main = logging_manager.get_logger("Main")

    @classmethod
    def get_logger(cls, module_name: str):
        """获取指定模块的日志器"""
        return logging_manager.get_logger(module_name)


# 便捷的模块日志器别名
api_logger = ModuleLoggers.API
store_logger = ModuleLoggers.Store
config_logger = ModuleLoggers.Config
main_logger = ModuleLoggers.Main


def initialize_logging(use_config_file: bool = True):
    """初始化日志系统"""
    if use_config_file:
        try:
            logging_config = logging_manager.configure_from_config_file()
            logger.info(f"Logging system initialized from config file (level: {logging_config.level})")
            return True
        except QuoteServiceError as e:
            # 配置文件不可用时回退到默认配置
            print(f"Failed to initialize logging from config file: {e}")
            print("Falling back to default configuration...")

    logging_manager.configure(LogConfig())
    logger.info("Logging system initialized with default config")
    return True


# 自动初始化（使用配置文件）
initialize_logging(use_config_file=True)
