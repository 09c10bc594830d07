"""
统一异常定义模块
提供报价服务的异常类和错误响应构造
"""

from typing import Optional, Dict, Any


class QuoteServiceError(Exception):
    """报价服务基础异常类"""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(QuoteServiceError):
    """配置相关错误"""
    pass


class QuoteNotFoundError(QuoteServiceError):
    """报价不存在"""

    def __init__(self, quote_id: int):
        super().__init__(
            f"Quote {quote_id} not found",
            ErrorCodes.QUOTE_NOT_FOUND,
            {"quote_id": quote_id}
        )
        self.quote_id = quote_id


class QuoteRangeError(QuoteServiceError, IndexError):
    """分页窗口超出集合范围"""

    def __init__(self, index: int, size: int, start: int, end: int):
        super().__init__(
            f"Index {index} out of bounds for collection of size {size}",
            ErrorCodes.QUOTE_RANGE_ERROR,
            {"index": index, "size": size, "start": start, "end": end}
        )
        self.index = index
        self.size = size


# 错误代码常量
class ErrorCodes:
    """错误代码常量"""

    # 配置错误
    CONFIG_FILE_NOT_FOUND = "CONFIG_001"
    CONFIG_INVALID_FORMAT = "CONFIG_002"
    CONFIG_LOAD_ERROR = "CONFIG_003"
    CONFIG_SAVE_ERROR = "CONFIG_004"

    # 报价错误
    QUOTE_NOT_FOUND = "QUOTE_001"
    QUOTE_RANGE_ERROR = "QUOTE_002"

    # 通用错误
    INTERNAL_ERROR = "INTERNAL_ERROR"


def create_error_response(error: QuoteServiceError,
                          include_traceback: bool = False) -> Dict[str, Any]:
    """创建标准化的错误响应"""
    response = {
        "error": True,
        "error_code": error.error_code,
        "message": error.message,
        "context": error.context
    }

    if include_traceback:
        import traceback
        response["traceback"] = traceback.format_exc()

    return response
