"""
API data models for the quote service.
Pydantic models for responses and the quote wire format.
"""

from typing import Any, Dict, Iterable

from pydantic import BaseModel, Field

from store.models import Quote


# 单个报价对象序列化时的根包装名
QUOTE_ROOT_NAME = "QuoteObject"


class QuoteObject(BaseModel):
    """报价响应模型"""
    id: int = Field(..., description="报价ID")
    quote: str = Field(..., description="报价内容")

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteObject":
        return cls(id=quote.id, quote=quote.text)


class HealthResponse(BaseModel):
    """健康检查响应模型"""
    status: str = Field(..., description="服务状态")
    timestamp: str = Field(..., description="检查时间")
    version: str = Field(..., description="服务版本")
    total_quotes: int = Field(..., description="当前报价数量", ge=0)


def render_quote(quote: Quote, wrap_root_value: bool = True) -> Dict[str, Any]:
    """构造单个报价的响应主体，默认带 QuoteObject 根包装"""
    payload = QuoteObject.from_quote(quote).model_dump()
    if wrap_root_value:
        payload = {QUOTE_ROOT_NAME: payload}
    return payload


def render_quote_lines(quotes: Iterable[Quote]) -> str:
    """序列化报价列表：每个对象一行，不包装、不组成数组"""
    return "".join(
        QuoteObject.from_quote(quote).model_dump_json() + "\n" for quote in quotes
    )
