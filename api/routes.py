"""
API routes for the quote service.
Maps the /quotes endpoints onto QuoteStore operations.
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from store.quote_store import QuoteStore
from utils import api_logger, config_manager, QuoteNotFoundError
from .models import render_quote, render_quote_lines

router = APIRouter(prefix="/quotes", tags=["Quotes"])

JSON_MEDIA_TYPE = "application/json"


def get_quote_store(request: Request) -> QuoteStore:
    """获取应用持有的报价存储"""
    return request.app.state.quote_store


def _quote_lines_response(body: str) -> Response:
    return Response(content=body, status_code=200, media_type=JSON_MEDIA_TYPE)


# Landing page
@router.get("", response_class=PlainTextResponse)
async def welcome():
    """欢迎页"""
    return PlainTextResponse(config_manager.get_api_config().welcome_message)


@router.get("/getAllQuotes")
async def get_all_quotes(
    page: int = Query(1, description="页码"),
    per_page: int = Query(5, description="每页数量"),
    store: QuoteStore = Depends(get_quote_store)
):
    """分页获取报价，每个报价一行"""
    # 越界时 QuoteRangeError 由应用的异常处理器转换为 500
    quotes = store.page(page, per_page)
    api_logger.debug(f"[API] getAllQuotes page={page} per_page={per_page} -> {len(quotes)} quotes")
    return _quote_lines_response(render_quote_lines(quotes))


@router.get("/getQuote/{quote_id}")
async def get_quote_by_id(quote_id: int, store: QuoteStore = Depends(get_quote_store)):
    """根据ID获取报价"""
    quote = store.find(quote_id)
    if quote is None:
        raise QuoteNotFoundError(quote_id)

    return JSONResponse(content=render_quote(quote, config_manager.get_api_config().wrap_root_value))


@router.post("/addQuote/{quote_text}")
async def add_quote(quote_text: str, store: QuoteStore = Depends(get_quote_store)):
    """新增报价"""
    quote = store.create(quote_text)
    return JSONResponse(content=render_quote(quote, config_manager.get_api_config().wrap_root_value))


@router.put("/updateQuote/{quote_id}/{new_quote_text}")
async def update_quote(quote_id: int, new_quote_text: str,
                       store: QuoteStore = Depends(get_quote_store)):
    """更新报价内容"""
    quote = store.update(quote_id, new_quote_text)
    if quote is None:
        raise QuoteNotFoundError(quote_id)

    return JSONResponse(content=render_quote(quote, config_manager.get_api_config().wrap_root_value))


@router.delete("/deleteQuote/{quote_id}", response_class=PlainTextResponse)
async def delete_quote(quote_id: int, store: QuoteStore = Depends(get_quote_store)):
    """删除报价"""
    if not store.delete(quote_id):
        raise QuoteNotFoundError(quote_id)

    return PlainTextResponse(f"Quote {quote_id}successfully removed!")
