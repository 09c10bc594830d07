"""
In-memory quote store.
Owns the ordered quote collection and the id counter behind a single lock.
"""

import threading
from typing import List, Optional, Sequence

from utils import config_manager, store_logger, log_execution, QuoteRangeError

from .models import Quote, SEED_QUOTES


class QuoteStore:
    """报价存储

    所有读写操作都在同一把可重入锁内执行。新报价的 id 从种子数量加一开始
    单调递增，删除后不会复用。
    """

    def __init__(self, seed_quotes: Optional[Sequence[str]] = None):
        if seed_quotes is None:
            seed_quotes = SEED_QUOTES

        self._lock = threading.RLock()
        self._quotes: List[Quote] = [
            Quote(id=index, text=text) for index, text in enumerate(seed_quotes, start=1)
        ]
        self._next_id = len(self._quotes) + 1

        store_logger.info(f"[Store] Quote store initialized with {len(self._quotes)} quotes")

    def __len__(self) -> int:
        return self.count()

    @property
    def next_id(self) -> int:
        """下一次创建时分配的 id"""
        with self._lock:
            return self._next_id

    def count(self) -> int:
        """当前报价数量"""
        with self._lock:
            return len(self._quotes)

    def snapshot(self) -> List[Quote]:
        """返回当前报价的副本"""
        with self._lock:
            return [Quote(id=q.id, text=q.text) for q in self._quotes]

    def find(self, quote_id: int) -> Optional[Quote]:
        """按 id 线性查找报价，存在重复 id 时返回最后一个匹配项"""
        with self._lock:
            found = None
            for quote in self._quotes:
                if quote.id == quote_id:
                    found = quote
            return found

    def list_range(self, offset: int, limit: int) -> List[Quote]:
        """按位置返回 [offset, offset + limit) 区间内的报价

        区间内任一位置越界都会抛出 QuoteRangeError，不做截断。
        """
        end = offset + limit
        with self._lock:
            size = len(self._quotes)
            result = []
            for index in range(offset, end):
                if index < 0 or index >= size:
                    raise QuoteRangeError(index, size, offset, end)
                result.append(self._quotes[index])
            return result

    def page(self, page: int, per_page: int) -> List[Quote]:
        """分页读取，第 page 页从位置 page * per_page - per_page 开始"""
        start = page * per_page - per_page
        return self.list_range(start, per_page)

    @log_execution("Store", "create")
    def create(self, text: str) -> Quote:
        """创建报价并追加到集合末尾"""
        with self._lock:
            quote = Quote(id=self._next_id, text=text)
            self._quotes.append(quote)
            self._next_id += 1
            return quote

    @log_execution("Store", "update")
    def update(self, quote_id: int, text: str) -> Optional[Quote]:
        """修改已有报价的内容，不存在时返回 None"""
        with self._lock:
            quote = self.find(quote_id)
            if quote is None:
                return None
            quote.text = text
            return quote

    @log_execution("Store", "delete")
    def delete(self, quote_id: int) -> bool:
        """删除所有匹配 id 的报价，不存在时返回 False"""
        with self._lock:
            if self.find(quote_id) is None:
                return False
            self._quotes = [q for q in self._quotes if q.id != quote_id]
            return True


def create_default_store() -> QuoteStore:
    """根据 store_config 创建报价存储"""
    store_config = config_manager.get_store_config()
    if store_config.seed_on_startup:
        return QuoteStore()
    return QuoteStore(seed_quotes=())
