"""
Data models for the quote store.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class Quote:
    """报价记录"""
    id: int
    text: str


# 启动时载入的示例报价，id 依次为 1-5
SEED_QUOTES: Tuple[str, ...] = (
    "The greatest glory in living lies not in never falling, but in rising every time we fall. -Nelson Mandela",
    "If life were predictable it would cease to be life, and be without flavor. -Eleanor Roosevelt",
    "The best and most beautiful things in the world cannot be seen or even touched - they must be felt with the heart. -Helen Keller",
    "Tell me and I forget. Teach me and I remember. Involve me and I learn. -Benjamin Franklin",
    "You will face many defeats in life, but never let yourself be defeated. -Maya Angelou",
)
