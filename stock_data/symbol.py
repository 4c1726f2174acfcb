from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CodeInfo:
    """拆分后的股票代码信息。"""

    raw: str
    exchange: str  # sh / sz
    symbol: str


def split_code(code: str, sep: str = ".") -> CodeInfo:
    """拆分 "sh.600000" 形式的复合代码。

    以 sep 分割后第一段为交易所前缀，第二段为股票代码。
    """
    parts = code.split(sep)
    if len(parts) < 2:
        raise ValueError(f"股票代码格式错误，期望如 sh.600000，实际: {code!r}")
    return CodeInfo(raw=code, exchange=parts[0], symbol=parts[1])
