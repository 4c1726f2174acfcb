"""
数据模型定义

csv 数据文件一行代表一日股票数据，表头共 18 列：

    date,code,open,high,low,close,preclose,volume,amount,
    adjustflag,turn,tradestatus,pctChg,peTTM,pbMRQ,psTTM,pcfNcfTTM,isST

当股票停牌时，开盘价、最高价、最低价、收盘价都为前一日的收盘价，
成交量、成交额记为 0，换手率 turn 为空。
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple

import numpy as np
import pandas as pd

# 输入文件表头，顺序固定
COLUMNS: Tuple[str, ...] = (
    "date", "code", "open", "high", "low", "close", "preclose", "volume", "amount",
    "adjustflag", "turn", "tradestatus", "pctChg", "peTTM", "pbMRQ", "psTTM",
    "pcfNcfTTM", "isST",
)

# 第 2~17 列对应的 DayTable 字段名
NUMERIC_FIELDS: Tuple[str, ...] = (
    "opens", "highs", "lows", "closes", "pre_closes", "volumes", "amounts",
    "adjust_flags", "turns", "trade_status", "pct_chgs", "pe_ttms", "pb_mrqs",
    "ps_ttms", "pcf_ncf_ttms", "is_sts",
)


class AdjustFlag(Enum):
    """复权状态"""
    BACKWARD = 1  # 后复权
    FORWARD = 2   # 前复权
    NONE = 3      # 不复权


class TradeStatus(Enum):
    """交易状态"""
    SUSPENDED = 0  # 停牌
    NORMAL = 1     # 正常


@dataclass(frozen=True)
class ParseIssue:
    """单个字段解析失败的记录，不影响整体读取。

    column 是 csv 中的绝对列号（0~17，date 为 0，turn 为 10），
    不是 16 个数值列内部的序号。
    """

    row: int       # 数据行号（不含表头，从 0 开始）
    column: int    # csv 列号（从 0 开始）
    name: str      # 列名
    text: str      # 原始文本
    value: object  # 实际写入的默认值

    def __str__(self) -> str:
        return f"解析失败 ({self.row}, {self.column}) {self.name}={self.text!r}, 取值 {self.value}"


@dataclass
class DailyData:
    """股票日线数据模型"""
    symbol: str              # 股票代码
    date: Optional[date]     # 交易日期，无法解析时为 None
    open: float              # 开盘价
    high: float              # 最高价
    low: float               # 最低价
    close: float             # 收盘价
    pre_close: float         # 前收盘价
    volume: float            # 成交量(股)
    amount: float            # 成交额(元)
    adjust_flag: float       # 复权状态
    turn: float              # 换手率
    trade_status: float      # 交易状态
    pct_chg: float           # 涨跌幅(百分比)
    pe_ttm: float            # 动态市盈率
    pb_mrq: float            # 市净率
    ps_ttm: float            # 动态市销率
    pcf_ncf_ttm: float       # 动态市现率
    is_st: float             # 是否ST股

    @property
    def is_suspended(self) -> bool:
        return self.trade_status == TradeStatus.SUSPENDED.value

    def __repr__(self):
        return f"<DailyData {self.symbol} {self.date}>"


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class DayTable:
    """单只股票的全部日线数据，按列存储。

    除 stock_code / exchange 外，每个字段都是等长的只读 numpy 数组，
    下标 i 在所有列上指向同一个交易日。
    """

    stock_code: str
    dates: np.ndarray
    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    pre_closes: np.ndarray
    volumes: np.ndarray
    amounts: np.ndarray
    adjust_flags: np.ndarray
    turns: np.ndarray
    trade_status: np.ndarray
    pct_chgs: np.ndarray
    pe_ttms: np.ndarray
    pb_mrqs: np.ndarray
    ps_ttms: np.ndarray
    pcf_ncf_ttms: np.ndarray
    is_sts: np.ndarray
    exchange: str = ""
    issues: Tuple[ParseIssue, ...] = ()

    def __post_init__(self):
        lengths = {name: len(getattr(self, name)) for name in ("dates",) + NUMERIC_FIELDS}
        if len(set(lengths.values())) > 1:
            raise ValueError(f"DayTable 各列长度不一致: {lengths}")

        # frozen dataclass 只能用 object.__setattr__ 规范化字段
        object.__setattr__(self, "dates", _frozen(np.array(self.dates, dtype="datetime64[D]")))
        for name in NUMERIC_FIELDS:
            object.__setattr__(self, name, _frozen(np.array(getattr(self, name), dtype=np.float64)))
        object.__setattr__(self, "issues", tuple(self.issues))

    def __len__(self) -> int:
        return len(self.dates)

    @property
    def suspended(self) -> np.ndarray:
        """停牌日掩码"""
        return self.trade_status == TradeStatus.SUSPENDED.value

    def row(self, i: int) -> DailyData:
        d = self.dates[i]
        values = [float(getattr(self, name)[i]) for name in NUMERIC_FIELDS]
        return DailyData(
            self.stock_code,
            None if np.isnat(d) else d.astype(object),
            *values,
        )

    def to_frame(self) -> pd.DataFrame:
        """按输入表头列名返回 DataFrame 视图（数据为副本）。"""
        data = {
            "date": pd.to_datetime(self.dates),
            "code": [self.stock_code] * len(self),
        }
        for name, column in zip(NUMERIC_FIELDS, COLUMNS[2:]):
            data[column] = np.array(getattr(self, name))
        return pd.DataFrame(data, columns=list(COLUMNS))

    def __repr__(self):
        return f"<DayTable {self.stock_code} rows={len(self)}>"

