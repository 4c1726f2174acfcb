"""stock_data: 读取单只股票日线 csv 数据为只读的按列存储表。"""

from .models import COLUMNS, AdjustFlag, DailyData, DayTable, ParseIssue, TradeStatus
from .symbol import CodeInfo, split_code
from .loader import DataFileError, DayCsvLoader, read_data
from .validation import validate_suspension

__all__ = [
    "COLUMNS",
    "AdjustFlag",
    "DailyData",
    "DayTable",
    "ParseIssue",
    "TradeStatus",
    "CodeInfo",
    "split_code",
    "DataFileError",
    "DayCsvLoader",
    "read_data",
    "validate_suspension",
]
