from __future__ import annotations

import numpy as np
import pandas as pd

from .models import DayTable


def validate_suspension(table: DayTable) -> pd.DataFrame:
    """返回每个停牌日是否符合约定的校验结果。

    停牌日开盘价、最高价、最低价、收盘价都应等于前一日收盘价，
    成交量、成交额为 0。非停牌日以及首行停牌（没有前收盘价）视为通过。
    """
    if len(table) == 0:
        return pd.DataFrame(columns=["date", "ok", "reason"])

    out = pd.DataFrame({"date": pd.to_datetime(table.dates)})

    prev_close = np.concatenate(([np.nan], table.closes[:-1]))
    checked = table.suspended & ~np.isnan(prev_close)

    price_ok = np.ones(len(table), dtype=bool)
    for prices in (table.opens, table.highs, table.lows, table.closes):
        price_ok &= prices == prev_close

    price_bad = checked & ~price_ok
    volume_bad = checked & (table.volumes != 0)
    amount_bad = checked & (table.amounts != 0)

    out["ok"] = ~(price_bad | volume_bad | amount_bad)
    out["reason"] = ""
    out.loc[price_bad, "reason"] += "price_not_prev_close;"
    out.loc[volume_bad, "reason"] += "volume_not_zero;"
    out.loc[amount_bad, "reason"] += "amount_not_zero;"
    return out
