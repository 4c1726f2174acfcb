"""
日线 csv 数据文件读取
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Union

import numpy as np
import pandas as pd

from .models import COLUMNS, NUMERIC_FIELDS, DayTable, ParseIssue
from .symbol import split_code

logger = logging.getLogger(__name__)

# 停牌日换手率为空，解析失败不报告
TURN_COLUMN = COLUMNS.index("turn")

IssueHandler = Callable[[ParseIssue], None]


class DataFileError(Exception):
    """文件级错误：文件不存在、无法读取或结构损坏，不返回部分数据。"""

    def __init__(self, message: str, path: Union[str, Path], line: Optional[int] = None):
        super().__init__(message)
        self.path = Path(path)
        self.line = line


@dataclass(frozen=True)
class DayCsvLoader:
    """读取单只股票的日线 csv 文件，第一行为表头，共 18 列。"""

    delimiter: str = ","
    date_format: str = "%Y-%m-%d"
    code_sep: str = "."
    encoding: str = "utf-8"

    def load(self, path: Union[str, Path], on_issue: Optional[IssueHandler] = None) -> DayTable:
        """
        读取数据文件

        Args:
            path: csv 文件路径
            on_issue: 可选，字段解析失败时的回调；不传则写 warning 日志

        Returns:
            DayTable

        Raises:
            DataFileError: 文件不存在、无法读取或某行列数不是 18
        """
        path = Path(path).expanduser()
        df = self._read_frame(path)

        dates: List[np.datetime64] = []
        columns: List[List[float]] = [[] for _ in NUMERIC_FIELDS]
        issues: List[ParseIssue] = []
        buf = [0.0] * len(NUMERIC_FIELDS)
        code = ""

        def report(issue: ParseIssue):
            issues.append(issue)
            if on_issue is not None:
                on_issue(issue)
            else:
                logger.warning(f"{path.name} {issue}")

        for i, row in enumerate(df.itertuples(index=False, name=None)):
            day = self._parse_date(row[0])
            if np.isnat(day):
                report(ParseIssue(i, 0, COLUMNS[0], row[0], day))
            dates.append(day)

            code = row[1]

            for j, text in enumerate(row[2:]):
                try:
                    buf[j] = _parse_float(text)
                except ValueError:
                    buf[j] = 0.0
                    if j + 2 != TURN_COLUMN:
                        report(ParseIssue(i, j + 2, COLUMNS[j + 2], text, 0.0))

            for column, value in zip(columns, buf):
                column.append(value)

        stock_code, exchange = "", ""
        if len(df) > 0:
            try:
                info = split_code(code, self.code_sep)
            except ValueError as e:
                raise DataFileError(f"{path}: {e}", path) from e
            stock_code, exchange = info.symbol, info.exchange

        table = DayTable(
            stock_code=stock_code,
            dates=np.array(dates, dtype="datetime64[D]"),
            exchange=exchange,
            issues=tuple(issues),
            **{name: np.array(column, dtype=np.float64) for name, column in zip(NUMERIC_FIELDS, columns)},
        )
        logger.info(f"读取 {path.name} 完成: 股票 {stock_code or '-'}，共 {len(table)} 条，解析失败 {len(issues)} 处")
        return table

    def _read_frame(self, path: Path) -> pd.DataFrame:
        """读取全部字段为字符串，空字段保留为 ""，跳过空行。"""
        try:
            df = pd.read_csv(
                path,
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                encoding=self.encoding,
            )
        except FileNotFoundError as e:
            raise DataFileError(f"数据文件不存在: {path}", path) from e
        except OSError as e:
            raise DataFileError(f"无法读取数据文件 {path}: {e}", path) from e
        except pd.errors.EmptyDataError as e:
            raise DataFileError(f"数据文件为空，缺少表头: {path}", path) from e
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            match = re.search(r"line (\d+)", str(e))
            line = int(match.group(1)) if match else None
            raise DataFileError(f"数据文件格式错误 {path}: {e}", path, line) from e

        if df.shape[1] != len(COLUMNS):
            raise DataFileError(
                f"{path} 表头列数错误，期望 {len(COLUMNS)}，实际 {df.shape[1]}",
                path,
                1,
            )
        # 数据行比表头多一列时 pandas 会把第一列当作索引
        if len(df) > 0 and not isinstance(df.index, pd.RangeIndex):
            raise DataFileError(f"{path} 数据行列数多于表头", path, 2)

        # 短行缺失的字段
        missing = df.isna().any(axis=1)
        if missing.any():
            first = int(missing.to_numpy().argmax())
            raise DataFileError(
                f"{path} 第 {first + 2} 行列数不足 {len(COLUMNS)}",
                path,
                first + 2,
            )
        return df

    def _parse_date(self, text: str) -> np.datetime64:
        """按 date_format 严格解析，格式化后须与原文一致（如 2020-1-2 视为失败）。"""
        try:
            parsed = datetime.strptime(text, self.date_format)
        except ValueError:
            return np.datetime64("NaT", "D")
        if parsed.strftime(self.date_format) != text:
            return np.datetime64("NaT", "D")
        return np.datetime64(parsed.date(), "D")


def _parse_float(text: str) -> float:
    # float() 还接受下划线和首尾空白
    if "_" in text or text != text.strip():
        raise ValueError(f"非法数值: {text!r}")
    return float(text)


def read_data(path: Union[str, Path], on_issue: Optional[IssueHandler] = None) -> DayTable:
    """使用默认配置读取数据文件，见 DayCsvLoader.load。"""
    return DayCsvLoader().load(path, on_issue=on_issue)
