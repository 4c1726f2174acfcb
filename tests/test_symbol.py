import pytest

from stock_data.symbol import split_code


class TestSplitCode:
    """测试复合代码拆分"""

    def test_split(self):
        info = split_code("sh.600000")
        assert info.exchange == "sh"
        assert info.symbol == "600000"
        assert info.raw == "sh.600000"

    def test_second_segment_only(self):
        """测试多个分隔符时只取第二段"""
        assert split_code("sz.000001.x").symbol == "000001"

    def test_custom_separator(self):
        assert split_code("sz_000001", sep="_").symbol == "000001"

    def test_missing_separator(self):
        with pytest.raises(ValueError):
            split_code("600000")
