"""
tests.test_tally
~~~~~~~~~~~~~~~~

计票规则单元测试。
"""
from __future__ import annotations

import pytest

from chewcrew.core.exceptions import EmptyChoiceSet
from chewcrew.services.tally import rank_choices, select_winner


class TestSelectWinner:
    """测试胜出类别的选择规则。"""

    def test_highest_count_wins(self) -> None:
        """票数最高者胜出。"""
        counts = {"sushi": 1, "pizza": 2}

        assert select_winner(counts, ["sushi", "pizza"]) == "pizza"

    def test_tie_breaks_by_declaration_order(self) -> None:
        """同票时取声明顺序靠前的类别，与字典插入顺序无关。"""
        counts = {"tacos": 3, "pizza": 3, "sushi": 1}

        assert select_winner(counts, ["pizza", "sushi", "tacos"]) == "pizza"
        assert select_winner(counts, ["tacos", "pizza", "sushi"]) == "tacos"

    def test_all_zero_picks_first_choice(self) -> None:
        """没有人投票时取第一个类别。"""
        counts = {"sushi": 0, "pizza": 0}

        assert select_winner(counts, ["sushi", "pizza"]) == "sushi"

    def test_missing_counts_treated_as_zero(self) -> None:
        """缺失票数的类别按零票处理。"""
        assert select_winner({"pizza": 1}, ["sushi", "pizza"]) == "pizza"
        assert select_winner({}, ["sushi", "pizza"]) == "sushi"

    def test_repeated_calls_are_deterministic(self) -> None:
        """同样的输入多次计算结果一致。"""
        counts = {"a": 2, "b": 2, "c": 2}
        choices = ["b", "c", "a"]

        results = {select_winner(counts, choices) for _ in range(100)}

        assert results == {"b"}

    def test_empty_choices_raises(self) -> None:
        """候选为空时抛出 EmptyChoiceSet。"""
        with pytest.raises(EmptyChoiceSet):
            select_winner({}, [])


class TestRankChoices:
    """测试完整名次。"""

    def test_ranks_by_count_then_order(self) -> None:
        counts = {"sushi": 1, "pizza": 4, "tacos": 1, "thai": 2}

        ranked = rank_choices(counts, ["sushi", "pizza", "tacos", "thai"])

        assert ranked == ["pizza", "thai", "sushi", "tacos"]
