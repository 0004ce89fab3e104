"""
chewcrew.services.tally
~~~~~~~~~~~~~~~~~~~~~~~

计票 —— 根据票数确定性地选出胜出类别。

规则：票数最高者胜出；同票时按候选项的声明顺序取靠前者；
全部为零票时取第一个候选项。
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence

from chewcrew.core.exceptions import EmptyChoiceSet


def rank_choices(vote_counts: Mapping[str, int], choices: Sequence[str]) -> list[str]:
    """按名次返回全部候选项。

    Args:
        vote_counts: 候选项 → 票数。缺失的候选项按零票计。
        choices: 声明顺序的候选项。

    Returns:
        票数降序、同票按声明顺序排列的候选项列表。

    Raises:
        EmptyChoiceSet: ``choices`` 为空。
    """
    if not choices:
        raise EmptyChoiceSet()
    # sorted 是稳定排序，同票自然保持声明顺序
    return sorted(choices, key=lambda choice: -vote_counts.get(choice, 0))


def select_winner(vote_counts: Mapping[str, int], choices: Sequence[str]) -> str:
    """返回胜出的候选项。"""
    return rank_choices(vote_counts, choices)[0]
