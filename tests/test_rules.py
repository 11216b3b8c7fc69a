from __future__ import annotations

import pytest

from sand_puzzle_rl.game import GameMode, ProgressionRules, ScoringRules
from sand_puzzle_rl.game.rules import PALETTE_SIZE, color_rgb


def test_level_from_clear_events():
    rules = ProgressionRules()
    assert [rules.level_for_clears(n) for n in range(6)] == [1, 1, 2, 2, 3, 3]


def test_drop_interval_at_level_three():
    rules = ProgressionRules(base_drop_interval=30)
    level = rules.level_for_clears(4)
    assert level == 3
    assert rules.drop_interval(level, GameMode.ARCADE) == 24
    assert rules.drop_interval(level, GameMode.CLASSIC) == 27


def test_drop_interval_floors():
    rules = ProgressionRules()
    assert rules.drop_interval(20, GameMode.ARCADE) == 1
    assert rules.drop_interval(40, GameMode.CLASSIC) == 5


def test_initial_palettes():
    rules = ProgressionRules()
    assert rules.initial_palette(GameMode.CLASSIC) == [1, 2, 3]
    assert rules.initial_palette(GameMode.ARCADE) == list(range(1, PALETTE_SIZE + 1))


def test_classic_palette_grows_every_third_level():
    rules = ProgressionRules()
    palette = rules.initial_palette(GameMode.CLASSIC)
    assert rules.grow_palette(palette, 2, GameMode.CLASSIC) == [1, 2, 3]
    grown = rules.grow_palette(palette, 3, GameMode.CLASSIC)
    assert grown == [1, 2, 3, 4]
    assert palette == [1, 2, 3]
    assert rules.grow_palette(grown, 6, GameMode.CLASSIC) == [1, 2, 3, 4, 5]


def test_full_palette_never_grows():
    rules = ProgressionRules()
    full = list(range(1, PALETTE_SIZE + 1))
    assert rules.grow_palette(full, 9, GameMode.CLASSIC) == full
    assert rules.grow_palette([1, 2], 3, GameMode.ARCADE) == [1, 2]


def test_mode_accepts_plain_strings():
    rules = ProgressionRules()
    assert rules.drop_interval(3, GameMode("arcade")) == 24


def test_clear_score():
    scoring = ScoringRules()
    assert scoring.score_for_clear(0) == 0
    assert scoring.score_for_clear(17) == 170


def test_color_lookup():
    assert color_rgb(1) == (0xFF, 0x55, 0x55)
    with pytest.raises(ValueError):
        color_rgb(0)
