import math
import random

import pytest

from squart.components.layout_mask import LayoutMask
from squart.components.orientation import GameStatus, Orientation
from squart.exceptions import BoardGenerationError, InvalidDimensions, InvalidPercentage, MaskExcludesAllCells
from squart.factories.campaign import EXTRA_MISSION, all_city_specs
from squart.systems.board_generator import (
    GenerationConfig,
    determine_inactive_count,
    generate,
    generate_board,
    shuffle_in_place,
)
from squart.systems.board_ops import count_available_moves


def _never_called():
    raise AssertionError("random stream should not be consumed")


def test_open_five_by_five_board_has_balanced_moves():
    board = generate(rows=5, cols=5, seed="test", inactive_percentage=0)

    assert board.playable_square_count == 25
    assert board.inactive_count == 0
    assert board.void_count == 0
    assert count_available_moves(board, Orientation.HORIZONTAL) == 20
    assert count_available_moves(board, Orientation.VERTICAL) == 20
    assert board.status is GameStatus.ACTIVE
    assert board.current_player is Orientation.HORIZONTAL
    assert board.placements == []


def test_same_seed_reproduces_board():
    first = generate(rows=10, cols=12, seed="repeat-me")
    second = generate(rows=10, cols=12, seed="repeat-me")

    assert first.inactive_squares == second.inactive_squares
    assert first.inactive_count == second.inactive_count


def test_different_seeds_usually_differ():
    boards = {tuple(generate(rows=10, cols=10, seed=f"s{i}").inactive_squares) for i in range(5)}
    assert len(boards) > 1


def test_numeric_seed_is_normalized_to_string():
    board = generate(rows=6, cols=6, seed=7)
    assert board.seed == "7"
    assert board.inactive_squares == generate(rows=6, cols=6, seed="7").inactive_squares


def test_default_inactive_count_within_ratio_range():
    for seed in range(10):
        board = generate(rows=10, cols=10, seed=str(seed))
        assert math.ceil(100 * 0.17) <= board.inactive_count <= math.floor(100 * 0.19)
        assert board.requested_inactive_percentage is None
        assert board.actual_inactive_percentage == pytest.approx(board.inactive_count)


def test_inactive_cells_match_inactive_squares():
    board = generate(rows=8, cols=9, seed="cells")
    flagged = [(cell.row, cell.col) for row in board.cells for cell in row if cell.is_inactive]
    assert sorted(flagged) == sorted(board.inactive_squares)
    assert len(set(board.inactive_squares)) == board.inactive_count


def test_override_rounds_half_up():
    board = generate(rows=5, cols=5, seed="half", inactive_percentage=10)
    assert board.inactive_count == 3
    assert board.requested_inactive_percentage == 10


def test_override_is_clamped_to_supported_range():
    high = generate(rows=5, cols=5, seed="high", inactive_percentage=100)
    assert high.requested_inactive_percentage == 90
    assert high.inactive_count == 23

    low = generate(rows=5, cols=5, seed="low", inactive_percentage=-5)
    assert low.requested_inactive_percentage == 0
    assert low.inactive_count == 0


def test_infinite_override_is_clamped():
    board = generate(rows=5, cols=5, seed="inf", inactive_percentage=float("inf"))
    assert board.requested_inactive_percentage == 90
    assert board.inactive_count == 23

    assert GenerationConfig(inactive_percentage=float("-inf")).inactive_percentage == float("-inf")
    assert generate(rows=5, cols=5, seed="-inf", inactive_percentage=float("-inf")).inactive_count == 0


def test_override_does_not_consume_random_stream():
    count, requested = determine_inactive_count(40, _never_called, 25)
    assert (count, requested) == (10, 25)


def test_default_count_draws_from_range():
    assert determine_inactive_count(100, lambda: 0.0) == (17, None)
    assert determine_inactive_count(100, lambda: 0.999) == (19, None)


def test_degenerate_range_uses_fallback_count():
    assert determine_inactive_count(6, _never_called) == (2, None)
    assert determine_inactive_count(3, _never_called) == (1, None)
    assert determine_inactive_count(1, _never_called) == (1, None)


def test_shuffle_in_place_follows_random_stream():
    items = ["a", "b", "c", "d"]
    assert shuffle_in_place(items, lambda: 0.0) == ["b", "c", "d", "a"]
    untouched = ["a", "b", "c"]
    assert shuffle_in_place(untouched, lambda: 0.999) == ["a", "b", "c"]


@pytest.mark.parametrize("rows, cols", [(4, 10), (10, 21), ("a", 10), (5.5, 10), (True, 10), (None, 10)])
def test_invalid_dimensions_raise(rows, cols):
    with pytest.raises(InvalidDimensions):
        GenerationConfig(rows=rows, cols=cols)


def test_integral_float_dimensions_are_accepted():
    config = GenerationConfig(rows=5.0, cols=20)
    assert config.rows == 5 and isinstance(config.rows, int)


def test_custom_size_limits():
    assert GenerationConfig(rows=3, cols=3, min_size=3).rows == 3
    with pytest.raises(InvalidDimensions):
        GenerationConfig(rows=12, cols=12, max_size=10)


@pytest.mark.parametrize("value", [float("nan"), "abc", True, object()])
def test_invalid_percentage_raises(value):
    with pytest.raises(InvalidPercentage):
        GenerationConfig(inactive_percentage=value)


def test_generation_errors_are_value_errors():
    with pytest.raises(ValueError):
        GenerationConfig(rows=2)
    assert issubclass(MaskExcludesAllCells, BoardGenerationError)


def test_mask_voids_cells_and_shrinks_playable_area():
    mask = LayoutMask.block([(0, 0), (4, 4)])
    board = generate(rows=5, cols=5, seed="mask", inactive_percentage=50, mask=mask)

    assert board.void_count == 2
    assert board.playable_square_count == 23
    assert board.total_square_count == 25
    assert board.cells[0][0].is_void and not board.cells[0][0].is_inactive
    assert board.inactive_count == 12
    assert (0, 0) not in board.inactive_squares
    assert board.actual_inactive_percentage == pytest.approx(12 / 23 * 100)


def test_allow_mask_restricts_playable_cells():
    mask = LayoutMask.allow([(r, c) for r in range(2) for c in range(5)])
    board = generate(rows=5, cols=5, seed="allow", inactive_percentage=0, mask=mask)

    assert board.playable_square_count == 10
    assert count_available_moves(board, Orientation.HORIZONTAL) == 8
    assert count_available_moves(board, Orientation.VERTICAL) == 5


@pytest.mark.parametrize("percentage", [0, 50, 90, 100])
def test_campaign_masks_keep_inactive_within_playable_area(percentage):
    missions = [hood for city in all_city_specs() for hood in city.neighborhoods] + [EXTRA_MISSION]
    for mission in missions:
        config = GenerationConfig(
            rows=mission.rows,
            cols=mission.cols,
            seed=f"{mission.id}-{percentage}",
            inactive_percentage=percentage,
            mask=mission.mask,
        )
        board = generate_board(config)

        assert 0 <= board.inactive_count <= board.playable_square_count <= board.rows * board.cols
        assert board.void_count + board.playable_square_count == board.total_square_count
        assert len(board.inactive_squares) == board.inactive_count
        assert not any(cell.is_void and cell.is_inactive for line in board.cells for cell in line)


def test_mask_excluding_every_cell_raises():
    mask = LayoutMask.allow([(30, 30)])
    with pytest.raises(MaskExcludesAllCells):
        generate(rows=5, cols=5, mask=mask)


def test_unseeded_generation_uses_supplied_rng():
    config = GenerationConfig(rows=9, cols=9)
    first = generate_board(config, rng=random.Random(5))
    second = generate_board(config, rng=random.Random(5))

    assert first.seed is None
    assert first.inactive_squares == second.inactive_squares


def test_seeded_generation_ignores_rng():
    config = GenerationConfig(rows=9, cols=9, seed="fixed")
    assert (
        generate_board(config, rng=random.Random(1)).inactive_squares
        == generate_board(config, rng=random.Random(2)).inactive_squares
    )


def test_board_with_no_moves_is_an_immediate_draw():
    mask = LayoutMask.allow([(0, 0), (2, 2)])
    board = generate(rows=5, cols=5, seed="lonely", inactive_percentage=0, mask=mask)

    assert board.status is GameStatus.FINISHED
    assert board.winner is None
    assert board.current_player is None
