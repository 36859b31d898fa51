"""
Tests for game.py - the simulation core, no pygame involved.
"""

import dataclasses
import random

import pytest

from snake_arcade.config import GRID_W, GRID_H
from snake_arcade.game import (
    Cell,
    Direction,
    GameState,
    Phase,
    initial_body,
    new_game_state,
    next_cell,
    score_for,
    spawn_food,
)


def make_state(body, direction=Direction.LEFT, food=Cell(0, 0), grid=(10, 10),
               food_spawned_at=0, seed=0):
    return GameState(
        grid_w=grid[0],
        grid_h=grid[1],
        body=[Cell(*c) for c in body],
        direction=direction,
        food=food,
        score=0,
        food_spawned_at=food_spawned_at,
        rng=random.Random(seed),
    )


class TestDirection:
    """Tests for Direction."""

    @pytest.mark.parametrize("direction", list(Direction))
    def test_opposite_is_involutive(self, direction):
        """opposite(opposite(d)) is d."""
        assert direction.opposite.opposite is direction

    def test_opposite_pairs(self):
        """Up pairs with Down, Left with Right."""
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.DOWN.opposite is Direction.UP
        assert Direction.LEFT.opposite is Direction.RIGHT
        assert Direction.RIGHT.opposite is Direction.LEFT


class TestConstruction:
    """Tests for new_game_state."""

    def test_default_grid_layout(self):
        """Snake is horizontal, head at the center, heading left."""
        state = new_game_state(GRID_W, GRID_H, 10, now_ms=123, rng=random.Random(1))
        assert (GRID_W, GRID_H) == (53, 40)
        assert state.head == (26, 20)
        assert state.body == [(26 + i, 20) for i in range(10)]
        assert state.direction is Direction.LEFT
        assert state.phase is Phase.PLAYING
        assert state.score == 0
        assert state.food_spawned_at == 123

    @pytest.mark.parametrize("seed", range(25))
    def test_food_never_on_body(self, seed):
        """Freshly placed food is never on the snake."""
        state = new_game_state(6, 3, 3, now_ms=0, rng=random.Random(seed))
        assert state.food is not None
        assert state.food not in state.body
        assert 0 <= state.food.x < 6 and 0 <= state.food.y < 3

    def test_rejects_bad_sizes(self):
        """Empty grids, empty snakes and snakes wider than the grid are refused."""
        with pytest.raises(ValueError):
            initial_body(0, 10, 3)
        with pytest.raises(ValueError):
            initial_body(10, 10, 0)
        with pytest.raises(ValueError):
            initial_body(10, 10, 6)


class TestSetDirection:
    """Tests for GameState.set_direction."""

    def test_reversal_is_ignored(self):
        """Turning back onto the neck changes nothing."""
        state = make_state([(5, 5), (6, 5), (7, 5)])
        state.set_direction(Direction.RIGHT)
        assert state.direction is Direction.LEFT
        assert state.body == [(5, 5), (6, 5), (7, 5)]

    def test_perpendicular_turn(self):
        """A quarter turn applies at once and shows on the next advance."""
        state = make_state([(5, 5), (6, 5), (7, 5)])
        state.set_direction(Direction.UP)
        assert state.direction is Direction.UP
        state.advance(10)
        assert state.head == (5, 4)

    def test_frozen_after_game_over(self):
        """Direction can no longer change once the game is over."""
        state = make_state([(5, 5), (6, 5)])
        state.phase = Phase.GAME_OVER
        state.set_direction(Direction.UP)
        assert state.direction is Direction.LEFT


class TestAdvance:
    """Tests for GameState.advance."""

    def test_moves_in_a_straight_line(self):
        """One cell per tick, same length, until food is reached."""
        state = make_state([(5, 5), (6, 5), (7, 5)], food=Cell(9, 9))
        for tick in range(1, 5):
            assert state.advance(tick * 50) is True
            assert state.head == (5 - tick, 5)
            assert len(state.body) == 3
        assert state.body == [(1, 5), (2, 5), (3, 5)]

    def test_eating_on_small_grid(self):
        """4x4 grid, one cell at (2,2), food at (1,2), 10ms after it appeared."""
        state = make_state([(2, 2)], food=Cell(1, 2), grid=(4, 4), food_spawned_at=0)
        state.advance(10)
        assert state.head == (1, 2)
        assert state.body == [(1, 2), (2, 2)]
        assert state.score == 10000
        assert state.food_spawned_at == 10
        assert state.food is not None
        assert state.food not in state.body

    def test_growth_reuses_old_tail(self):
        """The new segment goes where the tail was before the move."""
        state = make_state([(5, 5), (6, 5), (7, 5)], food=Cell(4, 5), food_spawned_at=100)
        state.advance(300)
        assert state.body == [(4, 5), (5, 5), (6, 5), (7, 5)]
        assert state.score == score_for(200) == 500

    def test_food_under_the_head_is_eaten(self):
        """Food that sits under the head before the move also counts."""
        state = make_state([(5, 5), (6, 5)], food=Cell(5, 5), food_spawned_at=0)
        state.advance(20)
        assert state.body == [(4, 5), (5, 5), (6, 5)]
        assert state.score == 5000

    def test_score_is_positive_when_time_passed(self):
        """Any positive delay scores something."""
        state = make_state([(5, 5)], food=Cell(4, 5), food_spawned_at=1000)
        state.advance(1000 + 60_000)
        assert state.score > 0

    def test_self_collision(self):
        """Moving into the body ends the game and leaves the snake alone."""
        body = [(2, 2), (3, 2), (3, 1), (2, 1), (1, 1)]
        state = make_state(body, direction=Direction.UP, food=Cell(8, 8))
        assert state.advance(50) is False
        assert state.phase is Phase.GAME_OVER
        assert state.body == body
        assert state.score == 0

    def test_tail_counts_as_collision(self):
        """The tail cell is checked before it moves away."""
        body = [(1, 1), (2, 1), (2, 2), (1, 2)]
        state = make_state(body, direction=Direction.DOWN, food=Cell(8, 8))
        state.advance(50)
        assert state.game_over
        assert state.body == body

    def test_game_over_is_terminal(self):
        """advance does nothing after game over."""
        state = make_state([(2, 2), (3, 2)], food=Cell(1, 2))
        state.phase = Phase.GAME_OVER
        assert state.advance(50) is False
        assert state.body == [(2, 2), (3, 2)]
        assert state.food == (1, 2)

    def test_wraparound_lands_on_cell_count(self):
        """From x=0 heading left on a 10-wide grid the head lands on x=10, then x=9."""
        state = make_state([(0, 5)], food=Cell(5, 0), grid=(10, 10))
        state.advance(50)
        assert state.head == (10, 5)
        state.advance(100)
        assert state.head == (9, 5)

    def test_wraparound_forward_edge(self):
        """Heading right only wraps to 0 from x == cell count."""
        assert next_cell((9, 3), Direction.RIGHT, 10, 10) == (10, 3)
        assert next_cell((10, 3), Direction.RIGHT, 10, 10) == (0, 3)
        assert next_cell((3, 0), Direction.UP, 10, 8) == (3, 8)
        assert next_cell((3, 8), Direction.DOWN, 10, 8) == (3, 0)


class TestScore:
    """Tests for score_for."""

    def test_truncates(self):
        assert score_for(10) == 10000
        assert score_for(3) == 33333
        assert score_for(7) == 14285

    def test_zero_and_negative_elapsed_clamp_to_one_ms(self):
        assert score_for(0) == 100000
        assert score_for(-5) == 100000


class TestSpawnFood:
    """Tests for spawn_food."""

    def test_full_grid_has_no_food(self):
        """No free cell -> None instead of looping forever."""
        body = [Cell(x, y) for y in range(3) for x in range(3)]
        assert spawn_food(body, 3, 3, random.Random(0)) is None

    def test_single_free_cell_is_found(self):
        """The last free cell is found even when sampling keeps missing."""
        body = [Cell(x, y) for y in range(20) for x in range(20) if (x, y) != (13, 7)]
        assert spawn_food(body, 20, 20, random.Random(0)) == (13, 7)

    def test_eating_the_last_gap_leaves_no_food(self):
        """Growing into the only free cell leaves the board without food."""
        state = make_state([(1, 0), (2, 0), (2, 1), (1, 1), (0, 1)], food=Cell(0, 0), grid=(3, 2))
        state.advance(10)
        assert state.phase is Phase.PLAYING
        assert len(state.body) == 6
        assert state.food is None


class TestResetAndSnapshot:
    """Tests for reset and snapshot."""

    def test_reset_restores_a_fresh_game(self):
        """reset after game over behaves like construction."""
        state = make_state([(2, 2), (3, 2)], food=Cell(1, 2), grid=(8, 8))
        state.score = 42
        state.phase = Phase.GAME_OVER
        state.direction = Direction.UP
        state.reset(now_ms=500, initial_length=3)
        assert state.phase is Phase.PLAYING
        assert state.score == 0
        assert state.direction is Direction.LEFT
        assert state.body == [(4, 4), (5, 4), (6, 4)]
        assert state.food_spawned_at == 500
        assert state.food not in state.body

    def test_snapshot_is_a_read_only_copy(self):
        """Mutating the state later does not change an earlier snapshot."""
        state = make_state([(5, 5), (6, 5)], food=Cell(9, 9))
        snap = state.snapshot(fps=60, show_fps=True, area=(800, 600))
        state.advance(50)
        assert snap.body == ((5, 5), (6, 5))
        assert snap.area == (800, 600)
        assert snap.fps == 60 and snap.show_fps
        assert snap.playing
        with pytest.raises(dataclasses.FrozenInstanceError):
            snap.score = 1
