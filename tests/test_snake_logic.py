import random
import unittest
from collections import deque

from snake_logic import (SnakeLogic, Position, Direction, MIN_TICK_MS, SPEED_STEP_MS,
                         INITIAL_TICK_MS, POINTS_PER_SPECIAL_FOOD, SPECIAL_FOOD_DURATION,
                         MAX_PENDING_DIRECTIONS, CELL_WALL, CELL_HEAD, CELL_SNAKE,
                         CELL_FOOD, CELL_EMPTY)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class StuckRandom:
    """randrange siempre devuelve el mínimo: fuerza el escaneo de respaldo."""

    def randrange(self, start, stop=None):
        return start


def make_game(width=20, height=20, body=None, food=None, direction=Direction.RIGHT, **kwargs):
    kwargs.setdefault('rng', random.Random(1234))
    game = SnakeLogic(width, height, **kwargs)
    if body is not None:
        game.snake_body = deque(Position(*p) for p in body)
    if food is not None:
        game.food = Position(*food)
    game.direction = direction
    return game


class TestMovement(unittest.TestCase):
    def test_initial_snake_is_centered_and_heads_right(self):
        game = SnakeLogic(40, 30, rng=random.Random(0))
        self.assertEqual(list(game.snake_body),
                         [Position(20, 15), Position(19, 15), Position(18, 15)])
        self.assertEqual(game.direction, Direction.RIGHT)
        self.assertEqual(game.tick_interval, INITIAL_TICK_MS)

    def test_console_start_length_one(self):
        game = SnakeLogic(32, 22, start_length=1, rng=random.Random(0))
        self.assertEqual(len(game.snake_body), 1)

    def test_eating_food_grows_by_one_and_scores(self):
        game = make_game(body=[(10, 10), (9, 10), (8, 10)], food=(11, 10))
        info = game.step()
        self.assertTrue(info['ate_food'])
        self.assertEqual(game.head, Position(11, 10))
        self.assertEqual(len(game.snake_body), 4)
        self.assertEqual(game.score, 1)
        self.assertEqual(game.snake_body[-1], Position(8, 10))
        self.assertNotIn(game.food, game.snake_body)

    def test_plain_tick_keeps_length(self):
        game = make_game(body=[(10, 10), (9, 10), (8, 10)], food=(1, 1))
        game.step()
        self.assertEqual(list(game.snake_body),
                         [Position(11, 10), Position(10, 10), Position(9, 10)])
        self.assertEqual(game.score, 0)

    def test_reverse_request_is_ignored(self):
        game = make_game(body=[(10, 10), (9, 10), (8, 10)], food=(1, 1))
        game.request_direction(Direction.LEFT)
        game.step()
        self.assertEqual(game.direction, Direction.RIGHT)
        self.assertEqual(game.head, Position(11, 10))
        self.assertFalse(game.game_over)

    def test_queued_turns_are_consumed_one_per_tick(self):
        game = make_game(body=[(10, 10), (9, 10), (8, 10)], food=(1, 1))
        game.request_direction(Direction.UP)
        game.request_direction(Direction.LEFT)
        game.step()
        self.assertEqual(game.head, Position(10, 9))
        game.step()
        self.assertEqual(game.head, Position(9, 9))
        self.assertEqual(game.direction, Direction.LEFT)

    def test_quick_double_turn_cannot_reverse(self):
        # UP y luego DOWN antes del siguiente paso: DOWN se compara con UP
        game = make_game(body=[(10, 10), (9, 10), (8, 10)], food=(1, 1))
        game.request_direction(Direction.UP)
        game.request_direction(Direction.DOWN)
        game.step()
        game.step()
        self.assertEqual(game.direction, Direction.UP)
        self.assertEqual(game.head, Position(10, 8))

    def test_input_queue_is_bounded(self):
        game = make_game()
        results = [game.request_direction(Direction.UP)
                   for _ in range(MAX_PENDING_DIRECTIONS + 1)]
        self.assertEqual(results[-1], False)
        self.assertEqual(len(game.pending_directions), MAX_PENDING_DIRECTIONS)

    def test_request_direction_rejects_unknown_values(self):
        game = make_game()
        with self.assertRaises(ValueError):
            game.request_direction("left")


class TestCollisions(unittest.TestCase):
    def test_right_wall_is_terminal_even_with_food_there(self):
        game = make_game(body=[(18, 10), (17, 10), (16, 10)], food=(19, 10))
        info = game.step()
        self.assertTrue(game.game_over)
        self.assertEqual(info['collision_type'], "wall")
        self.assertFalse(info['ate_food'])
        self.assertEqual(game.score, 0)

    def test_left_wall_at_zero(self):
        game = make_game(body=[(1, 5)], food=(10, 10), direction=Direction.LEFT)
        info = game.step()
        self.assertEqual(info['collision_type'], "wall")
        self.assertEqual(game.head, Position(0, 5))

    def test_self_collision(self):
        game = make_game(body=[(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)],
                         food=(10, 10), direction=Direction.DOWN)
        info = game.step()
        self.assertEqual(info['collision_type'], "self")
        self.assertTrue(game.game_over)

    def test_moving_into_vacated_tail_cell_is_safe(self):
        game = make_game(body=[(5, 5), (6, 5), (6, 6), (5, 6)],
                         food=(10, 10), direction=Direction.DOWN)
        info = game.step()
        self.assertIsNone(info['collision_type'])
        self.assertEqual(game.head, Position(5, 6))

    def test_step_after_game_over_does_nothing(self):
        game = make_game(body=[(18, 10)], food=(1, 1))
        game.step()
        body = list(game.snake_body)
        info = game.step()
        self.assertEqual(info['collision_type'], "wall")
        self.assertEqual(list(game.snake_body), body)


class TestFoodAndSpeed(unittest.TestCase):
    def test_speed_increases_with_floor(self):
        game = make_game(body=[(10, 10), (9, 10)], food=(11, 10))
        game.step()
        self.assertEqual(game.tick_interval, INITIAL_TICK_MS - SPEED_STEP_MS)

        game = make_game(body=[(10, 10), (9, 10)], food=(11, 10))
        game.tick_interval = MIN_TICK_MS + 2
        game.step()
        self.assertEqual(game.tick_interval, MIN_TICK_MS)
        game.food = Position(12, 10)
        game.step()
        self.assertEqual(game.tick_interval, MIN_TICK_MS)

    def test_food_never_spawns_on_snake_or_wall(self):
        for seed in range(50):
            game = SnakeLogic(8, 8, rng=random.Random(seed))
            self.assertNotIn(game.food, game.snake_body)
            self.assertTrue(1 <= game.food.x <= 6 and 1 <= game.food.y <= 6)

    def test_spawn_falls_back_to_scan(self):
        # 3x3 celdas jugables; la serpiente ocupa todo menos (3, 3)
        game = SnakeLogic(5, 5, start_length=1, rng=StuckRandom())
        game.snake_body = deque(Position(x, y) for y in range(1, 4) for x in range(1, 4)
                                if (x, y) != (3, 3))
        self.assertEqual(game._place_food(), Position(3, 3))

    def test_full_board_returns_no_cell(self):
        game = SnakeLogic(5, 5, start_length=1, rng=StuckRandom())
        game.snake_body = deque(Position(x, y) for y in range(1, 4) for x in range(1, 4))
        self.assertIsNone(game._place_food())

    def test_eating_last_free_cell_ends_the_run(self):
        game = SnakeLogic(4, 3, start_length=1, start_direction=Direction.LEFT,
                          rng=random.Random(0))
        self.assertEqual(game.food, Position(1, 1))
        info = game.step()
        self.assertTrue(info['ate_food'])
        self.assertEqual(info['collision_type'], "board_full")
        self.assertTrue(game.game_over)
        self.assertIsNone(game.food)

    def test_food_can_share_the_special_food_cell(self):
        # Queda una sola celda libre y la ocupa la comida especial
        clock = FakeClock()
        game = SnakeLogic(5, 3, start_length=1, start_direction=Direction.LEFT,
                          rng=random.Random(0), clock=clock)
        game.food = Position(1, 1)
        game.special_food = Position(3, 1)
        game.special_food_spawned_at = clock.now
        info = game.step()
        self.assertTrue(info['ate_food'])
        self.assertIsNone(info['collision_type'])
        self.assertFalse(game.game_over)
        self.assertEqual(game.food, Position(3, 1))
        self.assertEqual(game.special_food, Position(3, 1))


class TestSpecialFood(unittest.TestCase):
    def test_special_food_spawns_on_milestone(self):
        game = make_game(body=[(10, 10), (9, 10), (8, 10)], food=(11, 10))
        game.score = 9
        game.step()
        self.assertEqual(game.score, 10)
        self.assertIsNotNone(game.special_food)
        self.assertNotIn(game.special_food, game.snake_body)
        self.assertNotEqual(game.special_food, game.food)

    def test_no_special_food_when_disabled(self):
        game = make_game(body=[(10, 10), (9, 10)], food=(11, 10), special_food_every=0)
        game.score = 9
        game.step()
        self.assertIsNone(game.special_food)

    def test_eating_special_food_grows_by_two(self):
        clock = FakeClock()
        game = make_game(body=[(10, 10), (9, 10), (8, 10)], food=(1, 1), clock=clock)
        game.special_food = Position(11, 10)
        game.special_food_spawned_at = clock.now
        info = game.step()
        self.assertTrue(info['ate_special'])
        self.assertEqual(game.score, POINTS_PER_SPECIAL_FOOD)
        self.assertEqual(len(game.snake_body), 5)
        self.assertIsNone(game.special_food)

        # Los segmentos duplicados se separan en los pasos siguientes
        game.step()
        game.step()
        self.assertEqual(len(set(game.snake_body)), 5)

    def test_special_food_expires(self):
        clock = FakeClock()
        game = make_game(body=[(10, 10), (9, 10)], food=(1, 1), clock=clock)
        game.special_food = Position(2, 18)
        game.special_food_spawned_at = 0.0
        clock.now = SPECIAL_FOOD_DURATION - 0.1
        game.step()
        self.assertEqual(game.special_food, Position(2, 18))
        clock.now = SPECIAL_FOOD_DURATION
        game.step()
        self.assertIsNone(game.special_food)


class TestInvariants(unittest.TestCase):
    def test_random_play_keeps_invariants(self):
        rng = random.Random(42)
        for seed in range(10):
            game = SnakeLogic(12, 12, rng=random.Random(seed))
            previous_score = 0
            for _ in range(300):
                if game.game_over:
                    break
                game.request_direction(rng.choice(list(Direction)))
                before = len(game.snake_body)
                previous_direction = game.direction
                info = game.step()
                self.assertNotEqual(game.direction, previous_direction.opposite)
                self.assertGreaterEqual(game.score, previous_score)
                previous_score = game.score
                if info['collision_type']:
                    continue
                growth = (1 if info['ate_food'] else 0) + (2 if info['ate_special'] else 0)
                self.assertEqual(len(game.snake_body), before + growth)
                if game.food is not None:
                    self.assertNotIn(game.food, game.snake_body)


class TestSetup(unittest.TestCase):
    def test_rejects_tiny_board(self):
        with self.assertRaises(ValueError):
            SnakeLogic(2, 10)

    def test_rejects_snake_that_does_not_fit(self):
        with self.assertRaises(ValueError):
            SnakeLogic(10, 10, start_length=8)

    def test_reset_restores_start(self):
        game = make_game(body=[(18, 10)], food=(1, 1))
        game.step()
        game.reset()
        self.assertFalse(game.game_over)
        self.assertEqual(game.score, 0)
        self.assertEqual(len(game.snake_body), 3)
        self.assertEqual(game.direction, Direction.RIGHT)

    def test_board_matrix(self):
        game = make_game(width=6, height=5, body=[(3, 2), (2, 2)], food=(4, 3))
        board = game.get_board()
        self.assertEqual(board.shape, (5, 6))
        self.assertEqual(board[0, 0], CELL_WALL)
        self.assertEqual(board[4, 5], CELL_WALL)
        self.assertEqual(board[2, 3], CELL_HEAD)
        self.assertEqual(board[2, 2], CELL_SNAKE)
        self.assertEqual(board[3, 4], CELL_FOOD)
        self.assertEqual(board[1, 1], CELL_EMPTY)

    def test_snapshot_is_a_copy(self):
        game = make_game(body=[(10, 10), (9, 10)], food=(1, 1))
        snapshot = game.get_snapshot(high_score=7)
        game.step()
        self.assertEqual(snapshot.snake, (Position(10, 10), Position(9, 10)))
        self.assertEqual(snapshot.high_score, 7)
        self.assertEqual((snapshot.grid_width, snapshot.grid_height), (20, 20))


if __name__ == '__main__':
    unittest.main()
