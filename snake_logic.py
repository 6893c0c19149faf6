# snake_logic.py

# Lógica pura del juego: sin arcade ni curses. Las UIs le pasan direcciones
# y leen una foto (snapshot) del estado para dibujar.

import random
import time
from collections import deque
from enum import Enum
from typing import NamedTuple, Optional, Tuple

import numpy as np

# --- Constantes del Juego ---
GRID_WIDTH_LOGIC = 40   # Celdas, incluyendo la fila/columna de pared
GRID_HEIGHT_LOGIC = 30
START_LENGTH_LOGIC = 3

# --- Velocidad (milisegundos por paso) ---
INITIAL_TICK_MS = 200.0
SPEED_STEP_MS = 5.0
MIN_TICK_MS = 50.0

# --- Puntuación ---
POINTS_PER_FOOD = 1
POINTS_PER_SPECIAL_FOOD = 5
SPECIAL_FOOD_EVERY = 10       # Cada 10 puntos aparece comida especial (0 = nunca)
SPECIAL_FOOD_DURATION = 5.0   # Segundos antes de que caduque
SPECIAL_FOOD_GROWTH = 2

MAX_SPAWN_ATTEMPTS = 1000
MAX_PENDING_DIRECTIONS = 3

# --- Códigos del tablero (get_board) ---
CELL_EMPTY = 0
CELL_WALL = 1
CELL_SNAKE = 2
CELL_HEAD = 3
CELL_FOOD = 4
CELL_SPECIAL_FOOD = 5


class Position(NamedTuple):
    x: int
    y: int


class Direction(Enum):
    # (dx, dy); la y crece hacia abajo, la fila 0 es la pared de arriba
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self):
        return self.value[0]

    @property
    def dy(self):
        return self.value[1]

    @property
    def opposite(self):
        return Direction((-self.dx, -self.dy))


class GameSnapshot(NamedTuple):
    snake: Tuple[Position, ...]
    food: Optional[Position]
    special_food: Optional[Position]
    score: int
    high_score: int
    state: Optional[Enum]  # GameState en la versión ventana, None en consola
    tick_interval: float
    collision_type: Optional[str]
    grid_width: int
    grid_height: int


class SnakeLogic:
    def __init__(self, width=GRID_WIDTH_LOGIC, height=GRID_HEIGHT_LOGIC,
                 start_length=START_LENGTH_LOGIC,
                 start_direction=Direction.RIGHT,
                 special_food_every=SPECIAL_FOOD_EVERY,
                 initial_tick_ms=INITIAL_TICK_MS,
                 rng=None, clock=time.monotonic):
        if width < 3 or height < 3:
            raise ValueError(
                f"El tablero necesita al menos 3x3 celdas (recibido {width}x{height})")
        if start_length < 1:
            raise ValueError("start_length debe ser >= 1")
        if not isinstance(start_direction, Direction):
            raise ValueError(f"Dirección inicial desconocida: {start_direction!r}")
        # La cola se extiende en sentido contrario a la dirección inicial
        back = start_direction.opposite
        tail_x = width // 2 + back.dx * (start_length - 1)
        tail_y = height // 2 + back.dy * (start_length - 1)
        if not (1 <= tail_x <= width - 2 and 1 <= tail_y <= height - 2):
            raise ValueError(
                f"Una serpiente de {start_length} segmentos no cabe en {width}x{height}")

        self.width = width
        self.height = height
        self.start_length = start_length
        self.start_direction = start_direction
        self.special_food_every = special_food_every
        self.initial_tick_ms = initial_tick_ms
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock

        self.snake_body = deque()  # deque de Position, cabeza en el índice 0
        self.direction = start_direction
        self.pending_directions = deque()
        self.food = None
        self.special_food = None
        self.special_food_spawned_at = 0.0
        self.score = 0
        self.tick_interval = initial_tick_ms
        self.game_over = False
        self.last_collision_type = None

        self.setup()

    def setup(self):
        """Deja el juego listo para una partida nueva."""
        self.game_over = False
        self.last_collision_type = None
        self.score = 0
        self.tick_interval = self.initial_tick_ms
        self.direction = self.start_direction
        self.pending_directions.clear()

        head = Position(self.width // 2, self.height // 2)
        back = self.start_direction.opposite
        self.snake_body = deque(
            Position(head.x + back.dx * i, head.y + back.dy * i)
            for i in range(self.start_length))

        self.special_food = None
        self.food = self._place_food()
        if self.food is None:
            self.game_over = True
            self.last_collision_type = "board_full"

    def reset(self):
        self.setup()

    @property
    def head(self):
        return self.snake_body[0]

    def request_direction(self, direction):
        """Encola una intención de giro; se consume una por paso en step()."""
        if not isinstance(direction, Direction):
            raise ValueError(f"Dirección desconocida: {direction!r}")
        if len(self.pending_directions) >= MAX_PENDING_DIRECTIONS:
            return False
        self.pending_directions.append(direction)
        return True

    # --- Comida ---
    def _is_playable(self, pos):
        return 1 <= pos.x <= self.width - 2 and 1 <= pos.y <= self.height - 2

    def _random_cell(self):
        return Position(self.rng.randrange(1, self.width - 1),
                        self.rng.randrange(1, self.height - 1))

    def _first_free_cell(self, excluded):
        """Recorre el tablero por filas y devuelve la primera celda libre."""
        occupied = np.zeros((self.height, self.width), dtype=bool)
        occupied[0, :] = occupied[-1, :] = True
        occupied[:, 0] = occupied[:, -1] = True
        for pos in excluded:
            if self._is_playable(pos):
                occupied[pos.y, pos.x] = True
        free = np.argwhere(~occupied)
        if free.size == 0:
            return None
        y, x = free[0]
        return Position(int(x), int(y))

    def _spawn(self, excluded):
        excluded = set(excluded)
        for _ in range(MAX_SPAWN_ATTEMPTS):
            candidate = self._random_cell()
            if candidate not in excluded:
                return candidate
        # Tablero casi lleno: dejamos de muestrear y buscamos en orden
        return self._first_free_cell(excluded)

    def _place_food(self):
        excluded = set(self.snake_body)
        if self.special_food is None:
            return self._spawn(excluded)
        food = self._spawn(excluded | {self.special_food})
        if food is None:
            # Solo queda la celda de la comida especial: se comparte
            food = self._spawn(excluded)
        return food

    def _place_special_food(self):
        excluded = set(self.snake_body)
        excluded.add(self.food)
        self.special_food = self._spawn(excluded)
        if self.special_food is not None:
            self.special_food_spawned_at = self.clock()

    def update_special_food(self):
        if self.special_food is None:
            return
        if self.clock() - self.special_food_spawned_at >= SPECIAL_FOOD_DURATION:
            self.special_food = None

    # --- Colisiones ---
    def _is_wall_collision(self, pos):
        return not self._is_playable(pos)

    def _is_body_collision(self, pos, check_body_from_index=1):
        for i in range(check_body_from_index, len(self.snake_body)):
            if self.snake_body[i] == pos:
                return True
        return False

    def _grow(self, tail, segments):
        # La cola que acabamos de quitar vuelve a su sitio; el resto se
        # duplica y se separa en los pasos siguientes
        self.snake_body.append(tail)
        for _ in range(segments - 1):
            self.snake_body.append(self.snake_body[-1])

    def _commit_direction(self):
        if not self.pending_directions:
            return
        requested = self.pending_directions.popleft()
        if requested != self.direction.opposite:
            self.direction = requested

    def step(self):
        """Avanza la serpiente exactamente una celda.

        Devuelve un dict con 'collision_type' (None, 'wall', 'self' o
        'board_full'), 'ate_food' y 'ate_special'.
        """
        info = {'collision_type': None, 'ate_food': False, 'ate_special': False}
        if self.game_over:
            info['collision_type'] = self.last_collision_type
            return info

        self._commit_direction()
        head = self.head
        new_head = Position(head.x + self.direction.dx, head.y + self.direction.dy)
        self.snake_body.appendleft(new_head)
        tail = self.snake_body.pop()

        # 1. Pared  2. Cuerpo. Si chocamos no se come nada en este paso
        if self._is_wall_collision(new_head):
            info['collision_type'] = "wall"
        elif self._is_body_collision(new_head, 1):
            info['collision_type'] = "self"

        if info['collision_type']:
            self.game_over = True
            self.last_collision_type = info['collision_type']
            return info

        if new_head == self.food:
            info['ate_food'] = True
            self.score += POINTS_PER_FOOD
            self._grow(tail, 1)
            self.tick_interval = max(MIN_TICK_MS, self.tick_interval - SPEED_STEP_MS)
            self.food = self._place_food()
            if self.food is None:
                # No queda sitio libre: la partida acaba con el tablero lleno
                self.game_over = True
                self.last_collision_type = info['collision_type'] = "board_full"
                return info
            if self.special_food_every and self.score % self.special_food_every == 0:
                self._place_special_food()

        if self.special_food is not None and new_head == self.special_food:
            info['ate_special'] = True
            self.score += POINTS_PER_SPECIAL_FOOD
            self._grow(tail, SPECIAL_FOOD_GROWTH)
            self.special_food = None

        self.update_special_food()
        return info

    def get_board(self):
        """Matriz (alto x ancho) con los códigos CELL_* para dibujar en consola."""
        board = np.full((self.height, self.width), CELL_EMPTY, dtype=np.int8)
        board[0, :] = board[-1, :] = CELL_WALL
        board[:, 0] = board[:, -1] = CELL_WALL
        if self.food is not None:
            board[self.food.y, self.food.x] = CELL_FOOD
        if self.special_food is not None:
            board[self.special_food.y, self.special_food.x] = CELL_SPECIAL_FOOD
        for i, segment in enumerate(self.snake_body):
            if 0 <= segment.x < self.width and 0 <= segment.y < self.height:
                board[segment.y, segment.x] = CELL_HEAD if i == 0 else CELL_SNAKE
        return board

    def get_snapshot(self, high_score=0, state=None):
        return GameSnapshot(
            snake=tuple(self.snake_body),
            food=self.food,
            special_food=self.special_food,
            score=self.score,
            high_score=high_score,
            state=state,
            tick_interval=self.tick_interval,
            collision_type=self.last_collision_type,
            grid_width=self.width,
            grid_height=self.height,
        )
