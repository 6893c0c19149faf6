# snake_ui.py
import argparse
import random
import sys

import arcade

from highscore import HighScoreStore, HIGHSCORE_FILE_DEFAULT
from snake_logic import (SnakeLogic, Direction, Position, INITIAL_TICK_MS, SPECIAL_FOOD_EVERY,
                         GRID_WIDTH_LOGIC, GRID_HEIGHT_LOGIC)
from snake_session import SnakeSession, GameState, Command

# --- Constantes de la Pantalla ---
STEP_SIZE = 20  # Tamaño de cada celda en píxeles
SCREEN_WIDTH = GRID_WIDTH_LOGIC * STEP_SIZE    # 800
SCREEN_HEIGHT = GRID_HEIGHT_LOGIC * STEP_SIZE  # 600
SCREEN_TITLE = "Snake Game"

# --- Colores ---
BACKGROUND_COLOR = arcade.color.BLACK
WALL_COLOR = arcade.color.BLUE
SNAKE_COLOR = (144, 238, 144)  # Verde claro
FOOD_COLOR = arcade.color.RED
SPECIAL_FOOD_COLOR = arcade.color.MAGENTA
TEXT_COLOR = arcade.color.WHITE
TITLE_COLOR = arcade.color.GREEN
HIGHSCORE_COLOR = arcade.color.YELLOW
GAMEOVER_COLOR = arcade.color.RED
PAUSE_OVERLAY_COLOR = (0, 0, 0, 128)

# --- Teclado ---
KEY_DIRECTIONS = {
    arcade.key.UP: Direction.UP,
    arcade.key.W: Direction.UP,
    arcade.key.DOWN: Direction.DOWN,
    arcade.key.S: Direction.DOWN,
    arcade.key.LEFT: Direction.LEFT,
    arcade.key.A: Direction.LEFT,
    arcade.key.RIGHT: Direction.RIGHT,
    arcade.key.D: Direction.RIGHT,
}

KEY_COMMANDS = {
    arcade.key.RETURN: Command.CONFIRM,
    arcade.key.ENTER: Command.CONFIRM,
    arcade.key.SPACE: Command.TOGGLE,
    arcade.key.R: Command.RESUME,
    arcade.key.Q: Command.QUIT,
    arcade.key.ESCAPE: Command.QUIT,
}


class SnakeGameUI(arcade.Window):
    def __init__(self, session: SnakeSession, width: int = SCREEN_WIDTH,
                 height: int = SCREEN_HEIGHT, title: str = SCREEN_TITLE):
        super().__init__(width, height, title, update_rate=1/60)
        self.background_color = BACKGROUND_COLOR
        self.session = session

    # --- Coordenadas: la lógica tiene la y hacia abajo, arcade hacia arriba ---
    def _cell_lrbt(self, rows, x, y, inset=0):
        left = x * STEP_SIZE
        bottom = (rows - 1 - y) * STEP_SIZE
        return left, left + STEP_SIZE - inset, bottom, bottom + STEP_SIZE - inset

    def _draw_cell(self, snapshot, pos, color, inset=1):
        lrbt = self._cell_lrbt(snapshot.grid_height, pos.x, pos.y, inset)
        arcade.draw_lrbt_rectangle_filled(*lrbt, color)

    def _draw_centered(self, text, y, color, font_size):
        arcade.draw_text(text, self.width / 2, y, color, font_size=font_size,
                         anchor_x="center", anchor_y="center")

    # --- Pantallas ---
    def draw_menu(self, snapshot):
        self._draw_centered("SNAKE GAME", self.height - 150, TITLE_COLOR, 60)
        self._draw_centered("Press ENTER or SPACE to Play", self.height - 300, TEXT_COLOR, 24)
        self._draw_centered("Press Q or ESC to Quit", self.height - 350, TEXT_COLOR, 24)
        if snapshot.high_score > 0:
            self._draw_centered(f"High Score: {snapshot.high_score}",
                                self.height - 450, HIGHSCORE_COLOR, 24)

    def draw_game(self, snapshot):
        cols, rows = snapshot.grid_width, snapshot.grid_height
        for x in range(cols):
            self._draw_cell(snapshot, Position(x, 0), WALL_COLOR, inset=0)
            self._draw_cell(snapshot, Position(x, rows - 1), WALL_COLOR, inset=0)
        for y in range(rows):
            self._draw_cell(snapshot, Position(0, y), WALL_COLOR, inset=0)
            self._draw_cell(snapshot, Position(cols - 1, y), WALL_COLOR, inset=0)

        for segment in snapshot.snake:
            self._draw_cell(snapshot, segment, SNAKE_COLOR)
        if snapshot.food is not None:
            self._draw_cell(snapshot, snapshot.food, FOOD_COLOR)
        if snapshot.special_food is not None:
            self._draw_cell(snapshot, snapshot.special_food, SPECIAL_FOOD_COLOR)

        arcade.draw_text(f"Score: {snapshot.score}", 10, self.height - 30,
                         TEXT_COLOR, font_size=18)

    def draw_paused(self, snapshot):
        self.draw_game(snapshot)  # El juego queda de fondo
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, PAUSE_OVERLAY_COLOR)
        self._draw_centered("PAUSED", self.height - 200, TEXT_COLOR, 48)
        self._draw_centered(f"Score: {snapshot.score}", self.height - 280, TEXT_COLOR, 24)
        self._draw_centered("Press SPACE or R to Resume", self.height - 350, TEXT_COLOR, 20)
        self._draw_centered("Press Q or ESC to Quit", self.height - 380, TEXT_COLOR, 20)

    def draw_game_over(self, snapshot):
        self._draw_centered("GAME OVER", self.height - 200, GAMEOVER_COLOR, 48)
        collision_msg = ""
        if snapshot.collision_type == "wall":
            collision_msg = "Hit a wall!"
        elif snapshot.collision_type == "self":
            collision_msg = "Hit itself!"
        elif snapshot.collision_type == "board_full":
            collision_msg = "Board full!"
        if collision_msg:
            self._draw_centered(collision_msg, self.height - 245, TEXT_COLOR, 16)
        self._draw_centered(f"Final Score: {snapshot.score}", self.height - 280, TEXT_COLOR, 24)
        self._draw_centered(f"High Score: {snapshot.high_score}",
                            self.height - 320, HIGHSCORE_COLOR, 24)
        self._draw_centered("Press ENTER or SPACE to Return to Menu",
                            self.height - 400, TEXT_COLOR, 20)

    def on_draw(self):
        self.clear()
        snapshot = self.session.get_snapshot()
        if snapshot.state == GameState.MENU:
            self.draw_menu(snapshot)
        elif snapshot.state == GameState.PLAYING:
            self.draw_game(snapshot)
        elif snapshot.state == GameState.PAUSED:
            self.draw_paused(snapshot)
        elif snapshot.state == GameState.GAME_OVER:
            self.draw_game_over(snapshot)

    def on_update(self, delta_time: float):
        self.session.update(delta_time * 1000.0)
        if not self.session.running:
            arcade.exit()

    def on_key_press(self, key, modifiers):
        if key in KEY_DIRECTIONS:
            self.session.push_input(KEY_DIRECTIONS[key])
        elif key in KEY_COMMANDS:
            self.session.push_input(KEY_COMMANDS[key])

    def on_close(self):
        print("Ventana cerrada por el usuario.")
        super().on_close()
        arcade.exit()


def build_session(args):
    logic = SnakeLogic(
        args.width, args.height,
        start_length=3,
        special_food_every=SPECIAL_FOOD_EVERY,
        initial_tick_ms=args.speed,
        rng=random.Random(args.seed),
    )
    return SnakeSession(logic, HighScoreStore(args.highscore_file))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Snake Game - versión ventana (arcade)")
    parser.add_argument("--width", type=int, default=GRID_WIDTH_LOGIC,
                        help="Ancho del tablero en celdas (incluye las paredes).")
    parser.add_argument("--height", type=int, default=GRID_HEIGHT_LOGIC,
                        help="Alto del tablero en celdas (incluye las paredes).")
    parser.add_argument("--highscore-file", default=HIGHSCORE_FILE_DEFAULT,
                        help="Fichero donde se guarda la puntuación máxima.")
    parser.add_argument("--speed", type=float, default=INITIAL_TICK_MS,
                        help="Milisegundos por paso al empezar la partida.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Semilla para la posición de la comida.")
    args = parser.parse_args(argv)

    try:
        session = build_session(args)
    except ValueError as e:
        print(f"Configuración no válida: {e}")
        return 1
    try:
        window = SnakeGameUI(session, args.width * STEP_SIZE, args.height * STEP_SIZE)
    except Exception as e:
        print(f"Error al inicializar la ventana de Arcade: {e}")
        return 1
    arcade.run()
    print(f"Puntuación máxima: {window.session.high_score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
