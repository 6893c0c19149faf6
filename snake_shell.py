# snake_shell.py
import argparse
import random
import sys
import time

try:
    import curses
except ImportError:  # Windows sin windows-curses
    curses = None

from highscore import HighScoreStore, HIGHSCORE_FILE_DEFAULT
from snake_logic import (SnakeLogic, Direction, INITIAL_TICK_MS,
                         CELL_WALL, CELL_SNAKE, CELL_HEAD, CELL_FOOD, CELL_SPECIAL_FOOD)

# --- Constantes del Juego (versión consola) ---
GRID_WIDTH_SHELL = 32   # Celdas lógicas, cada una ocupa dos caracteres
GRID_HEIGHT_SHELL = 22
START_LENGTH_SHELL = 1
FRAME_MS = 30  # Espera máxima de getch() por frame

# Cada celda lógica son dos caracteres
CELL_CHARS = {
    CELL_WALL: "##",
    CELL_SNAKE: "ss",
    CELL_HEAD: "SS",
    CELL_FOOD: "**",
    CELL_SPECIAL_FOOD: "$$",
}

KEY_DIRECTIONS_CHARS = {
    'w': Direction.UP, 'W': Direction.UP,
    's': Direction.DOWN, 'S': Direction.DOWN,
    'a': Direction.LEFT, 'A': Direction.LEFT,
    'd': Direction.RIGHT, 'D': Direction.RIGHT,
}

COLLISION_MESSAGES = {
    "wall": "OOPS! Snake bumped into the wall !!",
    "self": "OOPS! Snake bumped into itself !!!",
    "board_full": "Board full! Nothing left to eat.",
}


def key_to_direction(key):
    """Traduce un código de curses.getch() a Direction (o None)."""
    if curses is not None:
        arrows = {
            curses.KEY_UP: Direction.UP,
            curses.KEY_DOWN: Direction.DOWN,
            curses.KEY_LEFT: Direction.LEFT,
            curses.KEY_RIGHT: Direction.RIGHT,
        }
        if key in arrows:
            return arrows[key]
    if 0 <= key < 256:
        return KEY_DIRECTIONS_CHARS.get(chr(key))
    return None


def render_lines(game_logic, high_score, paused=False):
    """Devuelve las líneas de texto a pintar: tablero, marcador y mensajes."""
    board = game_logic.get_board()
    lines = ["".join(CELL_CHARS.get(int(cell), "  ") for cell in row) for row in board]
    lines.append(f"  Score: {game_logic.score}   High Score: {high_score}")

    if game_logic.game_over:
        lines.append("  GAME OVER! 'q' to quit, 'r' to restart.")
    elif paused:
        lines.append("  PAUSED - Press 'p' to continue")
    return lines


def draw_game_shell(stdscr, game_logic, high_score, paused=False):
    stdscr.erase()
    term_rows, term_cols = stdscr.getmaxyx()
    for r_idx, line in enumerate(render_lines(game_logic, high_score, paused)):
        if r_idx >= term_rows:
            break
        try:
            stdscr.addstr(r_idx, 0, line[:term_cols - 1])
        except curses.error:
            pass
    stdscr.refresh()


def game_loop_shell_curses(stdscr, game_logic, highscore_store):
    """Bucle principal. Devuelve (puntuación, tipo de colisión, máxima)."""
    curses.curs_set(0)
    stdscr.nodelay(1)
    stdscr.timeout(FRAME_MS)

    high_score = highscore_store.load()

    term_rows, term_cols = stdscr.getmaxyx()
    min_req_rows = game_logic.height + 2  # +marcador, +mensaje
    min_req_cols = game_logic.width * 2 + 1
    if term_rows < min_req_rows or term_cols < min_req_cols:
        stdscr.clear()
        stdscr.addstr(0, 0, "Terminal is too small.")
        stdscr.addstr(1, 0, f"Required: {min_req_rows} rows, {min_req_cols} cols.")
        stdscr.addstr(2, 0, f"Available: {term_rows} rows, {term_cols} cols.")
        stdscr.addstr(4, 0, "Press any key to exit.")
        stdscr.nodelay(0)
        stdscr.getch()
        return game_logic.score, None, high_score

    paused = False
    last_tick = time.monotonic()

    while True:
        user_key = stdscr.getch()

        if user_key in (ord('q'), ord('Q'), 27):  # 27 = Escape
            break

        if game_logic.game_over:
            if user_key in (ord('r'), ord('R')):
                game_logic.reset()
                paused = False
                last_tick = time.monotonic()
        elif user_key in (ord('p'), ord('P')):
            paused = not paused
            last_tick = time.monotonic()
        elif not paused and user_key != -1:
            direction = key_to_direction(user_key)
            if direction is not None:
                game_logic.request_direction(direction)

        now = time.monotonic()
        if not paused and not game_logic.game_over and \
                (now - last_tick) * 1000.0 >= game_logic.tick_interval:
            last_tick = now
            game_logic.step()
            if game_logic.game_over:
                high_score = highscore_store.update(high_score, game_logic.score)

        draw_game_shell(stdscr, game_logic, high_score, paused)

    return game_logic.score, game_logic.last_collision_type, high_score


def main(argv=None):
    parser = argparse.ArgumentParser(description="Snake Game - versión consola (curses)")
    parser.add_argument("--width", type=int, default=GRID_WIDTH_SHELL,
                        help="Ancho del tablero en celdas (incluye las paredes).")
    parser.add_argument("--height", type=int, default=GRID_HEIGHT_SHELL,
                        help="Alto del tablero en celdas (incluye las paredes).")
    parser.add_argument("--speed", type=float, default=INITIAL_TICK_MS,
                        help="Milisegundos por paso al empezar la partida.")
    parser.add_argument("--highscore-file", default=HIGHSCORE_FILE_DEFAULT,
                        help="Fichero donde se guarda la puntuación máxima.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Semilla para la posición de la comida.")
    args = parser.parse_args(argv)

    if curses is None:
        print("El módulo 'curses' (o 'windows-curses' en Windows) no está disponible.")
        print("Intenta: pip install windows-curses (si estás en Windows)")
        return 1

    try:
        game_logic = SnakeLogic(args.width, args.height,
                                start_length=START_LENGTH_SHELL,
                                start_direction=Direction.RIGHT,
                                special_food_every=0,
                                initial_tick_ms=args.speed,
                                rng=random.Random(args.seed))
    except ValueError as e:
        print(f"Configuración no válida: {e}")
        return 1

    highscore_store = HighScoreStore(args.highscore_file)
    try:
        score, collision_type, high_score = curses.wrapper(
            game_loop_shell_curses, game_logic, highscore_store)
    except curses.error as e:
        print(f"Error de Curses: {e}")
        print("Asegúrate de que la terminal es compatible y tiene el tamaño adecuado.")
        return 1

    if collision_type in COLLISION_MESSAGES:
        print(COLLISION_MESSAGES[collision_type] + "\n")
    print(f"Your score is : {score}\n")
    print(f"High score : {high_score}\n")
    print("Game Over !!!\t Try Again.\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
