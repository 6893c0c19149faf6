# snake_session.py

# Máquina de estados de la versión con ventana: Menu -> Playing <-> Paused,
# Playing -> GameOver -> Menu. La UI solo traduce teclas a Command/Direction.

from collections import deque
from enum import Enum

from highscore import HighScoreStore
from snake_logic import Direction, SnakeLogic


class GameState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Command(Enum):
    CONFIRM = "confirm"   # Enter
    TOGGLE = "toggle"     # Espacio
    RESUME = "resume"     # R
    QUIT = "quit"         # Q / Escape


# Destino None = cerrar el juego
TRANSITIONS = {
    (GameState.MENU, Command.CONFIRM): GameState.PLAYING,
    (GameState.MENU, Command.TOGGLE): GameState.PLAYING,
    (GameState.MENU, Command.QUIT): None,
    (GameState.PLAYING, Command.TOGGLE): GameState.PAUSED,
    (GameState.PAUSED, Command.TOGGLE): GameState.PLAYING,
    (GameState.PAUSED, Command.RESUME): GameState.PLAYING,
    (GameState.PAUSED, Command.QUIT): GameState.MENU,
    (GameState.GAME_OVER, Command.CONFIRM): GameState.MENU,
    (GameState.GAME_OVER, Command.TOGGLE): GameState.MENU,
}


class SnakeSession:
    def __init__(self, game_logic=None, highscore_store=None):
        self.game_logic = game_logic if game_logic is not None else SnakeLogic()
        self.highscore_store = highscore_store if highscore_store is not None else HighScoreStore()
        self.high_score = self.highscore_store.load()

        self.state = GameState.MENU
        self.running = True
        self.elapsed_ms = 0.0
        self.events = deque()  # Eventos de entrada pendientes (Command o Direction)

    def push_input(self, event):
        self.events.append(event)

    def process_inputs(self):
        while self.events:
            event = self.events.popleft()
            if isinstance(event, Direction):
                # Los giros solo cuentan mientras se juega
                if self.state == GameState.PLAYING:
                    self.game_logic.request_direction(event)
            else:
                self.handle_command(event)
            if not self.running:
                self.events.clear()

    def handle_command(self, command):
        key = (self.state, command)
        if key not in TRANSITIONS:
            return self.state
        target = TRANSITIONS[key]
        if target is None:
            self.running = False
            return self.state

        if self.state == GameState.MENU and target == GameState.PLAYING:
            self.start_game()
        self.state = target
        return self.state

    def start_game(self):
        self.game_logic.reset()
        self.elapsed_ms = 0.0
        print(f"Nueva partida. Puntuación máxima actual: {self.high_score}")

    def update(self, elapsed_ms):
        """Procesa la entrada y avanza como mucho un paso de simulación.

        Devuelve el info de SnakeLogic.step() si se avanzó, o None.
        """
        self.process_inputs()
        if self.state != GameState.PLAYING:
            return None

        self.elapsed_ms += elapsed_ms
        if self.elapsed_ms < self.game_logic.tick_interval:
            return None
        self.elapsed_ms = 0.0

        info = self.game_logic.step()
        if self.game_logic.game_over:
            self._game_over(info['collision_type'])
        return info

    def _game_over(self, collision_type):
        score = self.game_logic.score
        print(f"Game over ({collision_type}). Puntuación: {score}")
        self.high_score = self.highscore_store.update(self.high_score, score)
        self.state = GameState.GAME_OVER

    def get_snapshot(self):
        return self.game_logic.get_snapshot(high_score=self.high_score, state=self.state)
