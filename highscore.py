# highscore.py

import os

HIGHSCORE_FILE_DEFAULT = "highscore.txt"


class HighScoreStore:
    """Fichero de texto plano con un único entero: la mejor puntuación."""

    def __init__(self, filepath=HIGHSCORE_FILE_DEFAULT):
        self.filepath = filepath

    def load(self):
        # Si no existe se crea con 0, igual que en la primera partida
        if not os.path.exists(self.filepath):
            self.save(0)
            return 0
        try:
            with open(self.filepath, 'r', encoding='utf-8') as f:
                value = int(f.read().strip() or 0)
        except (OSError, ValueError) as e:
            print(f"Advertencia: no se pudo leer la puntuación máxima de {self.filepath}: {e}")
            return 0
        if value < 0:
            print(f"Advertencia: puntuación máxima negativa en {self.filepath}, se usa 0.")
            return 0
        return value

    def save(self, value):
        try:
            with open(self.filepath, 'w', encoding='utf-8') as f:
                f.write(f"{int(value)}\n")
        except OSError as e:
            print(f"Advertencia: no se pudo guardar la puntuación máxima en {self.filepath}: {e}")
            return False
        return True

    def update(self, previous, score):
        """Guarda score si supera a previous. Devuelve la nueva máxima."""
        if score > previous:
            if self.save(score):
                print(f"Nueva puntuación máxima guardada: {score}")
            return score
        return previous
