import os
from pathlib import Path
from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]

# .env só preenche o que não veio do ambiente
load_dotenv(ROOT / ".env", override=False)

DATABASE_URL = os.getenv("SLOTS_DATABASE_URL", "sqlite:///database.db")
PLAY_COST = int(os.getenv("SLOTS_PLAY_COST", "1"))
STARTING_BALANCE = float(os.getenv("SLOTS_STARTING_BALANCE", "1000"))
MAX_SIMULATED_PLAYS = int(os.getenv("SLOTS_MAX_SIMULATED_PLAYS", "1000000"))
LOG_LEVEL = os.getenv("SLOTS_LOG_LEVEL", "INFO")
DEFAULT_USERNAME = os.getenv("SLOTS_DEFAULT_USERNAME", "player1")
