import logging
from itertools import product
from typing import Dict, List, Optional

import numpy as np

from game_logic import PROBABILITIES, SYMBOLS, get_many_symbols, score_many

logger = logging.getLogger(__name__)

SYMBOL_PROBABILITY = dict(zip(SYMBOLS, PROBABILITIES))


def all_combinations() -> List[tuple]:
    # 7^3 = 343 combinações, rolos independentes
    return list(product(SYMBOLS, repeat=3))


def combination_table() -> List[Dict]:
    combos = all_combinations()
    prizes = score_many(combos)
    table = []
    for combo, prize in zip(combos, prizes):
        probability = 1.0
        for s in combo:
            probability *= SYMBOL_PROBABILITY[s]
        table.append({'symbols': list(combo), 'probability': probability, 'prize': int(prize)})
    return table


def expected_payout_rate() -> float:
    """Prêmio esperado por jogada de $1, somando todas as combinações."""
    table = combination_table()
    return float(sum(row['probability'] * row['prize'] for row in table))


def simulate_payout_rate(n: int, rng: Optional[np.random.Generator] = None) -> float:
    if n <= 0:
        raise ValueError("number of plays must be positive")
    symbols = get_many_symbols(n, rng=rng)
    rate = float(score_many(symbols).mean())
    logger.info("Simulated %d plays, payout rate %.4f", n, rate)
    return rate
