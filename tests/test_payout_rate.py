from itertools import product

import numpy as np
import pytest

from game_logic import SYMBOLS, score
from payout_rate import (
    SYMBOL_PROBABILITY,
    all_combinations,
    combination_table,
    expected_payout_rate,
    simulate_payout_rate,
)


def test_combination_table_covers_all_outcomes():
    table = combination_table()
    assert len(table) == len(all_combinations()) == 343
    assert sum(row['probability'] for row in table) == pytest.approx(1.0)
    assert table[0] == {'symbols': ['DD', 'DD', 'DD'], 'probability': pytest.approx(0.03 ** 3), 'prize': 800}


def test_expected_payout_rate_matches_scalar_enumeration():
    manual = 0.0
    for combo in product(SYMBOLS, repeat=3):
        p = 1.0
        for s in combo:
            p *= SYMBOL_PROBABILITY[s]
        manual += p * score(combo)
    rate = expected_payout_rate()
    assert rate == pytest.approx(manual)
    assert 0.5 < rate < 1.0


def test_simulated_rate_close_to_expected():
    rate = simulate_payout_rate(200000, rng=np.random.default_rng(2024))
    assert rate == pytest.approx(expected_payout_rate(), abs=0.1)


@pytest.mark.parametrize("n", [0, -5])
def test_simulate_requires_positive_plays(n):
    with pytest.raises(ValueError):
        simulate_payout_rate(n)
