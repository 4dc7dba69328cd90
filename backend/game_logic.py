from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from provably_fair import pick_index

# Símbolos dos três rolos (DD = double diamond, coringa)
WILD = "DD"
CHERRY = "C"
SYMBOLS = ("DD", "7", "BBB", "BB", "B", "C", "0")
BARS = ("B", "BB", "BBB")
SYMBOL_INDEX = {s: i for i, s in enumerate(SYMBOLS)}

# pesos em 100 sorteios; iguais para os três rolos
REEL_WEIGHTS = [3, 3, 6, 10, 25, 1, 52]
PROBABILITIES = [w / sum(REEL_WEIGHTS) for w in REEL_WEIGHTS]

# Prêmio de três iguais (em dólares, aposta de $1)
PAYTABLE = {
    "DD": 100,
    "7": 80,
    "BBB": 40,
    "BB": 25,
    "B": 10,
    "C": 10,
    "0": 0,
}

# prêmio por quantidade de cerejas (coringas contam como cereja)
CHERRY_PRIZES = [0, 2, 5]
ALL_BARS_PRIZE = 5

_WILD_CODE = SYMBOL_INDEX[WILD]
_CHERRY_CODE = SYMBOL_INDEX[CHERRY]
_BAR_CODES = np.array([SYMBOL_INDEX[b] for b in BARS])
# alfabeto ordenado para busca vetorizada com searchsorted
_SORTED_CODES = np.argsort(np.array(SYMBOLS)).astype(np.intp)
_SORTED_SYMBOLS = np.array(SYMBOLS)[_SORTED_CODES]
_PAYOUTS = np.array([PAYTABLE[s] for s in SYMBOLS], dtype=np.int64)
# índice 3 nunca sobrevive às regras seguintes
_CHERRY_PRIZES = np.array(CHERRY_PRIZES + [0], dtype=np.int64)


class SlotError(ValueError):
    pass


class InvalidSymbol(SlotError):
    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"invalid symbol: {symbol!r} (expected one of {', '.join(SYMBOLS)})")


class InvalidCombination(SlotError):
    def __init__(self, value, reason="a combination must have exactly 3 symbols"):
        self.value = value
        super().__init__(reason)


@dataclass
class PlayResult:
    symbols: List[str]
    prize: int

    @property
    def display(self) -> str:
        return format_play(self.symbols, self.prize)


def symbol_code(symbol) -> int:
    if not isinstance(symbol, str) or symbol not in SYMBOL_INDEX:
        raise InvalidSymbol(symbol)
    return SYMBOL_INDEX[symbol]


def validate_combination(symbols: Sequence[str]) -> List[str]:
    if isinstance(symbols, str) or not hasattr(symbols, '__len__'):
        raise InvalidCombination(symbols)
    symbols = list(symbols)
    if len(symbols) != 3:
        raise InvalidCombination(symbols)
    for s in symbols:
        symbol_code(s)
    return [str(s) for s in symbols]


def score(symbols: Sequence[str]) -> int:
    """Prêmio de uma combinação de três símbolos.

    As regras são aplicadas em ordem e as posteriores sobrescrevem as
    anteriores: cerejas, três iguais, só barras, dois coringas, um coringa.
    Cada coringa dobra o prêmio final.
    """
    symbols = validate_combination(symbols)
    wilds = symbols.count(WILD)
    cherries = symbols.count(CHERRY)

    prize = CHERRY_PRIZES[cherries + wilds] if cherries and cherries + wilds < 3 else 0

    if symbols[0] == symbols[1] == symbols[2]:
        prize = PAYTABLE[symbols[0]]
    elif all(s in BARS for s in symbols):
        prize = ALL_BARS_PRIZE

    others = [s for s in symbols if s != WILD]
    if wilds == 2:
        prize = PAYTABLE[others[0]]
    elif wilds == 1:
        if all(s in BARS for s in others):
            prize = ALL_BARS_PRIZE
        if others[0] == others[1]:
            prize = PAYTABLE[others[0]]

    return prize * 2 ** wilds


def _symbol_matrix(combinations) -> np.ndarray:
    # matriz (n, 3) de str; linhas vazias ou irregulares são rejeitadas
    if isinstance(combinations, np.ndarray) and combinations.dtype.kind == 'U':
        arr = combinations
    else:
        try:
            arr = np.asarray(combinations, dtype=object)
        except ValueError:
            raise InvalidCombination(combinations)
    if arr.ndim == 1 and arr.size == 0:
        return np.empty((0, 3), dtype=str)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise InvalidCombination(combinations)
    if arr.dtype == object:
        is_str = np.frompyfunc(lambda s: isinstance(s, str), 1, 1)(arr).astype(bool)
        if not is_str.all():
            raise InvalidSymbol(arr[~is_str][0])
        arr = arr.astype(str)
    return arr


def encode_many(combinations) -> np.ndarray:
    """Converte combinações em códigos inteiros, matriz (n, 3)."""
    arr = _symbol_matrix(combinations)
    if len(arr) == 0:
        return np.empty((0, 3), dtype=np.intp)

    pos = np.searchsorted(_SORTED_SYMBOLS, arr)
    pos = np.minimum(pos, len(_SORTED_SYMBOLS) - 1)
    valid = _SORTED_SYMBOLS[pos] == arr
    if not valid.all():
        raise InvalidSymbol(str(arr[~valid][0]))
    return _SORTED_CODES[pos]


def score_many(combinations) -> np.ndarray:
    """Versão vetorizada de score: um prêmio por linha, na mesma ordem."""
    codes = encode_many(combinations)
    if len(codes) == 0:
        return np.zeros(0, dtype=np.int64)

    wild = codes == _WILD_CODE
    wilds = wild.sum(axis=1)
    cherries = (codes == _CHERRY_CODE).sum(axis=1)

    prize = _CHERRY_PRIZES[cherries + wilds]
    prize[cherries == 0] = 0

    payouts = _PAYOUTS[codes]
    same = (codes[:, 0] == codes[:, 1]) & (codes[:, 1] == codes[:, 2])
    prize[same] = payouts[same, 0]

    bars = np.isin(codes, _BAR_CODES)
    prize[bars.all(axis=1) & ~same] = ALL_BARS_PRIZE

    # com 1 ou 2 coringas, o prêmio vem do símbolo que não é coringa
    other_payout = np.where(wild, 0, payouts).max(axis=1)

    two_wilds = wilds == 2
    prize[two_wilds] = other_payout[two_wilds]

    one_wild = wilds == 1
    prize[one_wild & ((bars & ~wild).sum(axis=1) == 2)] = ALL_BARS_PRIZE
    pair = (
        (codes[:, 0] == codes[:, 1])
        | (codes[:, 1] == codes[:, 2])
        | (codes[:, 0] == codes[:, 2])
    )
    matched = one_wild & pair
    prize[matched] = other_payout[matched]

    return prize * 2 ** wilds


def format_play(symbols: Sequence[str], prize) -> str:
    return f"{' '.join(symbols)}\n${prize}"


def _weighted_choice(symbols, weights, pick):
    # pick in [0, sum(weights))
    acc = 0
    for i, w in enumerate(weights):
        acc += w
        if pick < acc:
            return symbols[i]
    return symbols[-1]


def get_symbols(rng: Optional[np.random.Generator] = None) -> List[str]:
    rng = rng if rng is not None else np.random.default_rng()
    return rng.choice(SYMBOLS, size=3, replace=True, p=PROBABILITIES).tolist()


def get_many_symbols(n: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    if n < 0:
        raise ValueError("n must be >= 0")
    rng = rng if rng is not None else np.random.default_rng()
    return rng.choice(SYMBOLS, size=(n, 3), replace=True, p=PROBABILITIES)


def spin_symbols(server_seed, client_seed, nonce) -> List[str]:
    # sorteio determinístico via provably fair, um cursor por rolo
    total = sum(REEL_WEIGHTS)
    symbols = []
    for cursor in range(3):
        idx = pick_index(total, server_seed=server_seed, client_seed=client_seed, nonce=nonce, cursor=cursor)
        symbols.append(_weighted_choice(SYMBOLS, REEL_WEIGHTS, idx))
    return symbols


def play(server_seed, client_seed, nonce) -> PlayResult:
    symbols = spin_symbols(server_seed, client_seed, nonce)
    return PlayResult(symbols=symbols, prize=score(symbols))
