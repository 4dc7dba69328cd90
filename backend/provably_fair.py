import hashlib
import hmac
import secrets
from math import floor


def hash_server_seed(seed: str) -> str:
    return hashlib.sha256(seed.encode()).hexdigest()


# Gera seed do servidor e o hash publicado antes das jogadas
def generate_server_seed():
    seed = secrets.token_hex(32)
    return seed, hash_server_seed(seed)


def verify_server_seed(seed: str, seed_hash: str) -> bool:
    # confere a seed revelada contra o hash mostrado ao jogador
    return hmac.compare_digest(hash_server_seed(seed), seed_hash)


def derive_float_0_1(server_seed: str, client_seed: str, nonce: int, cursor: int) -> float:
    # HMAC(server_seed, f"{client_seed}:{nonce}:{cursor}") -> número em [0,1)
    msg = f"{client_seed}:{nonce}:{cursor}".encode()
    digest = hmac.new(server_seed.encode(), msg, hashlib.sha256).digest()
    val = int.from_bytes(digest[:8], 'big')
    return val / (1 << 64)


def pick_index(n: int, **kw) -> int:
    return floor(derive_float_0_1(**kw) * n)
