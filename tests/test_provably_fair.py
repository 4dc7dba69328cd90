from provably_fair import (
    derive_float_0_1,
    generate_server_seed,
    hash_server_seed,
    pick_index,
    verify_server_seed,
)


def test_generated_seed_matches_published_hash():
    seed, seed_hash = generate_server_seed()
    assert len(seed) == 64
    assert seed_hash == hash_server_seed(seed)
    assert verify_server_seed(seed, seed_hash)
    assert not verify_server_seed(seed + "x", seed_hash)


def test_derived_float_is_stable_and_in_range():
    kw = dict(server_seed="s", client_seed="c", nonce=1, cursor=0)
    value = derive_float_0_1(**kw)
    assert 0.0 <= value < 1.0
    assert value == derive_float_0_1(**kw)
    assert value != derive_float_0_1(server_seed="s", client_seed="c", nonce=1, cursor=1)


def test_pick_index_bounds():
    for cursor in range(200):
        idx = pick_index(100, server_seed="s", client_seed="c", nonce=0, cursor=cursor)
        assert 0 <= idx < 100
