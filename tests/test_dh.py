import pytest


def test_xor_cipher_round_trip_keeps_trailing_nul_bytes():
    from bigint.hex_int import HexBigInt
    from dh.dh_hex_demo import xor_decrypt, xor_encrypt

    secret = HexBigInt("1f2e3d4c5b6a7988")
    message = b"attack at dawn\x00\x00"
    ciphertext = xor_encrypt(message, secret)
    assert ciphertext.message_len == len(message)
    assert all(len(chunk) == 16 for chunk in ciphertext.chunks)
    assert "".join(ciphertext.chunks) != message.hex()
    assert xor_decrypt(ciphertext, secret) == message


def test_xor_cipher_accepts_text():
    from bigint.hex_int import HexBigInt
    from dh.dh_hex_demo import xor_decrypt, xor_encrypt

    secret = HexBigInt("abc")
    assert xor_decrypt(xor_encrypt("héllo", secret), secret).decode("utf-8") == "héllo"


def test_public_component_validation():
    from bigint.errors import InvalidInput
    from bigint.hex_int import HexBigInt
    from dh.dh_hex_demo import validate_public_component

    p = HexBigInt("61")
    validate_public_component(HexBigInt("2"), p)
    for bad in ("1", "60", "61", "0", "-5"):
        with pytest.raises(InvalidInput):
            validate_public_component(HexBigInt(bad), p)


def test_private_key_lies_in_two_to_p_minus_two(rng):
    from bigint.hex_int import HexBigInt
    from dh.dh_hex_demo import generate_private_key

    for modulus in ("5", "11", "fffffffb"):
        p = HexBigInt(modulus)
        for _ in range(20):
            key = generate_private_key(p, rng=rng)
            assert HexBigInt("2") <= key <= p - HexBigInt("2")


def test_private_key_needs_room_below_modulus(rng):
    from bigint.errors import InvalidInput
    from bigint.hex_int import HexBigInt
    from dh.dh_hex_demo import generate_private_key

    with pytest.raises(InvalidInput):
        generate_private_key(HexBigInt("3"), rng=rng)


def test_key_pair_public_key_is_accepted_by_peer(rng, engine):
    from bigint.hex_int import HexBigInt
    from dh.dh_hex_demo import generate_key_pair, validate_public_component

    p = HexBigInt("11")
    for _ in range(30):
        private_key, public_key = generate_key_pair(p, rng=rng, multiplier=engine)
        validate_public_component(public_key, p)
        assert HexBigInt("2") <= private_key <= HexBigInt("f")


def test_key_pair_gives_up_when_generator_is_degenerate(rng):
    from bigint.errors import InvalidInput
    from bigint.hex_int import HexBigInt
    from dh.dh_hex_demo import generate_key_pair

    # 7 is 0 modulo 7, so every public key is 0.
    with pytest.raises(InvalidInput, match="no usable public key"):
        generate_key_pair(HexBigInt("7"), rng=rng)


def test_dh_demo_agrees_and_recovers_message(rng, engine):
    from dh.dh_hex_demo import dh_demo

    values = dh_demo("Hello from the hex engine", prime_digits=8, rng=rng, multiplier=engine)
    assert values["shared_match"]
    assert values["ok"]
    assert values["recovered"] == "Hello from the hex engine"
    assert values["A"] < values["p"] and values["B"] < values["p"]


def test_dh_demo_needs_a_two_digit_prime():
    from bigint.errors import InvalidInput
    from dh.dh_hex_demo import dh_demo

    with pytest.raises(InvalidInput):
        dh_demo(prime_digits=1)


@pytest.mark.parametrize("seed", range(60))
def test_dh_demo_with_two_digit_primes(seed, engine):
    import random

    from dh.dh_hex_demo import dh_demo

    values = dh_demo("hi", prime_digits=2, iterations=5, rng=random.Random(seed), multiplier=engine)
    assert values["p"].length == 2
    assert values["shared_match"]
    assert values["ok"]
