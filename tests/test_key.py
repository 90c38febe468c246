import io

import pytest

from mixinkit.key import (
    Key,
    Signature,
    derive_ghost_private_key,
    derive_ghost_public_key,
    key_from_json,
    key_from_string,
    key_mult_pub_priv,
    new_key,
    new_key_from_seed,
    signature_from_string,
    view_ghost_output_key,
)


def _key(n):
    return new_key_from_seed(bytes([n]) * 64)


def test_public_of_one_is_base_point():
    one = Key((1).to_bytes(32, "little"))
    assert one.public().hex() == "58" + "66" * 31


def test_public_of_zero_is_identity():
    assert Key().public().hex() == "01" + "00" * 31


def test_new_key_from_reader_matches_seed():
    seed = bytes(range(64))
    assert new_key(io.BytesIO(seed)) == new_key_from_seed(seed)


def test_new_key_short_reader_raises():
    with pytest.raises(EOFError):
        new_key(io.BytesIO(b"\x01" * 10))


def test_new_key_default_is_scalar():
    assert new_key().check_scalar()


def test_new_key_from_seed_rejects_wrong_length():
    with pytest.raises(ValueError):
        new_key_from_seed(b"\x00" * 32)


def test_key_string_round_trip():
    key = _key(3)
    assert key_from_string(str(key)) == key
    assert key_from_json(key.to_json()) == key


def test_key_from_json_accepts_base64():
    import base64

    key = _key(4)
    assert key_from_json(base64.b64encode(key).decode()) == key


def test_key_from_string_errors():
    with pytest.raises(ValueError):
        key_from_string("abcd")
    with pytest.raises(ValueError):
        key_from_string("zz" * 32)
    with pytest.raises(ValueError):
        key_from_json("%%%")


def test_has_value():
    assert not Key().has_value()
    assert _key(1).has_value()


def test_check_scalar():
    assert _key(9).check_scalar()
    assert not Key(b"\xff" * 32).check_scalar()


def test_check_key():
    assert _key(5).public().check_key()
    assert not all(Key(bytes([i]) + bytes(31)).check_key() for i in range(16))


def test_deterministic_hash_derive():
    key = _key(6).public()
    derived = key.deterministic_hash_derive()
    assert derived == key.deterministic_hash_derive()
    assert derived.check_scalar()


def test_mult_scalar_depends_on_index():
    key = _key(7)
    assert key.mult_scalar(0) != key.mult_scalar(1)
    assert key.mult_scalar(200).check_scalar()
    assert key.hash_scalar().check_scalar()


def test_sign_and_verify():
    private = _key(8)
    public = private.public()
    message = b"hello mixin"
    signature = private.sign(message)
    assert public.verify(message, signature)
    assert not public.verify(b"other", signature)
    assert not _key(10).public().verify(message, signature)


def test_verify_rejects_unreduced_s():
    private = _key(11)
    signature = private.sign(b"msg")
    forged = Signature(signature[:32] + b"\xff" * 32)
    assert not private.public().verify(b"msg", forged)


def test_key_mult_pub_priv_commutes():
    a, b = _key(12), _key(13)
    assert key_mult_pub_priv(a.public(), b) == key_mult_pub_priv(b.public(), a)


def test_key_mult_pub_priv_rejects_bad_scalar():
    with pytest.raises(ValueError):
        key_mult_pub_priv(_key(1).public(), Key(b"\xff" * 32))


@pytest.mark.parametrize("index", [0, 1, 300])
def test_ghost_keys_are_consistent(index):
    r = _key(20)
    view = _key(21)
    spend = _key(22)
    view_pub, spend_pub = view.public(), spend.public()
    ghost_pub = derive_ghost_public_key(r, view_pub, spend_pub, index)
    ghost_priv = derive_ghost_private_key(r.public(), view, spend, index)
    assert ghost_priv.public() == ghost_pub
    assert view_ghost_output_key(ghost_pub, view, r.public(), index) == spend_pub


def test_signature_string_round_trip():
    signature = _key(30).sign(b"data")
    assert signature_from_string(str(signature)) == signature
    assert signature_from_string(signature.to_json()) == signature


def test_signature_length_checked():
    with pytest.raises(ValueError):
        signature_from_string("00" * 32)
    with pytest.raises(ValueError):
        Signature(b"\x00" * 10)