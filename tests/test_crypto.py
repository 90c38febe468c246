import pytest

from mixinkit.crypto import (
    Hash,
    Script,
    TransactionExtra,
    extra_from_json,
    hash_from_string,
    new_hash,
    new_threshold_script,
    script_from_json,
)


def test_new_hash_is_sha3_256():
    assert new_hash(b"").hex() == (
        "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a"
    )


def test_hash_string_round_trip():
    h = new_hash(b"mixin")
    assert hash_from_string(str(h)) == h
    assert hash_from_string(h.to_json()) == h


def test_hash_from_string_rejects_wrong_length():
    with pytest.raises(ValueError):
        hash_from_string("abcd")


def test_hash_from_string_rejects_bad_hex():
    with pytest.raises(ValueError):
        hash_from_string("zz" * 32)


def test_hash_constructor_rejects_wrong_length():
    with pytest.raises(ValueError):
        Hash(b"\x01" * 31)


def test_hash_has_value():
    assert not Hash().has_value()
    assert new_hash(b"x").has_value()


def test_threshold_script_bytes():
    assert str(new_threshold_script(2)) == "fffe02"


def test_script_validate():
    script = new_threshold_script(2)
    assert script.validate(2) is None
    with pytest.raises(ValueError):
        script.validate(1)


def test_script_verify_format_rejects_bad_scripts():
    with pytest.raises(ValueError):
        Script(b"\xff\xfe").verify_format()
    with pytest.raises(ValueError):
        Script(b"\x00\xfe\x01").verify_format()


def test_script_json_round_trip():
    script = new_threshold_script(5)
    assert script_from_json(script.to_json()) == script


def test_script_from_json_rejects_bad_hex():
    with pytest.raises(ValueError):
        script_from_json("xyz")


def test_extra_from_json_accepts_hex_and_base64():
    assert extra_from_json("68656c6c6f") == b"hello"
    assert extra_from_json("aGVsbG8=") == b"hello"


def test_extra_json_round_trip():
    extra = TransactionExtra(b"hello")
    assert extra_from_json(extra.to_json()) == b"hello"


def test_extra_from_json_rejects_garbage():
    with pytest.raises(ValueError):
        extra_from_json("!!!")