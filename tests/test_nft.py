import uuid

import pytest

from mixinkit.nft import (
    DEFAULT_CHAIN,
    DEFAULT_CLASS,
    NIL_UUID,
    NFOMemo,
    build_mint_nfo,
    decode_nfo_memo,
)

COLLECTION = "d33ec557-b14c-403f-9f7a-08ed0f5866d4"
CONTENT_HASH = bytes(range(32))


def test_build_and_decode_round_trip():
    raw = build_mint_nfo(COLLECTION, b"\x01\x02", CONTENT_HASH)
    memo = decode_nfo_memo(raw)
    assert memo.mask == 1
    assert memo.chain == DEFAULT_CHAIN
    assert memo.class_ == DEFAULT_CLASS
    assert memo.collection == uuid.UUID(COLLECTION)
    assert memo.token == b"\x01\x02"
    assert memo.extra == CONTENT_HASH
    assert memo.will_mint()
    assert memo.indexes() == [0]


def test_build_starts_with_prefix_version_and_hint():
    raw = build_mint_nfo(COLLECTION, b"\x07", CONTENT_HASH)
    assert raw[:5] == b"NFO\x00\x01"


def test_build_with_invalid_collection_uses_nil():
    raw = build_mint_nfo("not-a-uuid", b"\x05", CONTENT_HASH)
    assert decode_nfo_memo(raw).collection == NIL_UUID


def test_build_rejects_wrong_hash_size():
    with pytest.raises(ValueError):
        build_mint_nfo(COLLECTION, b"\x01", b"short")


def test_mark_toggles_bits():
    memo = NFOMemo()
    memo.mark([3, 5])
    assert memo.indexes() == [3, 5]
    memo.mark([3])
    assert memo.indexes() == [5]
    assert memo.will_mint()


@pytest.mark.parametrize("index", [64, -1])
def test_mark_rejects_invalid_index(index):
    with pytest.raises(ValueError):
        NFOMemo().mark([index])


def test_encode_without_mint():
    raw = NFOMemo(extra=b"ab").encode()
    assert raw == b"NFO\x00\x00\x02ab"
    memo = decode_nfo_memo(raw)
    assert not memo.will_mint()
    assert memo.extra == b"ab"


@pytest.mark.parametrize(
    "raw", [b"NF", b"XYZ\x00\x00\x00", b"NFO\x01\x00\x00", b"NFO\x00"]
)
def test_decode_rejects_bad_header(raw):
    with pytest.raises(ValueError):
        decode_nfo_memo(raw)


def _mint_memo(**changes):
    values = dict(
        mask=1,
        chain=DEFAULT_CHAIN,
        class_=DEFAULT_CLASS,
        collection=uuid.UUID(COLLECTION),
        token=b"\x01",
        extra=CONTENT_HASH,
    )
    values.update(changes)
    return NFOMemo(**values)


def test_decode_rejects_other_mask():
    with pytest.raises(ValueError, match="invalid mask"):
        decode_nfo_memo(_mint_memo(mask=2).encode())


def test_decode_rejects_other_chain():
    raw = _mint_memo(chain=uuid.uuid4()).encode()
    with pytest.raises(ValueError, match="invalid chain"):
        decode_nfo_memo(raw)


def test_decode_rejects_other_class():
    raw = _mint_memo(class_=b"\x01\x02").encode()
    with pytest.raises(ValueError, match="invalid class"):
        decode_nfo_memo(raw)


def test_decode_rejects_truncated():
    raw = build_mint_nfo(COLLECTION, b"\x01", CONTENT_HASH)
    with pytest.raises(ValueError):
        decode_nfo_memo(raw[:-5])


@pytest.mark.parametrize("token", [b"\x00\x01", b""])
def test_encode_rejects_unstripped_token(token):
    with pytest.raises(ValueError):
        _mint_memo(token=token).encode()


def test_encode_rejects_long_slice():
    with pytest.raises(ValueError):
        NFOMemo(extra=bytes(128)).encode()