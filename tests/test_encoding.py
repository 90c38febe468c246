import pytest

from mixinkit.crypto import new_hash, new_threshold_script
from mixinkit.encoding import (
    AGGREGATED_SIGNATURE_ORDINARY_MASK,
    AGGREGATED_SIGNATURE_PREFIX,
    AGGREGATED_SIGNATURE_SPARSE_MASK,
    MAGIC,
    MAXIMUM_ENCODING_INT,
    NULL,
    Encoder,
    encode_transaction,
)
from mixinkit.key import Signature
from mixinkit.models import (
    TX_VERSION,
    AggregatedSignature,
    Input,
    Output,
    Transaction,
)
from mixinkit.number import new_integer


def _tx(**kwargs):
    return Transaction(
        asset=new_hash(b"asset"),
        inputs=[Input(hash=new_hash(b"prev"), index=1)],
        outputs=[Output(amount=new_integer(1), script=new_threshold_script(1))],
        **kwargs,
    )


def test_header():
    data = encode_transaction(_tx())
    assert data[:4] == MAGIC + bytes([0, TX_VERSION])
    assert data[4:36] == new_hash(b"asset")


def test_wrong_version_rejected():
    with pytest.raises(ValueError):
        encode_transaction(_tx(version=1))


def test_write_int_limits():
    enc = Encoder()
    enc.write_int(MAXIMUM_ENCODING_INT)
    assert enc.getvalue() == b"\xff\xff"
    with pytest.raises(ValueError):
        enc.write_int(MAXIMUM_ENCODING_INT + 1)
    with pytest.raises(ValueError):
        enc.write_uint16(-1)


def test_write_uint64_big_endian():
    enc = Encoder()
    enc.write_uint64(1)
    assert enc.getvalue() == bytes(7) + b"\x01"
    with pytest.raises(ValueError):
        enc.write_uint64(1 << 64)


def test_write_integer_length_prefixed():
    enc = Encoder()
    amount = new_integer(1)
    enc.write_integer(amount)
    raw = amount.to_bytes()
    assert enc.getvalue() == len(raw).to_bytes(2, "big") + raw


def test_signatures_sorted_by_index():
    a, b = Signature(b"\x01" * 64), Signature(b"\x02" * 64)
    first, second = Encoder(), Encoder()
    first.encode_signatures({2: a, 0: b})
    second.encode_signatures({0: b, 2: a})
    assert first.getvalue() == second.getvalue()
    assert first.getvalue()[2:4] == b"\x00\x00"
    assert first.getvalue()[4:68] == b


def test_unsigned_transaction_ends_with_zero_count():
    assert encode_transaction(_tx()).endswith(b"\x00\x00")


def test_input_without_deposit_or_mint_writes_null_markers():
    enc = Encoder()
    enc.encode_input(Input(hash=new_hash(b"x"), index=0))
    assert enc.getvalue()[-4:] == NULL + NULL


def test_input_without_hash_rejected():
    with pytest.raises(ValueError):
        Encoder().encode_input(Input())


def test_too_many_signature_groups():
    tx = _tx(signatures=[{}] * MAXIMUM_ENCODING_INT)
    with pytest.raises(ValueError):
        encode_transaction(tx)


def _aggregated(signers):
    enc = Encoder()
    enc.encode_aggregated_signature(AggregatedSignature(signers=signers))
    return enc.getvalue()


def test_aggregated_prefix_and_empty_signers():
    data = _aggregated([])
    assert data[:2] == MAXIMUM_ENCODING_INT.to_bytes(2, "big")
    assert data[2:4] == AGGREGATED_SIGNATURE_PREFIX.to_bytes(2, "big")
    assert data[68:] == bytes([AGGREGATED_SIGNATURE_ORDINARY_MASK]) + b"\x00\x00"


def test_aggregated_ordinary_mask():
    data = _aggregated([0, 1, 2])
    assert data[68] == AGGREGATED_SIGNATURE_ORDINARY_MASK
    assert data[69:71] == b"\x00\x01"
    assert data[71:] == b"\x07"


def test_aggregated_sparse_mask():
    data = _aggregated([100])
    assert data[68] == AGGREGATED_SIGNATURE_SPARSE_MASK
    assert data[69:] == b"\x00\x01" + (100).to_bytes(2, "big")


def test_aggregated_unsorted_signers_rejected():
    with pytest.raises(ValueError):
        _aggregated([3, 1])
    with pytest.raises(ValueError):
        _aggregated([1, 1])