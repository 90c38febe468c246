import uuid
from unittest import mock

from mixinkit.utils import (
    Session,
    generate_session_checksum,
    is_encrypted_message_supported,
    random_pin,
    random_trace_id,
    unique_conversation_id,
)

USER_A = "4b188942-9fb0-4b99-b4be-e741a06d1ebf"
USER_B = "dd655520-c919-4349-822f-af92fabdbdf4"


def test_unique_conversation_id_is_symmetric():
    assert unique_conversation_id(USER_A, USER_B) == unique_conversation_id(USER_B, USER_A)


def test_unique_conversation_id_version_and_variant():
    parsed = uuid.UUID(unique_conversation_id(USER_A, USER_B))
    assert parsed.version == 3
    assert parsed.variant == uuid.RFC_4122


def test_unique_conversation_id_differs_per_pair():
    assert unique_conversation_id(USER_A, USER_B) != unique_conversation_id(USER_A, USER_A)


def test_random_pin_is_six_digits():
    for _ in range(50):
        pin = random_pin()
        assert len(pin) == 6
        assert pin.isdigit()
        assert int(pin) >= 100000


def test_random_pin_lifts_small_values():
    with mock.patch("mixinkit.utils.secrets.token_bytes", return_value=bytes(8)):
        assert random_pin() == "100000"


def test_random_trace_id_is_uuid4():
    trace = random_trace_id()
    assert uuid.UUID(trace).version == 4
    assert trace != random_trace_id()


def test_encrypted_message_support():
    with_key = Session(session_id="a", public_key="pk")
    without_key = Session(session_id="b")
    assert is_encrypted_message_supported([with_key])
    assert not is_encrypted_message_supported([with_key, without_key])
    assert is_encrypted_message_supported([])


def test_session_checksum_empty():
    assert generate_session_checksum([]) == ""


def test_session_checksum_order_independent():
    a = Session(session_id=USER_A)
    b = Session(session_id=USER_B)
    first = generate_session_checksum([a, b])
    assert first == generate_session_checksum([b, a])
    assert len(first) == 32
    assert first != generate_session_checksum([a])


def test_session_checksum_of_empty_ids_is_md5_of_nothing():
    checksum = generate_session_checksum([Session(), Session()])
    assert checksum == "d41d8cd98f00b204e9800998ecf8427e"