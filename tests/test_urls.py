import uuid
from decimal import Decimal

from mixinkit.inputs import TransferInput
from mixinkit.urls import codes, pay, snapshots, transfer, users


def test_transfer():
    user_id = str(uuid.uuid4())
    assert transfer(user_id) == "mixin://transfer/" + user_id


def test_users_and_codes():
    assert users("abc") == "mixin://users/abc"
    assert codes("xyz") == "mixin://codes/xyz"


def test_pay_query_is_sorted_and_escaped():
    link = pay(
        TransferInput(
            asset_id="a",
            opponent_id="r",
            amount=Decimal(1),
            trace_id="t",
            memo="hello world",
        )
    )
    assert link == "mixin://pay?amount=1&asset=a&memo=hello+world&recipient=r&trace=t"


def test_snapshots_variants():
    assert snapshots("sid", "") == "mixin://snapshots/sid"
    assert snapshots("", "tid") == "mixin://snapshots?trace=tid"
    assert snapshots("sid", "tid") == "mixin://snapshots/sid?trace=tid"
    assert snapshots("", "") == "mixin://snapshots"