# mixinkit

A pure Python toolkit for working with the Mixin Network: Ed25519-style keys
and ghost outputs, the binary transaction format, main-net addresses, NFO
mint memos, and the small helpers an API client needs (request signing, PIN
checks, `mixin://` links, snapshot query parameters, parsing of API
responses into dataclasses).

The only runtime dependency is `msgpack`, used for version 0 and 1
transactions.

## Installation

```
pip install mixinkit
```

To run the test suite:

```
pip install "mixinkit[test]"
pytest
```

## Modules

| Module                 | Contents                                                              |
|------------------------|-----------------------------------------------------------------------|
| `mixinkit.crypto`      | `Hash`, `Script`, `TransactionExtra`, `new_hash` (SHA3-256), `new_threshold_script` |
| `mixinkit.number`      | `Integer`, a fixed-point amount with 8 decimal places                 |
| `mixinkit.key`         | `Key`, `Signature`, signing and verification, ghost key derivation    |
| `mixinkit.models`      | `Transaction`, `Input`, `Output`, `DepositData`, `MintData`, `WithdrawalData`, `AggregatedSignature` |
| `mixinkit.encoding`    | `Encoder` and `encode_transaction` for the version 2 binary format    |
| `mixinkit.decoding`    | `Decoder`, `decode_transaction`, `DecodeError`                        |
| `mixinkit.transaction` | raw transaction dumps, parsing and hashes; `TransactionInput`, `GhostKeys`, `GhostInput` |
| `mixinkit.multisigs`   | `MultisigUTXO`, `MultisigRequest`, `hash_members`                     |
| `mixinkit.address`     | `MixinnetAddress`, `base58_encode`, `base58_decode`                   |
| `mixinkit.nft`         | `NFOMemo`, `build_mint_nfo`, `decode_nfo_memo`                        |
| `mixinkit.inputs`      | `TransferInput`, `WithdrawInput`, `Payment`                           |
| `mixinkit.urls`        | `users`, `transfer`, `pay`, `codes`, `snapshots`                      |
| `mixinkit.signing`     | `sign_raw`, `sign_request`, `trim_url_host`                           |
| `mixinkit.pin`         | `validate_pin_pattern`, `InvalidPinError`                             |
| `mixinkit.utils`       | `unique_conversation_id`, `random_pin`, `random_trace_id`, `Session` checks |
| `mixinkit.snapshot`    | `Snapshot`, `snapshot_from_dict`, `build_read_snapshots_params`       |
| `mixinkit.info`        | consensus, network and ticker records with `*_from_dict` builders     |

Errors are raised as `ValueError` (or a subclass such as `DecodeError` and
`InvalidPinError`).

## Examples

### Keys and signatures

```python
import os

from mixinkit.key import new_key_from_seed

private = new_key_from_seed(os.urandom(64))
public = private.public()

signature = private.sign(b"hello")
assert public.verify(b"hello", signature)
```

`new_key()` reads 64 bytes from a file-like object, or from system
randomness when none is given.

### Addresses

```python
from mixinkit.address import mixinnet_address_from_string, new_mixinnet_address

address = new_mixinnet_address()
text = str(address)                      # starts with "XIN"
parsed = mixinnet_address_from_string(text)
assert parsed.public_spend_key == address.public_spend_key
```

`MixinnetAddress.create_utxo(output_index, amount)` builds a single-key
output paying to the address.

### Transactions

```python
from mixinkit.transaction import dump_transaction, transaction_from_raw, transaction_hash

tx = transaction_from_raw(raw_hex)       # version 0/1 (msgpack) or version 2
print(transaction_hash(tx))              # SHA3-256 of the unsigned payload
print(dump_transaction(tx))              # hex of the serialized transaction
```

`encode_transaction` and `decode_transaction` work directly on the version 2
binary form; `Transaction.to_json()` gives a JSON-ready dictionary.

### Multisig spends

```python
from mixinkit.transaction import TransactionInput

spend = TransactionInput(memo="memo")
spend.append_utxo(utxo)                  # a MultisigUTXO
spend.append_output(["receiver-id"], 1, "0.5")
spend.validate()                         # raises ValueError if inconsistent
```

`hash_members(ids)` returns the hex hash of the sorted, concatenated member
ids; the order of the input does not matter.

### NFO memos

```python
from mixinkit.nft import build_mint_nfo, decode_nfo_memo

memo = build_mint_nfo("00000000-0000-4000-8000-000000000001", b"\x01", bytes(32))
assert decode_nfo_memo(memo).token == b"\x01"
```

### PINs

```python
from mixinkit.pin import InvalidPinError, validate_pin_pattern

validate_pin_pattern("123456")
try:
    validate_pin_pattern("123")
except InvalidPinError as err:
    print(err)
```

### URL schemes

```python
from mixinkit import urls

urls.transfer("00000000-0000-4000-8000-000000000000")
# 'mixin://transfer/00000000-0000-4000-8000-000000000000'
```

### Request signing

```python
from mixinkit.signing import sign_raw, trim_url_host

trim_url_host("https://api.example.com/assets")   # '/assets'
digest = sign_raw("GET", "/assets", b"")           # hex SHA-256
```

### Conversations and trace ids

```python
from mixinkit.utils import random_pin, random_trace_id, unique_conversation_id

conversation_id = unique_conversation_id(user_a, user_b)  # same for (b, a)
pin = random_pin()                                        # six digits
trace_id = random_trace_id()
```

### Snapshot queries

```python
from mixinkit.snapshot import build_read_snapshots_params

params = build_read_snapshots_params("", None, "ASC", 50)
# {'order': 'ASC', 'limit': '50'}
```

Unknown orders fall back to `DESC`, a non-positive limit is left out, and an
offset is written as an RFC 3339 time in UTC.

## What this package does not do

mixinkit makes no network calls. It has no HTTP API client, no node RPC
client, no authentication tokens or PIN encryption, and no messaging
connection. It builds and parses the data such a client sends and receives
(request bodies, signatures, transactions, response records); sending it is
left to the HTTP library of your choice.