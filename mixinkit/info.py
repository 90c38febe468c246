"""Consensus and network information of the Mixin network."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping

from .address import MixinnetAddress, mixinnet_address_from_string
from .crypto import Hash
from .multisigs import _parse_decimal, _parse_hash, _parse_time


def _address(value: Any) -> MixinnetAddress:
    if value is None:
        return MixinnetAddress()
    return mixinnet_address_from_string(value)


def _int(value: Any) -> int:
    return int(value or 0)


@dataclass
class Mint:
    pool: Decimal = Decimal(0)
    pledge: Decimal = Decimal(0)
    batch: int = 0


@dataclass
class Queue:
    finals: int = 0
    caches: int = 0


@dataclass
class ConsensusNode:
    """A node taking part in consensus."""

    node: Hash = Hash()
    signer: MixinnetAddress = field(default_factory=MixinnetAddress)
    payee: MixinnetAddress = field(default_factory=MixinnetAddress)
    state: str = ""
    timestamp: int = 0
    transaction: Hash = Hash()
    aggregator: int = 0
    works: tuple[int, int] = (0, 0)


@dataclass
class GraphReferences:
    external: Hash = Hash()
    self: Hash = Hash()


@dataclass
class GraphSnapshot:
    node: Hash = Hash()
    hash: Hash = Hash()
    references: GraphReferences = field(default_factory=GraphReferences)
    round: int = 0
    timestamp: int = 0
    transaction: Hash = Hash()
    signature: str = ""
    version: int = 0


@dataclass
class GraphCache:
    node: Hash = Hash()
    references: GraphReferences = field(default_factory=GraphReferences)
    timestamp: int = 0
    round: int = 0
    snapshots: list[GraphSnapshot] = field(default_factory=list)


@dataclass
class GraphFinal:
    node: Hash = Hash()
    hash: Hash = Hash()
    start: int = 0
    end: int = 0
    round: int = 0


@dataclass
class Graph:
    sps: float = 0.0
    topology: int = 0
    consensus: list[ConsensusNode] = field(default_factory=list)
    final: dict[str, GraphFinal] = field(default_factory=dict)
    cache: dict[str, GraphCache] = field(default_factory=dict)


@dataclass
class ConsensusInfo:
    """What a node reports about itself and the consensus graph."""

    network: Hash = Hash()
    node: Hash = Hash()
    version: str = ""
    uptime: str = ""
    epoch: datetime | None = None
    timestamp: datetime | None = None
    mint: Mint = field(default_factory=Mint)
    queue: Queue = field(default_factory=Queue)
    graph: Graph = field(default_factory=Graph)


@dataclass
class NetworkChain:
    chain_id: str = ""
    icon_url: str = ""
    name: str = ""
    type: str = ""
    withdraw_fee: Decimal = Decimal(0)
    withdraw_timestamp: datetime | None = None
    withdraw_pending_count: int = 0
    deposit_block_height: int = 0
    external_block_height: int = 0
    managed_block_height: int = 0
    is_synchronized: bool = False


@dataclass
class NetworkAsset:
    amount: Decimal = Decimal(0)
    asset_id: str = ""
    icon_url: str = ""
    symbol: str = ""


@dataclass
class NetworkInfo:
    """Summary of the assets and chains of the network."""

    assets: list[NetworkAsset] = field(default_factory=list)
    chains: list[NetworkChain] = field(default_factory=list)
    assets_count: Decimal = Decimal(0)
    peak_throughput: Decimal = Decimal(0)
    snapshots_count: Decimal = Decimal(0)
    type: str = ""


@dataclass
class Ticker:
    type: str = ""
    price_usd: Decimal = Decimal(0)
    price_btc: Decimal = Decimal(0)


def _references(data: Mapping[str, Any] | None) -> GraphReferences:
    data = data or {}
    return GraphReferences(
        external=_parse_hash(data.get("external")),
        self=_parse_hash(data.get("self")),
    )


def _consensus_node(data: Mapping[str, Any]) -> ConsensusNode:
    works = list(data.get("works") or [])
    if len(works) > 2:
        raise ValueError(f"invalid works {works}")
    works += [0] * (2 - len(works))
    return ConsensusNode(
        node=_parse_hash(data.get("node")),
        signer=_address(data.get("signer")),
        payee=_address(data.get("payee")),
        state=data.get("state") or "",
        timestamp=_int(data.get("timestamp")),
        transaction=_parse_hash(data.get("transaction")),
        aggregator=_int(data.get("aggregator")),
        works=(int(works[0]), int(works[1])),
    )


def _graph_snapshot(data: Mapping[str, Any]) -> GraphSnapshot:
    return GraphSnapshot(
        node=_parse_hash(data.get("node")),
        hash=_parse_hash(data.get("hash")),
        references=_references(data.get("references")),
        round=_int(data.get("round")),
        timestamp=_int(data.get("timestamp")),
        transaction=_parse_hash(data.get("transaction")),
        signature=data.get("signature") or "",
        version=_int(data.get("version")),
    )


def _graph_cache(data: Mapping[str, Any]) -> GraphCache:
    return GraphCache(
        node=_parse_hash(data.get("node")),
        references=_references(data.get("references")),
        timestamp=_int(data.get("timestamp")),
        round=_int(data.get("round")),
        snapshots=[_graph_snapshot(s) for s in data.get("snapshots") or []],
    )


def _graph_final(data: Mapping[str, Any]) -> GraphFinal:
    return GraphFinal(
        node=_parse_hash(data.get("node")),
        hash=_parse_hash(data.get("hash")),
        start=_int(data.get("start")),
        end=_int(data.get("end")),
        round=_int(data.get("round")),
    )


def _graph(data: Mapping[str, Any] | None) -> Graph:
    data = data or {}
    return Graph(
        sps=float(data.get("sps") or 0.0),
        topology=_int(data.get("topology")),
        consensus=[_consensus_node(n) for n in data.get("consensus") or []],
        final={k: _graph_final(v) for k, v in (data.get("final") or {}).items()},
        cache={k: _graph_cache(v) for k, v in (data.get("cache") or {}).items()},
    )


def consensus_info_from_dict(data: Mapping[str, Any]) -> ConsensusInfo:
    """Build consensus info from the ``getinfo`` response data."""
    mint = data.get("mint") or {}
    queue = data.get("queue") or {}
    return ConsensusInfo(
        network=_parse_hash(data.get("network")),
        node=_parse_hash(data.get("node")),
        version=data.get("version") or "",
        uptime=data.get("uptime") or "",
        epoch=_parse_time(data.get("epoch")),
        timestamp=_parse_time(data.get("timestamp")),
        mint=Mint(
            pool=_parse_decimal(mint.get("pool")),
            pledge=_parse_decimal(mint.get("pledge")),
            batch=_int(mint.get("batch")),
        ),
        queue=Queue(
            finals=_int(queue.get("finals")),
            caches=_int(queue.get("caches")),
        ),
        graph=_graph(data.get("graph")),
    )


def _network_chain(data: Mapping[str, Any]) -> NetworkChain:
    return NetworkChain(
        chain_id=data.get("chain_id") or "",
        icon_url=data.get("icon_url") or "",
        name=data.get("name") or "",
        type=data.get("type") or "",
        withdraw_fee=_parse_decimal(data.get("withdrawal_fee")),
        withdraw_timestamp=_parse_time(data.get("withdrawal_timestamp")),
        withdraw_pending_count=_int(data.get("withdrawal_pending_count")),
        deposit_block_height=_int(data.get("deposit_block_height")),
        external_block_height=_int(data.get("external_block_height")),
        managed_block_height=_int(data.get("managed_block_height")),
        is_synchronized=bool(data.get("is_synchronized")),
    )


def _network_asset(data: Mapping[str, Any]) -> NetworkAsset:
    return NetworkAsset(
        amount=_parse_decimal(data.get("amount")),
        asset_id=data.get("asset_id") or "",
        icon_url=data.get("icon_url") or "",
        symbol=data.get("symbol") or "",
    )


def network_info_from_dict(data: Mapping[str, Any]) -> NetworkInfo:
    """Build network info from its JSON form."""
    return NetworkInfo(
        assets=[_network_asset(a) for a in data.get("assets") or []],
        chains=[_network_chain(c) for c in data.get("chains") or []],
        assets_count=_parse_decimal(data.get("assets_count")),
        peak_throughput=_parse_decimal(data.get("peak_throughput")),
        snapshots_count=_parse_decimal(data.get("snapshots_count")),
        type=data.get("type") or "",
    )


def ticker_from_dict(data: Mapping[str, Any]) -> Ticker:
    """Build a ticker from its JSON form."""
    return Ticker(
        type=data.get("type") or "",
        price_usd=_parse_decimal(data.get("price_usd")),
        price_btc=_parse_decimal(data.get("price_btc")),
    )