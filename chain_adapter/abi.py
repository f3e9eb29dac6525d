"""Minimal ABI fragments plus calldata encoding/decoding.

Only the handful of read calls the adapter issues are described here; there
is no general contract-interaction layer.
"""
from __future__ import annotations

from typing import Any

from eth_abi import decode, encode
from eth_hash.auto import keccak

ERC20_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]

ENS_REGISTRY_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "resolver",
        "stateMutability": "view",
        "inputs": [{"name": "node", "type": "bytes32"}],
        "outputs": [{"name": "", "type": "address"}],
    },
]

ENS_RESOLVER_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "addr",
        "stateMutability": "view",
        "inputs": [{"name": "node", "type": "bytes32"}],
        "outputs": [{"name": "", "type": "address"}],
    },
]


def _find_function(abi: list[dict[str, Any]], function_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def function_selector(function_name: str, input_types: list[str]) -> bytes:
    """First 4 bytes of keccak256 of the canonical signature.

    NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    """
    sig = f"{function_name}({','.join(input_types)})"
    return keccak(sig.encode("utf-8"))[:4]


def encode_function_call(abi: list[dict[str, Any]], function_name: str, args: list) -> str:
    """ABI-encode a function call to 0x-prefixed hex calldata."""
    func = _find_function(abi, function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    selector = function_selector(function_name, input_types)
    encoded_args = encode(input_types, args) if args else b""
    return "0x" + selector.hex() + encoded_args.hex()


def decode_function_result(abi: list[dict[str, Any]], function_name: str, data: str) -> Any:
    """ABI-decode return data; a single output is returned unwrapped."""
    func = _find_function(abi, function_name)
    output_types = [out["type"] for out in func.get("outputs", [])]
    if not output_types:
        return None

    raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
    decoded = decode(output_types, raw)
    if len(decoded) == 1:
        return decoded[0]
    return decoded


def namehash(name: str) -> bytes:
    """ENS namehash (EIP-137) of an already-normalised name."""
    node = b"\x00" * 32
    if not name:
        return node
    for label in reversed(name.split(".")):
        node = keccak(node + keccak(label.encode("utf-8")))
    return node
