"""
Embedded interface descriptor for the keeper price-feed contract

The descriptor is a build-time constant. It is validated against a JSON
schema and wrapped exactly once; every encode/decode call reuses the same
ContractInterface.
"""
import copy
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence, Tuple

import jsonschema
from web3 import Web3

from .exceptions import InterfaceError, UnknownFunctionError

LOG = logging.getLogger(__name__)


PRICE_FEED_ABI: Tuple[Dict[str, Any], ...] = (
    {
        "inputs": [],
        "stateMutability": "nonpayable",
        "type": "constructor"
    },
    {
        "anonymous": False,
        "inputs": [
            {
                "indexed": False,
                "internalType": "uint256",
                "name": "newPrice",
                "type": "uint256"
            }
        ],
        "name": "PriceUpdated",
        "type": "event"
    },
    {
        "inputs": [],
        "name": "owner",
        "outputs": [
            {
                "internalType": "address",
                "name": "",
                "type": "address"
            }
        ],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "price",
        "outputs": [
            {
                "internalType": "uint256",
                "name": "",
                "type": "uint256"
            }
        ],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [
            {
                "internalType": "uint256",
                "name": "newPrice",
                "type": "uint256"
            }
        ],
        "name": "updatePrice",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
)


_PARAMETER_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "type": {"type": "string", "minLength": 1},
        "internalType": {"type": "string"},
        "indexed": {"type": "boolean"},
        "components": {"type": "array"},
    },
    "required": ["type"],
}

ABI_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["type"],
        "properties": {
            "type": {"enum": ["constructor", "function", "event", "fallback", "receive", "error"]},
            "name": {"type": "string", "minLength": 1},
            "inputs": {"type": "array", "items": _PARAMETER_SCHEMA},
            "outputs": {"type": "array", "items": _PARAMETER_SCHEMA},
            "stateMutability": {"enum": ["pure", "view", "nonpayable", "payable"]},
            "anonymous": {"type": "boolean"},
        },
        "allOf": [
            {
                "if": {"properties": {"type": {"enum": ["function", "event", "error"]}}},
                "then": {"required": ["name", "inputs"]},
            },
            {
                "if": {"properties": {"type": {"const": "function"}}},
                "then": {"required": ["stateMutability"]},
            },
        ],
    },
}


def canonical_type(param: Dict[str, Any]) -> str:
    """Collapse a parameter description into its canonical ABI type string"""
    type_str = param["type"]
    if type_str.startswith("tuple"):
        inner = ",".join(canonical_type(c) for c in param.get("components", []))
        return f"({inner}){type_str[len('tuple'):]}"
    return type_str


@dataclass(frozen=True)
class FunctionInfo:
    """A function entry resolved from the interface descriptor"""
    name: str
    input_types: Tuple[str, ...]
    input_names: Tuple[str, ...]
    state_mutability: str
    abi: Dict[str, Any] = field(compare=False, hash=False, repr=False)

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return bytes(Web3.keccak(text=self.signature)[:4])

    @property
    def selector_hex(self) -> str:
        return "0x" + self.selector.hex()


class ContractInterface:
    """Read-only view over a validated interface descriptor"""

    def __init__(self, abi: Sequence[Dict[str, Any]], name: str = "contract"):
        self.name = name
        # Private copy so callers cannot mutate the descriptor underneath us
        entries = copy.deepcopy(list(abi))
        try:
            jsonschema.validate(entries, ABI_SCHEMA)
        except jsonschema.ValidationError as e:
            path = "/".join(str(p) for p in e.absolute_path)
            raise InterfaceError(
                f"Invalid interface descriptor for {name} at '{path}': {e.message}",
                details={"contract": name, "path": path}
            ) from e

        self._entries = tuple(entries)
        self._functions = tuple(
            FunctionInfo(
                name=entry["name"],
                input_types=tuple(canonical_type(p) for p in entry["inputs"]),
                input_names=tuple(p.get("name", "") for p in entry["inputs"]),
                state_mutability=entry["stateMutability"],
                abi=entry,
            )
            for entry in self._entries
            if entry["type"] == "function"
        )
        LOG.debug(f"Loaded interface {name} with {len(self._functions)} functions")

    @property
    def abi(self) -> List[Dict[str, Any]]:
        """A fresh copy of the descriptor, in the list form web3 expects"""
        return copy.deepcopy(list(self._entries))

    @property
    def functions(self) -> Tuple[FunctionInfo, ...]:
        return self._functions

    def find_function(self, name: str) -> Optional[FunctionInfo]:
        """Return the first function entry with this name; overloads are not distinguished"""
        for fn in self._functions:
            if fn.name == name:
                return fn
        return None

    def get_function(self, name: str) -> FunctionInfo:
        fn = self.find_function(name)
        if fn is None:
            raise UnknownFunctionError(
                f"Function '{name}' not found in {self.name} interface",
                function_name=name
            )
        return fn

    def get_function_by_selector(self, selector: bytes) -> FunctionInfo:
        for fn in self._functions:
            if fn.selector == selector:
                return fn
        raise UnknownFunctionError(
            f"No function in {self.name} interface has selector 0x{selector.hex()}",
            selector="0x" + selector.hex()
        )


@lru_cache(maxsize=None)
def get_price_feed_interface() -> ContractInterface:
    """The embedded price-feed interface, validated once per process"""
    return ContractInterface(PRICE_FEED_ABI, name="PriceFeed")
