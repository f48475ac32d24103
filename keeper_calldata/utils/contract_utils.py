"""
Contract utility functions for encoding/decoding contract calls
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple, Union

import jsonschema
from eth_abi import is_encodable
from eth_abi.exceptions import DecodingError
from eth_utils import decode_hex, remove_0x_prefix
from web3 import Web3
from web3.exceptions import Web3Exception

from .exceptions import (
    ArgumentMismatchError,
    MalformedArgumentInputError,
    MalformedCalldataError,
)
from .interface import ContractInterface, FunctionInfo, get_price_feed_interface

LOG = logging.getLogger(__name__)

ARGUMENTS_SCHEMA = {"type": "array"}

SELECTOR_SIZE = 4


@dataclass
class DecodedCall:
    """Function call recovered from calldata"""
    function_name: str
    signature: str
    selector: str
    args: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "function": self.function_name,
            "signature": self.signature,
            "selector": self.selector,
            "args": [_jsonable(arg) for arg in self.args],
        }


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def parse_call_arguments(raw_args: str) -> List[Any]:
    """Parse command-line argument text into a positional argument list

    Args:
        raw_args: JSON array literal, e.g. "[123]"

    Returns:
        Decoded list of arguments

    Raises:
        MalformedArgumentInputError: If the text is not JSON or not an array
    """
    try:
        args = json.loads(raw_args)
    except (TypeError, json.JSONDecodeError) as e:
        raise MalformedArgumentInputError(
            f"Arguments are not valid JSON: {e}",
            raw_input=raw_args
        ) from e

    try:
        jsonschema.validate(args, ARGUMENTS_SCHEMA)
    except jsonschema.ValidationError as e:
        raise MalformedArgumentInputError(
            f"Arguments must be a JSON array, got {type(args).__name__}",
            raw_input=raw_args
        ) from e

    return args


class CalldataEncoder:
    """Encodes and decodes calls against a single contract interface"""

    def __init__(self, interface: ContractInterface = None):
        self.interface = interface or get_price_feed_interface()
        self.web3 = Web3()
        self.contract = self.web3.eth.contract(abi=self.interface.abi)

    def validate_arguments(self, fn: FunctionInfo, args: Sequence[Any]) -> None:
        """Check arity and per-position types before handing off to web3"""
        if len(args) != len(fn.input_types):
            raise ArgumentMismatchError(
                f"{fn.signature} expects {len(fn.input_types)} argument(s), got {len(args)}",
                signature=fn.signature
            )

        for position, (abi_type, value) in enumerate(zip(fn.input_types, args)):
            if not is_encodable(abi_type, value):
                raise ArgumentMismatchError(
                    f"Argument {position} of {fn.signature} is not a valid {abi_type}: {value!r}",
                    signature=fn.signature,
                    position=position,
                    expected_type=abi_type,
                    value=value
                )

    def encode_function_call(self, func_name: str, args: Sequence[Any] = None) -> str:
        """Encode complete function call

        Args:
            func_name: Function name; the first entry with this name is used
            args: Positional function arguments

        Returns:
            Complete call data (selector + encoded arguments) as 0x-prefixed hex
        """
        args = list(args or [])
        fn = self.interface.get_function(func_name)
        self.validate_arguments(fn, args)

        try:
            encoded = self.contract.encode_abi(fn.signature, args=args)
        except (Web3Exception, TypeError, ValueError) as e:
            raise ArgumentMismatchError(
                f"Failed to encode arguments for {fn.signature}: {e}",
                signature=fn.signature
            ) from e

        LOG.debug(f"Encoded {fn.signature} with {args}: {encoded}")
        return encoded

    def decode_function_call(self, calldata: Union[str, bytes]) -> DecodedCall:
        """Decode calldata back into the function and its positional arguments"""
        if isinstance(calldata, (bytes, bytearray)):
            data = bytes(calldata)
        else:
            text = remove_0x_prefix(calldata.strip())
            try:
                data = decode_hex(text)
            except (ValueError, TypeError) as e:
                raise MalformedCalldataError(
                    f"Calldata is not valid hex: {calldata!r}",
                    details={"calldata": calldata}
                ) from e

        if len(data) < SELECTOR_SIZE:
            raise MalformedCalldataError(
                f"Calldata is {len(data)} byte(s), shorter than a {SELECTOR_SIZE}-byte selector",
                details={"length": len(data)}
            )

        fn = self.interface.get_function_by_selector(data[:SELECTOR_SIZE])

        try:
            values = self.web3.codec.decode(list(fn.input_types), data[SELECTOR_SIZE:])
        except DecodingError as e:
            raise MalformedCalldataError(
                f"Cannot decode parameters for {fn.signature}: {e}",
                details={"signature": fn.signature}
            ) from e

        # eth-abi ignores trailing bytes; only canonical encodings are accepted
        if self.web3.codec.encode(list(fn.input_types), values) != data[SELECTOR_SIZE:]:
            raise MalformedCalldataError(
                f"Parameters for {fn.signature} are not canonically encoded "
                f"({len(data) - SELECTOR_SIZE} byte(s) after the selector)",
                details={"signature": fn.signature}
            )

        return DecodedCall(
            function_name=fn.name,
            signature=fn.signature,
            selector=fn.selector_hex,
            args=list(values),
        )

    def list_functions(self) -> List[Tuple[str, str]]:
        """(selector, signature) for every function, in declaration order"""
        return [(fn.selector_hex, fn.signature) for fn in self.interface.functions]


def encode_function_call(func_name: str, args: Sequence[Any] = None,
                         interface: ContractInterface = None) -> str:
    """Convenience function to encode function call"""
    return CalldataEncoder(interface).encode_function_call(func_name, args)


def decode_function_call(calldata: Union[str, bytes],
                         interface: ContractInterface = None) -> DecodedCall:
    """Convenience function to decode calldata"""
    return CalldataEncoder(interface).decode_function_call(calldata)


def list_functions(interface: ContractInterface = None) -> List[Tuple[str, str]]:
    """Convenience function to list function selectors"""
    return CalldataEncoder(interface).list_functions()
