"""
keeper-calldata: encode keeper price-feed contract calls into ABI calldata.

    from keeper_calldata import encode_function_call
    encode_function_call("updatePrice", [123])
"""
from .utils.contract_utils import (
    CalldataEncoder,
    DecodedCall,
    decode_function_call,
    encode_function_call,
    list_functions,
    parse_call_arguments,
)
from .utils.interface import PRICE_FEED_ABI, get_price_feed_interface

__version__ = "0.1.0"

__all__ = [
    "CalldataEncoder",
    "DecodedCall",
    "PRICE_FEED_ABI",
    "decode_function_call",
    "encode_function_call",
    "get_price_feed_interface",
    "list_functions",
    "parse_call_arguments",
]
