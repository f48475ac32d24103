"""
Unit tests for the embedded interface descriptor
"""

import pytest

from keeper_calldata.utils.exceptions import InterfaceError, UnknownFunctionError
from keeper_calldata.utils.interface import (
    PRICE_FEED_ABI,
    ContractInterface,
    canonical_type,
    get_price_feed_interface,
)


class TestPriceFeedInterface:
    """Test the embedded price-feed descriptor"""

    def test_loaded_once(self):
        """Test the cached accessor returns the same object"""
        assert get_price_feed_interface() is get_price_feed_interface()

    def test_functions(self, interface):
        """Test only function entries are exposed as functions"""
        names = [fn.name for fn in interface.functions]
        assert names == ["owner", "price", "updatePrice"]

    def test_function_info(self, interface):
        """Test signature, mutability and parameter metadata"""
        fn = interface.get_function("updatePrice")

        assert fn.signature == "updatePrice(uint256)"
        assert fn.input_types == ("uint256",)
        assert fn.input_names == ("newPrice",)
        assert fn.state_mutability == "nonpayable"
        assert len(fn.selector) == 4

    def test_view_functions(self, interface):
        """Test view functions without parameters"""
        assert interface.get_function("owner").signature == "owner()"
        assert interface.get_function("price").state_mutability == "view"

    def test_known_selectors(self, interface):
        """Test selectors against well-known values"""
        assert interface.get_function("owner").selector_hex == "0x8da5cb5b"
        assert interface.get_function("price").selector_hex == "0xa035b1fe"

    def test_function_info_is_hashable(self, interface):
        """Test FunctionInfo can be used in sets and as a dict key"""
        functions = set(interface.functions)
        price = interface.get_function("price")

        assert len(functions) == 3
        assert price in functions
        assert {price: "view"}[interface.get_function("price")] == "view"

    def test_lookup_by_selector(self, interface):
        """Test reverse lookup from selector"""
        assert interface.get_function_by_selector(bytes.fromhex("8da5cb5b")).name == "owner"

        with pytest.raises(UnknownFunctionError):
            interface.get_function_by_selector(b"\x00\x00\x00\x00")

    def test_unknown_name(self, interface):
        """Test find returns None and get raises"""
        assert interface.find_function("nonexistent") is None

        with pytest.raises(UnknownFunctionError):
            interface.get_function("nonexistent")

    def test_abi_copy_is_detached(self, interface):
        """Test mutating the returned descriptor does not affect the interface"""
        abi = interface.abi
        abi.clear()

        assert len(interface.abi) == len(PRICE_FEED_ABI)

    def test_source_constant_not_aliased(self):
        """Test the interface does not share dicts with the module constant"""
        iface = ContractInterface(PRICE_FEED_ABI)
        assert iface.get_function("price").abi is not PRICE_FEED_ABI[3]


class TestInterfaceValidation:
    """Test descriptor schema validation"""

    def test_rejects_unknown_entry_type(self):
        """Test an entry with an unsupported type"""
        with pytest.raises(InterfaceError) as exc_info:
            ContractInterface([{"type": "modifier", "name": "onlyOwner"}], name="Bad")

        assert exc_info.value.details["contract"] == "Bad"

    def test_rejects_function_without_name(self):
        """Test a function entry missing its name"""
        with pytest.raises(InterfaceError):
            ContractInterface([
                {"type": "function", "inputs": [], "stateMutability": "view"}
            ])

    def test_rejects_parameter_without_type(self):
        """Test a parameter missing its type"""
        with pytest.raises(InterfaceError):
            ContractInterface([
                {
                    "type": "function",
                    "name": "set",
                    "inputs": [{"name": "value"}],
                    "stateMutability": "nonpayable"
                }
            ])

    def test_constructor_needs_no_name(self):
        """Test a bare constructor entry is accepted"""
        iface = ContractInterface([{"type": "constructor", "inputs": [], "stateMutability": "nonpayable"}])
        assert iface.functions == ()


class TestCanonicalType:
    """Test canonical type strings"""

    def test_elementary(self):
        """Test elementary and array types pass through unchanged"""
        assert canonical_type({"type": "uint256"}) == "uint256"
        assert canonical_type({"type": "address[]"}) == "address[]"

    def test_tuple(self):
        """Test nested tuple components collapse into parenthesised lists"""
        param = {
            "type": "tuple[]",
            "components": [
                {"type": "address"},
                {"type": "tuple", "components": [{"type": "uint256"}, {"type": "bool"}]},
            ],
        }
        assert canonical_type(param) == "(address,(uint256,bool))[]"
