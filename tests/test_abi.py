"""Unit tests for the ABI codec."""

from __future__ import annotations

import pytest

from cherrydapp.chain.abi import FunctionDescriptor, decode_result, encode_call
from cherrydapp.errors import DecodingError, EncodingError
from cherrydapp.utils import to_checksum_address

from conftest import TEST_ADDRESS, word

BALANCE_OF = FunctionDescriptor("balanceOf", ("address",), ("uint256",))
TRANSFER = FunctionDescriptor("transfer", ("address", "uint256"), ("bool",))


class TestSelector:
    """Selectors are keccak256(signature)[:4]."""

    def test_signature_is_canonical(self) -> None:
        assert TRANSFER.signature == "transfer(address,uint256)"
        assert FunctionDescriptor("start").signature == "start()"

    def test_known_selectors(self) -> None:
        assert TRANSFER.selector.hex() == "a9059cbb"
        assert BALANCE_OF.selector.hex() == "70a08231"
        assert FunctionDescriptor("decimals", (), ("uint8",)).selector.hex() == "313ce567"

    def test_selector_ignores_outputs(self) -> None:
        other = FunctionDescriptor("transfer", ("address", "uint256"), ())
        assert other.selector == TRANSFER.selector


class TestEncodeCall:
    """Tests for encode_call."""

    def test_no_arguments_is_bare_selector(self) -> None:
        descriptor = FunctionDescriptor("currentRound", (), ("uint256",))
        assert encode_call(descriptor, []) == descriptor.selector

    def test_address_is_left_padded(self) -> None:
        data = encode_call(BALANCE_OF, [TEST_ADDRESS])
        assert len(data) == 4 + 32
        assert data[4:16] == b"\x00" * 12
        assert data[16:].hex() == TEST_ADDRESS[2:].lower()

    def test_uint_is_big_endian_word(self) -> None:
        data = encode_call(TRANSFER, [TEST_ADDRESS, 25200])
        assert data[36:] == word(25200)

    def test_arity_mismatch(self) -> None:
        with pytest.raises(EncodingError, match="takes 2 argument"):
            encode_call(TRANSFER, [TEST_ADDRESS])

    def test_type_mismatch(self) -> None:
        with pytest.raises(EncodingError):
            encode_call(TRANSFER, [TEST_ADDRESS, "not a number"])

    def test_uint8_out_of_range(self) -> None:
        descriptor = FunctionDescriptor("setDecimals", ("uint8",))
        with pytest.raises(EncodingError):
            encode_call(descriptor, [256])

    def test_negative_uint(self) -> None:
        with pytest.raises(EncodingError):
            encode_call(TRANSFER, [TEST_ADDRESS, -1])

    def test_invalid_address(self) -> None:
        with pytest.raises(EncodingError):
            encode_call(BALANCE_OF, ["0x1234"])

    def test_unsupported_type(self) -> None:
        descriptor = FunctionDescriptor("f", ("bytes32",))
        with pytest.raises(EncodingError, match="Unsupported"):
            encode_call(descriptor, [b"\x00" * 32])


class TestDecodeResult:
    """Tests for decode_result."""

    def test_uint256(self) -> None:
        assert decode_result(BALANCE_OF, word(10**24)) == [10**24]

    def test_uint256_max_is_not_truncated(self) -> None:
        top = 2**256 - 1
        assert decode_result(BALANCE_OF, word(top)) == [top]

    def test_bool(self) -> None:
        descriptor = FunctionDescriptor("isOpen", (), ("bool",))
        assert decode_result(descriptor, word(1)) == [True]
        assert decode_result(descriptor, word(0)) == [False]

    def test_address(self) -> None:
        descriptor = FunctionDescriptor("winner", (), ("address",))
        data = b"\x00" * 12 + bytes.fromhex(TEST_ADDRESS[2:])
        assert decode_result(descriptor, data) == [TEST_ADDRESS]

    def test_address_is_checksummed(self) -> None:
        descriptor = FunctionDescriptor("winner", (), ("address",))
        lower = TEST_ADDRESS.lower()
        (winner,) = decode_result(descriptor, b"\x00" * 12 + bytes.fromhex(lower[2:]))
        assert winner == to_checksum_address(lower) == TEST_ADDRESS

    def test_string(self) -> None:
        descriptor = FunctionDescriptor("symbol", (), ("string",))
        payload = word(32) + word(3) + b"CHR".ljust(32, b"\x00")
        assert decode_result(descriptor, payload) == ["CHR"]

    def test_empty_return_for_value_function(self) -> None:
        with pytest.raises(DecodingError, match="returned 0 bytes"):
            decode_result(BALANCE_OF, b"")

    def test_short_return(self) -> None:
        with pytest.raises(DecodingError):
            decode_result(BALANCE_OF, b"\x00" * 31)

    def test_extra_bytes_for_static_output(self) -> None:
        with pytest.raises(DecodingError):
            decode_result(BALANCE_OF, word(1) + word(2))

    def test_string_with_truncated_tail(self) -> None:
        descriptor = FunctionDescriptor("name", (), ("string",))
        with pytest.raises(DecodingError):
            decode_result(descriptor, word(32) + word(64))

    def test_no_outputs(self) -> None:
        assert decode_result(FunctionDescriptor("start"), b"") == []


class TestRoundTrip:
    """decode(encode(args)) == args for every supported tag."""

    @pytest.mark.parametrize(
        "tag, value",
        [
            ("uint8", 0),
            ("uint8", 255),
            ("uint256", 0),
            ("uint256", 2**256 - 1),
            ("address", TEST_ADDRESS),
            ("bool", True),
            ("bool", False),
            ("string", ""),
            ("string", "cherry 🍒 ".ljust(70, "x")),
        ],
    )
    def test_single_value(self, tag: str, value: object) -> None:
        descriptor = FunctionDescriptor("echo", (tag,), (tag,))
        encoded = encode_call(descriptor, [value])
        assert encoded[:4] == descriptor.selector
        assert decode_result(descriptor, encoded[4:]) == [value]

    def test_mixed_static_and_dynamic(self) -> None:
        tags = ("uint256", "string", "address", "bool", "uint8")
        values = [7, "round seven", TEST_ADDRESS, True, 18]
        descriptor = FunctionDescriptor("echo", tags, tags)
        assert decode_result(descriptor, encode_call(descriptor, values)[4:]) == values
