"""
Unit tests for CLI argument validation.
"""

import pytest

from state_proof_toolkit.commands.validation import (
    validate_eth_address,
    validate_hash32,
    validate_storage_slot,
)


class TestValidateEthAddress:
    def test_lowercase_is_checksummed(self, sample_address):
        checksummed = validate_eth_address(sample_address.lower())
        assert checksummed.lower() == sample_address.lower()
        assert checksummed != sample_address.lower()

    @pytest.mark.parametrize("address", ["", "0x1234", "not an address"])
    def test_invalid(self, address):
        with pytest.raises(ValueError, match="Invalid address"):
            validate_eth_address(address)


class TestValidateHash32:
    def test_valid_hash_is_lowercased(self):
        value = "0x" + "AB" * 32
        assert validate_hash32(value) == "0x" + "ab" * 32

    @pytest.mark.parametrize(
        "value", ["", "0x1234", "ab" * 32, "0x" + "zz" * 32, "0x" + "00" * 33]
    )
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid state_root"):
            validate_hash32(value, "state_root")


class TestValidateStorageSlot:
    @pytest.mark.parametrize("slot", ["1", "0x1", "0x" + "00" * 31 + "01"])
    def test_decimal_and_hex(self, slot):
        assert validate_storage_slot(slot) == b"\x00" * 31 + b"\x01"

    @pytest.mark.parametrize(
        "slot", ["0xzz", "-1", "0x1" + "0" * 64, "abc", "ff", ""]
    )
    def test_invalid(self, slot):
        with pytest.raises(ValueError, match="Invalid storage slot"):
            validate_storage_slot(slot)
