# =============================================================================
# test_isa.py - Instruction Catalog Tests
# =============================================================================
# Tests for the 8-bit CPU instruction set definition.
#
# Test coverage includes:
#   - Exact, case-sensitive mnemonic lookup
#   - Implicit-only vs operand instructions
#   - Branch/jump label support
#   - Spot checks of encoded bytes
# =============================================================================

import pytest

from cpu8_asm.cpu import (
    AddressingMode,
    OpcodeDescriptor,
    OPCODE_TABLE,
    MNEMONICS,
    IMPLICIT_INSTRUCTIONS,
    LABEL_INSTRUCTIONS,
    lookup,
    is_valid_mnemonic,
    get_supported_modes,
)


class TestLookup:
    """Test mnemonic lookup."""

    def test_table_size(self):
        """The instruction set has 33 mnemonics."""
        assert len(OPCODE_TABLE) == 33
        assert len(MNEMONICS) == 33

    def test_lookup_known(self):
        desc = lookup("lda")
        assert isinstance(desc, OpcodeDescriptor)
        assert desc.mnemonic == "lda"

    def test_lookup_unknown(self):
        assert lookup("nop") is None

    def test_lookup_is_case_sensitive(self):
        """Mnemonics are lowercase; uppercase is not found."""
        assert lookup("LDA") is None
        assert not is_valid_mnemonic("Lda")

    def test_lookup_is_exact(self):
        """No prefix matching: 'ldax' and 'ld' are not mnemonics."""
        assert lookup("ldax") is None
        assert lookup("ld") is None

    @pytest.mark.parametrize("mnemonic", sorted(MNEMONICS))
    def test_all_mnemonics_three_letters(self, mnemonic):
        assert len(mnemonic) == 3
        assert mnemonic == mnemonic.lower()


class TestInstructionClasses:
    """Test the split between implicit and operand instructions."""

    @pytest.mark.parametrize("mnemonic", sorted(MNEMONICS))
    def test_implicit_xor_operand(self, mnemonic):
        """An instruction is implicit-only or takes operands, never both."""
        desc = lookup(mnemonic)
        operand_modes = [m for m in desc.modes if m is not AddressingMode.IMPLICIT]
        if desc.is_implicit:
            assert operand_modes == []
        else:
            assert operand_modes != []

    def test_implicit_instructions(self):
        assert IMPLICIT_INSTRUCTIONS == {
            "asl", "cib", "clc", "dec", "inc", "lsl", "lsr", "pha",
            "pop", "rol", "ror", "rts", "sec", "tab", "tba",
        }

    def test_label_instructions(self):
        assert LABEL_INSTRUCTIONS == {
            "bcc", "bcs", "beq", "bmi", "bne", "bpl", "jmp", "jsr",
        }

    @pytest.mark.parametrize("mnemonic", sorted(LABEL_INSTRUCTIONS))
    def test_label_byte_matches_immediate(self, mnemonic):
        """Branches use the same microcode for a literal or a label target."""
        desc = lookup(mnemonic)
        assert desc.label == desc.immediate


class TestEncodings:
    """Spot checks of catalog bytes."""

    def test_implicit_bytes(self):
        assert lookup("sec").implicit == 0xA0
        assert lookup("clc").implicit == 0xA2
        assert lookup("rts").implicit == 0xD1

    def test_lda(self):
        desc = lookup("lda")
        assert desc.opcode_for(AddressingMode.IMMEDIATE) == 0x06
        assert desc.opcode_for(AddressingMode.ABSOLUTE) == 0x08
        assert desc.opcode_for(AddressingMode.INDIRECT) == 0x0C
        assert desc.opcode_for(AddressingMode.INDEXED) is None

    def test_ldb_supports_all_operand_modes(self):
        assert get_supported_modes("ldb") == [
            AddressingMode.ABSOLUTE,
            AddressingMode.IMMEDIATE,
            AddressingMode.INDEXED,
            AddressingMode.INDEXED_INDIRECT,
            AddressingMode.INDIRECT,
            AddressingMode.INDIRECT_INDEXED,
        ]

    def test_stores_have_no_immediate(self):
        assert not lookup("sta").supports(AddressingMode.IMMEDIATE)
        assert not lookup("stb").supports(AddressingMode.IMMEDIATE)

    def test_unknown_has_no_modes(self):
        assert get_supported_modes("xyz") == []

    def test_descriptor_is_frozen(self):
        desc = lookup("lda")
        with pytest.raises(AttributeError):
            desc.immediate = 0x99

    def test_repr(self):
        assert repr(lookup("rts")) == "OpcodeDescriptor('rts', implicit=$D1)"

    def test_mode_str(self):
        assert str(AddressingMode.INDIRECT_INDEXED) == "indirect indexed"
