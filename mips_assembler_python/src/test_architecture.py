import pytest

import architecture as arch
import arithmetic as arith

def test_statement_spec_entries():
    assert arch.statement_spec["add"] == {'ifmt': arch.iRRR, 'opcode': 0, 'function': 0x20}
    assert arch.statement_spec["sll"]["ifmt"] == arch.iRRS
    assert arch.statement_spec["lw"]["opcode"] == 0x23
    assert arch.statement_spec["beq"]["opcode"] == 0x04
    assert arch.statement_spec["j"]["ifmt"] == arch.iJ
    assert arch.statement_spec["nop"]["ifmt"] == arch.iNull

def test_opcodes_fit_their_fields():
    for m, x in arch.statement_spec.items():
        assert 0 <= x["opcode"] < 64, m
        assert 0 <= x["function"] < 64, m

def test_label_operand_mnemonics():
    assert arch.jump_mnemonics == {"j", "jal"}
    assert arch.branch_mnemonics == {"beq", "bne"}

def test_register_abbreviations_cover_all_registers():
    assert sorted(arch.register_abbrev.values()) == list(range(arch.n_registers))
    assert arch.register_abbrev["$sp"] == 29

def test_decode_fields():
    f = arch.decode_fields(0x8fa80004)
    assert (f["op"], f["rs"], f["rt"], f["imm"]) == (0x23, 29, 8, 4)
    f = arch.decode_fields(0x0c000003)
    assert (f["op"], f["target"]) == (3, 3)

def test_field_mask():
    assert arith.field_mask(5, 0) == 0x3F
    assert arith.field_mask(31, 26) == 0xFC000000
    assert arith.get_field(0xFC000000, 31, 26) == 63

def test_limits():
    assert arith.limit16(-1) == 0xFFFF
    assert arith.limit26(-1) == 0x3FFFFFF
    assert arith.limit32(-1) == 0xFFFFFFFF

def test_show_word():
    assert arith.show_word(0) == "0x00000000"
    assert arith.show_word(0xAFBFFFF8) == "0xafbffff8"

@pytest.mark.parametrize("xs,expected", [
    ("0", 0),
    ("42", 42),
    ("-8", -8),
    ("+3", 3),
    ("010", 10),
    ("0x10", 16),
    ("-0x10", -16),
    ("0b101", 5),
    ("0o17", 15),
    ("x", None),
    ("", None),
    ("4($sp)", None),
    ("0b12", None),
    ("1.5", None),
    ("1" * 5000, None),
])
def test_parse_int(xs, expected):
    assert arith.parse_int(xs) == expected
