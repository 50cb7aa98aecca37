# architecture.py

# Copyright (C) 2025 The mips-assembler authors. License: GNU GPL Version 3

# This file is part of mips-assembler. mips-assembler is free software:
# you can redistribute it and/or modify it under the terms of the GNU
# General Public License as published by the Free Software Foundation,
# either version 3 of the License, or (at your option) any later
# version. mips-assembler is distributed in the hope that it will be
# useful, but WITHOUT ANY WARRANTY; without even the implied warranty
# of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# General Public License for more details. You should have received a
# copy of the GNU General Public License along with mips-assembler. If
# not, see <https://www.gnu.org/licenses/>.

# --------------------------------------------------------------------
# architecture.py defines global constants and tables specifying
# formats, opcodes, mnemonics, registers and instruction fields
# --------------------------------------------------------------------

import common
import arithmetic as arith

# --------------------------------------------------------------------
# Architecture constants
# --------------------------------------------------------------------

# Every instruction occupies one 32-bit word, and addresses count
# bytes, so consecutive instructions are 4 apart.

instr_size = 4

comment_char = "#"
label_char = ":"

# --------------------------------------------------------------------
# Instruction formats
# --------------------------------------------------------------------

# The format determines how many operands an instruction takes and
# where they are packed in the word.

iRRR = "RegisterTriple"   # add      $rd, $rs, $rt       jr $rs
iRRS = "RegisterShift"    # sll      $rd, $rt, shamt
iI = "ImmediateForm"      # addi     $rt, $rs, imm       lw $rt, k($rs)
iJ = "JumpForm"           # j        label
iNull = "NullForm"        # nop

# Name used for the format family in error messages

format_letter = {
    iRRR: "R",
    iRRS: "R",
    iI: "I",
    iJ: "J",
    iNull: "-",
}

# --------------------------------------------------------------------
# Instruction fields
# --------------------------------------------------------------------

# Each field is (hi, lo), both bit indices inclusive, with bit 0 the
# least significant bit.

Field_op = (31, 26)
Field_rs = (25, 21)
Field_rt = (20, 16)
Field_rd = (15, 11)
Field_shamt = (10, 6)
Field_funct = (5, 0)
Field_imm = (15, 0)
Field_target = (25, 0)

def decode_fields(w):
    """Split an encoded word into its fields. The fields overlap: imm
    covers rd/shamt/funct and target covers everything below op."""
    return {
        "op": arith.get_field(w, *Field_op),
        "rs": arith.get_field(w, *Field_rs),
        "rt": arith.get_field(w, *Field_rt),
        "rd": arith.get_field(w, *Field_rd),
        "shamt": arith.get_field(w, *Field_shamt),
        "funct": arith.get_field(w, *Field_funct),
        "imm": arith.get_field(w, *Field_imm),
        "target": arith.get_field(w, *Field_target),
    }

# --------------------------------------------------------------------
# Line shapes
# --------------------------------------------------------------------

# The classifier sorts the code part of a line into one of these
# shapes before it builds the canonical token list.

sNoOperand = "NoOperand"                # syscall-like: nop
sSingleOperand = "SingleOperand"        # jr $ra      j loop
sBaseOffsetOperand = "BaseOffset"       # lw $t0, 4($sp)
sTripleOperand = "TripleOperand"        # add $t2, $t1, $t1
sUnrecognized = "Unrecognized"

# --------------------------------------------------------------------
# Registers
# --------------------------------------------------------------------

n_registers = 32

# Conventional names for the general registers. Numeric names ($00 to
# $31) are handled by the assembler and do not appear here.

register_abbrev = {
    "$zero": 0,
    "$at": 1,
    "$v0": 2, "$v1": 3,
    "$a0": 4, "$a1": 5, "$a2": 6, "$a3": 7,
    "$t0": 8, "$t1": 9, "$t2": 10, "$t3": 11,
    "$t4": 12, "$t5": 13, "$t6": 14, "$t7": 15,
    "$s0": 16, "$s1": 17, "$s2": 18, "$s3": 19,
    "$s4": 20, "$s5": 21, "$s6": 22, "$s7": 23,
    "$t8": 24, "$t9": 25,
    "$k0": 26, "$k1": 27,
    "$gp": 28,
    "$sp": 29,
    "$fp": 30,
    "$ra": 31,
}

# --------------------------------------------------------------------
# Assembly language statements
# --------------------------------------------------------------------

# The instruction set is defined by a map from mnemonic to statement
# specification. Each entry gives the instruction format, the primary
# opcode (op field) and, for R format instructions, the function code
# (funct field). The table is built once here and only read after
# that.

statement_spec = {}

# R format: op = 0, the operation is selected by the function code

statement_spec["add"] = {'ifmt': iRRR, 'opcode': 0x00, 'function': 0x20}
statement_spec["addu"] = {'ifmt': iRRR, 'opcode': 0x00, 'function': 0x21}
statement_spec["sub"] = {'ifmt': iRRR, 'opcode': 0x00, 'function': 0x22}
statement_spec["subu"] = {'ifmt': iRRR, 'opcode': 0x00, 'function': 0x23}
statement_spec["and"] = {'ifmt': iRRR, 'opcode': 0x00, 'function': 0x24}
statement_spec["or"] = {'ifmt': iRRR, 'opcode': 0x00, 'function': 0x25}
statement_spec["xor"] = {'ifmt': iRRR, 'opcode': 0x00, 'function': 0x26}
statement_spec["nor"] = {'ifmt': iRRR, 'opcode': 0x00, 'function': 0x27}
statement_spec["slt"] = {'ifmt': iRRR, 'opcode': 0x00, 'function': 0x2a}
statement_spec["sltu"] = {'ifmt': iRRR, 'opcode': 0x00, 'function': 0x2b}
statement_spec["jr"] = {'ifmt': iRRR, 'opcode': 0x00, 'function': 0x08}

# Shifts by a constant put the amount in the shamt field

statement_spec["sll"] = {'ifmt': iRRS, 'opcode': 0x00, 'function': 0x00}
statement_spec["srl"] = {'ifmt': iRRS, 'opcode': 0x00, 'function': 0x02}
statement_spec["sra"] = {'ifmt': iRRS, 'opcode': 0x00, 'function': 0x03}

# I format: arithmetic with an immediate, branches, loads and stores

statement_spec["beq"] = {'ifmt': iI, 'opcode': 0x04, 'function': 0}
statement_spec["bne"] = {'ifmt': iI, 'opcode': 0x05, 'function': 0}
statement_spec["addi"] = {'ifmt': iI, 'opcode': 0x08, 'function': 0}
statement_spec["addiu"] = {'ifmt': iI, 'opcode': 0x09, 'function': 0}
statement_spec["slti"] = {'ifmt': iI, 'opcode': 0x0a, 'function': 0}
statement_spec["sltiu"] = {'ifmt': iI, 'opcode': 0x0b, 'function': 0}
statement_spec["andi"] = {'ifmt': iI, 'opcode': 0x0c, 'function': 0}
statement_spec["ori"] = {'ifmt': iI, 'opcode': 0x0d, 'function': 0}
statement_spec["xori"] = {'ifmt': iI, 'opcode': 0x0e, 'function': 0}
statement_spec["lb"] = {'ifmt': iI, 'opcode': 0x20, 'function': 0}
statement_spec["lh"] = {'ifmt': iI, 'opcode': 0x21, 'function': 0}
statement_spec["lw"] = {'ifmt': iI, 'opcode': 0x23, 'function': 0}
statement_spec["lbu"] = {'ifmt': iI, 'opcode': 0x24, 'function': 0}
statement_spec["lhu"] = {'ifmt': iI, 'opcode': 0x25, 'function': 0}
statement_spec["sb"] = {'ifmt': iI, 'opcode': 0x28, 'function': 0}
statement_spec["sh"] = {'ifmt': iI, 'opcode': 0x29, 'function': 0}
statement_spec["sw"] = {'ifmt': iI, 'opcode': 0x2b, 'function': 0}

# J format: the operand is a label, encoded as a word address

statement_spec["j"] = {'ifmt': iJ, 'opcode': 0x02, 'function': 0}
statement_spec["jal"] = {'ifmt': iJ, 'opcode': 0x03, 'function': 0}

# The null format always produces the all-zero word

statement_spec["nop"] = {'ifmt': iNull, 'opcode': 0x00, 'function': 0}

# -------------------------------------
# Label operands
# -------------------------------------

# Jumps take an absolute word address (byte address / 4). The
# equality branches take a word offset relative to the instruction
# after the branch, and list rt before rs in the canonical operands.

jump_mnemonics = frozenset(
    m for m, x in statement_spec.items() if x['ifmt'] == iJ)
branch_mnemonics = frozenset(["beq", "bne"])

def show_statement_spec(m):
    x = statement_spec.get(m)
    if x:
        return f"{m} ifmt={x['ifmt']} opcode={x['opcode']:#04x} function={x['function']:#04x}"
    common.mode.devlog(f"show_statement_spec: no entry for {m}")
    return f"{m} unknown"
