# assembler.py

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

# ---------------------------------------------------------------------
# assembler.py translates assembly language to machine language
# ---------------------------------------------------------------------

import re
import time
import common
import state as st
import architecture as arch
import arithmetic as arith

# ----------------------------------------------------------------------
# Assembly language statement
# ----------------------------------------------------------------------

def mk_asm_stmt(line_number, address, src_line):
    return {
        "lineNumber": line_number,
        "address": address,
        "srcLine": src_line,
        "fieldLabel": '',      # label declaration as written, e.g. "loop:"
        "labelName": '',       # the name alone, as in the symbol table
        "fieldCode": '',       # text after the label, without the comment
        "fieldComment": '',    # from the comment character to end of line
        "hasLabel": False,
        "labelSingle": False,  # label with no instruction after it
        "shape": None,
        "tokens": [],          # canonical tokens, mnemonic first
        "codeWord": None,
        "errors": []
    }

# ----------------------------------------------------------------------
# Error messages
# ----------------------------------------------------------------------

def mk_err_msg(ma, s, kind, err):
    common.mode.devlog(f"{kind}: {err}")
    s["errors"].append((kind, err))
    ma.n_asm_errors += 1

# ----------------------------------------------------------------------
# Assembler
# ----------------------------------------------------------------------

def assembler(base_name, src_text):
    ai = st.AsmInfo(base_name, src_text)
    start = time.perf_counter()
    asm_pass1(ai)
    ai.pass1_ms = int((time.perf_counter() - start) * 1000)
    asm_pass2(ai)
    ai.listing_text = "".join(x + "\n" for x in ai.listing)
    ai.object_text = "".join(x + "\n" for x in ai.object_code)
    common.mode.devlog(ai.show_short())
    return ai

# ----------------------------------------------------------------------
# Splitting a line into fields
# ----------------------------------------------------------------------

def split_comment(line):
    """Return (code, comment); the comment keeps its leading '#'."""
    i = line.find(arch.comment_char)
    if i == -1:
        return line, ''
    return line[:i], line[i:]

def split_label(code):
    """Return (declaration, name, rest) for the comment-free part of a
    line. A label is declared by a first token that contains a colon
    with a non-empty name before it; "loop:" and "loop:add" both
    declare loop. Without a label the declaration and name are empty
    and rest is the whole stripped code."""
    xs = code.strip()
    parts = xs.split(None, 1)
    if parts:
        name, colon, after = parts[0].partition(arch.label_char)
        if colon and name:
            rest = after
            if len(parts) > 1:
                rest = rest + " " + parts[1]
            return name + colon, name, rest.strip()
    return '', '', xs

def split_operands(xs):
    return [x.strip() for x in xs.split(",")]

# ----------------------------------------------------------------------
# Assembler Pass 1
# ----------------------------------------------------------------------

# Pass 1 only assigns addresses to labels. Every line with code takes
# one instruction slot, except a line holding nothing but a label,
# whose label names the address of the next instruction. Pass 1 never
# reports errors: a malformed line simply takes its slot.

def asm_pass1(ma):
    common.mode.devlog(f"Assembler Pass 1: {len(ma.asm_src_lines)} source lines")
    ma.location_counter = 0
    for i, line in enumerate(ma.asm_src_lines):
        code, _ = split_comment(line)
        if not code.strip():
            continue
        _, name, rest = split_label(code)
        if name:
            if name in ma.symbol_table:
                common.mode.devlog(f"Pass 1 line {i} redefines {name}")
            ma.symbol_table[name] = ma.location_counter
            common.mode.devlog(f"Pass 1 line {i} label {name} = {arith.show_word(ma.location_counter)}")
            if not rest:
                continue
        ma.location_counter += arch.instr_size
    ma.pass1_end = ma.location_counter

# ----------------------------------------------------------------------
# Parser
# ----------------------------------------------------------------------

base_offset_parser = re.compile(r"([+-]?[0-9]+)\((\S+)\)")

def parse_asm_line(ma, s):
    common.mode.devlog(f"parse_asm_line {s['lineNumber']} /{s['srcLine']}/")
    code, s["fieldComment"] = split_comment(s["srcLine"])
    if not code.strip():
        return
    s["fieldLabel"], s["labelName"], s["fieldCode"] = split_label(code)
    s["hasLabel"] = bool(s["labelName"])
    s["labelSingle"] = s["hasLabel"] and not s["fieldCode"]
    if s["fieldCode"]:
        classify_code(ma, s)
    common.mode.devlog(f"  fieldLabel = {s['hasLabel']} /{s['fieldLabel']}/")
    common.mode.devlog(f"  fieldCode = /{s['fieldCode']}/")
    common.mode.devlog(f"  shape = {s['shape']} tokens = {s['tokens']}")
    common.mode.devlog(f"  fieldComment = /{s['fieldComment']}/")

def find_shape(operands):
    if any(len(x.split()) != 1 for x in operands):
        return arch.sUnrecognized
    k = len(operands)
    if k == 2 and base_offset_parser.fullmatch(operands[1]):
        return arch.sBaseOffsetOperand
    if k == 0:
        return arch.sNoOperand
    elif k == 1:
        return arch.sSingleOperand
    elif k == 3:
        return arch.sTripleOperand
    return arch.sUnrecognized

def classify_code(ma, s):
    parts = s["fieldCode"].split(None, 1)
    mnemonic = parts[0]
    operands = split_operands(parts[1]) if len(parts) > 1 else []
    shape = find_shape(operands)
    s["shape"] = shape
    if shape == arch.sNoOperand:
        s["tokens"] = [mnemonic]
    elif shape == arch.sSingleOperand:
        if mnemonic in arch.jump_mnemonics:
            a = label_address(ma, s, operands[0])
            s["tokens"] = [mnemonic, str(a // arch.instr_size)]
        else:
            s["tokens"] = [mnemonic, operands[0]]
    elif shape == arch.sBaseOffsetOperand:
        m = base_offset_parser.fullmatch(operands[1])
        offset, base = m.group(1), m.group(2)
        s["tokens"] = [mnemonic, operands[0], base, offset]
    elif shape == arch.sTripleOperand:
        if mnemonic in arch.branch_mnemonics:
            a = label_address(ma, s, operands[2])
            offset = (a - s["address"] - arch.instr_size) // arch.instr_size
            s["tokens"] = [mnemonic, operands[1], operands[0], str(offset)]
        else:
            s["tokens"] = [mnemonic] + operands
    else:
        s["tokens"] = []
        mk_err_msg(ma, s, st.ErrUnrecognizedLineShape,
                   "Error: Wrong amount of arguments, operation not supported.")

def label_address(ma, s, name):
    a = ma.symbol_table.get(name)
    if a is None:
        mk_err_msg(ma, s, st.ErrUndefinedLabel, f"Error: Label {name} is not defined")
        return 0
    return a

# ----------------------------------------------------------------------
# Operands
# ----------------------------------------------------------------------

reg_parser = re.compile(r"\$(zero|[0-9]{2}|[a-z][0-9]|[a-z]{2})")

def require_reg(ma, s, field):
    """Return the index of register field, or 0 after reporting an
    error."""
    if not reg_parser.fullmatch(field):
        mk_err_msg(ma, s, st.ErrMalformedRegister, f"Error: Register string invalid: {field}")
        return 0
    if field[1].isdigit():
        n = int(field[1:])
        if n >= arch.n_registers:
            mk_err_msg(ma, s, st.ErrRegisterOutOfRange, f"Error: Register out of range: {n}")
            return 0
        return n
    result = arch.register_abbrev.get(field)
    if result is None:
        mk_err_msg(ma, s, st.ErrUnknownAbbreviation,
                   f"Error: Register abbreviation not supported: {field}")
        return 0
    common.mode.devlog(f"require_reg field={field} result={result}")
    return result

def require_int(ma, s, field):
    k = arith.parse_int(field)
    if k is None:
        mk_err_msg(ma, s, st.ErrMalformedImmediate, f"Error: Immediate value invalid: {field}")
        return 0
    return k

# ----------------------------------------------------------------------
# Instruction words
# ----------------------------------------------------------------------

# The shift amount is not masked: a value outside 0..31 spills into
# the neighbouring fields.

def mk_word_r(op, rs, rt, rd, shamt, funct):
    return arith.limit32((op << 26) | (rs << 21) | (rt << 16) | (rd << 11) | (shamt << 6) | funct)

def mk_word_i(op, rs, rt, imm):
    return arith.limit32((op << 26) | (rs << 21) | (rt << 16) | arith.limit16(imm))

def mk_word_j(op, target):
    return arith.limit32((op << 26) | arith.limit26(target))

def wrong_argument_count(ma, s, ifmt, argument_cnt):
    mk_err_msg(ma, s, st.ErrWrongArgumentCount,
               f"Error: Wrong amount of arguments for instruction type "
               f"{arch.format_letter[ifmt]}: {argument_cnt}.")
    return 0

def encode_instruction(ma, s, tokens):
    """Translate canonical tokens (mnemonic first) into a 32-bit word.
    Errors are reported on s and give 0, either for the whole word or
    for the offending field."""
    argument_cnt = len(tokens)
    if argument_cnt == 0:
        mk_err_msg(ma, s, st.ErrEmptyInstruction,
                   "Error: Empty instruction can't be converted to binary.")
        return 0

    op = arch.statement_spec.get(tokens[0])
    if op is None:
        mk_err_msg(ma, s, st.ErrUnsupportedInstruction,
                   f"Error: Instruction {tokens[0]} is not supported.")
        return 0
    ifmt = op["ifmt"]
    common.mode.devlog(f"encode {tokens} {arch.show_statement_spec(tokens[0])}")

    if ifmt == arch.iRRR:
        if argument_cnt == 2:
            rs = require_reg(ma, s, tokens[1])
            return mk_word_r(op["opcode"], rs, 0, 0, 0, op["function"])
        if argument_cnt != 4:
            return wrong_argument_count(ma, s, ifmt, argument_cnt)
        rs = require_reg(ma, s, tokens[2])
        rt = require_reg(ma, s, tokens[3])
        rd = require_reg(ma, s, tokens[1])
        return mk_word_r(op["opcode"], rs, rt, rd, 0, op["function"])
    elif ifmt == arch.iRRS:
        if argument_cnt != 4:
            return wrong_argument_count(ma, s, ifmt, argument_cnt)
        rt = require_reg(ma, s, tokens[2])
        rd = require_reg(ma, s, tokens[1])
        shamt = require_int(ma, s, tokens[3])
        return mk_word_r(op["opcode"], 0, rt, rd, shamt, op["function"])
    elif ifmt == arch.iI:
        if argument_cnt != 3 and argument_cnt != 4:
            return wrong_argument_count(ma, s, ifmt, argument_cnt)
        rs = require_reg(ma, s, tokens[2])
        rt = require_reg(ma, s, tokens[1])
        imm = require_int(ma, s, tokens[3]) if argument_cnt == 4 else 0
        return mk_word_i(op["opcode"], rs, rt, imm)
    elif ifmt == arch.iJ:
        if argument_cnt != 2:
            return wrong_argument_count(ma, s, ifmt, argument_cnt)
        target = require_int(ma, s, tokens[1])
        return mk_word_j(op["opcode"], target)
    else:
        return 0

# ----------------------------------------------------------------------
# Pass 2
# ----------------------------------------------------------------------

def asm_pass2(ma):
    common.mode.devlog('Assembler Pass 2')
    ma.location_counter = 0
    for i, line in enumerate(ma.asm_src_lines):
        s = mk_asm_stmt(i, ma.location_counter, line)
        ma.asm_stmt.append(s)
        parse_asm_line(ma, s)
        if s["tokens"]:
            s["codeWord"] = encode_instruction(ma, s, s["tokens"])
        elif s["shape"] == arch.sUnrecognized:
            s["codeWord"] = 0
        emit_listing_lines(ma, s)
        if s["codeWord"] is not None:
            ma.object_code.append(arith.show_word(s["codeWord"]))
            ma.location_counter += arch.instr_size
    if ma.location_counter != ma.pass1_end:
        common.indicate_error(f"Pass 2 ended at {arith.show_word(ma.location_counter)}"
                              f" but pass 1 ended at {arith.show_word(ma.pass1_end)}")
    st.display_symbol_table(ma)

# ----------------------------------------------------------------------
# Listing
# ----------------------------------------------------------------------

label_width = 10
label_gutter = " " * 4
no_label_gap = " " * 18
no_code_indent = " " * 28
comment_gap = " " * 4

def listing_line(s):
    """Listing text for a statement, or None if nothing is shown."""
    if s["tokens"]:
        xs = f"{arith.show_word(s['address'])}    {arith.show_word(s['codeWord'])}"
        if s["fieldLabel"]:
            xs += label_gutter + s["fieldLabel"].ljust(label_width) + label_gutter
        else:
            xs += no_label_gap
        xs += "".join(t + " " for t in s["tokens"])
        if s["fieldComment"]:
            xs += comment_gap + s["fieldComment"]
        return xs
    if s["shape"] == arch.sUnrecognized:
        return None
    if not s["fieldLabel"] and not s["fieldComment"]:
        return None
    xs = no_code_indent + s["fieldLabel"]
    if s["fieldComment"]:
        if s["fieldLabel"]:
            xs += comment_gap
        xs += s["fieldComment"]
    return xs

def emit_listing_lines(ma, s):
    for _, err in s["errors"]:
        ma.listing.append(err)
    xs = listing_line(s)
    if xs is not None:
        ma.listing.append(xs)
