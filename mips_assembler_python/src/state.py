# state.py

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

# -------------------------------------------------------------------------
# state.py defines the state of one assembly run: the source, the
# symbol table, the per-line statements, and the generated listing and
# instruction stream.
# -------------------------------------------------------------------------

import common
import arithmetic as arith

# -------------------------------------------------------------------------
# Error kinds
# -------------------------------------------------------------------------

# Every error is recoverable. It is recorded on the statement where it
# occurred and printed in the listing just before that statement's
# listing line.

ErrMalformedRegister = "MalformedRegister"
ErrRegisterOutOfRange = "RegisterOutOfRange"
ErrUnknownAbbreviation = "UnknownAbbreviation"
ErrUnsupportedInstruction = "UnsupportedInstruction"
ErrWrongArgumentCount = "WrongArgumentCount"
ErrUnrecognizedLineShape = "UnrecognizedLineShape"
ErrEmptyInstruction = "EmptyInstruction"
ErrMalformedImmediate = "MalformedImmediate"
ErrUndefinedLabel = "UndefinedLabel"

# -------------------------------------------------------------------------
# Source text
# -------------------------------------------------------------------------

def split_lines(txt):
    return txt.split("\n")

def remove_cr(xs):
    return xs.replace("\r", "")

# ----------------------------------------------------------------------
# Assembler information record
# ----------------------------------------------------------------------

class AsmInfo:
    def __init__(self, base_name, src_text):
        self.asm_mod_name = base_name
        self.asm_src_lines = split_lines(remove_cr(src_text))

        # Pass 1 writes the symbol table; pass 2 only reads it
        self.symbol_table = {}
        self.location_counter = 0
        self.pass1_end = 0
        self.pass1_ms = 0

        self.asm_stmt = []
        self.n_asm_errors = 0

        self.listing = []          # listing lines, without newlines
        self.object_code = []      # instruction stream lines
        self.listing_text = ""
        self.object_text = ""

    def errors(self):
        """All (kind, message) pairs, in source order."""
        return [e for s in self.asm_stmt for e in s["errors"]]

    def error_kinds(self):
        return [kind for kind, _ in self.errors()]

    def show_short(self):
        xs = "AsmInfo\n"
        show_src = "\n".join(self.asm_src_lines[:4])
        show_obj = "\n".join(self.object_code[:4])
        xs += f" asm_mod_name={self.asm_mod_name}\n"
        xs += f" {len(self.symbol_table)} symbols, {self.n_asm_errors} errors\n"
        xs += show_src + "\n"
        xs += show_obj + "\n"
        return xs

# ----------------------------------------------------------------------
# Symbol table
# ----------------------------------------------------------------------

symbol_table_header = "Symbols"

def symbol_table_lines(ma):
    xs = ["", symbol_table_header]
    syms = sorted(ma.symbol_table.keys())
    common.mode.devlog(f"Symbol table keys = {syms}")
    for symkey in syms:
        a = ma.symbol_table[symkey]
        xs.append(f"{symkey.ljust(13)} {arith.show_word(a)}")
    return xs

def display_symbol_table(ma):
    ma.listing.extend(symbol_table_lines(ma))
