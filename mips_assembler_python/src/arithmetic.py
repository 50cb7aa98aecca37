# arithmetic.py

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

# ------------------------------------------------------------------------
# arithmetic.py defines word representation, data conversions, and
# operations on fields of a word
# ------------------------------------------------------------------------

import re
import common

word16mask = 0x0000FFFF
word26mask = 0x03FFFFFF
word32mask = 0xFFFFFFFF

# ------------------------------------------------------------------------
# Ensuring and asserting validity of words
# ------------------------------------------------------------------------

# All operations that produce a word should produce a valid word,
# which is represented as a nonnegative integer. For a k-bit word,
# the value x must satisfy 0 <= x < 2^k. Negative values reach a
# field through two's complement truncation.

def limit16(x):
    return x & word16mask

def limit26(x):
    return x & word26mask

def limit32(x):
    return x & word32mask

# ------------------------------------------------------------------------
# Operating on fields of a word
# ------------------------------------------------------------------------

# Fields are given by the indices of their most and least significant
# bits, inclusive, as in the architecture tables.

def field_mask(hi, lo):
    return ((1 << (hi - lo + 1)) - 1) << lo

def get_field(w, hi, lo):
    return (w & field_mask(hi, lo)) >> lo

# ------------------------------------------------------------------------
# Hexadecimal notation
# ------------------------------------------------------------------------

def word_to_hex8(x):
    return f"{limit32(x):08x}"

def show_word(w):
    return f"0x{word_to_hex8(w)}"

# ------------------------------------------------------------------------
# Integer literals
# ------------------------------------------------------------------------

# Decimal with an optional sign, or a 0x, 0o or 0b prefixed literal.
# Leading zeros are allowed in decimal ("010" is ten).

int_parser = re.compile(r"[+-]?[0-9]+")
prefixed_int_parser = re.compile(r"[+-]?0[xXoObB][0-9a-fA-F]+")

def parse_int(xs):
    """Return the integer value of xs, or None if it is not an integer
    literal."""
    if int_parser.fullmatch(xs):
        base = 10
    elif prefixed_int_parser.fullmatch(xs):
        base = 0
    else:
        return None
    # int() also refuses decimal strings beyond the interpreter's digit limit
    try:
        return int(xs, base)
    except ValueError:
        common.mode.devlog(f"parse_int: cannot convert {xs[:20]}")
        return None
