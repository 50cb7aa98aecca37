# common.py

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

# ----------------------------------------------------------------------
# common.py
# ----------------------------------------------------------------------

PROGRAM_NAME = 'mips-assembler'
PROGRAM_VERSION = '0.1.0'

def stacktrace():
    import traceback
    traceback.print_stack()

# ----------------------------------------------------------------------
# Trace mode
# ----------------------------------------------------------------------

# Developer tracing is off by default. It is switched on for one run
# with the --verbose option and prints to stdout, never to the
# listing or instruction files.

class Mode:
    def __init__(self):
        self.trace = False
        self.show_err = True

    def set_trace(self):
        self.trace = True

    def clear_trace(self):
        self.trace = False

    def devlog(self, xs):
        if self.trace:
            print(xs)

    def errlog(self, xs):
        if self.show_err:
            print(xs)

mode = Mode()

# ----------------------------------------------------------------------
# Logging error message
# ----------------------------------------------------------------------

# Reserved for internal failures; errors in the assembly source are
# reported in the listing instead.

def indicate_error(xs):
    print(f"\033[91m\033[1m{xs}\033[0m") # ANSI escape codes for red and bold
    if mode.trace:
        stacktrace()
