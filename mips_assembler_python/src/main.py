# main.py

import sys
import os
import argparse
from pathlib import Path

# Add the src directory to the Python path
sys.path.insert(0, str(Path(__file__).resolve().parent))

import common
import assembler

# Usage errors and unopenable files both end the run with this status
# before any line is assembled.
EXIT_FAILURE = 1

# Bytes that are not UTF-8 pass through to the listing unchanged
text_encoding = {'encoding': 'utf-8', 'errors': 'surrogateescape'}

class AsmArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")

def make_parser():
    parser = AsmArgumentParser(
        prog=common.PROGRAM_NAME,
        description="Two-pass MIPS assembler producing a listing and an instruction stream")
    parser.add_argument("source", help="Path to the assembly source file")
    parser.add_argument("listing", help="Path of the listing file to write")
    parser.add_argument("instructions", help="Path of the instruction file to write")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose debug logging")
    parser.add_argument("--timing", action="store_true",
                        help="Print the duration of pass 1 in milliseconds")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {common.PROGRAM_VERSION}")
    return parser

def assemble_file(source, listing, instructions):
    """Assemble source and write both outputs. Returns the AsmInfo, or
    None if one of the files cannot be opened."""
    base_name = os.path.basename(source).split('.')[0]
    try:
        with open(source, 'r', **text_encoding) as f, \
             open(listing, 'w', **text_encoding) as lst, \
             open(instructions, 'w', **text_encoding) as ins:
            src_text = f.read()
            asm_info = assembler.assembler(base_name, src_text)
            lst.write(asm_info.listing_text)
            ins.write(asm_info.object_text)
    except OSError as e:
        common.mode.errlog(f"Error: {e}")
        return None
    return asm_info

def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        common.mode.set_trace()
    try:
        asm_info = assemble_file(args.source, args.listing, args.instructions)
    finally:
        common.mode.clear_trace()
    if asm_info is None:
        return EXIT_FAILURE

    if args.timing:
        print(asm_info.pass1_ms)
    if asm_info.n_asm_errors > 0:
        print(f"Assembly completed with {asm_info.n_asm_errors} errors.")
    else:
        print("Assembly successful!")
    return 0

if __name__ == "__main__":
    sys.exit(main())
