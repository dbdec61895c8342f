#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
import os
import sys

from .config import (COLOR_MODES, DEFAULT_BRIGHTNESS, DEFAULT_CELL_SIZE, DEFAULT_CONTRAST,
                     ConversionConfig)
from .convert import convert
from .decode import open_image
from .errors import DecodeError, GlyphArtError
from .glyphs import GlyphTable, default_glyph_table
from .greyscale import DEFAULT_GREYSCALE, greyscale_names


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="glyphart",
                                description="Image -> text art, glyphs picked by measured ink coverage")
    p.add_argument("--input", help="input image (png, jpeg, ...)")
    p.add_argument("--output", default="-", help="output text file ('-' for stdout, default)")
    p.add_argument("--cell-size", type=int, default=DEFAULT_CELL_SIZE,
                   help=f"source pixels per glyph, width and height (default={DEFAULT_CELL_SIZE})")
    p.add_argument("--contrast", type=float, default=DEFAULT_CONTRAST,
                   help=f"contrast -1..1 (default={DEFAULT_CONTRAST})")
    p.add_argument("--brightness", type=float, default=DEFAULT_BRIGHTNESS,
                   help=f"brightness -1..1 (default={DEFAULT_BRIGHTNESS})")
    p.add_argument("--greyscale", default=DEFAULT_GREYSCALE,
                   help=f"greyscale function name (default={DEFAULT_GREYSCALE!r}, see --list-greyscale)")
    p.add_argument("--color-mode", choices=COLOR_MODES, default="inverted",
                   help="normal: black font on white bg, inverted: white font on black bg (default)")
    p.add_argument("--charset", type=str, default=None,
                   help="characters from dark to light, used instead of the measured glyph table")
    p.add_argument("--list-greyscale", action="store_true", help="list greyscale functions and exit")
    p.add_argument("--print-table", action="store_true", help="print the measured glyph table and exit")
    return p.parse_args(argv)


def write_output(path, text):
    if path == "-":
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    tmp_path = path + ".tmp"
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except OSError:
        try:
            os.remove(tmp_path)
        except FileNotFoundError:
            pass
        raise


def main(argv=None):
    args = parse_args(argv)

    if args.list_greyscale:
        for name in greyscale_names():
            print(name)
        return 0

    if args.print_table:
        print(default_glyph_table().chars)
        return 0

    if not args.input:
        print("Error: --input is required", file=sys.stderr)
        return 1

    try:
        cfg = ConversionConfig.from_args(args)
        table = GlyphTable.from_chars(args.charset) if args.charset else default_glyph_table()
    except GlyphArtError as e:
        print("Error: bad settings:", e, file=sys.stderr)
        return 1

    try:
        img = open_image(args.input)
    except (OSError, DecodeError) as e:
        print("Error: cannot open input:", e, file=sys.stderr)
        return 1

    art = convert(img, cfg, table)
    if not art:
        print(f"[warn] image {img.width}x{img.height} is smaller than one {cfg.cell_size}px cell, nothing to draw",
              file=sys.stderr)

    try:
        write_output(args.output, art)
    except OSError as e:
        print("Error: cannot write output:", e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
