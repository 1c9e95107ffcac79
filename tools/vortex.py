#!/usr/bin/env python3
"""
CLI wrapper for the modular vortex.

Usage:
    python tools/vortex.py draw                              # 3^k mod 811, figures/vortex_811_3.png
    python tools/vortex.py draw --modulus 97 --multiplier 5 --points --labels
    python tools/vortex.py draw --modulus 97 --multiplier 5 --generator digit_root
    python tools/vortex.py cycle --modulus 10 --multiplier 2  # print roots and cycle
    python tools/vortex.py table --modulus 20                 # period of every multiplier
    python tools/vortex.py -v cycle --modulus 811 --multiplier 3
"""

import argparse
import logging
import os
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from modular_vortex import (
    Vortex, VortexError, InvalidArgumentError, GENERATORS,
    DEFAULT_MODULUS, DEFAULT_MULTIPLIER, DEFAULT_COLOR,
)
from tools.logging_config import setup_logging

logger = logging.getLogger("tools.vortex")

EXIT_INVALID = 2
EXIT_INTERNAL = 3


def cmd_draw(args):
    """Compute and render one vortex to PNG."""
    from tools.render import render_vortex, save

    vortex = Vortex(args.modulus, args.multiplier, args.generator)
    fig, _ = render_vortex(vortex, color=args.color, show_points=args.points,
                           show_labels=args.labels, size=args.size)
    name = args.name or f"vortex_{args.modulus}_{args.multiplier}"
    out = save(fig, name, args.out)
    print(f"Figure saved: {out}")
    return 0


def cmd_cycle(args):
    """Print the generated roots and the detected cycle."""
    result = Vortex(args.modulus, args.multiplier, args.generator).compute()
    print(result.summary())
    if args.roots:
        print(f"roots: {result.roots}")
    return 0


def cmd_table(args):
    """Period and pre-period for every multiplier in a range."""
    start = args.start
    stop = args.stop if args.stop is not None else args.modulus
    if stop <= start:
        raise InvalidArgumentError(f"empty multiplier range [{start}, {stop})")

    print(f"\n{'mult':>6s} {'steps':>7s} {'pre':>5s} {'period':>7s}  cycle")
    print("-" * 60)
    for multiplier in range(start, stop):
        r = Vortex(args.modulus, multiplier, args.generator).compute()
        cycle = " ".join(str(v) for v in r.tail[:8]) + (" ..." if r.period > 8 else "")
        print(f"  {multiplier:>4d} {r.steps:>7d} {r.pre_period:>5d} {r.period:>7d}  {cycle}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        description="Modular vortex CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Debug logging')
    parser.add_argument('--log-file', default=None,
                        help='Also write logs to this file')
    sub = parser.add_subparsers(dest='command')

    def add_common(p, modulus=DEFAULT_MODULUS):
        p.add_argument('--modulus', type=int, default=modulus,
                       help=f'Number of points / ring size (default: {modulus})')
        p.add_argument('--generator', default='exp_mod',
                       choices=sorted(GENERATORS),
                       help='Generation strategy (default: exp_mod)')

    p_draw = sub.add_parser('draw', help='Render a vortex to PNG')
    add_common(p_draw)
    p_draw.add_argument('--multiplier', type=int, default=DEFAULT_MULTIPLIER)
    p_draw.add_argument('--color', default=DEFAULT_COLOR)
    p_draw.add_argument('--points', action='store_true',
                        help='Draw points (modulus <= 200)')
    p_draw.add_argument('--labels', action='store_true',
                        help='Draw labels (modulus <= 100)')
    p_draw.add_argument('--size', type=int, default=800,
                        help='Canvas size in pixels (default: 800)')
    p_draw.add_argument('--name', default=None, help='Output file stem')
    p_draw.add_argument('--out', default=None,
                        help='Output directory (default: figures/)')

    p_cycle = sub.add_parser('cycle', help='Print roots and cycle')
    add_common(p_cycle)
    p_cycle.add_argument('--multiplier', type=int, default=DEFAULT_MULTIPLIER)
    p_cycle.add_argument('--roots', action='store_true',
                         help='Also print the full root sequence')

    p_table = sub.add_parser('table', help='Periods for a range of multipliers')
    add_common(p_table, modulus=20)
    p_table.add_argument('--start', type=int, default=0)
    p_table.add_argument('--stop', type=int, default=None,
                         help='Exclusive upper bound (default: modulus)')
    return parser


COMMANDS = {
    'draw': cmd_draw,
    'cycle': cmd_cycle,
    'table': cmd_table,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    if args.command not in COMMANDS:
        parser.print_help()
        return 0
    try:
        return COMMANDS[args.command](args)
    except InvalidArgumentError as e:
        logger.error("invalid argument: %s", e)
        return EXIT_INVALID
    except VortexError as e:
        logger.error("internal error: %s", e)
        return EXIT_INTERNAL


if __name__ == '__main__':
    sys.exit(main())
