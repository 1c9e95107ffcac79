#!/usr/bin/env python3
"""
Modular Vortex Quickstart - Run this to verify the module and see examples.

Usage:
    pip install -e .
    python quickstart.py
"""

print("=" * 70)
print("MODULAR VORTEX - QUICKSTART")
print("=" * 70)

from modular_vortex import (
    Vortex, detect_cycle, generate_roots, digit_root, exp_digit_root,
)
print("\n[OK] Module imported successfully")

# Small worked examples
print("\n" + "-" * 70)
print("SEQUENCES AND CYCLES")
print("-" * 70)

for multiplier, modulus in [(2, 10), (1, 7), (2, 12), (6, 36), (3, 811)]:
    roots = generate_roots(multiplier, modulus)
    tail = detect_cycle(roots)
    shown = roots if len(roots) <= 12 else roots[:12] + ['...']
    print(f"  {multiplier}^k mod {modulus:<4d} roots={shown}")
    print(f"  {'':14s} period={len(tail)}  pre_period={roots.index(roots[-1])}")

# Digit-root toolkit
print("\n" + "-" * 70)
print("DIGIT ROOTS")
print("-" * 70)
print(f"  digit_root(9875, 10)       = {digit_root(9875, 10)}")
print(f"  exp_digit_root(2, 100, 10) = {exp_digit_root(2, 100, 10)}")
print(f"  digit_root(2**100, 10)     = {digit_root(2 ** 100, 10)}")

# Period table for one modulus
print("\n" + "-" * 70)
print("PERIODS MOD 811 (first 10 multipliers)")
print("-" * 70)
print("\n{:<10} | {:>8} | {:>10}".format("Multiplier", "Period", "Pre-period"))
print("-" * 35)
for m in range(10):
    r = Vortex(811, m).compute()
    print("{:<10} | {:>8} | {:>10}".format(m, r.period, r.pre_period))

# Render the default vortex
print("\n" + "-" * 70)
print("RENDERING")
print("-" * 70)
from tools.render import render_vortex, save
fig, _ = render_vortex(Vortex(811, 3))
out = save(fig, "quickstart_vortex_811_3")
print(f"  [OK] {out}")

print("\n" + "=" * 70)
print("QUICKSTART COMPLETE")
print("=" * 70)
print("""
Next steps:
  - python tools/vortex.py draw --modulus 97 --multiplier 5 --points --labels
  - python tools/vortex.py cycle --modulus 10 --multiplier 2 --roots
  - python tools/vortex.py table --modulus 20
  - python -m pytest tests/
""")
