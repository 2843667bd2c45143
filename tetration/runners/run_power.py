"""
Complex power runner: z^n = exp(n·log z) at an arbitrary bit precision.
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from tetration.errors import ParseError
from tetration.numeric.engine import ComplexEngine


_MAX_DIGITS = 1 << 20


def main(argv: Optional[List[str]] = None) -> int:
	"""
	CLI entry point for the complex power demo.
	"""
	p = argparse.ArgumentParser(prog="cpow", description="Arbitrary-precision complex power z^n")
	p.add_argument("--base", type=str, default="2+1e-100i", help='complex base, e.g. "2+1e-100i" or "(2 1e-100)"')
	p.add_argument("--exp", type=str, default="2-1e-100i", help='complex exponent, e.g. "2-1e-100i" or "(2 -1e-100)"')
	p.add_argument("--prec", type=int, default=8192, help="precision in bits (both real & imag)")
	p.add_argument("--digits", type=int, default=-1, help="digits for output; -1 = auto from precision")
	p.add_argument("--out", type=str, default="sci", choices=("sci", "fixed"))
	args = p.parse_args(argv)

	try:
		eng = ComplexEngine(int(args.prec))
		z = eng.parse(args.base)
		n = eng.parse(args.exp)
	except ParseError as exc:
		print(f"cpow: {exc}", file=sys.stderr)
		return 1

	res = eng.pow(z, n)
	d = int(args.digits)
	if d < 0:
		d = eng.digits()
	d = min(d, _MAX_DIGITS)

	print(f"z = {eng.scientific(z, d)}")
	print(f"n = {eng.scientific(n, d)}")
	print(f"precision = {eng.prec} bits, print digits ≈ {d}")
	if args.out == "fixed":
		print(f"z^n (fixed, {d} fractional digits): {eng.fixed(res, d)}")
	else:
		print(f"z^n (scientific, {d} significant digits): {eng.scientific(res, d)}")
	print(f"Re(z^n) (fixed, 0 frac): {eng.real_fixed(res, 0)}")
	print(f"Im(z^n) (fixed, 0 frac): {eng.imag_fixed(res, 0)}")
	print(f"|z^n| = {eng.abs_scientific(res, d)}, arg(z^n) = {eng.arg_scientific(res, d)}")
	return 0


if __name__ == "__main__":
	sys.exit(main())
