"""
Tetration runner: T_b(h) = f^{∘h}(1), f(z) = b^z, at a chosen bit precision.

  tetrate <base> <height> <precision_bits> [--events PATH]

Examples:
  tetrate 0.5 1.5 2048
  tetrate "(0.5 0.5)" 1.5 2048
"""

from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from tetration.errors import ParseError, TetrationError
from tetration.numeric.engine import ComplexEngine
from tetration.runlog.events import SolveLog
from tetration.solver.orchestrator import TetrationSolver


def parse_bits(text: str) -> int:
	"""Return a positive bit count parsed from `text`, or raise ParseError."""
	try:
		bits = int(str(text).strip(), 10)
	except ValueError:
		raise ParseError("invalid precision bits; need positive integer") from None
	if bits <= 0 or bits >= 2 ** 32:
		raise ParseError("invalid precision bits; need positive integer")
	return bits


def report(solver: TetrationSolver, base, height, result) -> List[str]:
	"""Return the printed report lines for a finished solve."""
	eng: ComplexEngine = solver.engine
	d = eng.digits()
	sanity = eng.pow(base, result.value)
	return [
		f"method: {result.method}",
		f"T_b(h) with b={eng.scientific(base, d)}, h={eng.scientific(height, d)}",
		f"precision={eng.prec} bits, printing ~{d} significant digits",
		f"result: {eng.scientific(result.value, d)}",
		f"Re: {eng.real_fixed(result.value, 0)}",
		f"Im: {eng.imag_fixed(result.value, 0)}",
		f"converged: {str(bool(result.converged)).lower()}",
		f"b^(T(h)) (sanity): {eng.scientific(sanity, d)}",
	]


def main(argv: Optional[List[str]] = None) -> int:
	"""
	CLI entry point. Exit status 2 for argument/parse errors, 1 when the
	solve fails, 0 otherwise.
	"""
	p = argparse.ArgumentParser(prog="tetrate", description="Fractional tetration via Koenigs/Schröder linearization")
	p.add_argument("base", type=str)
	p.add_argument("height", type=str)
	p.add_argument("precision_bits", type=str)
	p.add_argument("--events", type=str, default="", help="write the canonical JSONL solve trace to this path")
	args = p.parse_args(argv)

	try:
		prec = parse_bits(args.precision_bits)
		solver = TetrationSolver(prec)
		base = solver.engine.parse(args.base)
		height = solver.engine.parse(args.height)
	except ParseError as exc:
		print(f"tetrate: {exc}", file=sys.stderr)
		return 2

	status = 0
	try:
		result = solver.solve(base, height)
		for line in report(solver, base, height, result):
			print(line)
	except TetrationError as exc:
		print(f"tetrate: {exc}", file=sys.stderr)
		status = 1

	if args.events:
		manifest = SolveLog.build_manifest(args.base, args.height, prec)
		out = SolveLog.write(Path(args.events), manifest, solver.events)
		print(f"[tetrate] events written to {out}")
	return status


if __name__ == "__main__":
	sys.exit(main())
