"""
This module renders solve traces as canonical JSON and JSONL. Events carry a
logical timestamp (their index in the solve), a kind and a JSON-safe payload;
serialization uses sorted keys and fixed separators so identical solves
produce byte-identical logs.
"""

from __future__ import annotations
import hashlib
import json
import platform
import sys
from pathlib import Path
from typing import Dict, Iterable, List

import mpmath
import numpy as np

from tetration.solver.config import LogEvent


class SolveLog:
	"""
	Class facade for event canonicalization, manifests and JSONL output.
	"""

	@staticmethod
	def canonical_json(o: dict) -> str:
		"""
		Return a canonical JSON string with sorted keys and fixed separators.
		"""
		return json.dumps(o, sort_keys=True, ensure_ascii=False, separators=(",", ":"))

	@staticmethod
	def sha256_hex(b: bytes) -> str:
		h = hashlib.sha256()
		h.update(b)
		return h.hexdigest()

	@staticmethod
	def env_block() -> Dict[str, str]:
		"""
		Return a stable environment descriptor with fixed keys and string values.
		"""
		return {
			"python_version": ".".join(str(x) for x in sys.version_info[:3]),
			"mpmath_version": str(mpmath.__version__),
			"mpmath_backend": str(mpmath.libmp.BACKEND),
			"numpy_version": np.__version__,
			"system": platform.system(),
			"machine": platform.machine(),
			"python_impl": platform.python_implementation(),
		}

	@staticmethod
	def event_dict(event: LogEvent) -> Dict[str, object]:
		return {"ts": event.ts, "kind": event.kind, "payload": event.payload}

	@staticmethod
	def build_manifest(base: str, height: str, prec: int) -> Dict[str, object]:
		"""
		Build a run manifest for one solve with a stable hash over its inputs
		and environment.
		"""
		core = {
			"base": str(base),
			"height": str(height),
			"prec": int(prec),
			"env": SolveLog.env_block(),
		}
		out = dict(core)
		out["manifest_hash"] = SolveLog.sha256_hex(SolveLog.canonical_json(core).encode("utf-8"))
		return out

	@staticmethod
	def to_jsonl(events: Iterable[LogEvent]) -> str:
		"""
		Serialize events to canonical JSONL (one canonical object per line).
		Raises ValueError for an event that is not {ts:int, kind:str, payload:dict}.
		"""
		lines: List[str] = []
		for e in events:
			d = SolveLog.event_dict(e)
			if not SolveLog.validate_event_shape(d):
				raise ValueError(f"malformed log event: {d!r}")
			lines.append(SolveLog.canonical_json(d))
		return "\n".join(lines)

	@staticmethod
	def validate_event_shape(event: Dict[str, object]) -> bool:
		"""
		Return True iff event has exactly {ts:int, kind:str, payload:dict}.
		"""
		if not isinstance(event, dict):
			return False
		if set(event.keys()) != {"ts", "kind", "payload"}:
			return False
		if not isinstance(event["ts"], int):
			return False
		if not isinstance(event["kind"], str):
			return False
		return isinstance(event["payload"], dict)

	@staticmethod
	def write(path: Path, manifest: Dict[str, object], events: Iterable[LogEvent]) -> Path:
		"""
		Write the manifest as the first line followed by the event lines.
		"""
		p = Path(path)
		p.parent.mkdir(parents=True, exist_ok=True)
		body = SolveLog.canonical_json({"manifest": manifest})
		rest = SolveLog.to_jsonl(events)
		if rest:
			body = body + "\n" + rest
		p.write_text(body + "\n", encoding="utf-8")
		return p
