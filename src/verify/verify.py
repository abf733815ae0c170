"""Determinism verification for bindscan artifacts."""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from artifacts.utils import _load_jsonl
from artifacts.write import generate_all_artifacts
from contract.artifacts import ARTIFACT_SPECS

if TYPE_CHECKING:
    from settings.config import BindscanConfig


@dataclass(frozen=True)
class RecordMismatch:
    """First differing record of a mismatched artifact (1-indexed line)."""

    filename: str
    line: int
    expected: dict[str, object] | None
    actual: dict[str, object] | None


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    details: tuple[RecordMismatch, ...] = field(default_factory=tuple)


def _first_difference(original: Path, regenerated: Path) -> RecordMismatch:
    expected_records = _load_jsonl(original)
    actual_records = _load_jsonl(regenerated)
    for index in range(max(len(expected_records), len(actual_records))):
        expected = expected_records[index] if index < len(expected_records) else None
        actual = actual_records[index] if index < len(actual_records) else None
        if expected != actual:
            return RecordMismatch(original.name, index + 1, expected, actual)
    # Same records, different bytes (key order or whitespace).
    return RecordMismatch(original.name, 0, None, None)


def verify_determinism(
    *,
    root: Path,
    artifacts_dir: Path,
    config: BindscanConfig | None = None,
) -> DeterminismResult:
    """Verify that existing artifacts match a fresh scan of ``root``.

    Regenerates the contract artifacts into a temporary directory and compares
    them byte-for-byte with those in ``artifacts_dir``. Other files in the
    directory are ignored.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    missing: list[str] = []
    mismatches: list[str] = []
    details: list[RecordMismatch] = []

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        generate_all_artifacts(root=root, out_dir=temp_path, config=config)

        for spec in ARTIFACT_SPECS.values():
            original_path = artifacts_dir / spec.filename
            regenerated_path = temp_path / spec.filename
            if not original_path.is_file():
                missing.append(spec.filename)
                continue
            if not filecmp.cmp(original_path, regenerated_path, shallow=False):
                mismatches.append(spec.filename)
                details.append(_first_difference(original_path, regenerated_path))

    ok = not missing and not mismatches
    return DeterminismResult(
        ok=ok,
        mismatches=tuple(sorted(mismatches)),
        missing=tuple(sorted(missing)),
        details=tuple(details),
    )
