from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.generators import BindingsGenerator
from contract.artifacts import BINDINGS_JSONL, DIAGNOSTICS_JSONL
from model.diagnostics import Severity
from settings.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from settings.config import BindscanConfig


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: BindscanConfig | None = None,
) -> dict[str, object]:
    """Generate the binding artifacts for a repository.

    Args:
        root: Root directory of the repository to scan
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration; loaded from bindscan.toml when omitted

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    bindings, diagnostics = BindingsGenerator().generate(
        root=root, out_dir=out_dir, config=config
    )

    return {
        "binding_count": len(bindings),
        "files_with_bindings": len({record.path for record in bindings}),
        "diagnostic_count": len(diagnostics),
        "warning_count": sum(
            1 for record in diagnostics if record.severity is Severity.WARNING
        ),
        "artifacts": [
            str(out_dir / name) for name in (BINDINGS_JSONL, DIAGNOSTICS_JSONL)
        ],
    }
