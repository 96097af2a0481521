from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Paths:
    package_dir: Path
    data_dir: Path
    schema_dir: Path
    log_dir: Path


def get_paths(log_dir: Path | None = None) -> Paths:
    # src/flip7/paths.py -> parent: flip7 (data ships inside the package)
    package_dir = Path(__file__).resolve().parent
    data_dir = package_dir / "data"
    schema_dir = data_dir / "schemas"
    return Paths(
        package_dir=package_dir,
        data_dir=data_dir,
        schema_dir=schema_dir,
        log_dir=log_dir if log_dir is not None else Path.cwd() / "logs",
    )
