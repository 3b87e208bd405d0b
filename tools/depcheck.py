from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "src" / "menuhub"

_FRAMEWORKS = {
    "fastapi",
    "starlette",
    "sqlalchemy",
    "alembic",
    "redis",
    "httpx",
    "requests",
    "passlib",
    "jose",
    "opentelemetry",
}

LAYER_RULES: dict[str, frozenset[str]] = {
    "domain": frozenset(
        _FRAMEWORKS
        | {
            "pydantic",
            "prometheus_client",
            "menuhub.application",
            "menuhub.infrastructure",
            "menuhub.api",
        }
    ),
    "application": frozenset(_FRAMEWORKS | {"menuhub.infrastructure", "menuhub.api"}),
}


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str
    layer: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _matches_forbidden(module: str, forbidden_modules: frozenset[str]) -> bool:
    for forbidden in forbidden_modules:
        if module == forbidden or module.startswith(f"{forbidden}."):
            return True
    return False


def _scan_file(file_path: Path, layer: str) -> list[Violation]:
    forbidden_modules = LAYER_RULES[layer]
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    violations: list[Violation] = []

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules = [(alias.name, node.lineno) for alias in node.names]
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            modules = [(node.module, node.lineno)]
        else:
            continue
        for module, line in modules:
            if _matches_forbidden(module, forbidden_modules):
                violations.append(
                    Violation(file_path=file_path, line=line, module=module, layer=layer)
                )

    return violations


def find_violations(targets: Sequence[tuple[Path, str]]) -> list[Violation]:
    violations: list[Violation] = []
    for path, layer in targets:
        for file_path in _python_files(path):
            violations.extend(_scan_file(file_path, layer))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Layer import policy check for src/menuhub (domain and application)."
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan (repeatable). Defaults to every checked layer of src/menuhub.",
    )
    parser.add_argument(
        "--layer",
        choices=sorted(LAYER_RULES),
        default="domain",
        help="Rule set applied to --path entries (default: domain).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.path:
        targets = [(Path(item), args.layer) for item in args.path]
    else:
        targets = [(PACKAGE_ROOT / layer, layer) for layer in LAYER_RULES]

    violations = find_violations(targets)
    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"[{violation.layer}] {violation.file_path}:{violation.line} -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
