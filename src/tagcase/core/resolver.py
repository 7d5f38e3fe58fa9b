import logging
import os
import shutil
import subprocess
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from tagcase.core.constraints import is_ignored, matches_filename
from tagcase.core.errors import ResolutionError
from tagcase.core.ports.resolver import TargetResolver
from tagcase.models import SourceFile

logger = logging.getLogger(__name__)

_GO_SUFFIX = ".go"
_TEST_SUFFIX = "_test.go"
_RECURSIVE_WILDCARD = "..."
_SKIPPED_DIR_NAMES = frozenset({"testdata", "vendor"})
_GO_LIST_FORMAT = "{{.Dir}}{{range .GoFiles}}\t{{.}}{{end}}"


def display_path(path: str, cwd: str) -> str:
    """Render ``path`` as ``./relative`` when it lives under ``cwd``."""
    prefix = cwd.rstrip(os.sep) + os.sep
    if path.startswith(prefix):
        return "." + os.sep + path[len(prefix) :]
    return path


def _to_source_files(paths: Iterable[Path], cwd: Path) -> list[SourceFile]:
    seen: set[str] = set()
    files: list[SourceFile] = []
    for path in paths:
        key = str(path)
        if key in seen:
            continue
        seen.add(key)
        files.append(SourceFile(path=key, display_path=display_path(key, str(cwd))))
    return files


def _is_package_file(path: Path) -> bool:
    name = path.name
    if not name.endswith(_GO_SUFFIX) or name.startswith((".", "_")):
        return False
    return not name.endswith(_TEST_SUFFIX)


def _satisfies_constraints(path: Path) -> bool:
    if not matches_filename(path.name) or is_ignored(path):
        logger.debug("Skipping %s: excluded by build constraints", path)
        return False
    return True


def _package_files(directory: Path) -> list[Path]:
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and _is_package_file(p) and _satisfies_constraints(p)),
        key=lambda p: p.name,
    )


def _walk_package_dirs(base: Path) -> Iterator[Path]:
    for dirpath, dirnames, _ in os.walk(base):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith((".", "_")) and d not in _SKIPPED_DIR_NAMES)
        yield Path(dirpath)


def find_module(start_dir: Path) -> tuple[str, Path] | None:
    """Return ``(module path, module root)`` of the nearest ``go.mod`` above ``start_dir``."""
    for directory in (start_dir, *start_dir.parents):
        go_mod = directory / "go.mod"
        if not go_mod.is_file():
            continue
        for line in go_mod.read_text(encoding="utf-8", errors="replace").splitlines():
            parts = line.split("//", 1)[0].split()
            if len(parts) == 2 and parts[0] == "module":
                return parts[1].strip('"`'), directory
        return None
    return None


class FileSystemResolver:
    """Resolve Go package patterns by walking the file system.

    Implements the ``TargetResolver`` protocol. Understands directories,
    single ``.go`` files, ``dir/...`` wildcards and import paths under the
    module declared by the nearest ``go.mod``.
    """

    def __init__(self, cwd: str | Path | None = None) -> None:
        self._cwd = Path(cwd or os.getcwd()).absolute()

    def resolve(self, specifiers: Sequence[str]) -> list[SourceFile]:
        targets = list(specifiers) or ["."]
        paths: list[Path] = []
        for spec in targets:
            paths.extend(self._resolve_one(spec))
        return _to_source_files(paths, self._cwd)

    def _resolve_one(self, spec: str) -> list[Path]:
        recursive = spec == _RECURSIVE_WILDCARD or spec.endswith("/" + _RECURSIVE_WILDCARD)
        base_spec = spec[: -len(_RECURSIVE_WILDCARD)].rstrip("/") if recursive else spec
        base = self._locate(base_spec or ".", spec)

        if base.is_file():
            if recursive:
                raise ResolutionError(spec, f"{base} is not a directory")
            if base.suffix != _GO_SUFFIX:
                raise ResolutionError(spec, "not a Go source file")
            return [base]

        if not recursive:
            files = _package_files(base)
            if not files:
                raise ResolutionError(spec, f"no Go files in {base}")
            logger.debug("Resolved package %s (%d files)", base, len(files))
            return files

        files = []
        for directory in _walk_package_dirs(base):
            package = _package_files(directory)
            if package:
                logger.debug("Resolved package %s (%d files)", directory, len(package))
                files.extend(package)
        if not files:
            logger.warning('pattern "%s" matched no packages', spec)
        return files

    def _locate(self, base_spec: str, spec: str) -> Path:
        candidate = Path(base_spec)
        if not candidate.is_absolute():
            candidate = self._cwd / candidate
        if candidate.exists():
            return Path(os.path.normpath(candidate))

        module = find_module(self._cwd)
        if module is not None:
            module_path, module_root = module
            if base_spec == module_path:
                return module_root
            if base_spec.startswith(module_path + "/"):
                mapped = module_root / base_spec[len(module_path) + 1 :]
                if mapped.is_dir():
                    return mapped
        raise ResolutionError(spec, "no such file, directory or package")


class GoListResolver:
    """Resolve targets by asking the ``go`` tool which files belong to them."""

    def __init__(self, cwd: str | Path | None = None, go_binary: str = "go") -> None:
        self._cwd = Path(cwd or os.getcwd()).absolute()
        self._go_binary = go_binary

    def resolve(self, specifiers: Sequence[str]) -> list[SourceFile]:
        targets = list(specifiers) or ["."]
        joined = " ".join(targets)
        if shutil.which(self._go_binary) is None:
            raise ResolutionError(joined, f"'{self._go_binary}' is not installed or not in PATH")

        result = subprocess.run(
            [self._go_binary, "list", "-f", _GO_LIST_FORMAT, *targets],
            cwd=str(self._cwd),
            check=False,
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            reason = result.stderr.strip() or f"go list exited with status {result.returncode}"
            raise ResolutionError(joined, reason)

        paths: list[Path] = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            directory, *names = line.split("\t")
            paths.extend(Path(directory) / name for name in names)
        return _to_source_files(paths, self._cwd)


def get_resolver(name: str, cwd: str | Path | None = None) -> TargetResolver:
    if name == "fs":
        return FileSystemResolver(cwd)
    if name == "go":
        return GoListResolver(cwd)
    raise ValueError(f"Unknown resolver '{name}'. Supported: ['fs', 'go']")
