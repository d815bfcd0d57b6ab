"""CLI for computing gitoids and writing OmniBOR documents."""

import argparse
import sys
from pathlib import Path

from omnibor_core.exceptions import ObjectStoreError, UnsupportedAlgorithmError
from omnibor_core.gitoid import HashAlgorithm, gitoid_for_file
from omnibor_core.logging import setup_logging
from omnibor_core.object_store import LocalObjectStore
from omnibor_core.session import BuildSession
from omnibor_core.settings import LOG_LEVELS, settings

DEFAULT_TARGET = "a.out"


def _algorithm_for_gitoid(gitoid: str) -> HashAlgorithm:
    """Infer the family from a hex gitoid's length."""
    for algorithm in HashAlgorithm:
        if len(gitoid) == algorithm.hex_length:
            return algorithm
    raise UnsupportedAlgorithmError(f"Cannot infer the algorithm of a {len(gitoid)}-character gitoid")


def _parse_bom(value: str) -> tuple[str, HashAlgorithm, str]:
    """Parse ``PATH=GITOID`` into (path, algorithm, gitoid)."""
    path, sep, gitoid = value.rpartition("=")
    if not sep or not path or not gitoid:
        raise ValueError(f"Expected PATH=GITOID, got '{value}'")
    return path, _algorithm_for_gitoid(gitoid), gitoid


def _resolve_result_dir(args: argparse.Namespace) -> str | None:
    result_dir = args.result_dir or settings.result_dir
    if not result_dir:
        print("Error: no result directory; pass --result-dir or set OMNIBOR_DIR", file=sys.stderr)
        return None
    return result_dir


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_hash_object(args: argparse.Namespace) -> int:
    """Print the gitoid of a single file."""
    try:
        gitoid = gitoid_for_file(args.file, args.algorithm)
    except OSError as e:
        print(f"Error: cannot read '{args.file}': {e}", file=sys.stderr)
        return 1
    print(gitoid)
    return 0


def _cmd_write(args: argparse.Namespace) -> int:
    """Register dependencies and write one document per algorithm."""
    result_dir = _resolve_result_dir(args)
    if result_dir is None:
        return 1

    session = BuildSession.from_settings(settings)
    session.enable_omnibor()
    dependency_file = args.dependency_file or settings.dependency_file
    if dependency_file:
        session.start_dependencies(dependency_file)

    for dependency in args.dependencies:
        session.register_dependency(dependency)

    for bom in args.bom:
        try:
            path, algorithm, gitoid = _parse_bom(bom)
            if algorithm is HashAlgorithm.SHA1:
                session.add_note_reference(path, sha1=gitoid)
            else:
                session.add_note_reference(path, sha256=gitoid)
        except ValueError as e:
            print(f"Error: invalid --bom '{bom}': {e}", file=sys.stderr)
            return 1

    failed = False
    for algorithm in args.algorithm or settings.algorithms:
        gitoid = session.write_document(algorithm, result_dir)
        if gitoid:
            print(f"{algorithm} {gitoid}")
        else:
            print(f"Error: {algorithm} document was not written", file=sys.stderr)
            failed = True

    if dependency_file:
        session.print_dependencies(args.target)

    return 1 if failed else 0


def _cmd_cat_object(args: argparse.Namespace) -> int:
    """Print a stored document."""
    result_dir = _resolve_result_dir(args)
    if result_dir is None:
        return 1

    try:
        algorithm = args.algorithm or _algorithm_for_gitoid(args.gitoid)
        content = LocalObjectStore(result_dir).read_object(algorithm, args.gitoid)
    except (ObjectStoreError, UnsupportedAlgorithmError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(content.decode("ascii", errors="replace"))
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for OmniBOR operations."""
    parser = argparse.ArgumentParser(prog="omnibor", description="OmniBOR gitoid and document CLI")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None, help="Override OMNIBOR_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command")

    # hash-object
    hash_parser = subparsers.add_parser("hash-object", help="Print the gitoid of a file")
    hash_parser.add_argument("file", type=Path, help="File to hash")
    hash_parser.add_argument("-a", "--algorithm", type=HashAlgorithm.parse, default=HashAlgorithm.SHA1, help="sha1 (default) or sha256")

    # write
    write_parser = subparsers.add_parser("write", help="Write OmniBOR documents for a set of dependencies")
    write_parser.add_argument("dependencies", nargs="*", help="Files consumed by the build step")
    write_parser.add_argument("-d", "--result-dir", default=None, help="Result directory (default: $OMNIBOR_DIR)")
    write_parser.add_argument("-a", "--algorithm", type=HashAlgorithm.parse, action="append", help="Repeatable; default from settings")
    write_parser.add_argument("--bom", action="append", default=[], metavar="PATH=GITOID", help="Document gitoid embedded in a dependency")
    write_parser.add_argument("--dependency-file", default=None, help="Also write a Make-style dependency rule file")
    write_parser.add_argument("--target", default=DEFAULT_TARGET, help=f"Rule target for --dependency-file (default: {DEFAULT_TARGET})")

    # cat-object
    cat_parser = subparsers.add_parser("cat-object", help="Print a stored OmniBOR document")
    cat_parser.add_argument("gitoid", help="Document gitoid")
    cat_parser.add_argument("-d", "--result-dir", default=None, help="Result directory (default: $OMNIBOR_DIR)")
    cat_parser.add_argument("-a", "--algorithm", type=HashAlgorithm.parse, default=None, help="Inferred from the gitoid length when omitted")

    args = parser.parse_args(argv)

    if args.log_level:
        setup_logging(level=args.log_level)

    handlers = {"hash-object": _cmd_hash_object, "write": _cmd_write, "cat-object": _cmd_cat_object}
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


__all__ = ["main"]
