"""
fspaths - Command line entry point

A thin shell over fspaths.Path for inspecting and copying files from a
terminal.
"""

import argparse
import logging
import sys

from .config import AppConfig, load_config
from .logger import setup_logging
from .path import Path

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="fspaths - Filesystem path helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fspaths stat setup.py
  fspaths ls ./build
  fspaths cp config.ini config.ini.bak
  echo hello | fspaths write greeting.txt
  fspaths resolve ./current
        """,
    )
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--freshness-ms", type=int, help="Metadata cache freshness window")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    stat_parser = subparsers.add_parser("stat", help="Show file metadata")
    stat_parser.add_argument("path")

    exists_parser = subparsers.add_parser("exists", help="Check whether a path exists")
    exists_parser.add_argument("path")

    ls_parser = subparsers.add_parser("ls", help="List a directory")
    ls_parser.add_argument("path", nargs="?", default=".")

    cp_parser = subparsers.add_parser("cp", help="Copy a file, keeping its permissions")
    cp_parser.add_argument("src")
    cp_parser.add_argument("dst")

    mkdir_parser = subparsers.add_parser("mkdir", help="Create a directory and its parents")
    mkdir_parser.add_argument("path")

    write_parser = subparsers.add_parser("write", help="Write standard input to a file")
    write_parser.add_argument("path")

    resolve_parser = subparsers.add_parser("resolve", help="Print the absolute, symlink-free path")
    resolve_parser.add_argument("path")

    return parser.parse_args(argv)


def _make_path(raw: str, config: AppConfig) -> Path:
    path = Path.new(raw, freshness=config.cache.freshness_seconds)
    if path is None:
        raise ValueError("Empty path")
    return path


def cmd_stat(args, config: AppConfig) -> int:
    info = _make_path(args.path, config).stat()
    kind = "directory" if info.is_dir else "file" if info.is_file else "other"
    print(f"Name:  {info.name}")
    print(f"Type:  {kind}")
    print(f"Size:  {info.size}")
    print(f"Mode:  {info.perm:04o}")
    print(f"Mtime: {info.mtime.isoformat(sep=' ', timespec='seconds')}")
    return 0


def cmd_exists(args, config: AppConfig) -> int:
    path = _make_path(args.path, config)
    if not path.exist():
        print(f"{path}: does not exist")
        return 1
    kind = "directory" if path.is_dir() else "file"
    print(f"{path}: {kind}")
    return 0


def cmd_ls(args, config: AppConfig) -> int:
    for child in _make_path(args.path, config).read_dir():
        marker = "d" if child.is_dir() else "-"
        print(f"{marker} {child.base()}")
    return 0


def cmd_cp(args, config: AppConfig) -> int:
    src = _make_path(args.src, config)
    dst = _make_path(args.dst, config)
    if dst.is_dir():
        dst = dst.join(src.base())
    src.copy_to(dst)
    print(f"[OK] Copied {src} -> {dst}")
    return 0


def cmd_mkdir(args, config: AppConfig) -> int:
    _make_path(args.path, config).mkdir_all(config.modes.dir_mode)
    return 0


def cmd_write(args, config: AppConfig) -> int:
    path = _make_path(args.path, config)
    data = sys.stdin.buffer.read()
    path.write_file(data, config.modes.file_mode)
    print(f"[OK] Wrote {len(data)} bytes to {path}")
    return 0


def cmd_resolve(args, config: AppConfig) -> int:
    path = _make_path(args.path, config)
    path.to_abs()
    path.follow_symlink()
    print(path)
    return 0


COMMANDS = {
    "stat": cmd_stat,
    "exists": cmd_exists,
    "ls": cmd_ls,
    "cp": cmd_cp,
    "mkdir": cmd_mkdir,
    "write": cmd_write,
    "resolve": cmd_resolve,
}


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    handler = COMMANDS.get(args.command)
    if handler is None:
        print("Usage: fspaths [--config FILE] <command> [options]")
        print()
        print("Commands:")
        print("  stat     Show file metadata")
        print("  exists   Check whether a path exists")
        print("  ls       List a directory")
        print("  cp       Copy a file, keeping its permissions")
        print("  mkdir    Create a directory and its parents")
        print("  write    Write standard input to a file")
        print("  resolve  Print the absolute, symlink-free path")
        print()
        print("Run 'fspaths <command> --help' for more information.")
        return 1

    try:
        config = load_config(
            args.config, freshness_ms=args.freshness_ms, debug=args.verbose
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"[ERROR] Configuration error: {e}")
        return 1

    setup_logging(config.logging)
    logger.debug("Running %s", args.command)

    try:
        return handler(args, config)
    except (OSError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
