"""
Sparse Merkle tree command-line tool.

Build a tree from a handful of leaves, print its root, produce a proof for one
leaf, or check a proof against a root without rebuilding anything.

Usage::

    python -m sparse_merkle root --depth 257 --leaf 1=0x0101...01 --leaf 2=0x0101...01
    python -m sparse_merkle root --leaves leaves.yaml
    python -m sparse_merkle prove --leaves leaves.yaml --index 2 --format hex
    python -m sparse_merkle verify --depth 257 --index 2 --leaf-value 0x... \\
        --root 0x... --proof 0x...
    python -m sparse_merkle defaults --depth 8

Leaf files are YAML mappings from leaf index to a 32-byte hex value::

    1: "0x0101010101010101010101010101010101010101010101010101010101010101"
    0x10: "0x0202020202020202020202020202020202020202020202020202020202020202"

Exit codes:
    0  success (and, for `verify`, a valid proof)
    1  `verify` ran but the proof does not match the root
    2  invalid input (bad depth, index, leaf value or proof length)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from sparse_merkle.smt import (
    DEFAULT_DEPTH,
    SparseMerkleTree,
    build_default_nodes,
    verify_proof,
    verify_proof_for_depth,
)
from sparse_merkle.smt.utils import to_index
from sparse_merkle.types import Bytes32, MerkleError, Uint256

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the command-line tool."""
    level = logging.DEBUG if verbose else logging.WARNING

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def parse_index(value: Any) -> int:
    """Parse a leaf index given as an int or a decimal/`0x` hex string."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        return int(value.strip(), 0)
    raise ValueError(f"Invalid leaf index: {value!r}")


def parse_leaf_arg(arg: str) -> tuple[int, Bytes32]:
    """Parse an `INDEX=HEX` command-line leaf."""
    index, sep, value = arg.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"Expected INDEX=HEX, got {arg!r}")
    try:
        return parse_index(index), Bytes32(value.strip())
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid leaf {arg!r}: {e}") from e


def load_leaves(path: Path) -> dict[int, Bytes32]:
    """
    Load a YAML mapping of leaf index to 32-byte hex value.

    Raises:
        ValueError: If the document is not a mapping or holds an invalid entry.
    """
    with path.open() as f:
        document = yaml.safe_load(f)

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"{path}: expected a mapping of index to leaf value")

    leaves: dict[int, Bytes32] = {}
    for index, value in document.items():
        if not isinstance(value, str):
            raise ValueError(f"{path}: leaf {index!r} must be a hex string")
        leaves[parse_index(index)] = Bytes32(value)
    logger.debug("Loaded %d leaves from %s", len(leaves), path)
    return leaves


def collect_leaves(args: argparse.Namespace) -> dict[int, Bytes32]:
    """Merge leaves from `--leaves` with `--leaf` arguments (the latter win)."""
    leaves = load_leaves(args.leaves) if args.leaves is not None else {}
    leaves.update(dict(args.leaf))
    return leaves


def cmd_root(args: argparse.Namespace) -> int:
    """Print the root of the tree built from the given leaves."""
    tree = SparseMerkleTree.build(collect_leaves(args), args.depth)
    print(f"0x{tree.root.hex()}")
    return 0


def cmd_prove(args: argparse.Namespace) -> int:
    """Print the proof for one leaf of the tree built from the given leaves."""
    tree = SparseMerkleTree.build(collect_leaves(args), args.depth)
    proof = tree.open(parse_index(args.index))
    if args.format == "hex":
        print(f"0x{proof.to_bytes().hex()}")
    else:
        print(proof.model_dump_json(by_alias=True, indent=2))
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    """Check a proof against a root; exit code 1 means "does not match"."""
    # An index outside the 256-bit key space is bad input, not a failed proof.
    index = to_index(parse_index(args.index), 1 << Uint256.BITS)
    proof = bytes.fromhex(args.proof.removeprefix("0x"))
    leaf = Bytes32(args.leaf_value)
    root = Bytes32(args.root)

    if args.depth is None:
        valid = verify_proof(index, leaf, root, proof)
    else:
        valid = verify_proof_for_depth(index, leaf, root, proof, args.depth)

    print("valid" if valid else "invalid")
    return 0 if valid else 1


def cmd_defaults(args: argparse.Namespace) -> int:
    """Print the default digest of every level."""
    for level, node in enumerate(build_default_nodes(args.depth)):
        print(f"{level:>3} 0x{node.hex()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="sparse_merkle",
        description="Sparse Merkle tree tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    tree_args = argparse.ArgumentParser(add_help=False)
    tree_args.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_DEPTH,
        help=f"Number of tree levels, leaves and root included (default: {DEFAULT_DEPTH})",
    )
    tree_args.add_argument(
        "--leaf",
        action="append",
        default=[],
        type=parse_leaf_arg,
        metavar="INDEX=HEX",
        help="Leaf index and 32-byte hex value (can be repeated)",
    )
    tree_args.add_argument(
        "--leaves",
        type=Path,
        default=None,
        help="Path to a YAML file mapping leaf index to 32-byte hex value",
    )

    root_parser = subparsers.add_parser("root", parents=[tree_args], help="Print the tree root")
    root_parser.set_defaults(handler=cmd_root)

    prove_parser = subparsers.add_parser(
        "prove", parents=[tree_args], help="Print the proof for one leaf"
    )
    prove_parser.add_argument("--index", required=True, help="Leaf index to prove")
    prove_parser.add_argument(
        "--format",
        choices=["json", "hex"],
        default="json",
        help="Output format (default: json)",
    )
    prove_parser.set_defaults(handler=cmd_prove)

    verify_parser = subparsers.add_parser("verify", help="Check a proof against a root")
    verify_parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Require the proof to match this tree depth exactly",
    )
    verify_parser.add_argument("--index", required=True, help="Leaf index")
    verify_parser.add_argument("--leaf-value", required=True, help="32-byte hex leaf value")
    verify_parser.add_argument("--root", required=True, help="32-byte hex root")
    verify_parser.add_argument("--proof", required=True, help="Hex-encoded proof buffer")
    verify_parser.set_defaults(handler=cmd_verify)

    defaults_parser = subparsers.add_parser(
        "defaults", help="Print the default digest of every level"
    )
    defaults_parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_DEPTH,
        help=f"Number of tree levels (default: {DEFAULT_DEPTH})",
    )
    defaults_parser.set_defaults(handler=cmd_defaults)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    try:
        return args.handler(args)
    except (MerkleError, ValueError, OSError, yaml.YAMLError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
