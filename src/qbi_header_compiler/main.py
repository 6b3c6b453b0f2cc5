"""Main entry point for the QBI header compiler."""

import argparse
import json
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import NoReturn

from .application.generators import RegistryGenerator, compile_header_file
from .domain.models.qbi import document_to_json
from .domain.services.validation import validate_qbi_document
from .exceptions import QbiError
from .infrastructure.config import Config, get_config
from .infrastructure.logging import LoggerSetup, get_logger, log_timing

DISTRIBUTION_NAME = "qbi-header-compiler"


def get_generator_version() -> str | None:
    """Installed package version, or None when running from a source tree."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return None


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="qbi-header-compiler",
        description="Compile Qubic contract headers into QBI interface documents",
        epilog="""
Examples:
  # Compile one contract to stdout
  qbi-header-compiler compile --contract core/src/contracts/QUtil.h \\
      --qpi core/src/contracts/qpi.h --contract-def core/src/contract_core/contract_def.h

  # Compile every contract into a registry directory
  qbi-header-compiler compile-registry --contract-def core/src/contract_core/contract_def.h \\
      --contracts-dir core/src/contracts --out registry \\
      --source-repo https://github.com/qubic/core --source-revision <sha>

  # Validate a registry
  qbi-header-compiler validate --dir registry

  # Using .env file for configuration
  echo 'QBI_CONTRACTS_DIR=core/src/contracts' > .env
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output with debug logs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser("compile", help="Compile a single contract header")
    compile_parser.add_argument("--contract", type=Path, required=True, help="Contract header")
    compile_parser.add_argument("--out", type=Path, help="Output file (default: stdout)")
    compile_parser.add_argument("--qpi", type=Path, help="qpi.h to prepend to the header")
    compile_parser.add_argument(
        "--contract-def", type=Path, help="contract_def.h used to look up the contract index"
    )

    registry_parser = subparsers.add_parser(
        "compile-registry", help="Compile all contract headers of a directory"
    )
    registry_parser.add_argument("--contract-def", type=Path, help="contract_def.h")
    registry_parser.add_argument(
        "--contracts-dir", type=Path, help="Directory holding qpi.h and contract headers"
    )
    registry_parser.add_argument("--out", type=Path, help="Output directory (default: registry)")
    registry_parser.add_argument("--source-repo", help="Source repository URL")
    registry_parser.add_argument("--source-revision", help="Source revision, e.g. a git SHA")

    validate_parser = subparsers.add_parser("validate", help="Validate QBI documents")
    target = validate_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--file", type=Path, help="A single .qbi document")
    target.add_argument("--dir", type=Path, help="A directory of .qbi documents")

    return parser


def run_compile(args: argparse.Namespace, config: Config) -> int:
    """Compile one header and write the document to --out or stdout."""
    logger = get_logger(__name__)

    document = compile_header_file(
        args.contract,
        qpi_path=config.qpi_path,
        contract_def_path=config.contract_def_path,
        generator_version=get_generator_version(),
    )
    text = document_to_json(document)

    if args.out is not None:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(text, encoding="utf-8")
        logger.info(f"[SUCCESS] Generated: {args.out} ({len(document.entries)} entries)")
    else:
        sys.stdout.write(text)
    return 0


def run_compile_registry(config: Config) -> int:
    """Compile every contract header into the configured output directory."""
    if config.contract_def_path is None or config.contracts_dir is None:
        raise ValueError("compile-registry requires --contract-def and --contracts-dir")

    generator = RegistryGenerator(
        contract_def_path=config.contract_def_path,
        contracts_dir=config.contracts_dir,
        output_dir=config.output_dir,
        source_repo=config.source_repo,
        source_revision=config.source_revision,
        generator_version=get_generator_version(),
    )
    generator.generate()
    return 0


def collect_documents(file: Path | None, directory: Path | None) -> list[Path]:
    """Resolve the validate target into a sorted list of documents."""
    if file is not None:
        return [file]
    if directory is None:
        raise ValueError("validate requires --file or --dir")
    suffix = get_config()["OUTPUT_SUFFIX"]
    return sorted(p for p in directory.iterdir() if p.is_file() and p.name.endswith(suffix))


def run_validate(args: argparse.Namespace) -> int:
    """Validate documents; every error is printed as ``<path>: <error>``."""
    logger = get_logger(__name__)
    paths = collect_documents(args.file, args.dir)

    all_errors: list[str] = []
    for path in paths:
        try:
            value = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            all_errors.append(f"{path}: invalid JSON ({e})")
            continue

        result = validate_qbi_document(value)
        all_errors.extend(f"{path}: {error}" for error in result.errors)

    for error in all_errors:
        print(error, file=sys.stderr)

    logger.info(f"Validated {len(paths)} document(s), {len(all_errors)} error(s)")
    return 1 if all_errors else 0


def run(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch a subcommand.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_args(
            contracts_dir=getattr(args, "contracts_dir", None),
            contract_def_path=getattr(args, "contract_def", None),
            qpi_path=getattr(args, "qpi", None),
            output_dir=getattr(args, "out", None) if args.command == "compile-registry" else None,
            verbose=args.verbose or None,
            source_repo=getattr(args, "source_repo", None),
            source_revision=getattr(args, "source_revision", None),
        )
        config.validate()
    except QbiError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    # Only registry runs keep a log file; compile and validate are one-shot
    LoggerSetup.initialize(
        config.log_dir,
        verbose=config.verbose,
        log_to_file=args.command == "compile-registry",
    )
    logger = get_logger(__name__)
    logger.debug(f"Command: {args.command}")

    try:
        if args.command == "compile":
            return run_compile(args, config)
        if args.command == "compile-registry":
            return run_compile_registry(config)
        return run_validate(args)
    except (QbiError, OSError, ValueError) as e:
        logger.error(f"Fatal error during {args.command}: {e}")
        return 1


@log_timing
def main() -> NoReturn:
    """Console script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
