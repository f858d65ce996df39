from __future__ import annotations

import argparse
import importlib.util
import logging
from pathlib import Path
from types import ModuleType

from record_mapper.errors import RecordParseError
from record_mapper.io import (
    FileFormat,
    discover_record_files,
    errors_to_frame,
    output_path_for_file,
    read_records,
    results_to_frame,
    write_results,
)
from record_mapper.mapper import Mapper, MapperConfig, MappingResult
from record_mapper.parsers import get_parser, list_parsers
from record_mapper.parsers.query import ROOT
from record_mapper.records import OriginalRecord

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="record-mapper",
        description="Map harvested records to domain objects with a named mapping.",
    )
    parser.add_argument(
        "definitions",
        type=Path,
        help="Python file defining mappings in a register(mapper) function.",
    )
    parser.add_argument("name", help="Name of the mapping to apply.")
    parser.add_argument(
        "input_path",
        type=Path,
        help="Path to a file or folder containing .json, .jsonl or .xml records.",
    )
    parser.add_argument(
        "output_path",
        type=Path,
        help="Destination folder for mapped output files.",
    )
    parser.add_argument(
        "--parser",
        choices=list_parsers(),
        default="json",
        help="Default parser for mappings that do not name one (default: json).",
    )
    parser.add_argument(
        "--root-path",
        default=ROOT,
        help="Path selecting the root node of each record (default: $).",
    )
    parser.add_argument(
        "--output-format",
        type=FileFormat,
        choices=list(FileFormat),
        default=FileFormat.JSONL,
        help="Output file format (default: jsonl).",
    )
    parser.add_argument(
        "--errors",
        type=Path,
        default=None,
        metavar="PATH",
        help="Optional path to write a CSV of records that failed to map.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING).",
    )
    return parser


def load_definitions(path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(path.stem, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load mapping definitions from {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    if not callable(getattr(module, "register", None)):
        raise ImportError(f"{path} does not define a register(mapper) function")
    return module


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    input_path: Path = args.input_path
    output_path: Path = args.output_path
    output_format: FileFormat = args.output_format
    errors_path: Path | None = args.errors

    if not args.definitions.exists():
        parser.error(f"Definitions file not found: {args.definitions}")

    files = discover_record_files(input_path)
    if not files:
        parser.error("No supported input files found (.json, .jsonl, .xml).")

    config = MapperConfig(
        default_parser=get_parser(args.parser),
        default_parser_args=(args.root_path,),
    )
    mapper = Mapper(config=config)
    load_definitions(args.definitions).register(mapper)
    if args.name not in mapper.registry:
        parser.error(
            f"Mapping '{args.name}' is not defined. "
            f"Defined mappings: {', '.join(mapper.registry.names()) or 'none'}"
        )

    failures: list[MappingResult] = []
    total = 0
    for input_file in files:
        try:
            records = read_records(input_file)
        except RecordParseError as exc:
            logger.error("Skipping %s: %s", input_file, exc)
            failures.append(
                MappingResult(record=OriginalRecord(None, str(input_file)), error=exc)
            )
            total += 1
            print(f"Skipped: {input_file} ({exc})")
            continue

        results = mapper.map(args.name, records)
        total += len(results)
        failures.extend(result for result in results if not result.ok)

        destination = output_path_for_file(
            input_file=input_file,
            input_root=input_path,
            output_root=output_path,
            output_format=output_format,
        )
        write_results(results_to_frame(results), destination, output_format)
        print(f"Processed: {input_file} -> {destination}")

    print(f"Done. Mapped {total - len(failures)} of {total} record(s) with '{args.name}'.")

    if errors_path is not None:
        errors_path.parent.mkdir(parents=True, exist_ok=True)
        errors_to_frame(failures).to_csv(errors_path, index=False)
        print(f"Errors written to: {errors_path}")

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
