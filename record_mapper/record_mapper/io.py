from __future__ import annotations

import json
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Any

import pandas as pd

from record_mapper.errors import RecordParseError
from record_mapper.mapper import MappingResult
from record_mapper.records import OriginalRecord


class FileFormat(str, Enum):
    JSONL = "jsonl"
    CSV_GZIP = "csv-gzip"
    PARQUET = "parquet"


SUPPORTED_INPUT_EXTENSIONS: tuple[str, ...] = (".json", ".jsonl", ".xml")


def discover_record_files(input_path: Path) -> list[Path]:
    if input_path.is_file():
        if _is_supported_input_file(input_path):
            return [input_path]
        return []

    files: list[Path] = []
    for candidate in sorted(input_path.rglob("*")):
        if candidate.is_file() and _is_supported_input_file(candidate):
            files.append(candidate)
    return files


def read_records(path: Path) -> list[OriginalRecord]:
    """Read the records stored in one input file.

    A ``.json`` file holds one record, or a list of records; a ``.jsonl``
    file holds one record per line; an ``.xml`` file is a single record.
    A ``.json`` file that cannot be decoded raises ``RecordParseError``.
    """
    suffix = path.suffix.lower()

    if suffix == ".jsonl":
        records: list[OriginalRecord] = []
        with path.open(encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                if line.strip():
                    records.append(
                        OriginalRecord(content=line, identifier=f"{path.name}:{line_number}")
                    )
        return records

    if suffix == ".json":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RecordParseError(f"{path.name} is not valid JSON: {exc}") from exc
        if isinstance(data, list):
            return [
                OriginalRecord(content=item, identifier=f"{path.name}[{index}]")
                for index, item in enumerate(data)
            ]
        return [OriginalRecord(content=data, identifier=path.name)]

    if suffix == ".xml":
        return [OriginalRecord(content=path.read_bytes(), identifier=path.name)]

    raise ValueError(f"Unsupported input format: {path}")


def results_to_frame(results: Iterable[MappingResult]) -> pd.DataFrame:
    """Flatten successfully mapped objects into one row each."""
    rows = [_as_row(result.value) for result in results if result.ok]
    return pd.json_normalize(rows)


def errors_to_frame(results: Iterable[MappingResult]) -> pd.DataFrame:
    rows = [
        {"record": str(result.record), "error": result.message}
        for result in results
        if not result.ok
    ]
    return pd.DataFrame(rows, columns=["record", "error"])


def output_path_for_file(
    input_file: Path,
    input_root: Path,
    output_root: Path,
    output_format: FileFormat,
) -> Path:
    relative = input_file.relative_to(input_root) if input_root.is_dir() else Path(input_file.name)
    base = _strip_known_extensions(relative)

    if output_format == FileFormat.CSV_GZIP:
        return output_root / f"{base}.csv.gz"
    if output_format == FileFormat.PARQUET:
        return output_root / f"{base}.parquet"
    return output_root / f"{base}.jsonl"


def write_results(df: pd.DataFrame, output_file: Path, output_format: FileFormat) -> None:
    output_file.parent.mkdir(parents=True, exist_ok=True)

    if output_format == FileFormat.JSONL:
        df.to_json(output_file, orient="records", lines=True, force_ascii=False)
        return

    if output_format == FileFormat.CSV_GZIP:
        df.to_csv(output_file, index=False, compression="gzip")
        return

    if output_format == FileFormat.PARQUET:
        df.to_parquet(output_file, index=False)
        return

    raise ValueError(f"Unsupported output format: {output_format}")


def _as_row(value: Any) -> dict[str, Any]:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return dict(vars(value))


def _is_supported_input_file(path: Path) -> bool:
    return path.name.lower().endswith(SUPPORTED_INPUT_EXTENSIONS)


def _strip_known_extensions(path: Path) -> str:
    text = str(path)
    for suffix in SUPPORTED_INPUT_EXTENSIONS:
        if text.lower().endswith(suffix):
            return text[: -len(suffix)]
    return text
