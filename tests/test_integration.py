"""Integration tests for the complete define / map / write workflow."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from record_mapper.cli import load_definitions, main
from record_mapper.mapper import Mapper

DEFINITIONS = textwrap.dedent(
    """
    from record_mapper.mapping import record
    from record_mapper.models import Resource


    class Agent(Resource):
        pass


    def register(mapper):
        def book(m):
            m.set("title", "$.headline")
            m.set("language", "$.lang", str.lower)
            m.set("subject", "$.subjects", many=True)
            m.set("first_author", record.field("authors", "name").first_value())

            @m.nested("creator", cls=Agent, path="$.authors", many=True)
            def creator(agent):
                agent.set("name", "$.name")

        mapper.define("book", book)
    """
)


@pytest.fixture
def definitions(tmp_path: Path) -> Path:
    path = tmp_path / "mappings.py"
    path.write_text(DEFINITIONS)
    return path


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    root = tmp_path / "input"
    root.mkdir()
    (root / "books.jsonl").write_text(
        "\n".join(
            [
                json.dumps(
                    {
                        "headline": "Old Maps",
                        "lang": "EN",
                        "subjects": ["Maps"],
                        "authors": [{"name": "Ada"}, {"name": "Grace"}],
                    }
                ),
                "{not json",
                json.dumps({"headline": "Sparse"}),
            ]
        )
    )
    return root


class TestIntegration:
    """Integration tests for the complete workflow."""

    def test_definitions_file_registers_mappings(self, definitions: Path) -> None:
        mapper = Mapper()

        load_definitions(definitions).register(mapper)

        assert mapper.registry.names() == ["book"]

    def test_definitions_without_register_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.py"
        path.write_text("VALUE = 1\n")

        with pytest.raises(ImportError):
            load_definitions(path)

    def test_cli_maps_files(
        self, definitions: Path, input_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        output_dir = tmp_path / "output"
        errors_path = tmp_path / "errors.csv"

        exit_code = main(
            [
                str(definitions),
                "book",
                str(input_dir),
                str(output_dir),
                "--errors",
                str(errors_path),
            ]
        )

        # one of the three records is not valid JSON
        assert exit_code == 1

        lines = (output_dir / "books.jsonl").read_text().splitlines()
        rows = [json.loads(line) for line in lines]
        assert len(rows) == 2
        assert rows[0]["title"] == "Old Maps"
        assert rows[0]["language"] == "en"
        assert rows[0]["subject"] == ["Maps"]
        assert rows[0]["first_author"] == "Ada"
        assert rows[0]["creator"] == [{"name": "Ada"}, {"name": "Grace"}]
        assert rows[1]["title"] == "Sparse"
        assert rows[1]["language"] is None

        errors = errors_path.read_text()
        assert "books.jsonl:2" in errors

        out = capsys.readouterr().out
        assert "Mapped 2 of 3 record(s) with 'book'" in out

    def test_cli_unknown_mapping(self, definitions: Path, input_dir: Path, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main([str(definitions), "missing", str(input_dir), str(tmp_path / "out")])

        assert excinfo.value.code == 2

    def test_cli_no_input_files(self, definitions: Path, tmp_path: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()

        with pytest.raises(SystemExit):
            main([str(definitions), "book", str(empty), str(tmp_path / "out")])

    def test_cli_continues_after_unreadable_file(
        self, definitions: Path, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        input_root = tmp_path / "input"
        input_root.mkdir()
        (input_root / "a_bad.json").write_text("{broken")
        (input_root / "b_good.json").write_text(json.dumps({"headline": "Kept"}))
        output_dir = tmp_path / "output"
        errors_path = tmp_path / "errors.csv"

        exit_code = main(
            [
                str(definitions),
                "book",
                str(input_root),
                str(output_dir),
                "--errors",
                str(errors_path),
            ]
        )

        assert exit_code == 1
        assert not (output_dir / "a_bad.jsonl").exists()
        row = json.loads((output_dir / "b_good.jsonl").read_text())
        assert row["title"] == "Kept"
        assert "a_bad.json" in errors_path.read_text()

        out = capsys.readouterr().out
        assert "Skipped:" in out
        assert "Mapped 1 of 2 record(s) with 'book'" in out
