"""Integration tests for the CLI and MCP handlers."""

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from bundlewhy.cli import app
from bundlewhy.core.exceptions import UnknownModuleError
from bundlewhy.mcp.server import handle_find_chain, handle_modules, handle_tree

runner = CliRunner()

STATS: dict[str, Any] = {
    "version": "5.90.0",
    "chunks": [
        {
            "id": 0,
            "files": ["main.js", "main.js.map"],
            "modules": [
                {
                    "name": "./src/index.js",
                    "reasons": [{"moduleName": None, "type": "entry", "userRequest": "./src"}],
                },
                {
                    "name": "./src/app.js",
                    "reasons": [
                        {
                            "moduleName": "./src/index.js",
                            "userRequest": "./app",
                            "type": "harmony import specifier",
                        }
                    ],
                },
                {
                    "name": "./src/utils.js",
                    "reasons": [
                        {
                            "moduleName": "./src/app.js",
                            "userRequest": "./utils",
                            "type": "harmony import specifier",
                        },
                        {
                            "moduleName": "./src/lazy.js",
                            "userRequest": "./utils",
                            "type": "harmony side effect evaluation",
                        },
                    ],
                },
            ],
        },
        {
            "id": 1,
            "files": ["lazy.js"],
            "modules": [
                {
                    "name": "./src/lazy.js",
                    "reasons": [
                        {"moduleName": "./src/app.js", "userRequest": "./lazy", "type": "import()"}
                    ],
                },
                {
                    "name": "./node_modules/lodash/lodash.js",
                    "reasons": [
                        {
                            "moduleName": "./src/lazy.js",
                            "userRequest": "lodash",
                            "type": "harmony import specifier",
                        }
                    ],
                },
            ],
        },
    ],
}


@pytest.fixture
def stats_file(tmp_path: Path) -> Path:
    """Write the sample stats document to disk."""
    file_path = tmp_path / "stats.json"
    file_path.write_text(json.dumps(STATS))
    return file_path


class TestTreeCommand:
    """Tests for `bundlewhy tree`."""

    def test_tree_json(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["tree", str(stats_file), "utils.js", "-d", "3", "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["module"] == "./src/utils.js"
        assert data["importers"] == {
            "./src/app.js": {"./src/index.js": "main.js"},
            "./src/lazy.js": {"./src/app.js": {"./src/index.js": "main.js"}},
        }

    def test_tree_skip_async(self, stats_file: Path) -> None:
        result = runner.invoke(
            app, ["tree", str(stats_file), "utils.js", "-d", "3", "--skip-async", "--json"]
        )
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["importers"] == {
            "./src/app.js": {"./src/index.js": "main.js"},
            "./src/lazy.js": "lazy.js",
        }

    def test_tree_trim_and_skip(self, stats_file: Path) -> None:
        result = runner.invoke(
            app,
            ["tree", str(stats_file), "utils.js", "-d", "3", "-t", "index", "-s", "lazy", "-j"],
        )
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["importers"] == {"./src/app.js": "main.js"}

    def test_tree_text(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["tree", str(stats_file), "utils.js", "-d", "2", "-i"])
        assert result.exit_code == 0
        assert "Searching for module ./src/utils.js" in result.output
        assert "./src/app.js" in result.output
        assert "./src/lazy.js" in result.output
        assert "./utils" in result.output

    def test_tree_module_not_found(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["tree", str(stats_file), "nothing.js", "-d", "2"])
        assert result.exit_code == 1
        assert "Cannot find any module" in result.output

    def test_tree_requires_depth(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["tree", str(stats_file), "utils.js"])
        assert result.exit_code == 2

    def test_tree_invalid_regex(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["tree", str(stats_file), "utils.js", "-d", "2", "-t", "("])
        assert result.exit_code == 2

    def test_tree_reports_matched_chunks(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["tree", str(stats_file), "utils.js", "-d", "1", "-c", "main"])
        assert result.exit_code == 0
        assert "Searching in chunk: main.js" in result.output
        assert "Searching in chunk: lazy.js" not in result.output

    def test_stats_file_not_utf8(self, tmp_path: Path) -> None:
        file_path = tmp_path / "stats.json"
        file_path.write_bytes(b'{"chunks": [], "x": "\xff\xfe"}')

        result = runner.invoke(app, ["tree", str(file_path), "a", "-d", "1"])
        assert result.exit_code == 1
        assert "Cannot read" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_missing_stats_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["tree", str(tmp_path / "nope.json"), "utils.js", "-d", "2"])
        assert result.exit_code == 1
        assert "Cannot read" in result.output


class TestFindChainCommand:
    """Tests for `bundlewhy find-chain`."""

    def test_chain_found(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["find-chain", str(stats_file), "lodash", "index.js", "-j"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["count"] == 1
        assert data["chains"] == [
            [
                "./node_modules/lodash/lodash.js",
                "./src/lazy.js",
                "./src/app.js",
                "./src/index.js",
            ]
        ]

    def test_chain_text(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["find-chain", str(stats_file), "lazy", "app.js"])
        assert result.exit_code == 0
        assert "Found 1 chain(s)" in result.output

    def test_no_chain(self, stats_file: Path) -> None:
        result = runner.invoke(
            app, ["find-chain", str(stats_file), "lodash", "index.js", "--skip-async"]
        )
        assert result.exit_code == 1
        assert "No chain" in result.output

    def test_fail_on_success(self, stats_file: Path) -> None:
        found = runner.invoke(
            app, ["find-chain", str(stats_file), "lodash", "index.js", "--fail-on-success"]
        )
        assert found.exit_code == 1

        none = runner.invoke(
            app,
            ["find-chain", str(stats_file), "lodash", "index.js", "-a", "--fail-on-success"],
        )
        assert none.exit_code == 0

    def test_depth_limit(self, stats_file: Path) -> None:
        result = runner.invoke(
            app, ["find-chain", str(stats_file), "lodash", "index.js", "-d", "2", "-j"]
        )
        assert result.exit_code == 1
        assert json.loads(result.stdout)["count"] == 0

    def test_depth_counts_hops(self, stats_file: Path) -> None:
        """A depth of 3 still reaches a chain of 4 modules (3 hops)."""
        result = runner.invoke(
            app, ["find-chain", str(stats_file), "lodash", "index.js", "-d", "3", "-j"]
        )
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)["chains"][0]) == 4

    def test_depth_help(self) -> None:
        result = runner.invoke(app, ["find-chain", "--help"])
        assert result.exit_code == 0
        assert "hops" in result.output

    def test_shortest(self, stats_file: Path) -> None:
        result = runner.invoke(
            app, ["find-chain", str(stats_file), "utils", "index.js", "--shortest", "-j"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["chains"] == [["./src/utils.js", "./src/app.js", "./src/index.js"]]

    def test_endpoint_not_found(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["find-chain", str(stats_file), "lodash", "missing.js"])
        assert result.exit_code == 1
        assert "missing.js" in result.output

    def test_unique_match_ambiguous(self, stats_file: Path) -> None:
        result = runner.invoke(
            app, ["find-chain", str(stats_file), "src", "index.js", "--match", "unique"]
        )
        assert result.exit_code == 1
        assert "matches" in result.output


class TestOtherCommands:
    """Tests for `bundlewhy modules` and `bundlewhy stats`."""

    def test_modules_json(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["modules", str(stats_file), "src", "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert [m["name"] for m in data] == [
            "./src/index.js",
            "./src/app.js",
            "./src/utils.js",
            "./src/lazy.js",
        ]
        assert data[2] == {"name": "./src/utils.js", "chunk": "main.js", "importers": 2}

    def test_modules_no_match(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["modules", str(stats_file), "zzz"])
        assert result.exit_code == 0
        assert "No matches" in result.output

    def test_stats_json(self, stats_file: Path) -> None:
        result = runner.invoke(app, ["stats", str(stats_file), "--skip-async", "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["modules"] == 5
        assert data["chunks"] == 2
        assert data["skipped_dynamic"] == 1


class TestMcpHandlers:
    """Tests for the MCP tool handlers."""

    def test_handle_tree(self, stats_file: Path) -> None:
        result = handle_tree({"stats_file": str(stats_file), "module": "utils.js", "depth": 1})
        assert result["importers"] == {"./src/app.js": "main.js", "./src/lazy.js": "lazy.js"}

    def test_handle_find_chain(self, stats_file: Path) -> None:
        result = handle_find_chain(
            {"stats_file": str(stats_file), "from": "utils", "to": "index.js"}
        )
        assert sorted(result["chains"]) == [
            ["./src/utils.js", "./src/app.js", "./src/index.js"],
            ["./src/utils.js", "./src/lazy.js", "./src/app.js", "./src/index.js"],
        ]

    def test_handle_modules(self, stats_file: Path) -> None:
        result = handle_modules({"stats_file": str(stats_file), "query": "lodash"})
        assert result["total"] == 1
        assert result["results"][0]["chunk"] == "lazy.js"

    def test_handle_tree_not_found(self, stats_file: Path) -> None:
        with pytest.raises(UnknownModuleError):
            handle_tree({"stats_file": str(stats_file), "module": "missing.js"})
