from __future__ import annotations

import shutil
from pathlib import Path

import orjson

from artifacts import rewrite_tree
from artifacts.write import scan_tree
from contract.artifacts import CALLSITES_JSONL
from rules.config import GgTagConfig

FIXTURE = Path(__file__).parent / "fixtures" / "mini_app"


def _copy_fixture(root: Path) -> Path:
    shutil.copytree(FIXTURE, root)
    (root / "dist").mkdir()
    (root / "dist" / "bundle.js").write_text("gg(1);\n", encoding="utf-8")
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "node_modules" / "pkg" / "index.js").write_text(
        "gg(2);\n", encoding="utf-8"
    )
    return root


def _read_manifest(out_dir: Path) -> list[dict[str, object]]:
    lines = (out_dir / CALLSITES_JSONL).read_bytes().splitlines()
    return [orjson.loads(line) for line in lines]


def test_rewrite_tree_default_output(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "app")

    summary = rewrite_tree(root=root)

    out_dir = root / ".ggtag"
    assert summary["out_dir"] == str(out_dir.resolve())
    assert summary["files_scanned"] == 3
    assert summary["files_rewritten"] == 2
    assert summary["files_skipped"] == 0
    assert summary["call_sites"] == 3
    assert sorted(
        path.relative_to(out_dir).as_posix()
        for path in out_dir.rglob("*")
        if path.is_file()
    ) == [CALLSITES_JSONL, "src/lib/util.ts", "src/routes/+page.svelte"]


def test_manifest_records(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "app")

    rewrite_tree(root=root)

    records = _read_manifest(root / ".ggtag")
    assert records[0] == {
        "schema_version": 1,
        "callsite_id": "callsite:src/lib/util.ts@L2:C3:lib/util.ts@formatUser",
        "path": "src/lib/util.ts",
        "namespace": "lib/util.ts@formatUser",
        "file": "src/lib/util.ts",
        "line": 2,
        "col": 3,
        "function_name": "formatUser",
        "src": "user",
        "context": "script",
        "shape": "bare",
    }
    assert [
        (r["line"], r["col"], r["namespace"], r["context"], r["shape"])
        for r in records[1:]
    ] == [
        (5, 5, "click:handleClick", "script", "labeled"),
        (10, 24, "routes/+page.svelte", "embedded", "bare"),
    ]


def test_rewritten_sources_are_mirrored(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "app")

    rewrite_tree(root=root)

    mirrored = (root / ".ggtag" / "src" / "lib" / "util.ts").read_text(encoding="utf-8")
    assert (
        "  gg._ns({ns:'lib/util.ts@formatUser',file:'src/lib/util.ts',"
        "line:2,col:3,src:'user'}, user);\n"
    ) in mirrored
    original = (root / "src" / "lib" / "util.ts").read_text(encoding="utf-8")
    assert "gg(user);" in original


def test_rewrite_tree_is_deterministic(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "app")
    out_a = tmp_path / "out_a"
    out_b = tmp_path / "out_b"

    rewrite_tree(root=root, out_dir=out_a)
    rewrite_tree(root=root, out_dir=out_b)

    assert (out_a / CALLSITES_JSONL).read_bytes() == (out_b / CALLSITES_JSONL).read_bytes()
    for rel in ("src/lib/util.ts", "src/routes/+page.svelte"):
        assert (out_a / rel).read_bytes() == (out_b / rel).read_bytes()


def test_in_place_rewrite_is_idempotent(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "app")
    target = root / "src" / "lib" / "util.ts"

    first = rewrite_tree(root=root, in_place=True)
    rewritten = target.read_text(encoding="utf-8")
    second = rewrite_tree(root=root, in_place=True)

    assert first["call_sites"] == 3
    assert "gg._ns(" in rewritten
    assert second["call_sites"] == 0
    assert target.read_text(encoding="utf-8") == rewritten


def test_manifest_can_be_disabled(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "app")

    rewrite_tree(root=root, config=GgTagConfig(manifest=False))

    assert not (root / ".ggtag" / CALLSITES_JSONL).exists()
    assert (root / ".ggtag" / "src" / "lib" / "util.ts").exists()


def test_config_include_and_exclude(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "app")
    config = GgTagConfig(include=["src/**"], exclude=["src/routes/*"])

    records = scan_tree(root=root, config=config)

    assert [record["path"] for record in records] == ["src/lib/util.ts"]


def test_scan_tree_writes_nothing(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "app")

    records = scan_tree(root=root)

    assert len(records) == 3
    assert not (root / ".ggtag").exists()


def test_scan_skips_previous_output(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "app")
    rewrite_tree(root=root)

    records = scan_tree(root=root)

    assert {record["path"] for record in records} == {
        "src/lib/util.ts",
        "src/routes/+page.svelte",
    }


def test_undecodable_file_is_skipped(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "app")
    (root / "src" / "bad.ts").write_bytes(b"gg(\xff\xfe)\n")

    summary = rewrite_tree(root=root)

    assert summary["files_skipped"] == 1
    assert summary["call_sites"] == 3
