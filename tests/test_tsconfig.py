# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the build configuration rewriter."""

from __future__ import annotations

import errno
from pathlib import Path

import pytest

from tsrefs.errors import ConfigWriteError, MalformedConfigError, ReferenceCompilerError
from tsrefs.models import RewriteStatus
from tsrefs.tsconfig import configure_build_config, render_build_config


def test_missing_file_is_skipped(tmp_path: Path) -> None:
    path = tmp_path / "tsconfig.json"
    outcome = configure_build_config(path, ["../b"])
    assert outcome.status is RewriteStatus.MISSING
    assert not path.exists()


def test_bare_config_gains_default_compiler_options(tmp_path: Path, write_json, read_json) -> None:
    path = write_json(tmp_path / "tsconfig.json", {})
    outcome = configure_build_config(path, [])
    assert outcome.status is RewriteStatus.WRITTEN
    assert outcome.composite_enabled
    assert read_json(path) == {
        "compilerOptions": {"composite": True, "rootDir": "src", "outDir": "lib"},
    }


def test_composite_is_inserted_first_and_other_options_keep_order(
    tmp_path: Path,
    write_json,
    read_json,
) -> None:
    path = write_json(
        tmp_path / "tsconfig.json",
        {"extends": "../base", "compilerOptions": {"rootDir": "src", "outDir": "lib"}},
    )
    configure_build_config(path, [])
    document = read_json(path)
    assert list(document) == ["extends", "compilerOptions"]
    assert list(document["compilerOptions"].items()) == [
        ("composite", True),
        ("rootDir", "src"),
        ("outDir", "lib"),
    ]


def test_composite_false_is_overridden_in_place(tmp_path: Path, write_json, read_json) -> None:
    path = write_json(
        tmp_path / "tsconfig.json",
        {"compilerOptions": {"strict": True, "composite": False, "outDir": "lib"}},
    )
    configure_build_config(path, [])
    assert list(read_json(path)["compilerOptions"].items()) == [
        ("strict", True),
        ("composite", True),
        ("outDir", "lib"),
    ]


def test_additive_merge_keeps_existing_entries(tmp_path: Path, write_json, read_json) -> None:
    path = write_json(
        tmp_path / "tsconfig.json",
        {
            "compilerOptions": {"composite": True},
            "references": [{"path": "../a", "prepend": True}, {"path": "../legacy"}],
        },
    )
    outcome = configure_build_config(path, ["../b", "../a"])
    assert outcome.added == ("../b",)
    assert read_json(path)["references"] == [
        {"path": "../a", "prepend": True},
        {"path": "../legacy"},
        {"path": "../b"},
    ]


def test_duplicate_existing_entries_are_collapsed(tmp_path: Path, write_json, read_json) -> None:
    path = write_json(
        tmp_path / "tsconfig.json",
        {
            "compilerOptions": {"composite": True},
            "references": [{"path": "../a"}, {"path": "../a/"}, {"path": "../c"}],
        },
    )
    outcome = configure_build_config(path, ["../a"])
    assert outcome.status is RewriteStatus.WRITTEN
    assert outcome.duplicates_removed == 1
    assert read_json(path)["references"] == [{"path": "../a"}, {"path": "../c"}]


def test_references_key_not_added_when_empty(tmp_path: Path, write_json, read_json) -> None:
    path = write_json(tmp_path / "tsconfig.json", {"compilerOptions": {}})
    configure_build_config(path, [])
    assert "references" not in read_json(path)


def test_second_run_is_a_no_op(tmp_path: Path, write_json) -> None:
    path = write_json(tmp_path / "tsconfig.json", {"compilerOptions": {"strict": True}})
    first = configure_build_config(path, ["../b", "../c"])
    content = path.read_bytes()
    second = configure_build_config(path, ["../b", "../c"])
    assert first.status is RewriteStatus.WRITTEN
    assert second.status is RewriteStatus.UNCHANGED
    assert path.read_bytes() == content


def test_force_rewrites_unchanged_documents(tmp_path: Path) -> None:
    path = tmp_path / "tsconfig.json"
    path.write_text('{"compilerOptions":{"composite":true}}', encoding="utf-8")
    outcome = configure_build_config(path, [], force=True)
    assert outcome.status is RewriteStatus.WRITTEN
    assert path.read_text(encoding="utf-8") == (
        '{\n  "compilerOptions": {\n    "composite": true\n  }\n}\n'
    )


def test_dry_run_leaves_file_untouched(tmp_path: Path) -> None:
    path = tmp_path / "tsconfig.json"
    path.write_text("{}", encoding="utf-8")
    outcome = configure_build_config(path, ["../b"], dry_run=True)
    assert outcome.status is RewriteStatus.PENDING
    assert outcome.added == ("../b",)
    assert path.read_text(encoding="utf-8") == "{}"


def test_render_keeps_non_ascii_and_trailing_newline() -> None:
    assert render_build_config({"description": "café"}) == '{\n  "description": "café"\n}\n'


@pytest.mark.parametrize(
    ("content", "reason"),
    [
        ("{ not json", "invalid JSON"),
        ("[]", "top-level value must be an object"),
        ('{"compilerOptions": []}', "'compilerOptions' must be an object"),
        ('{"references": {"path": "../a"}}', "'references' must be a list"),
        ('{"references": ["../a"]}', "string 'path'"),
    ],
)
def test_malformed_documents_are_fatal(tmp_path: Path, content: str, reason: str) -> None:
    path = tmp_path / "tsconfig.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(MalformedConfigError, match=reason) as excinfo:
        configure_build_config(path, ["../b"])
    assert excinfo.value.path == path
    assert path.read_text(encoding="utf-8") == content


def test_non_utf8_documents_are_fatal(tmp_path: Path) -> None:
    path = tmp_path / "tsconfig.json"
    content = b'{"compilerOptions": {"outDir": "\xff"}}'
    path.write_bytes(content)
    with pytest.raises(MalformedConfigError, match="UTF-8") as excinfo:
        configure_build_config(path, ["../b"])
    assert excinfo.value.path == path
    assert path.read_bytes() == content


def test_read_failures_are_fatal(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "tsconfig.json"
    path.write_text("{}", encoding="utf-8")

    def _deny(self: Path, *args: object, **kwargs: object) -> str:
        raise PermissionError(errno.EACCES, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_text", _deny)
    with pytest.raises(ReferenceCompilerError, match="Unable to read build configuration") as excinfo:
        configure_build_config(path, [])
    assert not isinstance(excinfo.value, MalformedConfigError)


def test_write_failures_carry_the_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "tsconfig.json"
    path.write_text("{}", encoding="utf-8")

    def _deny(self: Path, *args: object, **kwargs: object) -> int:
        raise PermissionError(errno.EACCES, "Permission denied", str(self))

    monkeypatch.setattr(Path, "write_text", _deny)
    with pytest.raises(ConfigWriteError, match="Permission denied") as excinfo:
        configure_build_config(path, [])
    assert excinfo.value.path == path
