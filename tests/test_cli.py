import json

import pytest
from click.testing import CliRunner

from syft_access_tree.cli.commands import main

FOLDERS_YAML = """\
environments:
  dev:
    name: Development
    folders:
      - {id: root, path: /, parentId: null, name: root}
      - {id: app, path: /app, parentId: root, name: app}
      - {id: api, path: /app/api, parentId: app, name: api}
      - {id: web, path: /web, parentId: root, name: web}
"""

POLICY_YAML = """\
rules:
  - subject: secrets
    actions: [readValue]
    conditions: {secret_path: "/app/**"}
"""


@pytest.fixture
def files(tmp_path):
    folders = tmp_path / "folders.yaml"
    folders.write_text(FOLDERS_YAML)
    policy = tmp_path / "policy.yaml"
    policy.write_text(POLICY_YAML)
    return folders, policy


def _args(files, *extra) -> list[str]:
    folders, policy = files
    return ["show", "--folders", str(folders), "--policy", str(policy), *extra]


def test_show_renders_tree(files):
    """Only folders on the --path branch are printed."""
    result = CliRunner().invoke(main, _args(files, "--path", "/app"))
    assert result.exit_code == 0, result.output
    assert "/app/api" in result.output
    assert "/web" not in result.output
    assert "3 relevant folders" in result.output


def test_show_json(files):
    result = CliRunner().invoke(main, _args(files, "--json", "--env", "dev"))
    assert result.exit_code == 0, result.output
    graph = json.loads(result.stdout)
    assert [n["id"] for n in graph["nodes"]] == [
        "role-secrets-dev",
        "root",
        "app",
        "web",
        "api",
    ]
    api = next(n for n in graph["nodes"] if n["id"] == "api")
    assert api["access"] == "Full"
    assert api["actions"]["readValue"] == "Full"
    assert all(n["position"] is not None for n in graph["nodes"])


def test_show_expand(tmp_path):
    """--expand reveals the hidden children of a truncated level."""
    lines = ["environments:", "  dev:", "    name: Dev", "    folders:"]
    lines.append("      - {id: root, path: /, name: root}")
    for i in range(13):
        lines.append(f"      - {{id: f{i}, path: /f{i}, parentId: root}}")
    folders = tmp_path / "folders.yaml"
    folders.write_text("\n".join(lines) + "\n")
    policy = tmp_path / "policy.yaml"
    policy.write_text("rules: []\n")

    args = ["show", "--folders", str(folders), "--policy", str(policy)]
    result = CliRunner().invoke(main, args)
    assert result.exit_code == 0, result.output
    assert "show 3 more" in result.output
    assert "root: showing 10 of 13" in result.output

    result = CliRunner().invoke(main, [*args, "--expand", "root"])
    assert result.exit_code == 0, result.output
    assert "show 3 more" not in result.output
    assert "/f12" in result.output


def test_unknown_environment(files):
    result = CliRunner().invoke(main, _args(files, "--env", "qa"))
    assert result.exit_code != 0
    assert "Unknown environment 'qa'" in result.output


def test_invalid_policy(files, tmp_path):
    """Policy validation errors exit with status 1 and a short message."""
    folders, _ = files
    bad = tmp_path / "bad.yaml"
    bad.write_text("rules:\n  - subject: kms\n    actions: [read]\n")
    result = CliRunner().invoke(
        main, ["show", "--folders", str(folders), "--policy", str(bad)]
    )
    assert result.exit_code == 1
    assert "Invalid policy file" in result.output


def test_subjects_lists_actions():
    result = CliRunner().invoke(main, ["subjects"])
    assert result.exit_code == 0
    assert "secrets: describeSecret, readValue, create, edit, delete" in result.output
    assert "secret-folders: create, edit, delete" in result.output


@pytest.mark.parametrize(
    "content",
    [
        "access_tree: [unclosed\n",
        "access_tree: {node_width: wide}\n",
        "access_tree: [1, 2]\n",
    ],
)
def test_invalid_config(files, tmp_path, content):
    """Broken config files are reported as a usage error, not a traceback."""
    config = tmp_path / "config.yaml"
    config.write_text(content)
    result = CliRunner().invoke(main, _args(files, "--config", str(config)))
    assert result.exit_code == 1
    assert "Invalid config" in result.output
    assert "Traceback" not in result.output


def test_show_notes_truncated_top_level(tmp_path):
    """Folders without a parent are paged too and the CLI says so."""
    lines = ["environments:", "  dev:", "    name: Dev", "    folders:"]
    for i in range(12):
        lines.append(f"      - {{id: t{i}, path: /t{i}}}")
    folders = tmp_path / "folders.yaml"
    folders.write_text("\n".join(lines) + "\n")
    policy = tmp_path / "policy.yaml"
    policy.write_text("rules: []\n")

    args = ["show", "--folders", str(folders), "--policy", str(policy)]
    result = CliRunner().invoke(main, args)
    assert result.exit_code == 0, result.output
    assert "top level: showing 10 of 12" in result.output
    assert "/t11" not in result.output
