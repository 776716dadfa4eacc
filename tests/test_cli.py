# tests/test_cli.py
"""
Tests for the mummy CLI.
"""

from typer.testing import CliRunner

from mummy.cli import app

runner = CliRunner()


def test_cli_root_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "build" in result.stdout


def test_all_commands_have_help():
    for cmd in app.registered_commands:
        result = runner.invoke(app, [cmd.name, "--help"])
        assert result.exit_code == 0, f"Help failed for '{cmd.name}'"


class TestBuild:
    def test_build_site(self, source_root, target_root):
        (source_root / "a.txt").write_text("a")

        result = runner.invoke(app, ["build", str(source_root), str(target_root)])

        assert result.exit_code == 0, result.output
        assert "regenerated 1" in result.stdout
        assert (target_root / "a.txt").read_text() == "a"

    def test_second_build_skips(self, source_root, target_root):
        (source_root / "a.txt").write_text("a")
        runner.invoke(app, ["build", str(source_root), str(target_root)])

        result = runner.invoke(app, ["build", str(source_root), str(target_root)])

        assert result.exit_code == 0, result.output
        assert "skipped 1" in result.stdout

    def test_failed_artifact_exits_nonzero(self, tmp_path, source_root, target_root):
        (source_root / "broken.png").write_bytes(b"not a png")
        config = tmp_path / "mummy.yaml"
        config.write_text("mummy:\n  image:\n    process_threshold_file_size: 0\n")

        result = runner.invoke(
            app, ["build", str(source_root), str(target_root), "--config", str(config)]
        )

        assert result.exit_code == 1
        assert "failures 1" in result.stdout

    def test_fail_fast_aborts(self, tmp_path, source_root, target_root):
        (source_root / "broken.png").write_bytes(b"not a png")
        config = tmp_path / "mummy.yaml"
        config.write_text("mummy:\n  image:\n    process_threshold_file_size: 0\n")

        result = runner.invoke(
            app,
            ["build", str(source_root), str(target_root), "--config", str(config), "--fail-fast"],
        )

        assert result.exit_code == 1
        assert "Error generating" in result.stdout

    def test_invalid_config_exits_nonzero(self, tmp_path, source_root, target_root):
        config = tmp_path / "mummy.yaml"
        config.write_text("mummy:\n  bogus: 1\n")

        result = runner.invoke(
            app, ["build", str(source_root), str(target_root), "--config", str(config)]
        )

        assert result.exit_code == 1


class TestPlan:
    def test_plan_prints_tree_without_writing(self, source_root, target_root, description_root):
        (source_root / "notes.txt").write_text("n")

        result = runner.invoke(app, ["plan", str(source_root), str(target_root)])

        assert result.exit_code == 0, result.output
        assert "notes.txt" in result.stdout
        assert not target_root.exists()
        assert not description_root.exists()


class TestConfig:
    def test_shows_defaults(self):
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "content_base_names" in result.stdout
        assert "process_threshold_file_size" in result.stdout

    def test_shows_site_overrides(self, source_root):
        (source_root / ".mummy.yaml").write_text("mummy:\n  image:\n    with_aspects: [preview]\n")

        result = runner.invoke(app, ["config", "--source", str(source_root)])

        assert result.exit_code == 0
        assert "preview" in result.stdout
