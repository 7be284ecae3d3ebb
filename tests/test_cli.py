"""Tests for the interactive command-line interface."""

from click.testing import CliRunner

from bob_cli.cli import main


def run(args, text):
    runner = CliRunner()
    return runner.invoke(main, args, input=text)


class TestCli:
    """Test a whole session through the click entry point."""

    def test_session(self, tmp_path):
        data_file = tmp_path / "bob.txt"
        result = run(
            ["--data-file", str(data_file), "--config", str(tmp_path / "none.yaml")],
            "todo read book\nlist\nbye\n",
        )

        assert result.exit_code == 0, result.output
        assert "Hello! I'm Bob" in result.output
        assert "1.[T][ ] read book" in result.output
        assert "Bye. Hope to see you again soon!" in result.output
        assert data_file.read_text(encoding="utf-8") == "T | 0 | read book\n"

    def test_end_of_input_exits(self, tmp_path):
        result = run(
            ["--data-file", str(tmp_path / "bob.txt"), "--config", str(tmp_path / "none.yaml")],
            "list\n",
        )

        assert result.exit_code == 0, result.output
        assert "Bye. Hope to see you again soon!" in result.output

    def test_errors_are_shown(self, tmp_path):
        result = run(
            ["--data-file", str(tmp_path / "bob.txt"), "--config", str(tmp_path / "none.yaml")],
            "mark 1\nbye\n",
        )

        assert "That task number does not exist." in result.output

    def test_data_file_from_config(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        data_file = tmp_path / "from_config.txt"
        config_path.write_text(f"data_file: {data_file}\n", encoding="utf-8")

        result = run(["--config", str(config_path)], "todo x\nbye\n")

        assert result.exit_code == 0, result.output
        assert data_file.exists()

    def test_non_string_log_level_falls_back_to_defaults(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("log_level: 10\n", encoding="utf-8")

        result = run(
            ["--config", str(config_path), "--data-file", str(tmp_path / "bob.txt")],
            "bye\n",
        )

        assert result.exit_code == 0, result.output
        assert "Bye. Hope to see you again soon!" in result.output
