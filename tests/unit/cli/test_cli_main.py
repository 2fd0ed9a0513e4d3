"""Tests for global CLI options."""

from typer.testing import CliRunner

from lakecatalog.cli.main import app

runner = CliRunner()


class TestGlobalOptions:
    """Tests for the main callback."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "lakecatalog version" in result.output

    def test_invalid_output_format(self):
        result = runner.invoke(app, ["--output", "xml", "db", "list"])

        assert result.exit_code == 1
        assert "Invalid output format" in result.output

    def test_missing_config_file(self, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "db", "list"])

        assert result.exit_code == 2

    def test_config_file(self, tmp_path):
        """Test the YAML file names the catalog."""
        config = tmp_path / "config.yaml"
        config.write_text("catalog:\n  name: yaml_catalog\n")

        result = runner.invoke(app, ["--config", str(config), "db", "list"])

        assert result.exit_code == 0
        assert "yaml_catalog" in result.output
