"""Tests for the CLI."""

import json

import pytest
from click.testing import CliRunner

from rtxconfig.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestCLI:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "rtxconfig" in result.output
        for name in ("parse", "contexts", "commands", "reassemble", "scan", "serve", "demo"):
            assert name in result.output

    def test_parse_summary(self, runner, config_file):
        result = runner.invoke(cli, ["parse", str(config_file)])
        assert result.exit_code == 0
        assert "Device: rtx1210" in result.output
        assert "Commands: 39" in result.output
        assert "tunnel:1" in result.output

    def test_parse_json_stdout(self, runner, config_file):
        result = runner.invoke(cli, ["parse", str(config_file), "--format", "json", "--redact"])
        assert result.exit_code == 0
        assert '"command_count": 39' in result.output
        assert "test-login-password-123" not in result.output

    def test_parse_report_file(self, runner, config_file, tmp_path):
        out = tmp_path / "report.json"
        result = runner.invoke(cli, ["parse", str(config_file), "--format", "json",
                                     "-o", str(out)])
        assert result.exit_code == 0
        assert "Report saved" in result.output
        assert json.loads(out.read_text())["device"] == "rtx1210"

    def test_parse_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["parse", str(tmp_path / "missing.txt")])
        assert result.exit_code != 0

    def test_contexts(self, runner, config_file):
        result = runner.invoke(cli, ["contexts", str(config_file)])
        assert result.exit_code == 0
        assert "Contexts: 3" in result.output
        assert "pp:anonymous" in result.output
        assert "ipsec-tunnel:101" in result.output

    def test_contexts_none(self, runner, tmp_path):
        path = tmp_path / "flat.txt"
        path.write_text("ip route default gateway 192.0.2.1\n")
        result = runner.invoke(cli, ["contexts", str(path)])
        assert result.exit_code == 0
        assert "No contexts found." in result.output

    def test_commands_by_context(self, runner, config_file):
        result = runner.invoke(cli, ["commands", str(config_file), "--context", "tunnel:1"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 5
        assert lines[0].endswith("tunnel select 1")

    def test_commands_global_prefix(self, runner, config_file):
        result = runner.invoke(cli, ["commands", str(config_file), "-g",
                                     "-p", "ip filter ", "-p", "nat "])
        assert result.exit_code == 0
        assert len(result.output.strip().splitlines()) == 6

    def test_commands_redacted(self, runner, config_file):
        result = runner.invoke(cli, ["commands", str(config_file), "--redact"])
        assert result.exit_code == 0
        assert "test-l2tp-auth-secret" not in result.output

    def test_commands_unknown_context(self, runner, config_file):
        result = runner.invoke(cli, ["commands", str(config_file), "-c", "tunnel:9"])
        assert result.exit_code != 0
        assert "Context not found" in result.output

    def test_commands_bad_reference(self, runner, config_file):
        result = runner.invoke(cli, ["commands", str(config_file), "-c", "bogus"])
        assert result.exit_code != 0

    def test_commands_context_and_global(self, runner, config_file):
        result = runner.invoke(cli, ["commands", str(config_file), "-c", "tunnel:1", "-g"])
        assert result.exit_code != 0

    def test_reassemble(self, runner, tmp_path, wrapped_config):
        path = tmp_path / "wrapped.txt"
        path.write_bytes(wrapped_config.encode())
        out = tmp_path / "fixed.txt"
        result = runner.invoke(cli, ["reassemble", str(path), "-o", str(out)])
        assert result.exit_code == 0
        assert "edns=on any example.local" in out.read_text()

    def test_scan(self, runner, tmp_path, rtx_config):
        (tmp_path / "a.conf").write_text(rtx_config)
        (tmp_path / "b.txt").write_text("pp select 1\n pp enable 1\n")
        result = runner.invoke(cli, ["scan", str(tmp_path)])
        assert result.exit_code == 0
        assert "Config files: 2" in result.output

    def test_rules_option(self, runner, tmp_path):
        rules = tmp_path / "rules.yaml"
        rules.write_text("extend: true\ncontextual_prefixes:\n  tunnel: ['ip tunnel ']\n")
        conf = tmp_path / "t.txt"
        conf.write_text("tunnel select 1\nip tunnel tcp mss limit auto\n")
        result = runner.invoke(cli, ["commands", str(conf), "-c", "tunnel:1",
                                     "-r", str(rules)])
        assert result.exit_code == 0
        tagged = [l for l in result.output.splitlines() if "tunnel:1" in l]
        assert len(tagged) == 2

    def test_bad_rules_file(self, runner, tmp_path, config_file):
        rules = tmp_path / "rules.yaml"
        rules.write_text("contextual_prefixes:\n  vlan: ['vlan ']\n")
        result = runner.invoke(cli, ["parse", str(config_file), "-r", str(rules)])
        assert result.exit_code != 0

    def test_demo(self, runner):
        result = runner.invoke(cli, ["demo"])
        assert result.exit_code == 0
        assert "rtxconfig Demo" in result.output
        assert "ipsec-tunnel:101" in result.output
        assert "demo-psk" not in result.output

    def test_parse_json_stdout_is_pure_json(self, runner, config_file):
        result = runner.invoke(cli, ["parse", str(config_file), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["summary"]["command_count"] == 39
        assert "Device:" not in result.output

    def test_rules_file_with_yaml_error(self, runner, tmp_path, config_file):
        rules = tmp_path / "rules.yaml"
        rules.write_text("contextual_prefixes: [tunnel\n")
        result = runner.invoke(cli, ["parse", str(config_file), "-r", str(rules)])
        assert result.exit_code == 2
        assert "Invalid YAML" in result.output
        assert not isinstance(result.exception, ValueError)
