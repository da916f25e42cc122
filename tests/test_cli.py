"""CLI smoke tests using typer's CliRunner."""

import json

from typer.testing import CliRunner

from pepload.cli.app import app

runner = CliRunner()

VALID_DOC = json.dumps(
    {
        "attributes": {"age": "integer", "net": "network"},
        "requests": [
            {"age": "30", "net": "10.0.0.0/24", "user": "alice"},
            {"age": 41, "flag": True},
        ],
    }
)


class TestVersionFlag:
    """Test the --version flag."""

    def test_version_output(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "pepload" in result.output


class TestCheckCommand:
    """Tests for the check command."""

    def test_check_literal(self):
        result = runner.invoke(app, ["check", VALID_DOC])
        assert result.exit_code == 0
        assert "Loaded 2 request(s)" in result.output
        assert "Request 1" in result.output
        assert "10.0.0.0/24" in result.output

    def test_check_json_output(self):
        result = runner.invoke(app, ["--json", "check", VALID_DOC])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["status"] == "success"
        assert payload["request_count"] == 2
        first = {a["name"]: a for a in payload["requests"][0]}
        assert first["age"] == {"name": "age", "type": "integer", "value": 30}
        assert first["net"]["value"] == "10.0.0.0/24"
        assert first["user"]["type"] == "string"

    def test_check_yaml_file(self, tmp_path):
        path = tmp_path / "requests.yaml"
        path.write_text("requests:\n  - tags: [a, b]\n")
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 0
        assert "list of strings" in result.output

    def test_check_invalid_request(self):
        doc = json.dumps(
            {"attributes": {"d": "domain"}, "requests": [{"d": "ok.com"}, {"d": "a..b"}]}
        )
        result = runner.invoke(app, ["--json", "check", doc])
        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["status"] == "error"
        assert payload["errors"][0]["request"] == 2
        assert payload["errors"][0]["attribute"] == "d"
        assert "requests" not in payload

    def test_check_unknown_type(self):
        result = runner.invoke(app, ["check", '{"attributes": {"x": "blob"}}'])
        assert result.exit_code == 1
        assert "unknown type" in result.output

    def test_check_missing_file(self, tmp_path):
        result = runner.invoke(app, ["check", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 3

    def test_check_malformed_literal(self):
        result = runner.invoke(app, ["check", "{nope"])
        assert result.exit_code == 1

    def test_check_unsupported_format(self):
        result = runner.invoke(app, ["check", '{"requests": []}', "--format", "xml"])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "unsupported document format" in result.output


class TestEncodeDecodeCommands:
    """Tests for encode and decode."""

    def test_encode_then_decode(self, tmp_path):
        out_dir = tmp_path / "out"
        result = runner.invoke(app, ["encode", VALID_DOC, "-o", str(out_dir)])
        assert result.exit_code == 0
        files = sorted(p.name for p in out_dir.iterdir())
        assert files == ["request-0001.bin", "request-0002.bin"]

        result = runner.invoke(
            app, ["--json", "decode", str(out_dir / "request-0002.bin")]
        )
        assert result.exit_code == 0
        payload = json.loads(result.output)
        decoded = {a["name"]: a["value"] for a in payload["messages"]["request-0002.bin"]}
        assert decoded == {"age": 41, "flag": True}

    def test_encode_buffer_too_small(self, tmp_path):
        out_dir = tmp_path / "out"
        result = runner.invoke(
            app, ["encode", VALID_DOC, "-o", str(out_dir), "--size", "8"]
        )
        assert result.exit_code == 4
        assert not out_dir.exists()

    def test_encode_unsupported_format(self, tmp_path):
        out_dir = tmp_path / "out"
        result = runner.invoke(
            app,
            ["--json", "encode", VALID_DOC, "-o", str(out_dir), "--format", "xml"],
        )
        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert "unsupported document format" in payload["errors"][0]["message"]
        assert not out_dir.exists()

    def test_decode_garbage(self, tmp_path):
        path = tmp_path / "bad.bin"
        path.write_bytes(b"\x01")
        result = runner.invoke(app, ["decode", str(path)])
        assert result.exit_code == 4

    def test_decode_missing(self, tmp_path):
        result = runner.invoke(app, ["decode", str(tmp_path / "nope.bin")])
        assert result.exit_code == 3


class TestTypesCommand:
    def test_lists_builtin_types(self):
        result = runner.invoke(app, ["--json", "types"])
        assert result.exit_code == 0
        names = [row["Type"] for row in json.loads(result.output)["types"]]
        assert "list of strings" in names
        assert "undefined" not in names
        assert len(names) == 8


class TestConfigCommand:
    """Tests for the config command."""

    def test_config_show(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "buffer_size" in result.output

    def test_config_set_and_reset(self, isolated_config):
        result = runner.invoke(app, ["config", "set", "defaults.buffer_size", "2048"])
        assert result.exit_code == 0
        assert json.loads(isolated_config.read_text())["defaults"]["buffer_size"] == 2048

        result = runner.invoke(app, ["config", "reset"])
        assert result.exit_code == 0
        assert not isolated_config.exists()

    def test_config_set_invalid_key(self):
        result = runner.invoke(app, ["config", "set", "invalid.key", "value"])
        assert result.exit_code == 1
        assert "Unknown key" in result.output

    def test_config_set_invalid_int_value(self):
        result = runner.invoke(app, ["config", "set", "defaults.buffer_size", "abc"])
        assert result.exit_code == 1
        assert "Invalid integer" in result.output

    def test_config_set_invalid_choice(self):
        result = runner.invoke(app, ["config", "set", "defaults.raw_format", "toml"])
        assert result.exit_code == 1

    def test_config_unknown_action(self):
        result = runner.invoke(app, ["config", "unknown_action"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output

    def test_agent_mode_forces_json(self, monkeypatch):
        monkeypatch.setenv("PEPLOAD_CLI_MODE", "agent")
        result = runner.invoke(app, ["types"])
        assert result.exit_code == 0
        assert json.loads(result.output)["status"] == "success"
