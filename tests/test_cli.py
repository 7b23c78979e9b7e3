import json

from click.testing import CliRunner

from tmpltranslate.cli import cli, load_config


def write_config(folder):
    folder.mkdir()
    (folder / "config.yml").write_text(
        "logging:\n  level: DEBUG\n  format: '%(message)s'\n  datefmt: '%H:%M:%S'\n"
        "templates:\n  language: de\n  patterns: ['*.html']\n",
        "utf-8",
    )


def test_load_config_defaults(tmp_path):
    config = load_config(str(tmp_path / "missing"))
    assert config["templates"]["patterns"] == ["*.tmpl"]
    assert config["logging"]["level"] == "INFO"


def test_load_config_overrides(tmp_path):
    write_config(tmp_path / "config")
    config = load_config(str(tmp_path / "config"))
    assert config["templates"]["language"] == "de"
    assert config["logging"]["level"] == "DEBUG"


def test_extract(tmp_path):
    write_config(tmp_path / "config")
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "index.html").write_text('{{ _ "Hello %[1]s" $.Name /* greeting */ }}', "utf-8")
    (templates / "skip.tmpl").write_text('{{ _ "Skipped" }}', "utf-8")
    output = tmp_path / "catalog.json"

    result = CliRunner().invoke(
        cli,
        [
            "extract",
            "--config-folder",
            str(tmp_path / "config"),
            "--template-folder",
            str(templates),
            "--output",
            str(output),
        ],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text("utf-8"))
    assert data["language"] == "de"
    assert [m["key"] for m in data["messages"]] == ["Hello %[1]s"]
    message = data["messages"][0]
    assert message["translatorComment"] == "/* greeting */\n[from: index.html]"
    assert message["placeholders"] == [
        {
            "id": "Name",
            "string": "%[1]s",
            "type": "string",
            "underlyingType": "string",
            "argNum": 1,
            "expr": "$.Name",
        }
    ]


def test_extract_invalid_config(tmp_path):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "config.yml").write_text("logging: [unclosed\n", "utf-8")
    result = CliRunner().invoke(
        cli,
        ["extract", "--config-folder", str(tmp_path / "config"), "--template-folder", str(tmp_path)],
    )
    assert result.exit_code == 1


def test_prune(tmp_path):
    write_config(tmp_path / "config")
    template = tmp_path / "page.tmpl"
    template.write_text('<b>{{- _ /* screen reader only */ -}}</b>{{ _ "Hi" /* x */ }}', "utf-8")
    output = tmp_path / "clean.tmpl"

    result = CliRunner().invoke(
        cli,
        ["prune", "--config-folder", str(tmp_path / "config"), "--output", str(output), str(template)],
    )
    assert result.exit_code == 0, result.output
    assert output.read_text("utf-8") == '<b>{{- -}}</b>{{ _ "Hi" }}'

    result = CliRunner().invoke(cli, ["prune", "--config-folder", str(tmp_path / "config"), str(template)])
    assert '<b>{{- -}}</b>{{ _ "Hi" }}' in result.output
