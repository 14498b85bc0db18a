import argparse
import os

import pytest
import yaml

from swctl.cli import before_chain, build_parser, expand_file_path, load_config, main
from swctl.completion import script_for


def test_expand_file_path_expands_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert expand_file_path("~/.skywalking.yml") == os.path.join(str(tmp_path), ".skywalking.yml")


def test_expand_file_path_keeps_plain_path(tmp_path):
    path = str(tmp_path / "conf.yml")
    assert expand_file_path(path) == path


def test_load_config_missing_file_is_empty(tmp_path):
    assert load_config(tmp_path / "absent.yml") == {}


def test_load_config_reads_mapping(tmp_path):
    path = tmp_path / "conf.yml"
    path.write_text("base-url: http://127.0.0.1:12800/graphql\ndebug: true\n", encoding="utf-8")
    assert load_config(path) == {"base-url": "http://127.0.0.1:12800/graphql", "debug": True}


def test_load_config_empty_file_is_empty(tmp_path):
    path = tmp_path / "conf.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == {}


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "conf.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_rejects_invalid_yaml(tmp_path):
    path = tmp_path / "conf.yml"
    path.write_text("key: [unclosed\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        load_config(path)


def test_before_chain_runs_in_order():
    calls = []
    chain = before_chain(lambda ctx: calls.append("first"), lambda ctx: calls.append("second"))
    chain(argparse.Namespace(timezone="+0800"))
    assert calls == ["first", "second"]


def test_before_chain_stops_at_first_error():
    calls = []

    def failing(ctx):
        raise ValueError("boom")

    chain = before_chain(failing, lambda ctx: calls.append("after"))
    with pytest.raises(ValueError, match="boom"):
        chain(argparse.Namespace(timezone=None))
    assert calls == []


def test_before_chain_uses_server_timezone_when_absent():
    ctx = argparse.Namespace(timezone=None, server_timezone="+0800")
    before_chain()(ctx)
    assert ctx.timezone == "+0800"


def test_before_chain_keeps_explicit_timezone():
    ctx = argparse.Namespace(timezone="-0300", server_timezone="+0800")
    before_chain()(ctx)
    assert ctx.timezone == "-0300"


def test_build_parser_reads_global_flags_and_command():
    ctx = build_parser().parse_args(["--debug", "--display", "json", "completion", "bash"])
    assert ctx.debug is True
    assert ctx.display == "json"
    assert ctx.shell == "bash"


def test_build_parser_accepts_aliases():
    ctx = build_parser().parse_args(["completion", "p"])
    assert ctx.shell == "powershell"


def test_build_parser_leaves_unset_flags_empty():
    ctx = build_parser().parse_args(["completion", "bash"])
    assert ctx.base_url is None
    assert ctx.debug is None


def test_main_prints_bash_script(capsys, tmp_path):
    status = main(["--config", str(tmp_path / "none.yml"), "completion", "bash"])
    assert status == 0
    assert capsys.readouterr().out == script_for("bash")


def test_main_prints_powershell_script_via_alias(capsys, tmp_path):
    status = main(["--config", str(tmp_path / "none.yml"), "completion", "p"])
    assert status == 0
    assert capsys.readouterr().out == script_for("powershell")


def test_main_fails_on_bad_config(tmp_path, capsys):
    path = tmp_path / "conf.yml"
    path.write_text("- not\n- a mapping\n", encoding="utf-8")
    assert main(["--config", str(path), "completion", "bash"]) == 1
    assert capsys.readouterr().out == ""


def test_main_without_command_prints_help(capsys, tmp_path):
    assert main(["--config", str(tmp_path / "none.yml")]) == 0
    assert "swctl" in capsys.readouterr().out


def test_main_auto_complete_top_level(capsys):
    assert main(["--auto_complete"]) == 0
    assert capsys.readouterr().out.split() == ["completion"]


def test_main_auto_complete_subcommands(capsys):
    assert main(["completion", "--auto_complete"]) == 0
    assert capsys.readouterr().out.split() == ["bash", "powershell"]


def test_main_auto_complete_flags(capsys):
    assert main(["--", "--auto_complete"]) == 0
    out = capsys.readouterr().out.split()
    assert "--config" in out
    assert "--base-url" in out


def test_main_unknown_command_exits():
    with pytest.raises(SystemExit) as info:
        main(["nonexistent"])
    assert info.value.code == 2


def test_main_version(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--version"])
    assert info.value.code == 0
    assert "swctl version" in capsys.readouterr().out