import io

import pytest
import yaml

from swctl.manifest import load_overlay, usage


def test_usage_mentions_command_examples():
    text = usage("oap", "custom overlay example")
    assert "custom overlay example" in text
    assert "$ swctl install manifest oap\n" in text
    assert "$ swctl install manifest oap -f oap-cr.yaml\n" in text
    assert "$ cat oap-cr.yaml | swctl install manifest oap -f=-\n" in text
    assert "$ swctl install manifest oap -f oap-cr.yaml | kubectl apply -f-\n" in text


def test_usage_starts_with_examples_header():
    assert usage("ui", "x").startswith("\nExamples:\n\nx\n")


def test_load_overlay_empty_file_name():
    assert load_overlay("", io.StringIO("spec: {}")) is None


def test_load_overlay_from_stream():
    stream = io.StringIO("spec:\n  OAPServerAddress: oap.test\n")
    assert load_overlay("-", stream) == {"spec": {"OAPServerAddress": "oap.test"}}


def test_load_overlay_empty_stream():
    assert load_overlay("-", io.StringIO("")) is None


def test_load_overlay_stream_with_crlf():
    stream = io.StringIO("spec:\r\n  replicas: 2\r\n")
    assert load_overlay("-", stream) == {"spec": {"replicas": 2}}


def test_load_overlay_from_file(tmp_path):
    path = tmp_path / "ui-cr.yaml"
    path.write_text("spec:\n  service:\n    ingress:\n      host: ui.skywalking.test\n")
    assert load_overlay(str(path)) == {
        "spec": {"service": {"ingress": {"host": "ui.skywalking.test"}}}
    }


def test_load_overlay_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_overlay(str(tmp_path / "absent.yaml"))


def test_load_overlay_invalid_yaml():
    with pytest.raises(yaml.YAMLError):
        load_overlay("-", io.StringIO("spec: [unclosed\n"))