import pytest

from swctl.identifiers import FlagError
from swctl.processes import process_id, resolve_process, resolve_process_relation

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
SERVICE_ID = "c2VydmljZQ==.1"
INSTANCE_ID = "c2VydmljZQ==.1_aW5zdA=="


def test_process_id_prefix_and_suffix():
    result = process_id("inst", "proc")
    assert result.startswith(b"inst_proc".hex())
    assert result.endswith(EMPTY_SHA256)


def test_process_id_is_deterministic_and_distinct():
    assert process_id("a", "b") == process_id("a", "b")
    assert process_id("a", "b") != process_id("a", "c")


def test_resolve_process_from_name():
    flags = {"service-id": SERVICE_ID, "instance-id": INSTANCE_ID, "process-name": "proc"}
    resolve_process(flags, True)
    assert flags["process-id"] == process_id(INSTANCE_ID, "proc")
    assert flags["instance-name"] == "inst"
    assert flags["service-name"] == "service"


def test_resolve_process_keeps_given_id():
    flags = {"service-id": SERVICE_ID, "instance-id": INSTANCE_ID, "process-id": "abc"}
    resolve_process(flags, True)
    assert flags["process-id"] == "abc"


def test_resolve_process_required_missing():
    flags = {"service-id": SERVICE_ID, "instance-id": INSTANCE_ID}
    with pytest.raises(FlagError, match="process-id"):
        resolve_process(flags, True)


def test_resolve_process_optional_missing_leaves_flags():
    flags = {}
    resolve_process(flags, False)
    assert flags == {}


def test_resolve_process_name_without_instance():
    flags = {"process-name": "proc"}
    with pytest.raises(FlagError, match="process-name"):
        resolve_process(flags, False)


def test_resolve_process_relation_requires_dest_name():
    flags = {"service-id": SERVICE_ID, "instance-id": INSTANCE_ID, "process-name": "p"}
    with pytest.raises(FlagError, match="dest-process-name"):
        resolve_process_relation(flags, True)


def test_resolve_process_relation_success():
    flags = {
        "service-id": SERVICE_ID,
        "instance-id": INSTANCE_ID,
        "process-name": "p",
        "dest-process-name": "q",
    }
    resolve_process_relation(flags, True)
    assert flags["process-id"] == process_id(INSTANCE_ID, "p")
    assert flags["dest-process-name"] == "q"