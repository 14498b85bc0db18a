"""Resolution of process ids and names given on the command line."""

from __future__ import annotations

import hashlib

from swctl.identifiers import (
    INSTANCE_ID,
    FlagError,
    Flags,
    ServiceLookup,
    resolve_instance,
    resolve_service,
)

PROCESS_ID = "process-id"
PROCESS_NAME = "process-name"
DEST_PROCESS_NAME = "dest-process-name"

_EMPTY_DIGEST = hashlib.sha256(b"").digest()


def process_id(instance_id: str, name: str) -> str:
    """Derive the id of the process ``name`` running in ``instance_id``.

    The id is the hex form of ``<instance_id>_<name>`` followed by the
    SHA-256 digest of empty input, as the backend computes it.
    """
    raw = f"{instance_id}_{name}".encode("utf-8") + _EMPTY_DIGEST
    return raw.hex()


def _get(flags: Flags, name: str) -> str:
    return flags.get(name) or ""


def _resolve_process(
    flags: Flags, required: bool, id_flag: str, name_flag: str, instance_id_flag: str
) -> None:
    current_id = _get(flags, id_flag)
    name = _get(flags, name_flag)
    instance_id = _get(flags, instance_id_flag)

    if not current_id and not name:
        if required:
            raise FlagError(f'either flags "--{id_flag}" or "--{name_flag}" must be given')
        return

    if name:
        if not instance_id:
            raise FlagError(
                f'"--{name_flag}" is specified but its related service name or id is not given'
            )
        current_id = process_id(instance_id, name)

    flags[id_flag] = current_id


def resolve_process(
    flags: Flags, required: bool, lookup: ServiceLookup | None = None
) -> None:
    """Resolve the service and instance, then derive ``process-id`` from its name."""
    resolve_service(flags, required, lookup)
    resolve_instance(flags, required, lookup)
    _resolve_process(flags, required, PROCESS_ID, PROCESS_NAME, INSTANCE_ID)


def resolve_process_relation(
    flags: Flags, required: bool, lookup: ServiceLookup | None = None
) -> None:
    """Resolve the source process and require a destination process name."""
    resolve_service(flags, required, lookup)
    resolve_instance(flags, required, lookup)
    resolve_process(flags, required, lookup)
    if required and not _get(flags, DEST_PROCESS_NAME):
        raise FlagError(f'flag "--{DEST_PROCESS_NAME}" must given')