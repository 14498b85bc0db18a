"""Resolution of entity ids and names given on the command line.

Services, endpoints, instances, browser pages and browser versions can be
named either by id or by name. The resolvers here fill in whichever of the
two is missing, updating the flag mapping in place.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Callable, MutableMapping

SERVICE_ID = "service-id"
SERVICE_NAME = "service-name"
DEST_SERVICE_ID = "dest-service-id"
DEST_SERVICE_NAME = "dest-service-name"

ENDPOINT_ID = "endpoint-id"
ENDPOINT_NAME = "endpoint-name"
DEST_ENDPOINT_ID = "dest-endpoint-id"
DEST_ENDPOINT_NAME = "dest-endpoint-name"

INSTANCE_ID = "instance-id"
INSTANCE_NAME = "instance-name"
DEST_INSTANCE_ID = "dest-instance-id"
DEST_INSTANCE_NAME = "dest-instance-name"

PAGE_ID = "page-id"
PAGE_NAME = "page-name"

VERSION_ID = "version-id"
VERSION_NAME = "version-name"

Flags = MutableMapping[str, str]
ServiceLookup = Callable[[str], str]


class FlagError(ValueError):
    """Raised when id and name flags are missing, malformed or inconsistent."""


def _get(flags: Flags, name: str) -> str:
    return flags.get(name) or ""


def _b64decode(text: str) -> str:
    try:
        raw = base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise FlagError(f"illegal base64 data in {text!r}: {exc}") from exc
    return raw.decode("utf-8", errors="replace")


def _b64encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _missing(id_flag: str, name_flag: str) -> FlagError:
    return FlagError(f'either flags "--{id_flag}" or "--{name_flag}" must be given')


def parse_service_id(service_id: str) -> tuple[str, bool]:
    """Split a service id into its decoded name and whether it is a normal service.

    An empty id gives ``("", False)``. Raises ``FlagError`` if the id is malformed.
    """
    if not service_id:
        return "", False
    parts = service_id.split(".")
    if len(parts) != 2:
        raise FlagError(
            f"invalid service id, cannot be splitted into 2 parts. {service_id}"
        )
    return _b64decode(parts[0]), parts[1] == "1"


def _resolve_service(
    flags: Flags,
    required: bool,
    lookup: ServiceLookup | None,
    id_flag: str,
    name_flag: str,
) -> None:
    service_id = _get(flags, id_flag)
    name = _get(flags, name_flag)

    if not service_id and not name:
        if required:
            raise _missing(id_flag, name_flag)
        return

    if service_id:
        parts = service_id.split(".")
        if len(parts) != 2:
            raise FlagError(
                f"invalid service id, cannot be splitted into 2 parts. {service_id}"
            )
        name = _b64decode(parts[0])
    else:
        if lookup is None:
            raise FlagError(f'cannot look up the service given by "--{name_flag}"')
        service_id = lookup(name)

    flags[id_flag] = service_id
    flags[name_flag] = name


def _resolve_child(
    flags: Flags,
    required: bool,
    id_flag: str,
    name_flag: str,
    service_id_flag: str,
    kind: str,
) -> None:
    child_id = _get(flags, id_flag)
    name = _get(flags, name_flag)
    service_id = _get(flags, service_id_flag)

    if not child_id and not name:
        if required:
            raise _missing(id_flag, name_flag)
        return

    if child_id:
        parts = child_id.split("_")
        if len(parts) != 2:
            raise FlagError(
                f"invalid {kind} id, cannot be splitted into 2 parts. {child_id}"
            )
        name = _b64decode(parts[1])
    else:
        if not service_id:
            raise FlagError(
                f'"--{name_flag}" is specified but its related service name or id is not given'
            )
        child_id = f"{service_id}_{_b64encode(name)}"

    flags[id_flag] = child_id
    flags[name_flag] = name


def resolve_service(
    flags: Flags, required: bool, lookup: ServiceLookup | None = None
) -> None:
    """Fill in the missing one of ``service-id`` and ``service-name``.

    ``lookup`` maps a service name to its id and is used only when the name
    alone is given.
    """
    _resolve_service(flags, required, lookup, SERVICE_ID, SERVICE_NAME)


def resolve_service_relation(
    flags: Flags, required: bool, lookup: ServiceLookup | None = None
) -> None:
    """Resolve both the source and the destination service."""
    resolve_service(flags, required, lookup)
    _resolve_service(flags, required, lookup, DEST_SERVICE_ID, DEST_SERVICE_NAME)


def resolve_endpoint(
    flags: Flags, required: bool, lookup: ServiceLookup | None = None
) -> None:
    """Resolve the service, then fill in ``endpoint-id`` or ``endpoint-name``."""
    resolve_service(flags, required, lookup)
    _resolve_child(flags, required, ENDPOINT_ID, ENDPOINT_NAME, SERVICE_ID, "endpoint")


def resolve_endpoint_relation(
    flags: Flags, required: bool, lookup: ServiceLookup | None = None
) -> None:
    """Resolve the source and destination services and endpoints."""
    resolve_service_relation(flags, required, lookup)
    resolve_endpoint(flags, required, lookup)
    _resolve_child(
        flags, required, DEST_ENDPOINT_ID, DEST_ENDPOINT_NAME, DEST_SERVICE_ID, "endpoint"
    )


def resolve_instance(
    flags: Flags, required: bool, lookup: ServiceLookup | None = None
) -> None:
    """Resolve the service, then fill in ``instance-id`` or ``instance-name``."""
    resolve_service(flags, required, lookup)
    _resolve_child(flags, required, INSTANCE_ID, INSTANCE_NAME, SERVICE_ID, "instance")


def resolve_instance_relation(
    flags: Flags, required: bool, lookup: ServiceLookup | None = None
) -> None:
    """Resolve the source instance and the destination instance.

    The destination instance is derived from ``dest-service-id`` as given.
    """
    resolve_service(flags, required, lookup)
    resolve_instance(flags, required, lookup)
    _resolve_child(
        flags, required, DEST_INSTANCE_ID, DEST_INSTANCE_NAME, DEST_SERVICE_ID, "instance"
    )


def resolve_page(
    flags: Flags, required: bool, lookup: ServiceLookup | None = None
) -> None:
    """Resolve the browser service, then fill in ``page-id`` or ``page-name``.

    ``lookup`` should search browser services.
    """
    resolve_service(flags, required, lookup)
    _resolve_child(flags, required, PAGE_ID, PAGE_NAME, SERVICE_ID, "endpoint")


def resolve_version(
    flags: Flags, required: bool, lookup: ServiceLookup | None = None
) -> None:
    """Resolve the browser service, then fill in ``version-id`` or ``version-name``.

    ``lookup`` should search browser services.
    """
    resolve_service(flags, required, lookup)
    _resolve_child(flags, required, VERSION_ID, VERSION_NAME, SERVICE_ID, "instance")