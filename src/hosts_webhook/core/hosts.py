"""Translation between hosts-file text and DNS endpoints."""

import logging
from typing import List, Optional

from hosts_webhook.api.models import ADDRESS_RECORD, ChangeSet, Endpoint

logger = logging.getLogger(__name__)

COMMENT_MARKER = "#"


def _record_fields(line: str) -> Optional[List[str]]:
    """
    Return the whitespace separated fields of a record line.

    Blank lines, comment lines and lines without at least an address and one
    hostname are not records and return None.
    """
    stripped = line.strip()

    if not stripped or stripped.startswith(COMMENT_MARKER):
        return None

    fields = stripped.split()

    if len(fields) < 2:
        return None

    return fields


def parse_endpoints(content: str) -> List[Endpoint]:
    """
    Parse hosts-file content into endpoints.

    Each hostname on a line becomes its own A record pointing at the line's
    address. Hostnames after an inline ``#`` comment are ignored. Endpoints
    come out in file order, then in the order hostnames appear on the line.
    """
    endpoints = []

    for line in content.split("\n"):
        fields = _record_fields(line)

        if fields is None:
            continue

        address = fields[0]

        for hostname in fields[1:]:
            if hostname.startswith(COMMENT_MARKER):
                break

            endpoints.append(
                Endpoint(
                    dns_name=hostname,
                    record_type=ADDRESS_RECORD,
                    targets=[address],
                )
            )

    return endpoints


def format_line(endpoint: Endpoint) -> str:
    """Format an endpoint as a hosts-file line using its first target."""
    return f"{endpoint.targets[0]}\t{endpoint.dns_name}"


def apply_changes(content: str, changes: ChangeSet) -> str:
    """
    Rewrite hosts-file content to apply a change set.

    A record line is removed as a whole when any hostname on it is deleted;
    lines are never partially edited. Every other line is kept verbatim.
    Creates are appended one line each, without checking for an existing
    line, so applying the same create twice duplicates it. Creates without
    targets are skipped. Updates are not applied.
    """
    lines = content.split("\n")
    trailing_newline = content.endswith("\n")

    if lines[-1] == "":
        lines.pop()

    deleted = {endpoint.dns_name for endpoint in changes.delete}
    kept = []
    removed = 0

    for line in lines:
        fields = _record_fields(line)

        if fields is not None and deleted.intersection(fields[1:]):
            removed += 1
            continue

        kept.append(line)

    added = 0

    for endpoint in changes.create:
        if not endpoint.targets:
            logger.debug(f"Skipping {endpoint.dns_name}: no targets")
            continue

        kept.append(format_line(endpoint))
        added += 1

    logger.info(f"Hosts file: {added} line(s) added, {removed} line(s) removed")

    result = "\n".join(kept)

    if trailing_newline and kept:
        result += "\n"

    return result
