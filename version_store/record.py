"""Read and write the version file.

The file uses the java `.properties` layout written by gradle-style versioning
plugins, so existing `version.properties` files can be reused:

    # Version managed by version-store
    major=1
    minor=2
    patch=3
    releaseCandidate=0
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from zero_3rdparty.file_utils import ensure_parents_write_text

from version_store.errors import InvalidRecordValueError
from version_store.version import RECORD_KEYS, Version

logger = logging.getLogger(__name__)
COMMENT_PREFIXES = ("#", "!")
DEFAULT_VALUE = "0"
_key_value_regex = re.compile(r"^(?P<key>[^=:\s]+)\s*[=:]\s*(?P<value>.*)$")
_int_regex = re.compile(r"^[0-9]+$")


def parse_properties(text: str) -> dict[str, str]:
    """
    >>> parse_properties("# comment\\nmajor = 1\\nminor:2\\n\\n")
    {'major': '1', 'minor': '2'}
    """
    props: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        if match := _key_value_regex.match(line):
            props[match["key"]] = match["value"].strip()
        else:
            logger.debug(f"ignoring line without separator: {line!r}")
    return props


def _parse_int(props: dict[str, str], key: str) -> int:
    value = props.get(key, DEFAULT_VALUE).strip()
    if not _int_regex.match(value):
        raise InvalidRecordValueError(key, value)
    try:
        return int(value)
    except ValueError as e:
        # digit strings longer than sys.get_int_max_str_digits()
        raise InvalidRecordValueError(key, value) from e


def parse_record(text: str) -> Version:
    """Missing keys default to 0, unknown keys are ignored"""
    props = parse_properties(text)
    return Version(*(_parse_int(props, key) for key in RECORD_KEYS))


def dump_record(version: Version, header: str = "") -> str:
    lines = [f"# {line}".rstrip() for line in header.splitlines()]
    lines.extend(f"{key}={value}" for key, value in version.as_dict().items())
    return "\n".join(lines) + "\n"


def write_record(path: Path, version: Version, header: str = "") -> None:
    """Replace the whole file or leave the old one, never a partial write"""
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        ensure_parents_write_text(tmp_path, dump_record(version, header))
        os.replace(tmp_path, path)
    except OSError:
        if tmp_path.exists():
            tmp_path.unlink()
        raise
    logger.debug(f"wrote version {version} to {path}")


def read_record(path: Path) -> Version:
    return parse_record(path.read_text(encoding="utf-8"))


__all__ = [
    "dump_record",
    "parse_record",
    "read_record",
    "write_record",
]
