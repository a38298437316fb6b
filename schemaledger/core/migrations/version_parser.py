"""
Version Parser

Derives the numeric version of a migration from its file name.
"""
from schemaledger.core.migrations.exceptions import InvalidVersionFormat, InvalidVersionValue

VERSION_SEPARATOR = "_"
VERSION_LENGTH = 12


def parse_version(file_name: str) -> int:
    """
    Parse the version prefix of a migration file name.

    "202401150930_create_users.sql" -> 202401150930

    Raises:
        InvalidVersionFormat: no separator, or a prefix that is not 12 characters
        InvalidVersionValue: a prefix that is not made of digits
    """
    prefix, separator, _ = file_name.partition(VERSION_SEPARATOR)
    if not separator:
        raise InvalidVersionFormat(
            f"migration file name must start with a version followed by '{VERSION_SEPARATOR}'",
            file_name=file_name,
        )

    if len(prefix) != VERSION_LENGTH:
        raise InvalidVersionFormat(
            f"migration file must have exactly {VERSION_LENGTH} chars for version: '{prefix}' is invalid",
            file_name=file_name,
        )

    # int() would also accept signs, whitespace and non-ASCII digits
    if not (prefix.isascii() and prefix.isdigit()):
        raise InvalidVersionValue(
            f"failed to convert '{prefix}' to number",
            file_name=file_name,
        )

    return int(prefix)
