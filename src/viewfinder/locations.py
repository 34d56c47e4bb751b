"""Location format grammar.

A location format is a plain string with two positional placeholders:
``{0}`` for the view name and ``{1}`` for the group id (usually the
controller name)::

    "~/Views/{1}/{0}.html"  ->  "~/Views/Home/Index.html"

Substitution is ``str.format`` with positional arguments only.  Field
access, conversions and format specs are rejected up front by
``check_location_format`` so a bad format fails at startup, not on the
first request.
"""

from string import Formatter

from viewfinder.errors import ConfigurationError

_ALLOWED_FIELDS = frozenset({"0", "1"})
_formatter = Formatter()


def check_location_format(fmt: str) -> None:
    """Validate a single location format.

    Raises:
        ConfigurationError: If the format references anything other than
            ``{0}`` or ``{1}``, uses a conversion or format spec, does not
            reference ``{0}``, or has unbalanced braces.
    """
    if not isinstance(fmt, str) or not fmt:
        msg = f"Location format must be a non-empty string, got {fmt!r}"
        raise ConfigurationError(msg)

    try:
        parsed = list(_formatter.parse(fmt))
    except ValueError as exc:
        msg = f"Malformed location format {fmt!r}: {exc}"
        raise ConfigurationError(msg) from exc

    fields: set[str] = set()
    for _literal, field_name, spec, conversion in parsed:
        if field_name is None:
            continue
        if field_name not in _ALLOWED_FIELDS:
            msg = (
                f"Location format {fmt!r} uses placeholder {{{field_name}}}; "
                "only {0} (name) and {1} (group id) are supported"
            )
            raise ConfigurationError(msg)
        if spec or conversion:
            msg = f"Location format {fmt!r} must not use conversions or format specs"
            raise ConfigurationError(msg)
        fields.add(field_name)

    if "0" not in fields:
        msg = f"Location format {fmt!r} never references the view name {{0}}"
        raise ConfigurationError(msg)


def format_location(fmt: str, name: str, group_id: str) -> str:
    """Substitute *name* and *group_id* into *fmt*."""
    return fmt.format(name, group_id)


def is_specific_path(name: str) -> bool:
    """Return True when *name* is a literal path rather than a logical name.

    App-relative (``~/...``) and absolute (``/...``) names bypass the
    location formats and are probed as-is.
    """
    return name[:1] in ("~", "/")
