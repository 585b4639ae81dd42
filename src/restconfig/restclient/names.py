"""
Name constants and key tokenization for REST client configuration.

Two naming conventions coexist:

* ``quarkus.rest-client.<client>.<property>`` where ``<client>`` is one
  segment, either unquoted (``FooClient``) or quoted
  (``"com.acme.FooClient"``) when it contains dots.
* ``<client>/mp-rest/<property>``, the MicroProfile REST Client
  convention, where some properties are spelled differently
  (``connectTimeout`` vs ``connect-timeout``).

Keys are tokenized into a client segment and a property tail instead of
being compared with offset arithmetic; a segment only matches when it is
followed by the end of the name or a ``.``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import NamedTuple

REST_CLIENT_PREFIX = "quarkus.rest-client."
MP_REST = "/mp-rest/"

# Property names shared by both conventions, and the ones spelled differently.
_SAME_NAMES = ("url", "uri", "scope", "providers")
_RENAMED = (
    ("connect-timeout", "connectTimeout"),
    ("read-timeout", "readTimeout"),
    ("follow-redirects", "followRedirects"),
    ("proxy-address", "proxyAddress"),
    ("query-param-style", "queryParamStyle"),
    ("hostname-verifier", "hostnameVerifier"),
    ("verify-host", "verifyHost"),
    ("trust-store", "trustStore"),
    ("trust-store-password", "trustStorePassword"),
    ("trust-store-type", "trustStoreType"),
    ("key-store", "keyStore"),
    ("key-store-password", "keyStorePassword"),
    ("key-store-type", "keyStoreType"),
)


def _build_names() -> Mapping[str, str]:
    names = {name: name for name in _SAME_NAMES}
    for hyphenated, camel in _RENAMED:
        names[hyphenated] = camel
        names[camel] = hyphenated
    return MappingProxyType(names)


MICROPROFILE_NAMES: Mapping[str, str] = _build_names()


def is_microprofile_name(prop: str) -> bool:
    return prop in MICROPROFILE_NAMES


def translate_property(prop: str) -> str:
    """Flip a known property to its spelling in the other convention."""
    return MICROPROFILE_NAMES.get(prop, prop)


def quote(segment: str) -> str:
    return f'"{segment}"'


def mp_rest(client: str) -> str:
    """Legacy prefix for a client: ``com.acme.FooClient/mp-rest/``."""
    return client + MP_REST


class ClientKey(NamedTuple):
    """A name under :data:`REST_CLIENT_PREFIX` split at a known client segment.

    ``tail`` is empty or starts with ``.``.
    """

    segment: str
    tail: str

    @property
    def property(self) -> str:
        return self.tail[1:]


class LegacyKey(NamedTuple):
    """A ``<head>/mp-rest/<property>`` name."""

    head: str
    property: str

    @property
    def prefix(self) -> str:
        return mp_rest(self.head)


def _segment_candidates(remainder: str) -> Iterator[ClientKey]:
    """Yield possible client segments, longest first."""
    if remainder.startswith('"'):
        closing = remainder.find('"', 1)
        if closing != -1:
            segment, tail = remainder[: closing + 1], remainder[closing + 1 :]
            if not tail or tail.startswith("."):
                yield ClientKey(segment, tail)
        return

    parts = remainder.split(".")
    for end in range(len(parts), 0, -1):
        segment = ".".join(parts[:end])
        if not segment:
            continue
        yield ClientKey(segment, remainder[len(segment) :])


def match_client_key(name: str, known: Mapping[str, str]) -> ClientKey | None:
    """Split a prefixed name at the longest client segment present in ``known``.

    Returns ``None`` for names outside the prefix or without a match; a
    textual prefix that is not followed by ``.`` or the end of the name
    never matches (``FooBar.url`` does not match ``Foo``).
    """
    if not name.startswith(REST_CLIENT_PREFIX):
        return None
    for candidate in _segment_candidates(name[len(REST_CLIENT_PREFIX) :]):
        if candidate.segment in known:
            return candidate
    return None


def split_quoted_client_key(name: str) -> ClientKey | None:
    """Split ``quarkus.rest-client."<client>"<tail>`` whatever the client is."""
    if not name.startswith(REST_CLIENT_PREFIX + '"'):
        return None
    candidate = next(_segment_candidates(name[len(REST_CLIENT_PREFIX) :]), None)
    if candidate is None or len(candidate.segment) <= 2:
        return None
    return candidate


def split_legacy_key(name: str) -> LegacyKey | None:
    """Split ``<head>/mp-rest/<property>`` at the first ``/``."""
    slash = name.find("/")
    if slash <= 0 or not name.startswith(MP_REST, slash):
        return None
    return LegacyKey(name[:slash], name[slash + len(MP_REST) :])


__all__ = [
    "REST_CLIENT_PREFIX",
    "MP_REST",
    "MICROPROFILE_NAMES",
    "ClientKey",
    "LegacyKey",
    "is_microprofile_name",
    "match_client_key",
    "mp_rest",
    "quote",
    "split_legacy_key",
    "split_quoted_client_key",
    "translate_property",
]
