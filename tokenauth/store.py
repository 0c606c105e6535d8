"""
Immutable store of accepted secrets, with constant-time lookup.

A naive ``==`` on two strings returns as soon as the first differing character
is found, so the time it takes leaks the length of the matching prefix. Given
enough samples an attacker can recover a long-lived shared secret one byte at
a time. All comparisons against configured secrets therefore go through
:func:`equal`, and :meth:`SecretStore.contains` always visits every stored
secret.
"""

import hmac
from typing import Iterable, Tuple


def _as_bytes(value: str) -> bytes:
    return value.encode('utf-8')


def equal(a: bytes, b: bytes) -> bool:
    """
    Compare two byte strings in constant time.

    Inputs of different length may return early; the length of a secret is
    not itself secret. For inputs of equal length the cost does not depend on
    where, or whether, they differ.
    """
    return hmac.compare_digest(a, b)


class SecretStore(object):
    """
    An ordered, read-only collection of accepted secrets.

    Each configured value is stored verbatim with ``prefix`` prepended, so
    that a candidate can be compared directly against the full expected
    value (e.g. ``"Bearer s3cr3t"`` for an ``Authorization`` header).
    """

    def __init__(self, secrets: Iterable[str], prefix: str = '') -> None:
        self._secrets: Tuple[bytes, ...] = tuple(
            _as_bytes(prefix + secret) for secret in secrets
        )

    def __len__(self) -> int:
        return len(self._secrets)

    def __repr__(self) -> str:
        return f'<SecretStore ({len(self)} secrets)>'

    def contains(self, candidate: str) -> bool:
        """
        Check whether ``candidate`` is equal to any stored secret.

        Every stored secret is compared, whatever the outcome of earlier
        comparisons. An empty candidate goes through the same loop as a wrong
        one, and is rejected afterwards.

        Parameters
        ----------
        candidate : str
            A credential taken from the request. May be empty.

        Returns
        -------
        bool

        """
        received = _as_bytes(candidate)
        matched = False
        for secret in self._secrets:
            matched |= equal(received, secret)
        return matched and len(received) > 0
