"""Fuzzy selection of a credential by search term."""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from otpbridge.utils.exceptions import AmbiguousCredentialError, CredentialNotFoundError

T = TypeVar("T")


def credential_id(issuer: str | None, name: str) -> str:
    """Display id of a credential: ``issuer:name`` or just ``name``."""
    return f"{issuer}:{name}" if issuer else name


def select_credential(
    candidates: Iterable[T],
    search_term: str,
    *,
    key: Callable[[T], str] = str,
    case_sensitive: bool = False,
) -> T:
    """
    Pick the single candidate matching *search_term*.

    An exact id match wins over substring matches. Otherwise exactly one
    candidate must contain the term.

    Raises:
        CredentialNotFoundError: nothing matches, or the term is empty.
        AmbiguousCredentialError: several candidates contain the term.
    """
    fold = (lambda s: s) if case_sensitive else str.casefold
    needle = fold(search_term)
    if not needle:
        raise CredentialNotFoundError(search_term)

    matches: list[T] = []
    for candidate in candidates:
        ident = fold(key(candidate))
        if ident == needle:
            return candidate
        if needle in ident:
            matches.append(candidate)

    if not matches:
        raise CredentialNotFoundError(search_term)
    if len(matches) > 1:
        raise AmbiguousCredentialError(search_term, [key(m) for m in matches])
    return matches[0]
