"""Escaping helpers marking the boundary between code text and trusted markup."""

from __future__ import annotations

from markupsafe import Markup, escape


__all__ = ["Markup", "encode_content"]


def encode_content(code: str) -> Markup:
    """Escape ``&``, ``<``, ``>``, ``"`` and ``'`` for use as element text.

    The result is a :class:`~markupsafe.Markup` value so that interpolating it
    into a template never escapes it a second time. Snippet code is always
    text: a ``Markup`` argument is escaped like any other string.
    """
    return escape(str(code))
