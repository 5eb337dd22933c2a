"""Completion labels for intelephense completion items."""

from __future__ import annotations

from typing import Optional

from ..models import CodeLabel, CodeLabelSpan, Completion, CompletionKind

# See https://www.php.net/manual/en/reserved.variables.php
SUPERGLOBALS = (
    "$GLOBALS",
    "$_SERVER",
    "$_GET",
    "$_POST",
    "$_FILES",
    "$_COOKIE",
    "$_SESSION",
    "$_REQUEST",
    "$_ENV",
)


def _label(label: str, *spans: CodeLabelSpan) -> CodeLabel:
    return CodeLabel(spans=list(spans), filter_range=(0, len(label)))


def label_for_completion(completion: Completion) -> Optional[CodeLabel]:
    """Render a completion item, or None to let the host use the raw label."""
    label = completion.label
    detail = completion.detail or ""
    kind = completion.kind

    if kind in (CompletionKind.METHOD, CompletionKind.FUNCTION):
        highlight = "function.method" if kind == CompletionKind.METHOD else "function"
        # e.g. "foo(string $bar): int"
        name_and_params, sep, return_type = detail.rpartition("):")
        _, paren, params = name_and_params.partition("(")
        if not sep or not paren:
            # __construct has no detail
            return _label(label, CodeLabelSpan(label, highlight))
        return _label(
            label,
            CodeLabelSpan(label, highlight),
            CodeLabelSpan("("),
            CodeLabelSpan(params.strip(), "comment"),
            CodeLabelSpan("): "),
            CodeLabelSpan(return_type.strip(), "type"),
        )

    if kind in (CompletionKind.CONSTANT, CompletionKind.ENUM_MEMBER):
        if detail:
            return _label(
                label,
                CodeLabelSpan(label, "constant"),
                CodeLabelSpan(" "),
                CodeLabelSpan(detail, "comment"),
            )
        return _label(label, CodeLabelSpan(label, "constant"))

    if kind == CompletionKind.PROPERTY:
        if not detail:
            return None
        return _label(
            label,
            CodeLabelSpan(label, "attribute"),
            CodeLabelSpan(": "),
            CodeLabelSpan(detail, "type"),
        )

    if kind == CompletionKind.VARIABLE:
        highlight = "variable.special" if label in SUPERGLOBALS else "variable"
        spans = [CodeLabelSpan(label, highlight)]
        if detail:
            spans += [CodeLabelSpan(" "), CodeLabelSpan(detail, "comment")]
        return _label(label, *spans)

    return None
