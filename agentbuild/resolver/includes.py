"""Recursive @include(path) resolution for markdown sources.

A directive's path is resolved against the directory of the document that
contains it, so partials can include their own neighbours with short
relative paths no matter where the top-level source lives.

Failures never abort the document: a circular or unreadable include leaves
the directive's literal text in place and records a Diagnostic.
"""

import os
import re
from typing import Optional

from ..core.logger import CompileLogger
from ..core.types import Diagnostic, DiagnosticKind, IncludeDirective, ResolutionContext
from ..core.utils import read_text


INCLUDE_RE = re.compile(r'@include\(([^)]+)\)')


def find_directives(content: str) -> list[IncludeDirective]:
    """All @include(...) markers in text order, with trimmed path arguments."""
    return [
        IncludeDirective(text=m.group(0), path=m.group(1).strip(),
                         start=m.start(), end=m.end())
        for m in INCLUDE_RE.finditer(content)
    ]


def _failure_reason(exc: Exception) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


def resolve_includes(content: str, base_path: str,
                     context: Optional[ResolutionContext] = None,
                     logger: Optional[CompileLogger] = None,
                     source: Optional[str] = None) -> str:
    """Inline every resolvable @include(...) in content, depth-first.

    context.visited is shared with all nested calls; pass the same context
    for one top-level compile and a fresh one for the next. `source` names
    the document being resolved in log lines.
    """
    if context is None:
        context = ResolutionContext()

    def report(kind: DiagnosticKind, path: str, message: str) -> None:
        diag = Diagnostic(kind=kind.value, path=path, message=message)
        context.diagnostics.append(diag)
        if logger:
            logger.diagnostic(diag, source=source)

    def expand(directive: IncludeDirective) -> str:
        absolute_path = os.path.abspath(os.path.join(base_path, directive.path))

        if absolute_path in context.visited:
            report(DiagnosticKind.CIRCULAR, directive.path,
                   f"Circular include detected: {directive.path}")
            return directive.text

        try:
            included = read_text(absolute_path)
        except (OSError, ValueError) as e:
            # ValueError: undecodable bytes, or a NUL in the path
            report(DiagnosticKind.MISSING, directive.path,
                   f"Cannot include {directive.path}: {_failure_reason(e)}")
            return directive.text

        context.visited.add(absolute_path)
        if logger:
            logger.debug(f"Including {absolute_path}", source=source)
        return resolve_includes(included, os.path.dirname(absolute_path),
                                context, logger, source=absolute_path)

    parts = []
    position = 0
    for directive in find_directives(content):
        parts.append(content[position:directive.start])
        parts.append(expand(directive))
        position = directive.end
    parts.append(content[position:])
    return "".join(parts)
