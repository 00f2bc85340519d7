"""Shared data types for the compiler."""

from dataclasses import dataclass, field
from enum import Enum


class DiagnosticKind(str, Enum):
    CIRCULAR = "circular"
    MISSING = "missing"


class BatchKind(str, Enum):
    AGENTS = "agents"
    SKILLS = "skills"


@dataclass
class IncludeDirective:
    text: str  # literal "@include(...)" as matched
    path: str  # argument, trimmed
    start: int
    end: int


@dataclass
class Diagnostic:
    kind: str  # "circular" | "missing"
    path: str
    message: str

    @property
    def is_error(self) -> bool:
        return self.kind == DiagnosticKind.MISSING.value


@dataclass
class ResolutionContext:
    """State threaded through one top-level resolution.

    `visited` is shared by reference with every nested call, so a path
    entered anywhere in the include tree counts for the whole compile.
    """
    visited: set[str] = field(default_factory=set)
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass
class CompileResult:
    source: str
    output: str
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if not d.is_error)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.is_error)


@dataclass
class BatchResult:
    kind: str  # "agents" | "skills"
    source_dir: str
    results: list[CompileResult] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def outputs(self) -> list[str]:
        return [r.output for r in self.results]
