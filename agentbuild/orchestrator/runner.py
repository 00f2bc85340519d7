"""Compilation driver: maps sources to outputs and runs the resolver over them."""

import os
from typing import Optional

from ..core.config import CompileConfig
from ..core.errors import CompileError, OutputWriteError, SourceReadError, SourcesDirError
from ..core.logger import CompileLogger
from ..core.types import BatchKind, BatchResult, CompileResult, ResolutionContext
from ..core.utils import list_skill_dirs, list_sources, output_name, read_text, write_file
from ..resolver.includes import resolve_includes


class CompileRunner:
    def __init__(self, config: CompileConfig, logger: Optional[CompileLogger] = None):
        self.config = config
        self.logger = logger or CompileLogger(json_logs=config.json_logs)

    # ── Single documents ──

    def _compile(self, source_path: str, base_path: str, output_path: str,
                 label: str) -> CompileResult:
        self.logger.compile_start(label, source=source_path)

        try:
            content = read_text(source_path)
        except (OSError, ValueError) as e:
            raise SourceReadError(source_path, getattr(e, "strerror", None) or str(e)) from e

        context = ResolutionContext()
        compiled = resolve_includes(content, base_path, context, self.logger,
                                    source=source_path)

        try:
            write_file(output_path, compiled)
        except OSError as e:
            raise OutputWriteError(output_path, e.strerror or str(e)) from e

        result = CompileResult(source=source_path, output=output_path,
                               diagnostics=context.diagnostics)
        self.logger.report_compiled(result)
        return result

    def compile_file(self, source: str) -> CompileResult:
        """Compile one source into output_dir.

        Raises SourceReadError / OutputWriteError; include problems only
        show up in the result's diagnostics.
        """
        source_path = os.path.abspath(source)
        filename = output_name(os.path.basename(source_path),
                               self.config.source_suffix, self.config.output_suffix)
        output_path = os.path.join(self.config.output_dir, filename)
        return self._compile(source_path, os.path.dirname(source_path), output_path,
                             label=os.path.basename(source_path))

    def compile_skill(self, skill_dir: str) -> CompileResult:
        """Compile <skill_dir>/src.md into <skills_output_dir>/<name>/SKILL.md."""
        skill_path = os.path.abspath(skill_dir)
        name = os.path.basename(skill_path.rstrip(os.sep))
        source_path = os.path.join(skill_path, self.config.skill_source_name)
        output_path = os.path.join(self.config.skills_output_dir, name,
                                   self.config.skill_output_name)
        return self._compile(source_path, skill_path, output_path,
                             label=f"skill: {name}")

    # ── Batches ──

    def _run_batch(self, batch: BatchResult, sources: list[str], compile_one) -> BatchResult:
        if sources:
            self.logger.info(f"\n🚀 Compiling {len(sources)} {batch.kind}...\n")
        for source in sources:
            try:
                batch.results.append(compile_one(source))
            except CompileError as e:
                self.logger.error(f"Error compiling {source}: {e}", source=source)
                batch.failed.append(source)
        self.logger.report_batch(batch)
        return batch

    def compile_all(self) -> BatchResult:
        """Compile every *.src.md in sources_dir.

        Raises SourcesDirError when the directory cannot be listed.
        """
        source_dir = self.config.sources_dir
        try:
            sources = list_sources(source_dir, self.config.source_suffix)
        except OSError as e:
            raise SourcesDirError(source_dir, e.strerror or str(e)) from e

        batch = BatchResult(kind=BatchKind.AGENTS.value, source_dir=source_dir)
        if not sources:
            self.logger.info(f"No {self.config.source_suffix} files found in {source_dir}")
        return self._run_batch(batch, sources, self.compile_file)

    def compile_all_skills(self) -> BatchResult:
        """Compile every skill directory holding a src.md.

        A skills directory that does not exist is not an error.
        """
        skills_dir = self.config.skills_dir
        batch = BatchResult(kind=BatchKind.SKILLS.value, source_dir=skills_dir)
        if not os.path.exists(skills_dir):
            self.logger.info(f"No skills directory at {skills_dir}, skipping skills")
            return batch

        try:
            skills = list_skill_dirs(skills_dir, self.config.skill_source_name)
        except OSError as e:
            raise SourcesDirError(skills_dir, e.strerror or str(e)) from e

        if not skills:
            self.logger.info("No skills found to compile")
        return self._run_batch(batch, skills, self.compile_skill)

    def compile_everything(self) -> list[BatchResult]:
        """Agents first, then skills."""
        return [self.compile_all(), self.compile_all_skills()]
