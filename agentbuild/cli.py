#!/usr/bin/env python3
"""
Agent prompt compiler CLI.
Resolves @include(path) directives in markdown sources.

Usage:
  python3 agentbuild/cli.py                        # all agents, then all skills
  python3 agentbuild/cli.py agent-partials/sources/reviewer.src.md
  python3 agentbuild/cli.py --skill agent-partials/skills/testing
  python3 agentbuild/cli.py --root ./repo --json-logs
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agentbuild",
        description="Compile *.src.md agent sources by inlining @include(path) directives",
    )
    parser.add_argument("source", nargs="?", default=None,
                        help="Single source file to compile (default: compile everything)")
    parser.add_argument("--skill", default=None, help="Single skill directory to compile")
    parser.add_argument("--no-skills", action="store_true",
                        help="Skip skills when compiling everything")

    # ── Layout ──
    parser.add_argument("--root", default=None,
                        help="Project root holding agent-partials/, agents/ and skills/ "
                             "(default: $AGENTBUILD_ROOT, else the current working "
                             "directory, so running from elsewhere compiles a different tree)")
    parser.add_argument("--sources-dir", default=None, help="Agent sources directory")
    parser.add_argument("--output-dir", default=None, help="Compiled agents directory")
    parser.add_argument("--skills-dir", default=None, help="Skill sources directory")
    parser.add_argument("--skills-output-dir", default=None, help="Compiled skills directory")

    # ── Output ──
    parser.add_argument("--json-logs", action="store_true", default=None,
                        help="JSON log output")
    parser.add_argument("--verbose", action="store_true", help="Show debug lines")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    if args.source and args.skill:
        _error_json("Pass either a source file or --skill, not both")
        sys.exit(2)

    sys.exit(run(args))


def run(args) -> int:
    """Dispatch to the requested compile mode. Returns the exit code."""
    from agentbuild.core.config import load_config
    from agentbuild.core.errors import CompileError, ConfigError
    from agentbuild.core.logger import CompileLogger
    from agentbuild.orchestrator.runner import CompileRunner

    try:
        config = load_config(
            root=args.root,
            json_logs=args.json_logs,
            sources_dir=args.sources_dir,
            output_dir=args.output_dir,
            skills_dir=args.skills_dir,
            skills_output_dir=args.skills_output_dir,
        )
    except ConfigError as e:
        _error_json(f"Config error: {e}")
        return 1

    logger = CompileLogger(json_logs=config.json_logs, verbose=args.verbose)
    runner = CompileRunner(config, logger)

    try:
        if args.source:
            runner.compile_file(args.source)
            return 0
        if args.skill:
            runner.compile_skill(args.skill)
            return 0
        if args.no_skills:
            batches = [runner.compile_all()]
        else:
            batches = runner.compile_everything()
    except CompileError as e:
        logger.error(f"Compilation failed: {e}")
        return 1

    return 0 if all(b.ok for b in batches) else 1


def _error_json(message: str) -> None:
    """Print error as JSON log line to stdout."""
    print(json.dumps({
        "event": "log", "level": "error", "source": None,
        "message": message,
    }, ensure_ascii=False), flush=True)


if __name__ == "__main__":
    main()
