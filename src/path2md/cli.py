from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence, TextIO

from path2md.core.models import DumpConfig
from path2md.core.report import DumpReport
from path2md.discovery.ignore import split_pattern_list
from path2md.errors import OutputWriteFailed, Path2MdError
from path2md.logging.factory import DefaultLoggerFactory
from path2md.logging.helpers import get_logger
from path2md.parsing.parser import _build_parser
from path2md.runtime.orchestrator import Path2Md

logger = get_logger('path2md')


def _configure_logging(enable_json: bool, verbose: bool = False, stream: Optional[TextIO] = None) -> None:
    """Configure process-wide logging, either JSON or plain text, on stderr."""
    global logger
    factory = DefaultLoggerFactory.from_env(json_logs=enable_json, verbose=verbose, stream=stream)
    logger = factory.get_logger('path2md')


def _ignore_patterns(ns: argparse.Namespace) -> List[str]:
    patterns = split_pattern_list(ns.ignore)
    patterns.extend(split_pattern_list([os.getenv('PATH2MD_IGNORE', '')]))
    return patterns


def build_config(ns: argparse.Namespace) -> DumpConfig:
    """Translate parsed CLI flags into the immutable DumpConfig."""
    return DumpConfig(
        root=Path(ns.path),
        ignore=tuple(_ignore_patterns(ns)),
        structure_only=bool(ns.structure_only),
        list_only=bool(ns.list_only),
        exclude=(Path(ns.output).absolute(),) if ns.output else (),
    )


def _open_output(path: str) -> TextIO:
    try:
        return open(path, 'w', encoding='utf-8', newline='\n')
    except OSError as exc:
        raise OutputWriteFailed(Path(path), exc.strerror) from exc


def run(argv: Sequence[str], *, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:
    """Run the tool with an argv-like sequence and return the exit status.

    Usage errors are reported by argparse itself (SystemExit 2).
    """
    ns = _build_parser().parse_args(list(argv))
    _configure_logging(ns.json_logs, ns.verbose, stderr)

    report = DumpReport()
    try:
        cfg = build_config(ns)
        engine = Path2Md(cfg, report=report)
        if ns.output:
            with _open_output(ns.output) as fh:
                engine.write(fh)
            logger.info('✔ report written to %s', ns.output)
        else:
            engine.write(stdout or sys.stdout)
    except OutputWriteFailed as exc:
        if isinstance(exc.__cause__, BrokenPipeError):
            return 0
        logger.error('%s', exc)
        return 1
    except Path2MdError as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('%s', exc)
        return 1

    if ns.report:
        print(report.to_json(), file=stderr or sys.stderr)
    return 0


def main() -> NoReturn:
    """Entry point for `python -m path2md` and the `path2md` console script."""
    try:
        raise SystemExit(run(sys.argv[1:]))
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
