#!/usr/bin/env python3
import argparse
import logging
import sys
from typing import List, Optional

from .config import LOG_DATEFMT, LOG_FORMAT, Settings
from .errors import InvalidWordError
from .runner import LocalJobRunner
from .signature import SignatureBuilder
from .tokenizer import Tokenizer
from .worker import load_job

LOG = logging.getLogger("anagrams.cli")

usage_msg = """
anagrams – Group the words of text files into sets of anagrams.

Commands:
  run <inputs> --output DIR       Run the anagram job over local text files.
         [--reducers N]           Number of reduce partitions (default: 4).
         [--mappers N]            Size of the task thread pool (default: 4).
         [--job JOB_FILE]         Job file to load instead of the bundled one.
         [--joiners CHARS]        Characters allowed inside words (default: '’-).
         [--with-signature]       Prefix each group with its signature.
         [--overwrite]            Delete the output directory if it exists.
  tokenize [FILE]                 Print signature and word for every word (stdin by default).
  help                            Show this help message.

Examples:
  anagrams run books/*.txt --output out/
  anagrams run corpus.txt --output out/ --reducers 8 --with-signature --overwrite
  echo "Listen, silent night" | anagrams tokenize
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anagrams",
        description="Group the words of text files into sets of anagrams.",
        usage=usage_msg,
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: ANAGRAMS_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command")

    # Run
    p_run = subparsers.add_parser("run", help="Run the anagram job.")
    p_run.add_argument("inputs", nargs="+", help="Input text files")
    p_run.add_argument("--output", "-o", required=True, help="Output directory")
    p_run.add_argument("--reducers", dest="num_reducers", type=int, default=None,
                       help="Number of reduce partitions")
    p_run.add_argument("--mappers", dest="num_mappers", type=int, default=None,
                       help="Size of the task thread pool")
    p_run.add_argument("--max-attempts", dest="max_attempts", type=int, default=None,
                       help="Attempts per task before the job fails")
    p_run.add_argument("--job", dest="job_file", default=None, help="Path to a job file")
    p_run.add_argument("--joiners", default=None, help="Joiner characters")
    p_run.add_argument("--with-signature", dest="include_signature", action="store_true", default=None,
                       help="Prefix each group with its signature")
    p_run.add_argument("--overwrite", action="store_true", default=False,
                       help="Delete the output directory if it exists")

    # Tokenize
    p_tok = subparsers.add_parser("tokenize", help="Print the words of a file with their signatures.")
    p_tok.add_argument("file", nargs="?", type=argparse.FileType("r", encoding="utf-8"), default=sys.stdin)
    p_tok.add_argument("--joiners", default=None, help="Joiner characters")

    # Help fallback
    subparsers.add_parser("help", help="Show help")
    return parser


def run_job(args, settings: Settings) -> int:
    try:
        job = load_job(args.job_file, settings) if args.job_file else None
    except (OSError, ImportError, AttributeError, SyntaxError) as e:
        print(f"Cannot load job file {args.job_file}: {e}", file=sys.stderr)
        return 1
    runner = LocalJobRunner(job=job, settings=settings)
    try:
        result = runner.run(args.inputs, args.output, overwrite=args.overwrite)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if not result.ok:
        print(f"Job {result.job_id} failed: {result.message}", file=sys.stderr)
        return 1
    for path in result.file_paths:
        print(path)
    return 0


def tokenize(args, settings: Settings) -> int:
    tokenizer = Tokenizer(settings.joiners)
    signatures = SignatureBuilder(settings.joiners)
    for line in args.file:
        for word in tokenizer.extract(line.rstrip("\n")):
            try:
                print(f"{signatures.signature(word)}\t{word}")
            except InvalidWordError as e:
                LOG.warning("Skipping %s", e)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env().replace(
            log_level=args.log_level.upper() if args.log_level else None,
            joiners=getattr(args, "joiners", None),
            num_reducers=getattr(args, "num_reducers", None),
            num_mappers=getattr(args, "num_mappers", None),
            max_attempts=getattr(args, "max_attempts", None),
            include_signature=getattr(args, "include_signature", None),
        )
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    if args.command == "run":
        return run_job(args, settings)
    if args.command == "tokenize":
        return tokenize(args, settings)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
