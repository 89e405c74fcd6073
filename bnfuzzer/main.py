# bnfuzzer/main.py
import argparse
import logging
import sys

from rich.console import Console

from bnfuzzer import __version__
from bnfuzzer.logger import setup_bnfuzzer_logger
from bnfuzzer.config import BNFuzzerConfig, BNFuzzerConfigError
from bnfuzzer.grammar import (
    BuiltinGrammars,
    DiagError,
    GrammarGenerator,
    build_grammar,
    find_unused_symbols,
    verify_all_symbols_defined,
)

# Entry value that lists every defined symbol instead of generating
LIST_SYMBOLS_ENTRY = "!"


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or greater, got {number}")
    return number


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bnfuzzer",
        description="A program to generate random messages based on their BNF definition"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-f", "--file", metavar="FILE", help="Path to the BNF grammar file")
    source.add_argument("--builtin", choices=BuiltinGrammars.list_grammars(),
                        help="Use one of the bundled grammars instead of a file")
    parser.add_argument("-e", "--entry", metavar="ENTRY",
                        help="The symbol name to start generating from. Use '!' to list all available symbols. "
                             "Required with --file, defaults to the grammar's entry with --builtin.")
    parser.add_argument("-c", "--count", type=non_negative_int, default=None, help="How many messages to generate (default 1)")
    parser.add_argument("--verify", action="store_true", help="Verify that all the symbols are defined")
    parser.add_argument("--unused", action="store_true", help="Verify that all the symbols are used")
    parser.add_argument("--dump", action="store_true", help="Dump the text representation of the entry symbol")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible generation")
    parser.add_argument("--max-depth", type=non_negative_int, default=None,
                        help="Fail generation when symbol expansion gets deeper than this (0 for unbounded)")
    parser.add_argument("--config", default=None,
                        help="Optional path to an alternate config file (otherwise uses ~/.bnfuzzer/config.json).")
    parser.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Set the logging level for BNFuzzer.")
    parser.add_argument("--quiet", action="store_true", help="Only log errors (overrides --log-level).")
    return parser


def _report(console: Console, message) -> None:
    console.print(str(message), markup=False, highlight=False, emoji=False, soft_wrap=True)


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    err = Console(stderr=True)

    try:
        cfg = BNFuzzerConfig.load(args.config)
    except BNFuzzerConfigError as e:
        _report(err, f"ERROR: {e}")
        return 1

    # Override config with CLI args if provided
    if args.count is not None:
        cfg.count = args.count
    if args.seed is not None:
        cfg.seed = args.seed
    if args.max_depth is not None:
        cfg.max_depth = args.max_depth
    if args.log_level:
        cfg.log_level = args.log_level
    if args.quiet:
        cfg.log_level = "ERROR"

    log_level = logging.getLevelName(str(cfg.log_level).upper())
    if not isinstance(log_level, int):
        log_level = logging.WARNING
    logger = setup_bnfuzzer_logger(log_level, log_to_file=cfg.log_to_file, use_color=cfg.use_color)

    if args.builtin:
        file_path = f"<builtin:{args.builtin}>"
        content = BuiltinGrammars.get_grammar(args.builtin)
        entry = args.entry or BuiltinGrammars.get_entry(args.builtin)
    else:
        if not args.entry:
            _report(err, "ERROR: --entry is required when reading a grammar file")
            return 1
        file_path = args.file
        entry = args.entry
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            _report(err, f"ERROR: {e}")
            return 1

    result = build_grammar(content, file_path)
    if not result.ok:
        for error in result.errors:
            _report(err, error)
        return 1
    grammar = result.grammar

    if args.verify:
        report = verify_all_symbols_defined(grammar)
        if not report.ok:
            for loc, name in report.problems:
                _report(err, f"{loc}: ERROR: Symbol {name} is not defined")
            return 1

    if entry == LIST_SYMBOLS_ENTRY:
        for name in sorted(grammar):
            if args.dump:
                rule = grammar[name]
                print(f"{rule.head.loc}: {rule}")
            else:
                print(name)
        return 0

    rule = grammar.get(entry)
    if rule is None:
        _report(err, f"ERROR: Symbol {entry} is not defined. "
                     f"Pass --entry '{LIST_SYMBOLS_ENTRY}' to get the list of defined symbols.")
        return 1

    if args.unused:
        try:
            report = find_unused_symbols(grammar, entry)
        except DiagError as e:
            _report(err, e)
            return 1
        if not report.ok:
            for loc, name in report.problems:
                _report(err, f"{loc}: {name} is unused")
            return 1

    if args.dump:
        print(f"{rule.head.loc}: {rule}")
        return 0

    generator = GrammarGenerator(grammar, max_depth=cfg.max_depth or 0, seed=cfg.seed)
    logger.info(f"Generating {cfg.count} messages from {entry}")
    for _ in range(cfg.count):
        try:
            message = generator.generate(entry)
        except DiagError as e:
            _report(err, e)
            return 1
        print(message)

    return 0


if __name__ == "__main__":
    sys.exit(main())
