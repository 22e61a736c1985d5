#!/usr/bin/env python

"""Command-line interface for nextword"""

import argparse
import math
import sys

from nextword.data import get_sample_corpus, load_sample_texts
from nextword.debug import interactive_predict, print_predictions
from nextword.predictor import TextPredictor
from nextword.presets import get_preset, print_presets
from nextword.store import DEFAULT_ORDER, DEFAULT_SMOOTHING


def _create_parser():
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Train and query an n-gram next-word prediction model",
        epilog="The model file is created on first use and updated whenever new text is trained.",
    )
    parser.add_argument("model", nargs="?", help="model file to load or create")
    parser.add_argument("files", nargs="*", help="text files to learn from (one entry per line)")
    parser.add_argument("-t", "--text", type=str, action="append", help="text to learn from (repeatable)")
    parser.add_argument(
        "-m",
        "--order",
        type=int,
        default=DEFAULT_ORDER,
        help=f"n-gram order for a new model (default: {DEFAULT_ORDER})",
    )
    parser.add_argument(
        "-s",
        "--smoothing",
        type=float,
        default=DEFAULT_SMOOTHING,
        help=f"additive smoothing constant for a new model (default: {DEFAULT_SMOOTHING})",
    )
    parser.add_argument(
        "--preset",
        type=str,
        choices=["compact", "balanced", "contextual"],
        help="use preset configuration (overrides -m and -s)",
    )
    parser.add_argument("--list-presets", action="store_true", help="list available presets and exit")
    parser.add_argument("--samples", type=str, metavar="FILE", help="sample texts to pre-train a new model on")
    parser.add_argument("--demo", action="store_true", help="pre-train a new model on the bundled sample texts")
    parser.add_argument("-p", "--predict", type=str, metavar="CONTEXT", help="suggest next words after CONTEXT")
    parser.add_argument("-k", "--num-predictions", type=int, default=3, help="number of suggestions (default: 3)")
    parser.add_argument("-S", "--stats", action="store_true", help="show model statistics")
    parser.add_argument("-i", "--interactive", action="store_true", help="interactive prediction mode")
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose output to stderr")
    return parser


def _read_history_entries(args) -> list[str]:
    """Collect non-blank entries from input files and --text."""
    entries = []
    for filepath in args.files:
        entries.extend(load_sample_texts(filepath))
    for text in args.text or []:
        if text.strip():
            entries.append(text)
    return entries


def main() -> None:
    """Main entry point for the nextword command-line tool"""
    parser = _create_parser()
    args = parser.parse_args()

    if args.list_presets:
        print_presets()
        return

    if not args.model:
        parser.error("a model file is required")

    if args.preset:
        preset_config = get_preset(args.preset)

        # Override args with preset values (if not explicitly set by user)
        if args.order == DEFAULT_ORDER:
            args.order = preset_config["order"]
        if args.smoothing == DEFAULT_SMOOTHING:
            args.smoothing = preset_config["smoothing"]

        if args.verbose:
            print(f"Using preset: {args.preset}", file=sys.stderr)
            print(f"  {preset_config['description']}", file=sys.stderr)
            print(f"  Order: {args.order}, Smoothing: {args.smoothing}", file=sys.stderr)

    if args.order < 1:
        parser.error("--order must be >= 1")
    if not (math.isfinite(args.smoothing) and args.smoothing > 0):
        parser.error("--smoothing must be finite and > 0")
    if args.samples and args.demo:
        parser.error("--samples and --demo are mutually exclusive")

    sample_texts = None
    if args.demo:
        args.samples = get_sample_corpus()
        if args.verbose:
            print(f"Using sample corpus: {args.samples}", file=sys.stderr)
    if args.samples:
        sample_texts = load_sample_texts(args.samples)

    predictor = TextPredictor(
        args.model,
        order=args.order,
        sample_texts=sample_texts,
        smoothing=args.smoothing,
        verbose=args.verbose,
    )

    entries = _read_history_entries(args)
    if entries:
        for entry in entries:
            predictor.add_to_history(entry)
        if predictor.history_size:
            predictor.force_training()
        if predictor.failed_saves:
            print(f"Error: could not save model to {args.model}", file=sys.stderr)
            sys.exit(1)
        if args.verbose:
            print(f"Learned from {len(entries)} entries", file=sys.stderr)

    if args.stats:
        predictor.model.print_statistics()

    if args.predict is not None:
        print_predictions(predictor.predict(args.predict, args.num_predictions))

    if args.interactive:
        interactive_predict(predictor, k=args.num_predictions)


if __name__ == "__main__":
    main()
