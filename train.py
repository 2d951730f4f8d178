#!/usr/bin/env python3
"""
Witten-Bell N-gram Language Model Training Script

Train an n-gram model on a one-sentence-per-line corpus.

Usage:
    python train.py --vocab lab.syms --train train.txt --n 3
    python train.py --vocab lab.syms --train train.txt --count-file counts.txt
    python train.py --vocab lab.syms --train train.txt --test test.txt --interactive
"""

import argparse
import sys

from rich.console import Console

from wblm.config import LMConfig, LMError, parse_param_args
from wblm.training import train_model_cli, evaluate_model_cli, interactive_demo


def main():
    parser = argparse.ArgumentParser(
        description="Train a Witten-Bell smoothed n-gram language model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --vocab lab.syms --train train.txt
  %(prog)s --vocab lab.syms --train train.txt --n 2 --count-file counts.txt
  %(prog)s --param vocab=lab.syms --param train=train.txt --param n=4
  %(prog)s --vocab lab.syms --train train.txt --interactive

The vocabulary file holds one token per line, or 'token index' pairs.
        """
    )

    parser.add_argument('--vocab', type=str, default=None,
                        help='Vocabulary (symbol table) file')
    parser.add_argument('--train', type=str, default=None,
                        help='Training corpus, one sentence per line')
    parser.add_argument('-n', '--n', type=int, default=None,
                        help='Order of the n-gram model (default: 3 for trigram)')
    parser.add_argument('--bos', type=str, default=None,
                        help='Beginning-of-sentence marker (default: <s>)')
    parser.add_argument('--eos', type=str, default=None,
                        help='End-of-sentence marker (default: </s>)')
    parser.add_argument('--unk', type=str, default=None,
                        help='Unknown word marker (default: <UNK>)')
    parser.add_argument('--count-file', type=str, default=None,
                        help='Write the collected counts to this file')
    parser.add_argument('--test', type=str, default=None,
                        help='Held-out corpus to compute perplexity on')
    parser.add_argument('-p', '--param', action='append', default=[],
                        metavar='KEY=VALUE',
                        help='Set a raw model parameter (repeatable)')
    parser.add_argument('-i', '--interactive', action='store_true',
                        help='Query probabilities interactively after training')

    args = parser.parse_args()
    console = Console(stderr=True)

    try:
        params = parse_param_args(args.param)
        overrides = {
            'vocab': args.vocab,
            'train': args.train,
            'n': args.n,
            'bos': args.bos,
            'eos': args.eos,
            'unk': args.unk,
            'count_file': args.count_file,
            'test': args.test,
        }
        params.update({k: str(v) for k, v in overrides.items() if v is not None})
        config = LMConfig.from_params(params)

        model = train_model_cli(config)

        if config.test:
            evaluate_model_cli(model, config.test)
    except LMError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    if args.interactive:
        interactive_demo(model)

    return 0


if __name__ == '__main__':
    sys.exit(main())
