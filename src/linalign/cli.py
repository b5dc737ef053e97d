"""
Command-line entry point: aligns two sequences and prints the aligned pair, one sequence per line.
"""
import sys
from argparse import ArgumentParser

from linalign import AlignmentError, MissingInputError
from linalign.align.pairwise import Aligner, AlignmentMethod
from linalign.align.scoring import Scoring, GAP_PENALTY, MATCH_SCORE, MISMATCH_SCORE
from linalign.core.alphabet import Alphabet
from linalign.io import read_sequence


# Constants ------------------------------------------------------------------------------------------------------------
ALPHABETS = {'any': Alphabet.ANY, 'dna': Alphabet.DNA, 'rna': Alphabet.RNA, 'amino': Alphabet.AMINO}
METHODS = [m.name.lower().replace('_', '-') for m in AlignmentMethod]


# Functions ------------------------------------------------------------------------------------------------------------
def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog='linalign', description="Global pairwise alignment in linear space (Hirschberg).")
    parser.add_argument('seq_a', nargs='?', help="First sequence (or a file with --files)")
    parser.add_argument('seq_b', nargs='?', help="Second sequence (or a file with --files)")
    parser.add_argument('-f', '--files', action='store_true',
                        help="Treat both arguments as plain/FASTA files ('-' for stdin)")
    parser.add_argument('-m', '--method', choices=METHODS, default='hirschberg',
                        help="Reconstruction algorithm (default: hirschberg)")
    parser.add_argument('--alphabet', choices=list(ALPHABETS), default='any',
                        help="Restrict and validate input symbols (default: any)")
    parser.add_argument('--match', type=int, default=MATCH_SCORE, help=f"Match score (default: {MATCH_SCORE})")
    parser.add_argument('--mismatch', type=int, default=MISMATCH_SCORE,
                        help=f"Mismatch score (default: {MISMATCH_SCORE})")
    parser.add_argument('--gap', type=int, default=GAP_PENALTY, help=f"Gap penalty (default: {GAP_PENALTY})")
    parser.add_argument('-s', '--score', action='store_true', help="Print the optimal score before the alignment")
    parser.add_argument('--cigar', action='store_true', help="Print a CIGAR string after the alignment")
    return parser


def main(argv: list[str] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if args.seq_a is None or args.seq_b is None:
            raise MissingInputError('Please provide two sequences to align')
        x = read_sequence(args.seq_a) if args.files else args.seq_a
        y = read_sequence(args.seq_b) if args.files else args.seq_b
        aligner = Aligner(Scoring(args.match, args.mismatch, args.gap), ALPHABETS[args.alphabet])
        result = aligner.align(x, y, args.method)
    except AlignmentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.score: print(f"Optimal score alignment = {result.score}")
    print(result.first)
    print(result.second)
    if args.cigar: print(result.pair.cigar(aligner.alphabet.gap))
    return 0
