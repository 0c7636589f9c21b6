# src/sequencer/sequencer.py
from __future__ import annotations
import argparse, logging, sys

from sequencer.assembly.assembler import TieBreak
from sequencer.assembly.fragment import Fragment
from sequencer.pipeline import run_assembly
from sequencer.utility.io_utils import FORMATS
from sequencer.utility.utils import setup_logging, load_config


def build_parser(cfg: dict) -> argparse.ArgumentParser:
    asm_cfg = cfg["assembly"]
    ap = argparse.ArgumentParser(
        prog="sequencer", description="Greedy overlap assembly of short DNA fragments")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="-v: info, -vv: use for debugging")
    ap.add_argument("--log-dir", default=None, help="Folder for session log files (default: $SEQUENCER_LOG_DIR or ./logs)")
    sp = ap.add_subparsers(dest="cmd", required=True)

    # assembly
    p_asm = sp.add_parser("assemble", help="Merge fragments greedily by largest overlap")
    p_asm.add_argument("-i", "--input", required=True, help="FASTA/FASTQ or plain text, one sequence per line")
    p_asm.add_argument("-o", "--output", required=True, help="Contigs output (.fasta or plain text)")
    p_asm.add_argument("--input-format", choices=FORMATS, help="Override the format guessed from the suffix")
    p_asm.add_argument("--output-format", choices=[f for f in FORMATS if f != "fastq"],
                       help="Override the format guessed from the suffix")
    p_asm.add_argument("--tie-break", choices=[t.value for t in TieBreak], default=asm_cfg["tie_break"],
                       help="How equal-overlap pairs are ranked (default: %(default)s)")
    p_asm.add_argument("--min-overlap", type=int, default=int(asm_cfg["min_overlap"]),
                       help="Smallest overlap that allows a merge (default: %(default)s)")
    p_asm.add_argument("--report", metavar="TSV", help="Write the merge history to this TSV")
    p_asm.add_argument("--steps", type=int, metavar="N", help="Stop after at most N merges")

    # single pair overlap
    p_ovl = sp.add_parser("overlap", help="Show the overlap and merge of two sequences")
    p_ovl.add_argument("left", help="Sequence whose suffix is matched")
    p_ovl.add_argument("right", help="Sequence whose prefix is matched")
    return ap


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    ap = build_parser(cfg)
    args = ap.parse_args(argv)

    LEVEL = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    setup_logging(args.log_dir, level=LEVEL, force=True)

    try:
        if args.cmd == "assemble":
            run_assembly(
                args.input,
                args.output,
                tie_break=args.tie_break,
                min_overlap=args.min_overlap,
                report_tsv=args.report,
                max_steps=args.steps,
                input_format=args.input_format,
                output_format=args.output_format,
            )
            print("✓ contigs →", args.output)
            if args.report:
                print("✓ report  →", args.report)

        elif args.cmd == "overlap":
            left, right = Fragment(args.left), Fragment(args.right)
            print(f"overlap\t{left.calculate_overlap(right)}")
            print(f"merged\t{left.merged_with(right)}")
    except (ValueError, OSError) as e:  # InvalidSequence, bad options, unreadable paths
        logging.error(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
