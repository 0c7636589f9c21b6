# Re-export the core so callers can
# from sequencer import Assembler, Fragment
from .assembly import Assembler, Fragment, InvalidSequence, TieBreak  # noqa: F401

__all__ = ["Assembler", "Fragment", "InvalidSequence", "TieBreak"]

__version__ = "0.1.0"
