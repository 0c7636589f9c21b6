# src/sequencer/utility/progress.py

from __future__ import annotations
from contextlib import contextmanager
from tqdm import tqdm
from typing import IO, Iterator

@contextmanager
def stage_bar(total: int, *, desc: str = "", unit: str = "", disable: bool | None = None,
              file: IO[str] | None = None) -> Iterator[tqdm]:
    """
    Context manager that yields a tqdm for one pipeline stage and closes it on
    exit, even when the stage raises. disable=None lets tqdm hide the bar when
    the output stream is not a TTY.
    """
    bar = tqdm(total=total, desc=desc, unit=unit, leave=False, ncols=80, disable=disable, file=file,
               bar_format=("{l_bar}{bar}| " "{n_fmt}/{total_fmt} " "[elapsed: {elapsed} < remaining: {remaining}]"))
    try:
        yield bar  # caller does bar.update()
    finally:
        bar.close()
