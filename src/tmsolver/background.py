"""Run a long computation on a worker thread while a loading spinner is shown."""

from __future__ import annotations

import itertools
import sys
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from typing import TextIO

from loguru import logger

SPINNER_FRAMES: tuple[str, ...] = ("⠇", "⠋", "⠙", "⠸", "⠴", "⠦")


def run_with_spinner[T, *Ts](
    func: Callable[[*Ts], T],
    *args: *Ts,
    stream: TextIO | None = None,
    interval: float = 0.1,
    frames: Sequence[str] = SPINNER_FRAMES,
) -> T:
    """Call `func(*args)` on a worker thread, animating a spinner until it returns.

    Each frame overwrites the previous one with a carriage return; the spinner
    is erased before returning so the next line of output starts clean.

    Args:
        func (Callable[[*Ts], T]): The computation to run.
        *args (*Ts): Positional arguments passed to `func`.
        stream (TextIO | None): Where to draw the spinner. Defaults to stdout.
        interval (float): Seconds between two frames. Must be positive.
        frames (Sequence[str]): Spinner frames, drawn cyclically. Must not be empty.

    Returns:
        T: Whatever `func` returned.

    Raises:
        ValueError: If `interval` is not positive or `frames` is empty.
        KeyboardInterrupt: Re-raised as soon as the wait is interrupted. The
            worker thread cannot be stopped and keeps running until `func`
            returns; its result is discarded.

    Examples:
        >>> import io
        >>> run_with_spinner(sum, [1, 2, 3], stream=io.StringIO())
        6
    """
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")
    if not frames:
        raise ValueError("frames must not be empty")
    out = sys.stdout if stream is None else stream
    width = max(len(frame) for frame in frames)

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tmsolver-search")
    future = executor.submit(func, *args)
    drawn = 0
    try:
        for frame in itertools.cycle(frames):
            out.write(f"\r{frame}")
            out.flush()
            drawn += 1
            wait([future], timeout=interval)
            if future.done():
                break
    except KeyboardInterrupt:
        # Threads cannot be killed: the worker keeps running until func returns
        executor.shutdown(wait=False, cancel_futures=True)
        logger.warning("Interrupted while waiting for the worker", frames_drawn=drawn)
        raise
    finally:
        out.write(f"\r{' ' * width}\r")
        out.flush()
        logger.trace("Spinner stopped", frames_drawn=drawn)
    executor.shutdown()

    # Exceptions raised by func propagate from here
    return future.result()
