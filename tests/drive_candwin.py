#!/usr/bin/env python3
"""Drive the candidate window from the command line with a scripted session."""
from __future__ import annotations

import argparse
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Sequence

PROJECT_ROOT = Path(__file__).resolve().parent.parent
LABELS = "asdfghjkl;qwertyuiopzxcvbnm,./1234567890"


def _print_step(message: str) -> None:
    print(f"[candwin-cli] {message}")


def _fail(message: str, *, code: int = 1) -> None:
    print(f"[candwin-cli] ERROR: {message}", file=sys.stderr)
    raise SystemExit(code)


def _frame(*fields: bytes) -> bytes:
    return b"\f".join(fields) + b"\f\f"


def _entries(words: Sequence[str], start: int = 0) -> List[bytes]:
    return [
        f"{LABELS[(start + offset) % len(LABELS)]}\a{word}\aentry {start + offset}".encode("utf-8")
        for offset, word in enumerate(words)
    ]


def _eager_session(words: Sequence[str], limit: int) -> List[bytes]:
    return [
        _frame(b"activate", b"charset=UTF-8", b"display_limit=%d" % limit, *_entries(words)),
        _frame(b"move", b"200", b"200"),
        _frame(b"select", b"0", b"1"),
    ]


def _lazy_session(words: Sequence[str], limit: int) -> List[bytes]:
    frames = [_frame(b"set_nr_candidates", b"%d" % len(words), b"%d" % limit)]
    step = limit or len(words)
    for page, start in enumerate(range(0, len(words), step)):
        frames.append(
            _frame(
                b"set_page_candidates",
                b"charset=UTF-8",
                b"page=%d" % page,
                *_entries(words[start:start + step], start),
            )
        )
    frames.append(_frame(b"move", b"200", b"200"))
    frames.append(_frame(b"show_page", b"0"))
    return frames


def main(argv: Sequence[str]) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--lazy", action="store_true", help="Stream pages with set_page_candidates")
    parser.add_argument("--count", type=int, default=25, help="Number of candidates to send")
    parser.add_argument("--limit", type=int, default=10, help="display_limit for the session")
    parser.add_argument("--hold", type=float, default=5.0, help="Seconds to keep the window open")
    args = parser.parse_args(argv)

    if args.count < 0:
        _fail("--count must not be negative")

    words = [f"候補{number}" for number in range(args.count)]
    frames = _lazy_session(words, args.limit) if args.lazy else _eager_session(words, args.limit)

    _print_step(f"Launching candidate window from {PROJECT_ROOT}")
    process = subprocess.Popen(
        [sys.executable, "-m", "candwin", "--eof-policy", "graceful"],
        cwd=PROJECT_ROOT,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
    )
    assert process.stdin is not None
    for frame in frames:
        process.stdin.write(frame)
    process.stdin.flush()
    _print_step(f"Sent {len(frames)} frames; click a candidate to see the index reply")

    time.sleep(max(0.0, args.hold))
    process.stdin.close()
    replies, _ = process.communicate(timeout=10)
    for line in replies.decode("ascii", errors="replace").split("\n\n"):
        if line:
            _print_step(f"reply: {line.replace(chr(10), ' ')}")
    _print_step(f"Window exited with code {process.returncode}")
    return process.returncode


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
