#!/usr/bin/env python3
"""
Brainfuck runner

Wraps the interpreter with environment-driven settings (optionally read from
a .env file) and provides the command-line driver that runs the embedded
Hello World program.

Environment variables:
    BF_TAPE_SIZE    number of cells on the tape (default 256)
    BF_STEP_LIMIT   instruction budget, 0 means unlimited (default 0)
    BF_EOF_POLICY   what ',' does at end of input: unchanged, zero or error
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional, Union

from dotenv import load_dotenv

from brainfuck import (
    DEFAULT_TAPE_SIZE,
    BrainfuckError,
    BrainfuckInterpreter,
    EOFPolicy,
    Program,
)
from programs import HELLO_WORLD

load_dotenv()

DEFAULT_STEP_LIMIT = 0


@dataclass
class RunnerConfig:
    """Settings for a single interpreter run."""
    tape_size: int = DEFAULT_TAPE_SIZE
    step_limit: int = DEFAULT_STEP_LIMIT
    eof_policy: EOFPolicy = EOFPolicy.UNCHANGED

    def __post_init__(self):
        if self.tape_size < 1:
            raise ValueError(f"tape_size must be at least 1, got {self.tape_size}")
        if self.step_limit < 0:
            raise ValueError(f"step_limit must not be negative, got {self.step_limit}")
        self.eof_policy = EOFPolicy(self.eof_policy)

    @property
    def max_steps(self) -> Optional[int]:
        return self.step_limit or None


@dataclass
class RunResult:
    """Outcome of run_program."""
    output: bytes
    steps: int
    hit_step_limit: bool

    @property
    def text(self) -> str:
        return self.output.decode('latin-1')


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config() -> RunnerConfig:
    """Build a RunnerConfig from the current environment."""
    raw_policy = os.environ.get("BF_EOF_POLICY", EOFPolicy.UNCHANGED.value).strip().lower()
    try:
        policy = EOFPolicy(raw_policy)
    except ValueError:
        choices = ", ".join(p.value for p in EOFPolicy)
        raise ValueError(f"BF_EOF_POLICY must be one of {choices}, got {raw_policy!r}") from None

    return RunnerConfig(
        tape_size=_int_from_env("BF_TAPE_SIZE", DEFAULT_TAPE_SIZE),
        step_limit=_int_from_env("BF_STEP_LIMIT", DEFAULT_STEP_LIMIT),
        eof_policy=policy,
    )


def run_program(code: Union[Program, str], input_data: Union[bytes, str] = b"",
                config: Optional[RunnerConfig] = None, stream=None) -> RunResult:
    """Run `code` to completion (or to the step budget) and collect its output.

    Fatal interpreter errors propagate to the caller.
    """
    cfg = config or load_config()
    itp = BrainfuckInterpreter(code, tape_size=cfg.tape_size,
                               eof_policy=cfg.eof_policy, stream=stream)
    output = itp.run(input_data, max_steps=cfg.max_steps)
    return RunResult(output=output, steps=itp.step_count, hit_step_limit=itp.hit_step_limit)


def run_once(code: str, x: int, config: Optional[RunnerConfig] = None) -> Optional[int]:
    """Execute BF code with single byte input, return single byte output.

    Returns None when the program printed nothing or ran out of steps.
    """
    result = run_program(code, bytes([x % 256]), config=config)
    if result.hit_step_limit or not result.output:
        return None
    return result.output[0]


def main() -> int:
    try:
        config = load_config()
        run_program(HELLO_WORLD, config=config, stream=sys.stdout.buffer)
    except (BrainfuckError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
