#!/usr/bin/env python3
"""
Brainfuck Interpreter

Brainfuck is an esoteric programming language with only 8 commands:
    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the character signified by the cell at the pointer
    ,   Input a character and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored.

The tape is a fixed number of 8-bit cells (256 by default). Cell arithmetic
wraps around, pointer movement off either end of the tape is an error, and
every bracket must have a partner before the program is allowed to run.
"""

from enum import Enum
from typing import Dict, List, Optional, Union

import numpy as np

COMMANDS = '><+-.,[]'
DEFAULT_TAPE_SIZE = 256
CELL_MODULUS = 256


class BrainfuckError(Exception):
    """Base class for every fatal interpreter condition."""


class OutOfBounds(BrainfuckError):
    """The data pointer was moved off the tape."""

    def __init__(self, pointer: int, size: int, position: Optional[int] = None):
        self.pointer = pointer
        self.size = size
        self.position = position
        super().__init__(pointer, size, position)

    def __str__(self):
        msg = f"data pointer moved to {self.pointer}, outside tape of {self.size} cells"
        if self.position is not None:
            msg += f" (instruction at position {self.position})"
        return msg


class UnmatchedBracket(BrainfuckError):
    """A '[' or ']' has no partner in the program."""

    def __init__(self, bracket: str, position: int):
        self.bracket = bracket
        self.position = position
        super().__init__(bracket, position)

    def __str__(self):
        return f"Unmatched '{self.bracket}' at position {self.position}"


class InputExhausted(BrainfuckError):
    """',' asked for input after the input stream ran dry."""

    def __init__(self, position: int):
        self.position = position
        super().__init__(position)

    def __str__(self):
        return f"no input left for ',' at position {self.position}"


class EOFPolicy(Enum):
    """What ',' does once the input stream is exhausted."""
    UNCHANGED = 'unchanged'
    ZERO = 'zero'
    ERROR = 'error'


class State(Enum):
    RUNNING = 'running'
    HALTED = 'halted'


class Tape:
    """Fixed-size row of 8-bit cells with a single data pointer."""

    def __init__(self, size: int = DEFAULT_TAPE_SIZE):
        if size < 1:
            raise ValueError(f"tape size must be at least 1, got {size}")
        self.cells = np.zeros(size, dtype=np.uint8)
        self.pointer = 0

    def __len__(self):
        return len(self.cells)

    def get(self) -> int:
        return int(self.cells[self.pointer])

    def set(self, value: int) -> None:
        self.cells[self.pointer] = value % CELL_MODULUS

    def increment(self) -> None:
        self.set(self.get() + 1)

    def decrement(self) -> None:
        self.set(self.get() - 1)

    def move_right(self) -> None:
        if self.pointer + 1 >= len(self.cells):
            raise OutOfBounds(self.pointer + 1, len(self.cells))
        self.pointer += 1

    def move_left(self) -> None:
        if self.pointer - 1 < 0:
            raise OutOfBounds(self.pointer - 1, len(self.cells))
        self.pointer -= 1

    def snapshot(self, start: int = 0, end: Optional[int] = None) -> List[int]:
        """Return cells[start:end] as plain ints."""
        return self.cells[start:end].tolist()


def scan_forward(source: str, position: int) -> int:
    """Find the ']' matching the '[' at `position`.

    Nested pairs are skipped with a depth counter; running off the end of
    the source means the '[' is unmatched.
    """
    if source[position] != '[':
        raise ValueError(f"expected '[' at position {position}, found {source[position]!r}")
    depth = 1
    i = position + 1
    while i < len(source):
        if source[i] == '[':
            depth += 1
        elif source[i] == ']':
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise UnmatchedBracket('[', position)


def scan_backward(source: str, position: int) -> int:
    """Find the '[' matching the ']' at `position`."""
    if source[position] != ']':
        raise ValueError(f"expected ']' at position {position}, found {source[position]!r}")
    depth = 1
    i = position - 1
    while i >= 0:
        if source[i] == ']':
            depth += 1
        elif source[i] == '[':
            depth -= 1
            if depth == 0:
                return i
        i -= 1
    raise UnmatchedBracket(']', position)


class Program:
    """Immutable instruction stream.

    Every bracket is matched once at construction, so a program that gets
    this far is known to be well formed.
    """

    __slots__ = ('_source', '_jump_table')

    def __init__(self, source: str):
        self._source = source
        self._jump_table = self._build_jump_table(source)

    @staticmethod
    def _build_jump_table(source: str) -> Dict[int, int]:
        """Build a table mapping bracket positions for efficient jumping."""
        jump_table = {}
        for i, cmd in enumerate(source):
            if cmd == '[':
                jump_table[i] = scan_forward(source, i)
            elif cmd == ']':
                jump_table[i] = scan_backward(source, i)
        return jump_table

    @property
    def source(self) -> str:
        return self._source

    def __len__(self):
        return len(self._source)

    def __getitem__(self, index):
        return self._source[index]

    def __iter__(self):
        return iter(self._source)

    def __repr__(self):
        return f"Program({self._source!r})"

    def partner(self, position: int) -> int:
        """Position of the bracket paired with the one at `position`."""
        try:
            return self._jump_table[position]
        except KeyError:
            raise ValueError(f"no bracket at position {position}") from None

    def instructions(self) -> str:
        """The source with comments stripped."""
        return ''.join(c for c in self._source if c in COMMANDS)


class BrainfuckInterpreter:
    """Fetch-decode-execute loop over a Program and a private Tape."""

    def __init__(self, program: Union[Program, str], tape_size: int = DEFAULT_TAPE_SIZE,
                 eof_policy: EOFPolicy = EOFPolicy.UNCHANGED, stream=None):
        self.program = program if isinstance(program, Program) else Program(program)
        self.tape = Tape(tape_size)
        self.eof_policy = EOFPolicy(eof_policy)
        self.stream = stream
        self.instruction_pointer = 0
        self.state = State.RUNNING if len(self.program) else State.HALTED
        self.output = bytearray()
        self.input_data = bytearray()
        self.input_index = 0
        self.step_count = 0
        self.input_reads = 0
        self.output_writes = 0
        self.hit_step_limit = False

    @property
    def running(self) -> bool:
        return self.state is State.RUNNING

    def feed(self, data: Union[bytes, str]) -> None:
        """Append bytes to the pending input stream."""
        if isinstance(data, str):
            data = data.encode('latin-1')
        self.input_data.extend(data)

    def step(self) -> bool:
        """Execute one instruction. Returns True while the machine is running."""
        if self.state is State.HALTED:
            return False

        ip = self.instruction_pointer
        cmd = self.program[ip]
        tape = self.tape
        next_ip = ip + 1

        try:
            if cmd == '>':
                tape.move_right()
            elif cmd == '<':
                tape.move_left()
            elif cmd == '+':
                tape.increment()
            elif cmd == '-':
                tape.decrement()
            elif cmd == '.':
                self._write(tape.get())
            elif cmd == ',':
                self._read(ip)
            elif cmd == '[':
                if tape.get() == 0:
                    next_ip = self.program.partner(ip) + 1
            elif cmd == ']':
                if tape.get() != 0:
                    next_ip = self.program.partner(ip) + 1
        except OutOfBounds as e:
            e.position = ip
            self.state = State.HALTED
            raise
        except BrainfuckError:
            self.state = State.HALTED
            raise

        self.instruction_pointer = next_ip
        self.step_count += 1
        if self.instruction_pointer >= len(self.program):
            self.state = State.HALTED
        return self.running

    def run(self, input_data: Union[bytes, str] = b'', max_steps: Optional[int] = None) -> bytes:
        """Execute until the program ends or `max_steps` instructions have run."""
        self.feed(input_data)
        while self.running:
            if max_steps is not None and self.step_count >= max_steps:
                self.hit_step_limit = True
                break
            self.step()
        return bytes(self.output)

    def output_text(self) -> str:
        return self.output.decode('latin-1')

    def _write(self, value: int) -> None:
        self.output.append(value)
        self.output_writes += 1
        if self.stream is not None:
            self.stream.write(bytes([value]))
            self.stream.flush()

    def _read(self, position: int) -> None:
        if self.input_index < len(self.input_data):
            self.tape.set(self.input_data[self.input_index])
            self.input_index += 1
            self.input_reads += 1
        elif self.eof_policy is EOFPolicy.ZERO:
            self.tape.set(0)
        elif self.eof_policy is EOFPolicy.ERROR:
            raise InputExhausted(position)
        # EOFPolicy.UNCHANGED: no input data, leave cell unchanged


Interpreter = BrainfuckInterpreter
