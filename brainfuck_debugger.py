#!/usr/bin/env python3
"""
Brainfuck Step-by-Step Debugger

Shows the step-by-step execution of a Brainfuck program, displaying the
state of the memory tape, input stream, and output at each step.
"""

import sys

from brainfuck import BrainfuckError, BrainfuckInterpreter
from programs import DOUBLE, INCREMENT, NESTED_LOOP


class BrainfuckDebugger(BrainfuckInterpreter):
    """Brainfuck interpreter that narrates every step it executes."""

    def __init__(self, program, tape_size=30, show_memory_range=10, out=None, **kwargs):
        super().__init__(program, tape_size=tape_size, **kwargs)
        self.show_memory_range = show_memory_range
        self.out = out

    def _print(self, *args):
        print(*args, file=self.out or sys.stdout)

    def debug_run(self, input_data=b"", max_steps=100):
        """Execute the program, printing the machine state after every step."""
        self.feed(input_data)
        self._print("🐛 BRAINFUCK DEBUGGER")
        self._print(f"Program: {self.program.source}")
        self._print(f"Input: {bytes(self.input_data)!r} (as bytes: {list(self.input_data)})")
        self._print("=" * 80)

        self._show_state("INITIAL")

        while self.running and self.step_count < max_steps:
            ip = self.instruction_pointer
            cmd = self.program[ip]
            ptr = self.tape.pointer
            before = self.tape.get()
            reads = self.input_reads

            self._print(f"\nStep {self.step_count + 1}: Execute '{cmd}' at position {ip}")
            try:
                self.step()
            except BrainfuckError as e:
                self._print(f"  ❌ {type(e).__name__}: {e}")
                raise
            self._print(self._describe(cmd, ptr, before, reads))
            self._show_state(f"AFTER STEP {self.step_count}")

        if self.running:
            self.hit_step_limit = True
            self._print(f"\n⚠️ Execution stopped after {max_steps} steps (possible infinite loop)")

        self._print("\n🎯 FINAL RESULT:")
        self._print(f"Output: {self.output_text()!r} → {list(self.output)}")
        return bytes(self.output)

    def _describe(self, cmd, ptr, before, reads):
        cell = self.tape.get()
        if cmd == '>':
            return f"  Move pointer right → position {self.tape.pointer}"
        if cmd == '<':
            return f"  Move pointer left → position {self.tape.pointer}"
        if cmd == '+':
            return f"  Increment cell[{ptr}] → {cell}"
        if cmd == '-':
            return f"  Decrement cell[{ptr}] → {cell}"
        if cmd == '.':
            return f"  Output cell[{ptr}] = {cell} → {chr(cell)!r} (ASCII {cell})"
        if cmd == ',':
            if self.input_reads > reads:
                return f"  Read input[{self.input_index - 1}] = {cell} → cell[{ptr}]"
            return f"  Read input: EOF, cell[{ptr}] {before} → {cell} ({self.eof_policy.value})"
        if cmd == '[':
            if before == 0:
                return f"  Loop start: cell[{ptr}] = 0, jump to position {self.instruction_pointer}"
            return f"  Loop start: cell[{ptr}] ≠ 0, enter loop"
        if cmd == ']':
            if before != 0:
                return f"  Loop end: cell[{ptr}] ≠ 0, jump back to position {self.instruction_pointer}"
            return f"  Loop end: cell[{ptr}] = 0, exit loop"
        return f"  Comment {cmd!r}, no-op"

    def _show_state(self, label):
        """Show current state of memory, pointer, and program."""
        self._print(f"\n{label}:")

        # Show program with instruction pointer
        program_display = ""
        for i, cmd in enumerate(self.program):
            if i == self.instruction_pointer:
                program_display += f"[{cmd}]"
            else:
                program_display += cmd
        if self.instruction_pointer >= len(self.program):
            program_display += "[END]"
        self._print(f"Program:  {program_display}")

        # Show input stream
        input_display = ""
        for i, byte in enumerate(self.input_data):
            if i == self.input_index:
                input_display += f"[{byte}]"
            else:
                input_display += f" {byte} "
        if self.input_index >= len(self.input_data):
            input_display += "[EOF]"
        self._print(f"Input:    {input_display}")

        # Show memory tape (focused around pointer)
        pointer = self.tape.pointer
        size = len(self.tape)
        start = max(0, pointer - self.show_memory_range // 2)
        end = min(size, start + self.show_memory_range)

        # Adjust start if we're near the end
        if end - start < self.show_memory_range:
            start = max(0, end - self.show_memory_range)

        memory_vals = [f"{v:3d}" for v in self.tape.snapshot(start, end)]
        memory_ptrs = [" ^ " if i == pointer else "   " for i in range(start, end)]
        memory_addrs = [f"{i:3d}" for i in range(start, end)]

        self._print("Memory:   [" + "|".join(memory_vals) + "]")
        self._print("Pointer:   " + " ".join(memory_ptrs))
        self._print("Address:   " + " ".join(memory_addrs))

        # Show output so far
        if self.output:
            self._print(f"Output:   {self.output_text()!r} → {list(self.output)}")
        else:
            self._print("Output:   (empty)")


if __name__ == "__main__":
    print("🧪 EXAMPLE 1: Simple increment (f(x) = x + 1)")
    BrainfuckDebugger(INCREMENT, tape_size=15, show_memory_range=6).debug_run(bytes([3]))

    print("\n" + "=" * 80)
    print("\n🧪 EXAMPLE 2: Doubling program (f(x) = 2*x)")
    BrainfuckDebugger(DOUBLE, tape_size=15, show_memory_range=6).debug_run(bytes([3]))

    print("\n" + "=" * 80)
    print("\n🧪 EXAMPLE 3: Nested loops")
    BrainfuckDebugger(NESTED_LOOP, tape_size=15, show_memory_range=6).debug_run()
