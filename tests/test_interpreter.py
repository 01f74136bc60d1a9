import io
import random

import pytest

from brainfuck import (
    BrainfuckInterpreter,
    EOFPolicy,
    InputExhausted,
    Interpreter,
    OutOfBounds,
    Program,
    State,
    UnmatchedBracket,
)
from programs import DOUBLE, ECHO, HELLO_WORLD, INCREMENT, NESTED_LOOP


def test_hello_world():
    itp = BrainfuckInterpreter(HELLO_WORLD)
    assert itp.run() == b"Hello World!\n"
    assert itp.output_text() == "Hello World!\n"
    assert itp.output_writes == 13
    assert itp.state is State.HALTED
    assert itp.instruction_pointer == len(HELLO_WORLD)


def test_nested_loops():
    itp = BrainfuckInterpreter(NESTED_LOOP)
    itp.run()
    assert itp.tape.snapshot(0, 3) == [0, 0, 4]
    assert itp.tape.pointer == 0
    assert itp.instruction_pointer == len(NESTED_LOOP)


def test_interpreter_alias():
    assert Interpreter is BrainfuckInterpreter


def test_accepts_program_or_string():
    program = Program("+++")
    first = BrainfuckInterpreter(program)
    second = BrainfuckInterpreter(program)
    first.run()
    assert first.program is program
    assert first.tape.get() == 3
    assert second.tape.get() == 0
    assert BrainfuckInterpreter("+").program.source == "+"


def test_unmatched_bracket_rejected_before_running():
    with pytest.raises(UnmatchedBracket):
        BrainfuckInterpreter("[+")
    with pytest.raises(UnmatchedBracket):
        BrainfuckInterpreter("+.]")


def test_open_bracket_on_zero_skips_past_partner():
    itp = BrainfuckInterpreter("[+]-")
    assert itp.step() is True
    assert itp.instruction_pointer == 3
    itp.run()
    assert itp.tape.get() == 255


def test_close_bracket_on_nonzero_jumps_after_partner():
    itp = BrainfuckInterpreter("++[-]")
    for _ in range(4):
        itp.step()
    assert itp.instruction_pointer == 4
    assert itp.tape.get() == 1
    itp.step()
    assert itp.instruction_pointer == 3
    itp.run()
    assert itp.tape.get() == 0


def test_comments_are_skipped():
    itp = BrainfuckInterpreter("add two: ++ then print.")
    assert itp.run() == b"\x02"
    assert itp.step_count == len("add two: ++ then print.")


def test_empty_program_is_halted():
    itp = BrainfuckInterpreter("")
    assert itp.state is State.HALTED
    assert itp.step() is False
    assert itp.run() == b""


def test_step_after_halt_does_nothing():
    itp = BrainfuckInterpreter("+")
    assert itp.step() is False
    assert itp.step() is False
    assert itp.step_count == 1


def test_pointer_below_zero():
    itp = BrainfuckInterpreter("+<")
    with pytest.raises(OutOfBounds) as exc:
        itp.run()
    assert exc.value.position == 1
    assert exc.value.pointer == -1
    assert "position 1" in str(exc.value)
    assert itp.state is State.HALTED
    assert itp.step() is False


def test_pointer_past_end():
    itp = BrainfuckInterpreter("+.>>>", tape_size=2)
    with pytest.raises(OutOfBounds) as exc:
        itp.run()
    assert exc.value.position == 3
    assert exc.value.pointer == 2
    assert exc.value.size == 2
    assert bytes(itp.output) == b"\x01"


def test_last_cell_is_reachable():
    itp = BrainfuckInterpreter(">" * 255 + "+")
    itp.run()
    assert itp.tape.pointer == 255
    assert itp.tape.snapshot(255) == [1]


def test_cells_wrap_during_run():
    itp = BrainfuckInterpreter("-.+.")
    assert itp.run() == b"\xff\x00"


def test_output_stream_receives_bytes_in_order():
    stream = io.BytesIO()
    itp = BrainfuckInterpreter(HELLO_WORLD, stream=stream)
    itp.run()
    assert stream.getvalue() == b"Hello World!\n"


def test_input_bytes():
    assert BrainfuckInterpreter(INCREMENT).run(b"\x05") == b"\x06"
    assert BrainfuckInterpreter(DOUBLE).run(bytes([21])) == bytes([42])


def test_input_string_is_latin1():
    itp = BrainfuckInterpreter(",.,.")
    assert itp.run("Aé") == "Aé".encode("latin-1")
    assert itp.input_reads == 2


def test_echo_until_zero_byte():
    assert BrainfuckInterpreter(ECHO).run(b"hi\x00ignored") == b"hi"


def test_feed_before_run():
    itp = BrainfuckInterpreter(",.,.")
    itp.feed(b"a")
    assert itp.run(b"b") == b"ab"


def test_eof_leaves_cell_unchanged_by_default():
    itp = BrainfuckInterpreter("+++,")
    itp.run()
    assert itp.tape.get() == 3
    assert itp.input_reads == 0


def test_eof_zero_fill():
    itp = BrainfuckInterpreter("+++,", eof_policy=EOFPolicy.ZERO)
    itp.run()
    assert itp.tape.get() == 0


def test_eof_error():
    itp = BrainfuckInterpreter("+,.", eof_policy="error")
    with pytest.raises(InputExhausted) as exc:
        itp.run()
    assert exc.value.position == 1
    assert itp.state is State.HALTED
    assert itp.output == b""


def test_echo_with_zero_fill_stops_at_end_of_input():
    itp = BrainfuckInterpreter(ECHO, eof_policy=EOFPolicy.ZERO)
    assert itp.run(b"hey") == b"hey"


def test_step_limit():
    itp = BrainfuckInterpreter("+[]")
    assert itp.run(max_steps=50) == b""
    assert itp.hit_step_limit is True
    assert itp.step_count == 50
    assert itp.state is State.RUNNING


def test_step_limit_not_hit():
    itp = BrainfuckInterpreter(NESTED_LOOP)
    itp.run(max_steps=1000)
    assert itp.hit_step_limit is False


def random_mutation_program(rng, length):
    body, depth = [], 0
    for _ in range(length):
        if depth > 0 and rng.random() < 0.3:
            body.append(']')
            depth -= 1
        else:
            c = rng.choice("+-[")
            if c == '[':
                depth += 1
            body.append(c)
    body += [']'] * depth
    return ''.join(body)


def test_balanced_programs_never_fail_to_match():
    rng = random.Random(42)
    for _ in range(100):
        code = random_mutation_program(rng, rng.randint(1, 30))
        itp = BrainfuckInterpreter(code)
        itp.run(max_steps=5000)
        if not itp.hit_step_limit:
            assert itp.instruction_pointer == len(code)
            assert itp.state is State.HALTED
        assert 0 <= itp.tape.get() <= 255
