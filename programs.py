"""Fixture programs shared by the runner, the step tracer and the tests."""

# Prints "Hello World!\n". Cells 1-6 are primed by the first loop, then
# adjusted and printed one character at a time.
HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)

# Outer loop runs twice, inner loop twice per outer pass: cell 2 ends at 4.
NESTED_LOOP = "++[>++[>+<-]<-]"

# f(x) = x + 1
INCREMENT = ",+."

# f(x) = 2*x
DOUBLE = ",[->++<]>."

# Copies input to output up to the first zero byte.
ECHO = ",[.,]"
