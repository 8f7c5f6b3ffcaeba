import sys
import logging

import getch

from bfparse import parse, readchars, ParseError
from bftree import release
from bftree import INC_PTR, DEC_PTR, INC_VAL, DEC_VAL, OUTPUT, INPUT, LOOP

logger = logging.getLogger('bfinterp')
logger.addHandler(logging.NullHandler())

TAPE_SIZE = 65535


class UsageError(Exception):
    pass


class State:
    """Tape and cursor for one execution."""

    def __init__(self, size=TAPE_SIZE):
        self.mem = bytearray(size)
        self.cur = 0
        logger.debug('created tape of %d cells', size)


class TerminalInput:
    """Reads single keypresses from an interactive terminal.

    Ctrl-D is treated as end of input.
    """

    def read(self, n=1):
        c = getch.getch()
        if isinstance(c, str):
            c = c.encode('latin-1', 'replace')
        if c == b'\x04':
            return b''
        return c


def stdin_source():
    if sys.stdin.isatty():
        return TerminalInput()
    return sys.stdin.buffer


def execute(node, state, infile, outfile):
    mem = state.mem
    size = len(mem)
    while node is not None:
        kind = node.kind
        if kind == INC_PTR:
            state.cur = (state.cur + 1) % size
        elif kind == DEC_PTR:
            state.cur = (state.cur - 1) % size
        elif kind == INC_VAL:
            mem[state.cur] = (mem[state.cur] + 1) % 256
        elif kind == DEC_VAL:
            mem[state.cur] = (mem[state.cur] - 1) % 256
        elif kind == OUTPUT:
            outfile.write(bytes((mem[state.cur],)))
            outfile.flush()
        elif kind == INPUT:
            c = infile.read(1)
            mem[state.cur] = c[0] if c else 0
        elif kind == LOOP:
            # An empty body never changes the cell, so this spins forever
            while mem[state.cur]:
                execute(node.child, state, infile, outfile)
        else:
            raise ValueError('Node not handled: %r' % node)

        node = node.next


def interp(code, infile=None, outfile=None, state=None):
    """Parse and run code, returning the final State."""
    program = parse(code)
    try:
        if state is None:
            state = State()
        if infile is None:
            infile = stdin_source()
        if outfile is None:
            outfile = sys.stdout.buffer
        execute(program, state, infile, outfile)
    finally:
        release(program)
    logger.debug('execution finished at cell %d', state.cur)
    return state


def load(argv):
    """Parse the program in the file named by argv[1]."""
    if len(argv) != 2:
        prog = argv[0] if argv else 'bfinterp'
        raise UsageError('Usage: %s filename' % prog)
    with open(argv[1], encoding='latin-1') as bffile:
        return parse(readchars(bffile))


def report(error):
    if isinstance(error, OSError):
        message = 'Error opening file: %s' % (error.strerror or error)
    elif isinstance(error, MemoryError):
        message = 'Memory allocation failed.'
    else:
        message = str(error)
    print(message, file=sys.stderr)


def main(argv=None):
    if argv is None:
        argv = sys.argv
    try:
        program = load(argv)
    except (UsageError, OSError, ParseError, MemoryError) as e:
        report(e)
        return 1

    try:
        try:
            state = State()
        except MemoryError:
            print('Memory allocation failed for data tape.', file=sys.stderr)
            return 1
        execute(program, state, stdin_source(), sys.stdout.buffer)
    finally:
        release(program)
    logger.debug('execution finished at cell %d', state.cur)
    return 0


if __name__ == '__main__':
    sys.exit(main())
