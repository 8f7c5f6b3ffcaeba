import logging

from bftree import Node, release, count_leaves, iternodes
from bftree import max_depth as treedepth
from bftree import INC_PTR, DEC_PTR, INC_VAL, DEC_VAL, OUTPUT, INPUT, LOOP

logger = logging.getLogger('bfparse')
logger.addHandler(logging.NullHandler())

MAX_DEPTH = 512

SIMPLE = {
    '>': INC_PTR,
    '<': DEC_PTR,
    '+': INC_VAL,
    '-': DEC_VAL,
    '.': OUTPUT,
    ',': INPUT,
}


class ParseError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class UnmatchedClose(ParseError):
    def __init__(self, offset):
        super().__init__("Syntax error: unmatched ']'")
        self.offset = offset


class UnmatchedOpen(ParseError):
    def __init__(self, depth):
        super().__init__("Syntax error: unmatched '['")
        self.depth = depth


class LoopNestingTooDeep(ParseError):
    def __init__(self, offset, limit):
        super().__init__("Error: loop nesting too deep")
        self.offset = offset
        self.limit = limit


def readchars(stream):
    """Yield a stream's contents one character at a time.

    Binary streams are decoded as latin-1, so every byte is one character.
    """
    while True:
        c = stream.read(1)
        if not c:
            return
        if isinstance(c, bytes):
            c = c.decode('latin-1')
        yield c


def parse(chars, max_depth=MAX_DEPTH):
    """Build the program tree for chars in a single pass.

    Returns the first top level node, or None if the program has no
    instructions. On any error the partial tree is released first.
    """
    head = None
    # Open loops, innermost last
    loops = []
    # Most recent node at each depth; last[0] is the top level
    last = [None]
    try:
        for offset, i in enumerate(chars):
            if i in SIMPLE:
                node = Node(SIMPLE[i])
            elif i == '[':
                if len(loops) >= max_depth:
                    raise LoopNestingTooDeep(offset, max_depth)
                node = Node(LOOP)
            elif i == ']':
                if not loops:
                    raise UnmatchedClose(offset)
                loops.pop()
                last.pop()
                continue
            else:
                continue

            if last[-1] is not None:
                last[-1].next = node
            elif loops:
                loops[-1].child = node
            else:
                head = node
            last[-1] = node

            if node.kind == LOOP:
                loops.append(node)
                last.append(None)

        if loops:
            raise UnmatchedOpen(len(loops))
    except (ParseError, MemoryError):
        release(head)
        raise

    if logger.isEnabledFor(logging.DEBUG):
        total = sum(1 for i in iternodes(head))
        logger.debug('parsed %d nodes (%d leaves, depth %d)', total,
                     count_leaves(head), treedepth(head))
    return head
