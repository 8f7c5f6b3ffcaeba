#!/usr/bin/env python

import sys

from bfinterp import load, report, UsageError
from bfparse import ParseError
from bftree import release, NAMES, LOOP


def dumpir(node, indent=0, file=None):
    if file is None:
        file = sys.stdout
    while node is not None:
        print('    '*indent + NAMES[node.kind], file=file)
        if node.kind == LOOP:
            dumpir(node.child, indent+1, file)
            print('    '*indent + 'endloop', file=file)
        node = node.next


def main(argv=None):
    if argv is None:
        argv = sys.argv
    try:
        program = load(argv)
    except (UsageError, OSError, ParseError, MemoryError) as e:
        report(e)
        return 1
    try:
        dumpir(program)
    finally:
        release(program)
    return 0

if __name__ == '__main__':
    sys.exit(main())
