INC_PTR=0
DEC_PTR=1
INC_VAL=2
DEC_VAL=3
OUTPUT=4
INPUT=5
LOOP=6

# Marks a node whose subtree has already been torn down
RELEASED=-1

NAMES = {
    INC_PTR: 'incptr',
    DEC_PTR: 'decptr',
    INC_VAL: 'incval',
    DEC_VAL: 'decval',
    OUTPUT: 'output',
    INPUT: 'input',
    LOOP: 'loop',
}


class Node:
    __slots__ = ('kind', 'child', 'next')

    def __init__(self, kind):
        self.kind = kind
        self.child = None
        self.next = None

    def __repr__(self):
        return 'Node(%s)' % NAMES.get(self.kind, 'released')


def release(node):
    """Tear down a sequence and everything below it.

    Each loop body is released before its loop node, then the walk moves on
    to the next sibling. Returns the number of nodes released; None or an
    already released sequence gives 0.
    """
    count = 0
    while node is not None and node.kind != RELEASED:
        if node.child is not None:
            count += release(node.child)
        nextnode = node.next
        node.kind = RELEASED
        node.child = None
        node.next = None
        count += 1
        node = nextnode
    return count


def iternodes(node):
    # Pre-order: a loop comes before its body
    while node is not None:
        yield node
        if node.child is not None:
            yield from iternodes(node.child)
        node = node.next


def count_leaves(node):
    return sum(1 for i in iternodes(node) if i.kind != LOOP)


def max_depth(node):
    depth = 0
    while node is not None:
        if node.kind == LOOP:
            depth = max(depth, 1 + max_depth(node.child))
        node = node.next
    return depth
