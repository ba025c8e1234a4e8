"""
Block Tree Builder

Keeps every block opened during a parse in an arena (a flat list) and
tracks the currently open block by index. A block's `parent` is the arena
index of the block it was opened in; it is cleared when the block is popped.

Comment rules:
- comments found while skipping whitespace are queued on the current block;
  a comment is queued once per parse, however often backtracking rescans it
- push(): the queue of the current block becomes the leading children of
  the new block (a comment belongs to the rule it precedes)
- pop(): comments still queued on the popped block move to the parent queue
- append(): queued comments are flushed next to the appended node, ordered
  by source offset
"""

from typing import Any, List, Optional, Set

from scssparse.parser.nodes import Block, Comment


class BlockTree:
    """Arena of blocks with a single "current block" cursor."""

    def __init__(self):
        self.blocks: List[Block] = []
        self.current_index: Optional[int] = None
        self.comment_offsets: Set[int] = set()

    @property
    def root(self) -> Optional[Block]:
        return self.blocks[0] if self.blocks else None

    @property
    def current(self) -> Optional[Block]:
        if self.current_index is None:
            return None
        return self.blocks[self.current_index]

    @property
    def depth(self) -> int:
        """Number of open blocks below the root."""
        depth = 0
        block = self.current
        while block is not None and block.parent is not None:
            depth += 1
            block = self.blocks[block.parent]
        return depth

    def push(self, block: Block) -> Block:
        """Open block inside the current block and make it current."""
        env = self.current
        block.parent = self.current_index

        if env is not None and env.comments:
            block.children = env.comments + block.children
            env.comments = []

        self.blocks.append(block)
        self.current_index = len(self.blocks) - 1
        return block

    def pop(self) -> Optional[Block]:
        """
        Close the current block and return it.

        Returns None (and changes nothing) when the current block is the
        root; the caller reports the unbalanced `}`.
        """
        block = self.current
        if block is None or block.parent is None:
            return None

        self.current_index = block.parent
        block.parent = None

        if block.comments:
            self.current.comments.extend(block.comments)
            block.comments = []

        return block

    def queue_comment(self, comment: Comment) -> bool:
        """
        Queue a comment on the current block.

        Returns False when no block is open or a comment at the same offset
        was already queued.
        """
        env = self.current
        if env is None or comment.offset in self.comment_offsets:
            return False
        self.comment_offsets.add(comment.offset)
        env.comments.append(comment)
        return True

    def append(self, node: Any) -> None:
        """Append a statement or closed block to the current block."""
        env = self.current
        pending = env.comments
        env.comments = []

        offset = getattr(node, 'offset', 0)
        env.children.extend(c for c in pending if c.offset < offset)
        env.children.append(node)
        env.children.extend(c for c in pending if c.offset >= offset)

    def last(self) -> Optional[Any]:
        """Last appended child of the current block, ignoring comments."""
        for child in reversed(self.current.children):
            if not isinstance(child, Comment):
                return child
        return None

    def flush_comments(self) -> None:
        """Move comments still queued on the current block into its children."""
        env = self.current
        if env is not None and env.comments:
            env.children.extend(env.comments)
            env.comments = []
